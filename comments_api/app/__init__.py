"""
Application package initializer.

This package contains the main entrypoint for the API and its
submodules: ``core`` (configuration, logging, errors and storage),
``schemas``, ``services`` and the versioned routers under ``api``.
"""

from .main import app  # noqa: F401
