"""
Top‑level package for the Comments API.

The HTTP service lives in ``comments_api.app`` and a small client for
it in ``comments_api.client``.  The package itself has no public
exports.
"""

__all__ = []
