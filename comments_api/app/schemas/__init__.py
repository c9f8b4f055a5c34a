"""Pydantic schema definitions for API payloads and stored records."""
