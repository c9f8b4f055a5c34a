"""
Endpoint subpackage for API v1.

Each module defines an APIRouter for one resource.  The routers are
aggregated in ``router.py`` at the package level.
"""
