"""
Endpoint subpackage for API v1.

Each module defines an APIRouter for one collection.  The routers are
aggregated by ``build_router`` in ``router.py``.
"""
