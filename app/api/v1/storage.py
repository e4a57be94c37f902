"""
Storage API endpoints.
"""

from fastapi import APIRouter, Depends

from app.services.storage import get_storage

router = APIRouter()


@router.get("/init-storage")
def init_storage(storage=Depends(get_storage)):
    """Create any missing upload buckets."""
    created = storage.ensure_buckets()
    return {"success": True, "created": created}
