from __future__ import annotations

from fastapi import APIRouter, Depends

from wishlist_api.routers.deps import get_storage
from wishlist_api.services.storage_service import StorageService

router = APIRouter(prefix="/api", tags=["stats"])


@router.get("/stats")
def get_stats(storage: StorageService = Depends(get_storage)):
    return storage.get_stats().model_dump(by_alias=True)


@router.get("/health")
def health(storage: StorageService = Depends(get_storage)):
    return {"ok": storage.is_open}
