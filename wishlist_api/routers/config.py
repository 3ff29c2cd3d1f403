from __future__ import annotations

from fastapi import APIRouter, Depends

from wishlist_api.domain.models import ConfigUpdate
from wishlist_api.routers.deps import get_storage
from wishlist_api.services.storage_service import StorageService

router = APIRouter(prefix="/api/config", tags=["config"])


@router.get("")
def get_config(storage: StorageService = Depends(get_storage)):
    return storage.get_config()


@router.put("")
@router.put("/passwords")
def update_config(body: ConfigUpdate, storage: StorageService = Depends(get_storage)):
    return storage.update_config(body.to_changes())
