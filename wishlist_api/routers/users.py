from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from wishlist_api.domain.models import UserCreate, UserUpdate
from wishlist_api.routers.deps import get_storage
from wishlist_api.services.storage_service import StorageService

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("")
def list_users(storage: StorageService = Depends(get_storage)):
    return storage.list_users()


@router.post("", status_code=201)
def create_user(body: UserCreate, storage: StorageService = Depends(get_storage)):
    return storage.create_user(body.to_record())


@router.put("/{user_id}")
def update_user(user_id: str, body: UserUpdate, storage: StorageService = Depends(get_storage)):
    user = storage.update_user(user_id, body.to_changes())
    if not user:
        raise HTTPException(404, "Utilisateur non trouve")
    return user


@router.delete("/{user_id}")
def delete_user(user_id: str, storage: StorageService = Depends(get_storage)):
    if not storage.delete_user(user_id):
        raise HTTPException(404, "Utilisateur non trouve")
    return {"success": True}
