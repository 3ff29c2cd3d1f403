from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from wishlist_api.domain.models import AnnouncementCreate, AnnouncementUpdate
from wishlist_api.routers.deps import get_storage
from wishlist_api.services.storage_service import StorageService

router = APIRouter(prefix="/api/announcements", tags=["announcements"])


@router.get("")
def list_announcements(active: bool = False, storage: StorageService = Depends(get_storage)):
    return storage.list_announcements(active_only=active)


@router.post("", status_code=201)
def create_announcement(body: AnnouncementCreate, storage: StorageService = Depends(get_storage)):
    return storage.create_announcement(body.to_record())


@router.put("/{announcement_id}")
def update_announcement(announcement_id: str, body: AnnouncementUpdate, storage: StorageService = Depends(get_storage)):
    announcement = storage.update_announcement(announcement_id, body.to_changes())
    if not announcement:
        raise HTTPException(404, "Annonce non trouvee")
    return announcement


@router.delete("/{announcement_id}")
def delete_announcement(announcement_id: str, storage: StorageService = Depends(get_storage)):
    if not storage.delete_announcement(announcement_id):
        raise HTTPException(404, "Annonce non trouvee")
    return {"success": True}
