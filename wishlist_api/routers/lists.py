from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Body, Depends, HTTPException

from wishlist_api.core.utils import now_iso
from wishlist_api.domain.models import WishListItemCreate, WishListItemUpdate
from wishlist_api.routers.deps import get_storage, require_username, validate_payload
from wishlist_api.services.storage_service import StorageService

router = APIRouter(prefix="/api/lists", tags=["lists"])

ITEM_NOT_FOUND = "Article non trouve"
LIST_NOT_FOUND = "Liste non trouvee"


@router.get("")
def list_lists(storage: StorageService = Depends(get_storage)):
    return storage.list_lists()


@router.get("/current")
def current_list(username: Optional[str] = None, storage: StorageService = Depends(get_storage)):
    name = require_username(username)
    return {
        "id": "current",
        "username": name,
        "createdAt": now_iso(),
        "items": storage.get_working_list(name),
    }


# -------------------------- draft items --------------------------
@router.post("/items", status_code=201)
def add_item(body: Optional[dict] = Body(default=None), storage: StorageService = Depends(get_storage)):
    payload = dict(body or {})
    username = require_username(payload.pop("username", None))
    item = validate_payload(WishListItemCreate, payload)
    return storage.add_item(username, item.to_record())


@router.put("/items/{item_id}")
def update_item(item_id: str, body: Optional[dict] = Body(default=None), storage: StorageService = Depends(get_storage)):
    payload = dict(body or {})
    username = require_username(payload.pop("username", None))
    changes = validate_payload(WishListItemUpdate, payload)
    item = storage.update_item(username, item_id, changes.to_changes())
    if not item:
        raise HTTPException(404, ITEM_NOT_FOUND)
    return item


@router.delete("/items/{item_id}")
def delete_item(
    item_id: str,
    username: Optional[str] = None,
    payload: Optional[dict] = Body(default=None),
    storage: StorageService = Depends(get_storage),
):
    name = require_username((payload or {}).get("username") or username)
    if not storage.delete_item(name, item_id):
        raise HTTPException(404, ITEM_NOT_FOUND)
    return {"success": True}


@router.post("/send", status_code=201)
def send_list(body: Optional[dict] = Body(default=None), storage: StorageService = Depends(get_storage)):
    payload = dict(body or {})
    username = require_username(payload.get("username"))
    wish_list = storage.send_list(username)
    if not wish_list:
        raise HTTPException(400, "Liste vide")
    return wish_list


# -------------------------- persisted lists --------------------------
@router.delete("/reset")
def reset_lists(storage: StorageService = Depends(get_storage)):
    storage.reset_lists()
    return {"success": True}


@router.get("/{list_id}")
def get_list(list_id: str, storage: StorageService = Depends(get_storage)):
    wish_list = storage.get_list(list_id)
    if not wish_list:
        raise HTTPException(404, LIST_NOT_FOUND)
    return wish_list


@router.delete("/{list_id}")
def delete_list(list_id: str, storage: StorageService = Depends(get_storage)):
    if not storage.delete_list(list_id):
        raise HTTPException(404, LIST_NOT_FOUND)
    return {"success": True}
