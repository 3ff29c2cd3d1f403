from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from wishlist_api.domain.models import AccountCreate, AccountUpdate
from wishlist_api.routers.deps import get_storage
from wishlist_api.services.storage_service import AccountExistsError, StorageService

router = APIRouter(prefix="/api/accounts", tags=["accounts"])

ACCOUNT_EXISTS = "Cet identifiant existe deja"


@router.get("")
def list_accounts(storage: StorageService = Depends(get_storage)):
    return storage.list_accounts()


@router.post("", status_code=201)
def create_account(body: AccountCreate, storage: StorageService = Depends(get_storage)):
    try:
        return storage.create_account(body.to_record())
    except AccountExistsError:
        raise HTTPException(409, ACCOUNT_EXISTS)


@router.put("/{account_id}")
def update_account(account_id: str, body: AccountUpdate, storage: StorageService = Depends(get_storage)):
    try:
        account = storage.update_account(account_id, body.to_changes())
    except AccountExistsError:
        raise HTTPException(409, ACCOUNT_EXISTS)
    if not account:
        raise HTTPException(404, "Compte non trouve")
    return account


@router.delete("/{account_id}")
def delete_account(account_id: str, storage: StorageService = Depends(get_storage)):
    if not storage.delete_account(account_id):
        raise HTTPException(404, "Compte non trouve")
    return {"success": True}
