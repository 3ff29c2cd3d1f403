"""Shared router helpers (service lookup, payload validation)."""
from __future__ import annotations

from typing import TypeVar

from fastapi import HTTPException, Request
from pydantic import BaseModel, ValidationError

from wishlist_api.services.storage_service import StorageService

SchemaT = TypeVar("SchemaT", bound=BaseModel)

INVALID_DATA = "Donnees invalides"


def get_storage(request: Request) -> StorageService:
    svc = getattr(getattr(request.app, "state", None), "storage", None)
    if not svc:
        raise RuntimeError("StorageService non configure")
    return svc


def validate_payload(schema: type[SchemaT], payload: dict) -> SchemaT:
    try:
        return schema.model_validate(payload)
    except ValidationError as exc:
        raise HTTPException(400, {"error": INVALID_DATA, "details": exc.errors(include_url=False, include_context=False)})


def require_username(value: object) -> str:
    username = value.strip() if isinstance(value, str) else ""
    if not username:
        raise HTTPException(400, "Username requis")
    return username
