from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from wishlist_api.core.logger import get_logger
from wishlist_api.domain.models import LoginRequest
from wishlist_api.routers.deps import get_storage
from wishlist_api.services.auth_service import AuthError, AuthService
from wishlist_api.services.storage_service import StorageService

router = APIRouter(prefix="/api/auth", tags=["auth"])
logger = get_logger(__name__)


@router.post("/login")
def login(body: LoginRequest, storage: StorageService = Depends(get_storage)):
    service = AuthService(storage)
    try:
        result = service.login(body.password, role=body.role, username=body.username)
    except AuthError as exc:
        logger.info("Login refused (role=%s, username=%s): %s", body.role, body.username, exc.message)
        return JSONResponse({"success": False, "message": exc.message}, status_code=exc.status_code)
    return result.to_dict()
