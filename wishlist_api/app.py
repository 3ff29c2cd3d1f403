from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from wishlist_api.core.config import Settings, get_settings
from wishlist_api.core.logger import get_logger, setup_logging
from wishlist_api.routers import accounts as accounts_router
from wishlist_api.routers import announcements as announcements_router
from wishlist_api.routers import auth as auth_router
from wishlist_api.routers import config as config_router
from wishlist_api.routers import lists as lists_router
from wishlist_api.routers import stats as stats_router
from wishlist_api.routers import users as users_router
from wishlist_api.routers.deps import INVALID_DATA
from wishlist_api.services.storage_service import StorageService, StorageWriteError

logger = get_logger(__name__)

SERVER_ERROR = "Erreur serveur"


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Inject baseline security headers on every JSON response."""

    def __init__(self, app, *, enforce_hsts: bool) -> None:
        super().__init__(app)
        self._enforce_hsts = enforce_hsts

    async def dispatch(self, request, call_next):
        response = await call_next(request)
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Referrer-Policy", "no-referrer-when-downgrade")
        response.headers.setdefault("Cache-Control", "no-store")
        if self._enforce_hsts:
            response.headers.setdefault("Strict-Transport-Security", "max-age=31536000; includeSubDomains")
        return response


def _install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(HTTPException)
    async def http_error(request: Request, exc: HTTPException):
        body = exc.detail if isinstance(exc.detail, dict) else {"error": exc.detail}
        return JSONResponse(body, status_code=exc.status_code, headers=getattr(exc, "headers", None))

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError):
        return JSONResponse(
            {"error": INVALID_DATA, "details": jsonable_encoder(exc.errors())},
            status_code=400,
        )

    @app.exception_handler(StorageWriteError)
    async def storage_error(request: Request, exc: StorageWriteError):
        logger.error("Write failed on %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse({"error": SERVER_ERROR}, status_code=500)

    @app.exception_handler(Exception)
    async def unexpected_error(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse({"error": SERVER_ERROR}, status_code=500)


def create_app(settings: Optional[Settings] = None, storage: Optional[StorageService] = None) -> FastAPI:
    """Build the API around an explicit StorageService (opened/closed with the app lifespan)."""
    settings = settings or get_settings()
    setup_logging(settings.log_level)
    storage = storage or StorageService(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if not storage.is_open:
            storage.open()
        try:
            yield
        finally:
            storage.close()

    app = FastAPI(title="Ma Liste de Noel API", lifespan=lifespan)
    app.state.settings = settings
    app.state.storage = storage

    allowed_cors = {settings.public_base_url}
    if settings.app_env != "prod":
        allowed_cors.update(
            {
                "http://localhost:5000",
                "http://127.0.0.1:5000",
                "http://localhost:5173",
                "http://127.0.0.1:5173",
            }
        )
    allowed_cors = {origin for origin in allowed_cors if origin}
    if allowed_cors:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=sorted(allowed_cors),
            allow_credentials=True,
            allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
            allow_headers=["*"],
        )
    app.add_middleware(SecurityHeadersMiddleware, enforce_hsts=settings.app_env == "prod")
    _install_error_handlers(app)

    app.include_router(auth_router.router)
    app.include_router(config_router.router)
    app.include_router(accounts_router.router)
    app.include_router(users_router.router)
    app.include_router(lists_router.router)
    app.include_router(announcements_router.router)
    app.include_router(stats_router.router)
    return app
