"""ASGI entry point: ``uvicorn wishlist_api.app_factory:app``."""
from wishlist_api.app import create_app

app = create_app()

__all__ = ["app", "create_app"]
