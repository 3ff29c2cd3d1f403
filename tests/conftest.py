from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Make the package importable when running the tests from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from fastapi.testclient import TestClient  # noqa: E402

from wishlist_api.app import create_app  # noqa: E402
from wishlist_api.core.config import build_settings  # noqa: E402
from wishlist_api.services.storage_service import StorageService  # noqa: E402


@pytest.fixture()
def settings(tmp_path, monkeypatch):
    """Settings pointed at a temporary data directory, default passwords."""
    for var in ("CONFIG_FILE", "DEFAULT_USER_PASSWORD", "DEFAULT_PARENT_PASSWORD", "DEFAULT_DEV_PASSWORD", "APP_ENV"):
        monkeypatch.delenv(var, raising=False)
    data_dir = tmp_path / "data"
    return build_settings(data_dir, config_file=data_dir / "config.json")


@pytest.fixture()
def storage(settings):
    svc = StorageService(settings).open()
    yield svc
    svc.close()


@pytest.fixture()
def client(settings):
    app = create_app(settings)
    with TestClient(app) as test_client:
        yield test_client
