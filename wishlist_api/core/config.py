"""
Configuration helpers for the wish list backend.

Routers and services receive a Settings object instead of reading os.environ
directly, so tests can build one pointed at a temporary data directory.
"""

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
import os


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    data_dir: Path
    config_file: Path
    public_base_url: str
    default_user_password: str
    default_parent_password: str
    default_dev_password: str
    log_level: str

    @property
    def accounts_file(self) -> Path:
        return self.data_dir / "accounts.json"

    @property
    def users_file(self) -> Path:
        return self.data_dir / "users.json"

    @property
    def lists_file(self) -> Path:
        return self.data_dir / "lists.json"

    @property
    def announcements_file(self) -> Path:
        return self.data_dir / "annonces.json"

    def default_config(self) -> dict:
        return {
            "userPassword": self.default_user_password,
            "parentPassword": self.default_parent_password,
            "devPassword": self.default_dev_password,
        }


def build_settings(data_dir: str | Path | None = None, **overrides) -> Settings:
    """Build Settings from the environment, with explicit overrides taking precedence."""
    base_dir = Path(data_dir or os.getenv("DATA_DIR") or "data").resolve()
    config_file = os.getenv("CONFIG_FILE")
    values = dict(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        data_dir=base_dir,
        config_file=Path(config_file).resolve() if config_file else base_dir / "config.json",
        public_base_url=os.getenv("PUBLIC_BASE_URL", "http://localhost:5000").rstrip("/"),
        default_user_password=os.getenv("DEFAULT_USER_PASSWORD", "user123"),
        default_parent_password=os.getenv("DEFAULT_PARENT_PASSWORD", "parent123"),
        default_dev_password=os.getenv("DEFAULT_DEV_PASSWORD", "dev123"),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
    )
    values.update(overrides)
    return Settings(**values)


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    return build_settings()
