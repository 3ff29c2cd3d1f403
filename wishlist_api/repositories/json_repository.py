"""In-memory mirror of the JSON collections, rewritten to disk on every mutation."""
from __future__ import annotations

import copy
import threading
from pathlib import Path
from typing import Optional

from wishlist_api.core.config import Settings
from wishlist_api.core.logger import get_logger
from wishlist_api.core.utils import new_id, now_iso
from wishlist_api.domain.usernames import normalize_username, same_username
from wishlist_api.repositories import json_storage

logger = get_logger(__name__)

ACCOUNTS = "accounts"
USERS = "users"
LISTS = "lists"
ANNOUNCEMENTS = "announcements"
CONFIG = "config"


class AccountExistsError(Exception):
    def __init__(self, username: str):
        super().__init__(f"Account '{username}' already exists")
        self.username = username


def _merge(record: dict, changes: dict) -> None:
    for key, value in changes.items():
        if key in ("id", "createdAt"):
            continue
        if value is None:
            record.pop(key, None)
        else:
            record[key] = value


class JsonRepository:
    """CRUD helpers over the accounts/users/lists/announcements/config documents."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self._paths: dict[str, Path] = {
            ACCOUNTS: settings.accounts_file,
            USERS: settings.users_file,
            LISTS: settings.lists_file,
            ANNOUNCEMENTS: settings.announcements_file,
        }
        self._data: dict[str, list[dict]] = {name: [] for name in self._paths}
        self._config: dict = {}
        self._lock = threading.RLock()
        # collections changed in memory whose last write did not complete
        self._dirty: set[str] = set()

    # -------------------------- lifecycle --------------------------
    def open(self) -> None:
        with self._lock:
            self.settings.data_dir.mkdir(parents=True, exist_ok=True)
            for name, path in self._paths.items():
                self._data[name] = [r for r in json_storage.load(path, []) if isinstance(r, dict)]
            config_file = self.settings.config_file
            defaults = self.settings.default_config()
            if config_file.exists():
                self._config = {**defaults, **json_storage.load(config_file, {})}
            else:
                self._config = defaults
                self._save_config()
            logger.info(
                "Store loaded from %s (%d accounts, %d users, %d lists, %d announcements)",
                self.settings.data_dir,
                len(self._data[ACCOUNTS]),
                len(self._data[USERS]),
                len(self._data[LISTS]),
                len(self._data[ANNOUNCEMENTS]),
            )

    def close(self) -> None:
        """Flush collections left unsaved by a failed write; untouched files are never rewritten."""
        with self._lock:
            for name in sorted(self._dirty):
                if name == CONFIG:
                    self._save_config()
                else:
                    self._save(name)

    # -------------------------- generic helpers --------------------------
    def _save(self, name: str) -> None:
        self._dirty.add(name)
        json_storage.save(self._paths[name], self._data[name])
        self._dirty.discard(name)

    def _save_config(self) -> None:
        self._dirty.add(CONFIG)
        json_storage.save(self.settings.config_file, self._config)
        self._dirty.discard(CONFIG)

    def _index(self, name: str, record_id: str) -> int:
        for idx, record in enumerate(self._data[name]):
            if record.get("id") == record_id:
                return idx
        return -1

    def _all(self, name: str) -> list[dict]:
        with self._lock:
            return copy.deepcopy(self._data[name])

    def _get(self, name: str, record_id: str) -> Optional[dict]:
        with self._lock:
            idx = self._index(name, record_id)
            return copy.deepcopy(self._data[name][idx]) if idx >= 0 else None

    def _get_by_username(self, name: str, username: str) -> Optional[dict]:
        with self._lock:
            for record in self._data[name]:
                if same_username(record.get("username"), username):
                    return copy.deepcopy(record)
            return None

    def _create(self, name: str, data: dict) -> dict:
        record = {"id": new_id(), **data, "createdAt": now_iso()}
        self._data[name].append(record)
        self._save(name)
        return copy.deepcopy(record)

    def _update(self, name: str, record_id: str, changes: dict) -> Optional[dict]:
        idx = self._index(name, record_id)
        if idx < 0:
            return None
        record = self._data[name][idx]
        _merge(record, changes)
        self._save(name)
        return copy.deepcopy(record)

    def _delete(self, name: str, record_id: str) -> bool:
        with self._lock:
            idx = self._index(name, record_id)
            if idx < 0:
                return False
            del self._data[name][idx]
            self._save(name)
            return True

    def _username_taken(self, username: str, exclude_id: Optional[str] = None) -> bool:
        key = normalize_username(username)
        return any(
            normalize_username(a.get("username")) == key and a.get("id") != exclude_id
            for a in self._data[ACCOUNTS]
        )

    # -------------------------- config --------------------------
    def get_config(self) -> dict:
        with self._lock:
            return dict(self._config)

    def update_config(self, changes: dict) -> dict:
        with self._lock:
            self._config.update({k: v for k, v in changes.items() if v is not None})
            self._save_config()
            return dict(self._config)

    # -------------------------- accounts --------------------------
    def list_accounts(self) -> list[dict]:
        return self._all(ACCOUNTS)

    def get_account(self, account_id: str) -> Optional[dict]:
        return self._get(ACCOUNTS, account_id)

    def get_account_by_username(self, username: str) -> Optional[dict]:
        return self._get_by_username(ACCOUNTS, username)

    def create_account(self, data: dict) -> dict:
        with self._lock:
            if self._username_taken(data.get("username", "")):
                raise AccountExistsError(data.get("username", ""))
            return self._create(ACCOUNTS, data)

    def update_account(self, account_id: str, changes: dict) -> Optional[dict]:
        with self._lock:
            username = changes.get("username")
            if username and self._index(ACCOUNTS, account_id) >= 0 and self._username_taken(username, exclude_id=account_id):
                raise AccountExistsError(username)
            return self._update(ACCOUNTS, account_id, changes)

    def delete_account(self, account_id: str) -> bool:
        return self._delete(ACCOUNTS, account_id)

    # -------------------------- users --------------------------
    def list_users(self) -> list[dict]:
        return self._all(USERS)

    def get_user(self, user_id: str) -> Optional[dict]:
        return self._get(USERS, user_id)

    def get_user_by_username(self, username: str) -> Optional[dict]:
        return self._get_by_username(USERS, username)

    def create_user(self, data: dict) -> dict:
        with self._lock:
            return self._create(USERS, data)

    def update_user(self, user_id: str, changes: dict) -> Optional[dict]:
        with self._lock:
            return self._update(USERS, user_id, changes)

    def delete_user(self, user_id: str) -> bool:
        return self._delete(USERS, user_id)

    # -------------------------- wish lists --------------------------
    def list_lists(self) -> list[dict]:
        return self._all(LISTS)

    def get_list(self, list_id: str) -> Optional[dict]:
        return self._get(LISTS, list_id)

    def get_list_by_username(self, username: str) -> Optional[dict]:
        return self._get_by_username(LISTS, username)

    def replace_list_for_username(self, wish_list: dict) -> dict:
        """Store ``wish_list`` as the only list of its username (case-insensitive)."""
        with self._lock:
            username = wish_list["username"]
            self._data[LISTS] = [
                entry for entry in self._data[LISTS] if not same_username(entry.get("username"), username)
            ]
            self._data[LISTS].append(copy.deepcopy(wish_list))
            self._save(LISTS)
            return copy.deepcopy(wish_list)

    def delete_list(self, list_id: str) -> bool:
        return self._delete(LISTS, list_id)

    def delete_all_lists(self) -> None:
        with self._lock:
            self._data[LISTS] = []
            self._save(LISTS)

    # -------------------------- announcements --------------------------
    def list_announcements(self) -> list[dict]:
        return self._all(ANNOUNCEMENTS)

    def get_announcement(self, announcement_id: str) -> Optional[dict]:
        return self._get(ANNOUNCEMENTS, announcement_id)

    def create_announcement(self, data: dict) -> dict:
        with self._lock:
            return self._create(ANNOUNCEMENTS, data)

    def update_announcement(self, announcement_id: str, changes: dict) -> Optional[dict]:
        with self._lock:
            return self._update(ANNOUNCEMENTS, announcement_id, changes)

    def delete_announcement(self, announcement_id: str) -> bool:
        return self._delete(ANNOUNCEMENTS, announcement_id)

    # -------------------------- stats --------------------------
    def counts(self) -> dict[str, int]:
        with self._lock:
            return {
                ACCOUNTS: len(self._data[ACCOUNTS]),
                USERS: len(self._data[USERS]),
                LISTS: len(self._data[LISTS]),
                ANNOUNCEMENTS: len(self._data[ANNOUNCEMENTS]),
                "items": sum(len(entry.get("items") or []) for entry in self._data[LISTS]),
            }
