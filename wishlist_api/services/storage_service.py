"""
Storage façade used by the routers.

Combines the persisted collections (JsonRepository) with the in-memory drafts
(WorkingListCache). Expected absences are reported as ``None``/``False``;
routers turn them into 404s.
"""
from __future__ import annotations

import threading
from typing import Optional

from wishlist_api.core.config import Settings
from wishlist_api.core.logger import get_logger
from wishlist_api.core.utils import new_id, now_iso
from wishlist_api.domain.models import Stats
from wishlist_api.repositories.json_repository import (
    ACCOUNTS,
    ANNOUNCEMENTS,
    LISTS,
    USERS,
    AccountExistsError,
    JsonRepository,
)
from wishlist_api.repositories.json_storage import StorageWriteError
from wishlist_api.repositories.working_lists import WorkingListCache

logger = get_logger(__name__)

__all__ = ["StorageService", "AccountExistsError", "StorageWriteError"]


class StorageService:
    """Explicitly constructed store; call ``open()`` before use and ``close()`` on shutdown."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.repository = JsonRepository(settings)
        self.drafts = WorkingListCache()
        self._send_lock = threading.Lock()
        self._opened = False

    @property
    def is_open(self) -> bool:
        return self._opened

    def open(self) -> "StorageService":
        self.repository.open()
        self._opened = True
        return self

    def close(self) -> None:
        if not self._opened:
            return
        self.repository.close()
        self._opened = False

    def __enter__(self) -> "StorageService":
        return self.open()

    def __exit__(self, *exc) -> None:
        self.close()

    # -------------------------- config --------------------------
    def get_config(self) -> dict:
        return self.repository.get_config()

    def update_config(self, changes: dict) -> dict:
        config = self.repository.update_config(changes)
        logger.info("Config updated (%s)", ", ".join(sorted(changes)) or "no field")
        return config

    # -------------------------- accounts --------------------------
    def list_accounts(self) -> list[dict]:
        return self.repository.list_accounts()

    def get_account(self, account_id: str) -> Optional[dict]:
        return self.repository.get_account(account_id)

    def get_account_by_username(self, username: str) -> Optional[dict]:
        return self.repository.get_account_by_username(username)

    def create_account(self, data: dict) -> dict:
        return self.repository.create_account(data)

    def update_account(self, account_id: str, changes: dict) -> Optional[dict]:
        return self.repository.update_account(account_id, changes)

    def delete_account(self, account_id: str) -> bool:
        return self.repository.delete_account(account_id)

    # -------------------------- users --------------------------
    def list_users(self) -> list[dict]:
        return self.repository.list_users()

    def get_user(self, user_id: str) -> Optional[dict]:
        return self.repository.get_user(user_id)

    def get_user_by_username(self, username: str) -> Optional[dict]:
        return self.repository.get_user_by_username(username)

    def create_user(self, data: dict) -> dict:
        return self.repository.create_user(data)

    def update_user(self, user_id: str, changes: dict) -> Optional[dict]:
        return self.repository.update_user(user_id, changes)

    def delete_user(self, user_id: str) -> bool:
        return self.repository.delete_user(user_id)

    # -------------------------- announcements --------------------------
    def list_announcements(self, active_only: bool = False) -> list[dict]:
        announcements = self.repository.list_announcements()
        if active_only:
            return [a for a in announcements if a.get("isActive", True)]
        return announcements

    def get_announcement(self, announcement_id: str) -> Optional[dict]:
        return self.repository.get_announcement(announcement_id)

    def create_announcement(self, data: dict) -> dict:
        return self.repository.create_announcement(data)

    def update_announcement(self, announcement_id: str, changes: dict) -> Optional[dict]:
        return self.repository.update_announcement(announcement_id, changes)

    def delete_announcement(self, announcement_id: str) -> bool:
        return self.repository.delete_announcement(announcement_id)

    # -------------------------- persisted lists --------------------------
    def list_lists(self) -> list[dict]:
        return self.repository.list_lists()

    def get_list(self, list_id: str) -> Optional[dict]:
        return self.repository.get_list(list_id)

    def get_list_by_username(self, username: str) -> Optional[dict]:
        return self.repository.get_list_by_username(username)

    def delete_list(self, list_id: str) -> bool:
        return self.repository.delete_list(list_id)

    def reset_lists(self) -> None:
        self.repository.delete_all_lists()
        logger.warning("All wish lists deleted")

    # -------------------------- drafts --------------------------
    def get_working_list(self, username: str) -> list[dict]:
        return self.drafts.get_items(username)

    def add_item(self, username: str, data: dict) -> dict:
        return self.drafts.add_item(username, data)

    def update_item(self, username: str, item_id: str, changes: dict) -> Optional[dict]:
        return self.drafts.update_item(username, item_id, changes)

    def delete_item(self, username: str, item_id: str) -> bool:
        return self.drafts.delete_item(username, item_id)

    def send_list(self, username: str) -> Optional[dict]:
        """
        Freeze the draft of ``username`` into a persisted list.

        Any list previously sent under the same username (case-insensitive)
        is replaced. Returns None when the draft is empty; the draft is only
        cleared once the new list is on disk.
        """
        with self._send_lock:
            items = self.drafts.get_items(username)
            if not items:
                return None
            wish_list = {
                "id": new_id(),
                "username": username.strip(),
                "createdAt": now_iso(),
                "items": items,
            }
            saved = self.repository.replace_list_for_username(wish_list)
            self.drafts.clear(username)
        logger.info("List sent by %s (%d items)", saved["username"], len(items))
        return saved

    # -------------------------- stats --------------------------
    def get_stats(self) -> Stats:
        counts = self.repository.counts()
        return Stats(
            total_lists=counts[LISTS],
            total_users=counts[USERS],
            total_items=counts["items"],
            total_announcements=counts[ANNOUNCEMENTS],
            total_accounts=counts[ACCOUNTS],
        )
