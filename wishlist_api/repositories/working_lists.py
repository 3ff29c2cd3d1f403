"""
Draft items per username, kept in process memory until the list is sent.

Nothing here is written to disk: a restart drops every unsent draft.
"""
from __future__ import annotations

import copy
import threading
from typing import Optional

from wishlist_api.core.utils import new_id
from wishlist_api.domain.usernames import normalize_username


class WorkingListCache:
    def __init__(self) -> None:
        self._drafts: dict[str, list[dict]] = {}
        self._lock = threading.Lock()

    def _find(self, items: list[dict], item_id: str) -> int:
        for idx, item in enumerate(items):
            if item.get("id") == item_id:
                return idx
        return -1

    def add_item(self, username: str, data: dict) -> dict:
        item = {"id": new_id(), **data}
        with self._lock:
            self._drafts.setdefault(normalize_username(username), []).append(item)
        return copy.deepcopy(item)

    def update_item(self, username: str, item_id: str, changes: dict) -> Optional[dict]:
        with self._lock:
            items = self._drafts.get(normalize_username(username))
            if not items:
                return None
            idx = self._find(items, item_id)
            if idx < 0:
                return None
            item = items[idx]
            for key, value in changes.items():
                if key == "id":
                    continue
                if value is None:
                    item.pop(key, None)
                else:
                    item[key] = value
            return copy.deepcopy(item)

    def delete_item(self, username: str, item_id: str) -> bool:
        with self._lock:
            items = self._drafts.get(normalize_username(username))
            if not items:
                return False
            idx = self._find(items, item_id)
            if idx < 0:
                return False
            del items[idx]
            return True

    def get_items(self, username: str) -> list[dict]:
        with self._lock:
            return copy.deepcopy(self._drafts.get(normalize_username(username), []))

    def clear(self, username: str) -> None:
        with self._lock:
            self._drafts.pop(normalize_username(username), None)
