from __future__ import annotations

import pytest

from wishlist_api.repositories import json_storage
from wishlist_api.services.storage_service import StorageService, StorageWriteError


def _total_items(storage: StorageService) -> int:
    return sum(len(wish_list["items"]) for wish_list in storage.list_lists())


def test_send_moves_draft_into_a_persisted_list(storage):
    storage.add_item("Alice", {"title": "Velo", "quantity": 1})
    assert len(storage.get_working_list("Alice")) == 1

    sent = storage.send_list("Alice")

    lists = storage.list_lists()
    assert len(lists) == 1
    assert lists[0]["username"] == "Alice"
    assert [i["title"] for i in lists[0]["items"]] == ["Velo"]
    assert lists[0] == sent
    assert storage.get_working_list("Alice") == []


def test_send_replaces_previous_list_case_insensitive(storage):
    storage.add_item("Alice", {"title": "Velo", "quantity": 1})
    first = storage.send_list("Alice")
    storage.add_item("alice", {"title": "Luge", "quantity": 2})
    storage.add_item("alice", {"title": "Livre", "quantity": 1})

    second = storage.send_list("alice")

    lists = storage.list_lists()
    assert len(lists) == 1
    assert lists[0]["id"] == second["id"] != first["id"]
    assert [i["title"] for i in lists[0]["items"]] == ["Luge", "Livre"]


def test_send_empty_draft_is_a_no_op(storage):
    storage.add_item("bob", {"title": "Train", "quantity": 1})
    storage.send_list("bob")
    before = storage.list_lists()

    assert storage.send_list("bob") is None
    assert storage.send_list("nobody") is None
    assert storage.list_lists() == before


def test_draft_items_are_scoped_to_their_username(storage):
    item = storage.add_item("alice", {"title": "Velo", "quantity": 1})

    assert storage.update_item("bob", item["id"], {"title": "Vol"}) is None
    assert storage.delete_item("bob", item["id"]) is False
    assert storage.get_working_list("bob") == []
    assert storage.get_working_list("alice") == [item]


def test_draft_key_ignores_username_case(storage):
    storage.add_item("Alice", {"title": "Velo", "quantity": 1})

    assert len(storage.get_working_list("alice")) == 1
    assert storage.send_list("ALICE")["items"][0]["title"] == "Velo"
    assert storage.get_working_list("Alice") == []


def test_update_and_delete_draft_item(storage):
    item = storage.add_item("alice", {"title": "Velo", "quantity": 1, "description": "rouge"})

    updated = storage.update_item("alice", item["id"], {"quantity": 2, "description": None})
    assert updated == {"id": item["id"], "title": "Velo", "quantity": 2}

    assert storage.delete_item("alice", item["id"]) is True
    assert storage.delete_item("alice", item["id"]) is False
    assert storage.get_working_list("alice") == []


def test_drafts_are_lost_on_restart_but_lists_are_not(settings):
    with StorageService(settings) as first:
        first.add_item("alice", {"title": "Velo", "quantity": 1})
        first.send_list("alice")
        first.add_item("alice", {"title": "Brouillon", "quantity": 1})
        sent = first.list_lists()

    with StorageService(settings) as second:
        assert second.get_working_list("alice") == []
        assert second.list_lists() == sent


def test_stats_follow_collections(storage):
    storage.create_user({"username": "alice"})
    storage.create_account({"username": "papa", "password": "p", "displayName": "Papa", "role": "parent"})
    storage.create_announcement({"title": "Noel", "content": "Bientot", "isActive": True})
    storage.add_item("alice", {"title": "Velo", "quantity": 1})
    storage.add_item("alice", {"title": "Luge", "quantity": 1})
    storage.add_item("bob", {"title": "Train", "quantity": 1})

    stats = storage.get_stats()
    assert stats.total_items == 0 == _total_items(storage)

    storage.send_list("alice")
    stats = storage.get_stats()
    assert stats.model_dump(by_alias=True) == {
        "totalLists": 1,
        "totalUsers": 1,
        "totalItems": 2,
        "totalAnnouncements": 1,
        "totalAccounts": 1,
    }
    assert stats.total_items == _total_items(storage)

    storage.reset_lists()
    stats = storage.get_stats()
    assert stats.total_lists == 0
    assert stats.total_items == 0 == _total_items(storage)


def test_active_only_announcements(storage):
    storage.create_announcement({"title": "A", "content": "visible", "isActive": True})
    hidden = storage.create_announcement({"title": "B", "content": "cachee", "isActive": False})

    assert len(storage.list_announcements()) == 2
    assert [a["title"] for a in storage.list_announcements(active_only=True)] == ["A"]
    storage.update_announcement(hidden["id"], {"isActive": True})
    assert len(storage.list_announcements(active_only=True)) == 2


def test_failed_send_keeps_the_draft(storage, monkeypatch):
    storage.add_item("alice", {"title": "Velo", "quantity": 1})

    def failing_save(path, data):
        raise StorageWriteError(path, OSError("read-only"))

    with monkeypatch.context() as patch:
        patch.setattr(json_storage, "save", failing_save)
        with pytest.raises(StorageWriteError):
            storage.send_list("alice")
    assert len(storage.get_working_list("alice")) == 1
