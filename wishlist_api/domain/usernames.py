"""Username normalization shared by every lookup (accounts, lists, drafts)."""
from __future__ import annotations


def normalize_username(value: str | None) -> str:
    """Return the comparison key for a username: surrounding blanks dropped, case folded."""
    return (value or "").strip().casefold()


def same_username(left: str | None, right: str | None) -> bool:
    key = normalize_username(left)
    return bool(key) and key == normalize_username(right)
