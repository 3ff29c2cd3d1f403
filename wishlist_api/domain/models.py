"""
Request/record schemas for the wish list API.

Records are stored and served as plain dicts with camelCase keys; these
pydantic models only validate what comes in. ``*Create`` schemas describe a
new record (id/createdAt are assigned by the store), ``*Update`` schemas
describe a partial update where an omitted field is left untouched and an
explicit ``null`` clears an optional field.
"""
from __future__ import annotations

import re
from typing import Literal, Optional
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

Role = Literal["user", "parent", "developer"]
ROLES: tuple[str, ...] = ("user", "parent", "developer")

EMAIL_PATTERN = re.compile(r"[^@\s]+@[^@\s]+\.[^@\s]+")


class Schema(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    def to_record(self) -> dict:
        """Fields of a new record, camelCase, unset optionals left out."""
        return self.model_dump(by_alias=True, exclude_none=True)

    def to_changes(self) -> dict:
        """Only the fields the client actually sent (explicit nulls included)."""
        return self.model_dump(by_alias=True, exclude_unset=True)


def _require_value(value):
    if value is None:
        raise ValueError("ce champ ne peut pas etre vide")
    return value


def _check_email(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    if not EMAIL_PATTERN.fullmatch(value):
        raise ValueError("Email invalide")
    return value


def _check_image_url(value: Optional[str]) -> Optional[str]:
    if value is None or value == "":
        return value
    parsed = urlparse(value)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError("URL invalide")
    return value


# -------------------------- wish list items --------------------------
class WishListItemCreate(Schema):
    title: str = Field(min_length=1)
    description: Optional[str] = None
    quantity: int = Field(default=1, ge=1)
    image: Optional[str] = None
    image_url: Optional[str] = None

    @field_validator("image_url")
    @classmethod
    def valid_image_url(cls, value):
        return _check_image_url(value)


class WishListItemUpdate(Schema):
    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    quantity: Optional[int] = Field(default=None, ge=1)
    image: Optional[str] = None
    image_url: Optional[str] = None

    @field_validator("title", "quantity")
    @classmethod
    def not_null(cls, value):
        return _require_value(value)

    @field_validator("image_url")
    @classmethod
    def valid_image_url(cls, value):
        return _check_image_url(value)


# -------------------------- accounts --------------------------
class AccountCreate(Schema):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)
    display_name: str = Field(min_length=1)
    role: Role = "user"


class AccountUpdate(Schema):
    username: Optional[str] = Field(default=None, min_length=1)
    password: Optional[str] = Field(default=None, min_length=1)
    display_name: Optional[str] = Field(default=None, min_length=1)
    role: Optional[Role] = None

    @field_validator("username", "password", "display_name", "role")
    @classmethod
    def not_null(cls, value):
        return _require_value(value)


# -------------------------- legacy users --------------------------
class UserCreate(Schema):
    username: str = Field(min_length=1)
    email: Optional[str] = None

    @field_validator("email")
    @classmethod
    def valid_email(cls, value):
        return _check_email(value)


class UserUpdate(Schema):
    username: Optional[str] = Field(default=None, min_length=1)
    email: Optional[str] = None

    @field_validator("username")
    @classmethod
    def not_null(cls, value):
        return _require_value(value)

    @field_validator("email")
    @classmethod
    def valid_email(cls, value):
        return _check_email(value)


# -------------------------- announcements --------------------------
class AnnouncementCreate(Schema):
    title: str = Field(min_length=1)
    content: str = Field(min_length=1)
    is_active: bool = True


class AnnouncementUpdate(Schema):
    title: Optional[str] = Field(default=None, min_length=1)
    content: Optional[str] = Field(default=None, min_length=1)
    is_active: Optional[bool] = None

    @field_validator("title", "content", "is_active")
    @classmethod
    def not_null(cls, value):
        return _require_value(value)


# -------------------------- config --------------------------
class ConfigUpdate(Schema):
    user_password: Optional[str] = None
    parent_password: Optional[str] = None
    dev_password: Optional[str] = None

    @field_validator("user_password", "parent_password", "dev_password")
    @classmethod
    def not_null(cls, value):
        return _require_value(value)


# -------------------------- auth / stats --------------------------
class LoginRequest(Schema):
    role: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None


class Stats(Schema):
    total_lists: int
    total_users: int
    total_items: int
    total_announcements: int
    total_accounts: int
