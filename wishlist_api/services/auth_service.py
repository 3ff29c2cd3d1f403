"""
Login use case: shared role passwords (Config) or individual Accounts.

Passwords are stored and compared in plaintext; there is no session, the
client keeps the returned role itself.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
import secrets

from wishlist_api.domain.models import ROLES
from wishlist_api.services.storage_service import StorageService

ROLE_PASSWORD_KEYS = {
    "user": "userPassword",
    "parent": "parentPassword",
    "developer": "devPassword",
}


class AuthError(Exception):
    """Base class for authentication-related exceptions."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MissingCredentialsError(AuthError):
    pass


class InvalidRoleError(AuthError):
    pass


class InvalidCredentialsError(AuthError):
    status_code = 401


@dataclass
class LoginSuccess:
    role: str
    username: Optional[str]
    account: Optional[dict] = None

    def to_dict(self) -> dict:
        payload = {"success": True, "role": self.role, "username": self.username}
        if self.account is not None:
            payload["account"] = self.account
        return payload


def public_account(account: dict) -> dict:
    return {k: v for k, v in account.items() if k != "password"}


def _matches(supplied: str, expected: Optional[str]) -> bool:
    return secrets.compare_digest(supplied.encode("utf-8"), (expected or "").encode("utf-8"))


@dataclass
class AuthService:
    storage: StorageService

    def login(self, password: Optional[str], role: Optional[str] = None, username: Optional[str] = None) -> LoginSuccess:
        if not password or not (role or username):
            raise MissingCredentialsError("Role et mot de passe requis")
        if role:
            return self._login_with_role(role, password, username)
        return self._login_with_account(username or "", password)

    def _login_with_role(self, role: str, password: str, username: Optional[str]) -> LoginSuccess:
        if role not in ROLES:
            raise InvalidRoleError("Role invalide")
        config = self.storage.get_config()
        if not _matches(password, config.get(ROLE_PASSWORD_KEYS[role])):
            raise InvalidCredentialsError("Mot de passe incorrect")
        return LoginSuccess(role=role, username=username or None)

    def _login_with_account(self, username: str, password: str) -> LoginSuccess:
        account = self.storage.get_account_by_username(username)
        # Meme message dans les deux cas pour ne pas reveler les identifiants existants
        if not account or not _matches(password, account.get("password")):
            raise InvalidCredentialsError("Identifiant ou mot de passe incorrect")
        return LoginSuccess(role=account["role"], username=account["username"], account=public_account(account))
