from __future__ import annotations

import pytest

from wishlist_api.services.auth_service import (
    AuthService,
    InvalidCredentialsError,
    InvalidRoleError,
    MissingCredentialsError,
)


def test_role_login_uses_shared_config_password(storage):
    svc = AuthService(storage)

    result = svc.login("dev123", role="developer")
    assert result.to_dict() == {"success": True, "role": "developer", "username": None}

    with pytest.raises(InvalidCredentialsError) as exc:
        svc.login("wrong", role="developer")
    assert exc.value.status_code == 401


def test_role_login_follows_config_updates(storage):
    svc = AuthService(storage)
    storage.update_config({"userPassword": "sapin"})

    assert svc.login("sapin", role="user", username="Alice").username == "Alice"
    with pytest.raises(InvalidCredentialsError):
        svc.login("user123", role="user")


def test_unknown_role_and_missing_fields_are_bad_requests(storage):
    svc = AuthService(storage)

    with pytest.raises(InvalidRoleError) as exc:
        svc.login("dev123", role="admin")
    assert exc.value.status_code == 400
    with pytest.raises(MissingCredentialsError):
        svc.login("", role="user")
    with pytest.raises(MissingCredentialsError):
        svc.login("dev123")


def test_account_login_returns_account_without_password(storage):
    account = storage.create_account({"username": "Maman", "password": "etoile", "displayName": "Maman", "role": "parent"})
    svc = AuthService(storage)

    result = svc.login("etoile", username="maman")

    assert result.role == "parent"
    assert result.account["id"] == account["id"]
    assert "password" not in result.account


def test_account_login_rejects_wrong_password_and_unknown_user(storage):
    storage.create_account({"username": "papa", "password": "renne", "displayName": "Papa", "role": "parent"})
    svc = AuthService(storage)

    with pytest.raises(InvalidCredentialsError):
        svc.login("traineau", username="papa")
    with pytest.raises(InvalidCredentialsError):
        svc.login("renne", username="inconnu")
