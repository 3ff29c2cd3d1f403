#!/usr/bin/env python3
"""
Creer un compte directement dans le stockage JSON (sans passer par l'API).

Usage:
  python scripts/add_account.py --username alice --display-name "Alice" [--role user] [--password secret]
"""
from __future__ import annotations

import argparse
import secrets
import string
import sys

from wishlist_api.core.config import build_settings
from wishlist_api.core.logger import setup_logging
from wishlist_api.domain.models import ROLES
from wishlist_api.services.storage_service import AccountExistsError, StorageService


def gen_password(length: int = 10) -> str:
    alphabet = string.ascii_lowercase + string.digits
    return "".join(secrets.choice(alphabet) for _ in range(length))


def main() -> None:
    ap = argparse.ArgumentParser(description="Creer un compte")
    ap.add_argument("--username", required=True, help="Identifiant de connexion (unique)")
    ap.add_argument("--display-name", help="Nom affiche (default: identifiant)")
    ap.add_argument("--role", choices=ROLES, default="user", help="Role du compte")
    ap.add_argument("--password", help="Mot de passe (default: aleatoire de 10 caracteres)")
    ap.add_argument("--data-dir", help="Dossier des fichiers JSON (default: $DATA_DIR ou ./data)")
    args = ap.parse_args()

    username = (args.username or "").strip()
    if not username:
        raise SystemExit("Identifiant invalide")
    password = (args.password or "").strip() or gen_password()
    display_name = (args.display_name or "").strip() or username

    settings = build_settings(args.data_dir)
    setup_logging(settings.log_level)
    with StorageService(settings) as storage:
        try:
            account = storage.create_account(
                {"username": username, "password": password, "displayName": display_name, "role": args.role}
            )
        except AccountExistsError:
            raise SystemExit(f"Identifiant '{username}' deja utilise")

    print("OK: compte cree")
    print(f"  ID: {account['id']}")
    print(f"  Identifiant: {account['username']}")
    print(f"  Role: {account['role']}")
    print(f"  Mot de passe: {password}")


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover - usage CLI
        sys.stderr.write(f"Erreur: {exc}\n")
        raise SystemExit(1)
