#!/usr/bin/env python3
"""
Supprimer toutes les listes envoyees (ou celle d'un seul utilisateur).

Usage:
  python scripts/reset_lists.py [--username alice] [--yes]
"""
from __future__ import annotations

import argparse
import sys

from wishlist_api.core.config import build_settings
from wishlist_api.core.logger import setup_logging
from wishlist_api.services.storage_service import StorageService


def main() -> None:
    ap = argparse.ArgumentParser(description="Reinitialiser les listes")
    ap.add_argument("--username", help="Ne supprimer que la liste de cet utilisateur")
    ap.add_argument("--data-dir", help="Dossier des fichiers JSON (default: $DATA_DIR ou ./data)")
    ap.add_argument("--yes", action="store_true", help="Ne pas demander de confirmation")
    args = ap.parse_args()

    settings = build_settings(args.data_dir)
    setup_logging(settings.log_level)
    with StorageService(settings) as storage:
        username = (args.username or "").strip()
        if username:
            wish_list = storage.get_list_by_username(username)
            if not wish_list:
                raise SystemExit(f"Aucune liste pour '{username}'")
            storage.delete_list(wish_list["id"])
            print(f"OK: liste de {wish_list['username']} supprimee ({len(wish_list['items'])} articles)")
            return

        total = len(storage.list_lists())
        if not args.yes:
            answer = input(f"Supprimer {total} liste(s) ? [o/N] ").strip().lower()
            if answer not in {"o", "oui", "y", "yes"}:
                raise SystemExit("Annule")
        storage.reset_lists()
        print(f"OK: {total} liste(s) supprimee(s)")


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover - usage CLI
        sys.stderr.write(f"Erreur: {exc}\n")
        raise SystemExit(1)
