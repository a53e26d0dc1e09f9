"""Utility script to initialize or reset the configured document store."""
from __future__ import annotations

import argparse
import logging
import sys

from dossier_hub.core.errors import StorageIOError
from dossier_hub.core.settings import settings
from dossier_hub.db.store import DOCUMENT_ORDER, DocumentStore, default_shape
from dossier_hub.services.bootstrap import initialize_store


def build_store(backend: str, data_dir: str | None, url: str | None) -> DocumentStore:
    """Return a store for ``backend`` without touching the cached application store."""
    if backend == "sql":
        from dossier_hub.db.sql_store import SqlDocumentStore

        return SqlDocumentStore(url or settings.database_url, echo=settings.sql_debug)
    from dossier_hub.db.json_store import JsonFileStore

    return JsonFileStore(data_dir or settings.data_dir)


def reset_documents(store: DocumentStore) -> None:
    """Overwrite every document with its empty default shape."""
    for name in DOCUMENT_ORDER:
        with store.lock_for(name):
            store.save(name, default_shape(name))
    print(f"[init_store] reset {len(DOCUMENT_ORDER)} documents")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Initialize or reset the document store")
    parser.add_argument(
        "--backend",
        choices=("json", "sql"),
        default=settings.store_backend,
        help="Document store backend (defaults to STORE_BACKEND)",
    )
    parser.add_argument(
        "--data-dir",
        default=None,
        help="Override the JSON document directory (defaults to DATA_DIR)",
    )
    parser.add_argument(
        "--url",
        default=None,
        help="Override the SQL database URL (defaults to DATABASE_URL)",
    )
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Erase every document before seeding the default agents.",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=settings.log_level.upper())
    store = build_store(args.backend, args.data_dir, args.url)
    try:
        store.initialize()
        if args.reset:
            reset_documents(store)
        initialize_store(store)
    except StorageIOError as exc:
        print(f"[init_store] ERROR: {exc.message}", file=sys.stderr)
        return 1
    print(f"[init_store] {args.backend} store ready")
    return 0


if __name__ == "__main__":
    sys.exit(main())
