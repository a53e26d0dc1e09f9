# src/dossier_hub/db/__init__.py
"""Document store configuration and utilities."""

from __future__ import annotations

from functools import lru_cache

from dossier_hub.core.settings import settings

from .json_store import JsonFileStore
from .store import (
    AGENTS,
    DOCUMENT_ORDER,
    DOSSIERS,
    MESSAGES,
    NOTIFICATIONS,
    DocumentStore,
)


@lru_cache(maxsize=1)
def get_store() -> DocumentStore:
    """Return the process-wide document store selected by ``STORE_BACKEND``."""
    if settings.store_backend == "sql":
        from .sql_store import SqlDocumentStore

        return SqlDocumentStore(settings.database_url, echo=settings.sql_debug)
    return JsonFileStore(settings.data_dir)


__all__ = [
    "AGENTS",
    "DOCUMENT_ORDER",
    "DOSSIERS",
    "MESSAGES",
    "NOTIFICATIONS",
    "DocumentStore",
    "JsonFileStore",
    "get_store",
]
