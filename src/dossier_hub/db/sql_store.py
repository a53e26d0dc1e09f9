"""SQLAlchemy backend for the document store."""

from __future__ import annotations

import json
import logging
from typing import Any

from sqlalchemy.exc import SQLAlchemyError

from dossier_hub.core.errors import StorageIOError
from dossier_hub.db.session import build_engine, build_sessionmaker, create_tables
from dossier_hub.db.store import DocumentStore
from dossier_hub.db.time import utcnow
from dossier_hub.models import StoredDocument

logger = logging.getLogger(__name__)


class SqlDocumentStore(DocumentStore):
    """Keep each logical document as one row of ``stored_document``."""

    def __init__(self, database_url: str, *, echo: bool = False) -> None:
        super().__init__()
        self.engine = build_engine(database_url, echo=echo)
        self._session_factory = build_sessionmaker(self.engine)

    def initialize(self) -> None:
        """Create the backing table if needed."""
        try:
            create_tables(self.engine)
        except SQLAlchemyError as exc:
            raise StorageIOError(f"Cannot initialize document table: {exc}") from exc

    def _read(self, name: str) -> Any | None:
        try:
            with self._session_factory() as session:
                row = session.get(StoredDocument, name)
                body = row.body if row is not None else None
        except SQLAlchemyError as exc:
            logger.error("Failed to read document %s: %s", name, exc)
            raise StorageIOError(f"Cannot read document {name}") from exc

        if body is None or not body.strip():
            return None
        try:
            return json.loads(body)
        except json.JSONDecodeError as exc:
            logger.warning("Corrupt JSON in stored document %s (%s); using defaults", name, exc)
            return None

    def _write(self, name: str, document: dict[str, Any]) -> None:
        body = json.dumps(document, ensure_ascii=False)
        try:
            with self._session_factory.begin() as session:
                row = session.get(StoredDocument, name)
                if row is None:
                    session.add(StoredDocument(name=name, body=body))
                else:
                    row.body = body
                    row.updated_at = utcnow()
        except SQLAlchemyError as exc:
            logger.error("Failed to write document %s: %s", name, exc)
            raise StorageIOError(f"Cannot write document {name}") from exc

    def dispose(self) -> None:
        self.engine.dispose()
