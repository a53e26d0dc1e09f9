"""Flat JSON file backend for the document store."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from dossier_hub.core.errors import StorageIOError
from dossier_hub.db.store import DocumentStore

logger = logging.getLogger(__name__)


class JsonFileStore(DocumentStore):
    """Store each logical document as ``<data_dir>/<name>.json``."""

    def __init__(self, data_dir: Path | str) -> None:
        super().__init__()
        self.data_dir = Path(data_dir)

    def path_for(self, name: str) -> Path:
        return self.data_dir / f"{name}.json"

    def initialize(self) -> None:
        """Create the data directory if it does not exist."""
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageIOError(f"Cannot create data directory {self.data_dir}: {exc}") from exc

    def _read(self, name: str) -> Any | None:
        path = self.path_for(name)
        try:
            data = path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as exc:
            logger.error("Failed to read %s: %s", path, exc)
            raise StorageIOError(f"Cannot read document {name}") from exc

        try:
            raw = data.decode("utf-8")
            if not raw.strip():
                return None
            return json.loads(raw)
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            logger.warning("Corrupt JSON in %s (%s); it will be overwritten with defaults", path, exc)
            return None

    def _write(self, name: str, document: dict[str, Any]) -> None:
        path = self.path_for(name)
        payload = json.dumps(document, indent=2, ensure_ascii=False)
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            # Readers only ever see the old or the new file.
            fd, tmp_name = tempfile.mkstemp(prefix=f".{name}.", suffix=".tmp", dir=self.data_dir)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(payload)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            logger.error("Failed to write %s: %s", path, exc)
            raise StorageIOError(f"Cannot write document {name}") from exc
