"""Whole-document persistence shared by every service.

Each logical document (agents, dossiers, messages, notifications) is loaded
in full, mutated in memory and written back in full. A per-document re-entrant
lock spans the read-modify-write so two requests cannot interleave on the same
document. When one operation needs several documents it must acquire them in
``DOCUMENT_ORDER`` to keep lock acquisition deadlock free.
"""

from __future__ import annotations

import copy
import logging
from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import contextmanager
from threading import Lock, RLock
from typing import Any, Final, TypeVar

from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)

AGENTS: Final[str] = "agents"
DOSSIERS: Final[str] = "dossiers"
MESSAGES: Final[str] = "messages"
NOTIFICATIONS: Final[str] = "notifications"

DOCUMENT_ORDER: Final[tuple[str, ...]] = (AGENTS, DOSSIERS, MESSAGES, NOTIFICATIONS)

DEFAULT_SHAPES: Final[dict[str, dict[str, Any]]] = {
    AGENTS: {"agents": []},
    DOSSIERS: {"dossiers": []},
    MESSAGES: {"contacts": [], "conversations": []},
    NOTIFICATIONS: {"notifications": []},
}

ModelT = TypeVar("ModelT", bound=BaseModel)


def default_shape(name: str) -> dict[str, Any]:
    """Return a fresh copy of the default shape for a logical document."""
    try:
        return copy.deepcopy(DEFAULT_SHAPES[name])
    except KeyError as exc:
        raise KeyError(f"Unknown document: {name}") from exc


def has_default_shape(name: str, document: Any) -> bool:
    """Return True if every top-level list of the default shape is present."""
    if not isinstance(document, dict):
        return False
    return all(isinstance(document.get(key), list) for key in DEFAULT_SHAPES[name])


class DocumentStore(ABC):
    """Load and save whole JSON documents by logical name.

    Subclasses implement ``_read`` and ``_write``. ``_read`` returns ``None``
    when the document is missing, empty or unparseable; it raises
    :class:`~dossier_hub.core.errors.StorageIOError` only for real I/O failures.
    """

    def __init__(self) -> None:
        self._locks: dict[str, RLock] = {}
        self._locks_guard = Lock()

    @abstractmethod
    def _read(self, name: str) -> Any | None:
        """Return the raw parsed document or ``None``."""

    @abstractmethod
    def _write(self, name: str, document: dict[str, Any]) -> None:
        """Overwrite the stored document."""

    def initialize(self) -> None:
        """Prepare the backing storage (directories, tables)."""

    def lock_for(self, name: str) -> RLock:
        """Return the lock guarding a logical document."""
        with self._locks_guard:
            lock = self._locks.get(name)
            if lock is None:
                lock = self._locks[name] = RLock()
            return lock

    def load(self, name: str) -> dict[str, Any]:
        """Return the document, or its default shape when missing or corrupt."""
        document = self._read(name)
        if document is None:
            return default_shape(name)
        if not has_default_shape(name, document):
            logger.warning("Document %s has an unexpected shape; using defaults", name)
            return default_shape(name)
        return document

    def save(self, name: str, document: dict[str, Any]) -> None:
        """Overwrite the document in full."""
        self._write(name, document)

    def load_model(self, name: str, model: type[ModelT]) -> ModelT:
        """Load a document and validate it into ``model``.

        A document that no longer validates is treated like a corrupt file:
        the failure is logged and the default shape is returned.
        """
        document = self.load(name)
        try:
            return model.model_validate(document)
        except ValidationError as exc:
            logger.warning("Document %s failed validation; using defaults: %s", name, exc)
            return model.model_validate(default_shape(name))

    def save_model(self, name: str, state: BaseModel) -> None:
        """Serialize ``state`` with camelCase keys and save it."""
        self.save(name, state.model_dump(mode="json", by_alias=True))

    @contextmanager
    def transaction(self, name: str) -> Iterator[dict[str, Any]]:
        """Hold the document lock while the caller mutates the raw document.

        The document is saved only if the block exits without raising.
        """
        with self.lock_for(name):
            document = self.load(name)
            yield document
            self.save(name, document)

    @contextmanager
    def edit(self, name: str, model: type[ModelT]) -> Iterator[ModelT]:
        """Typed variant of :meth:`transaction` yielding a validated model."""
        with self.lock_for(name):
            state = self.load_model(name, model)
            yield state
            self.save_model(name, state)

    def ensure(self, name: str) -> dict[str, Any]:
        """Repair a document in place and return its current content."""
        with self.lock_for(name):
            document = self.load(name)
            self.save(name, document)
            return document
