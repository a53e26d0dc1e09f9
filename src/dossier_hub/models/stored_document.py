# src/dossier_hub/models/stored_document.py
"""ORM model backing the SQL document store."""

from datetime import datetime

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from dossier_hub.db.session import Base
from dossier_hub.db.time import utcnow


class StoredDocument(Base):
    """One logical JSON document, kept as serialized text.

    The store never updates part of a document; ``body`` is always
    replaced in full.
    """

    __tablename__ = "stored_document"

    name: Mapped[str] = mapped_column(String(64), primary_key=True)
    body: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(default=utcnow, onupdate=utcnow)
