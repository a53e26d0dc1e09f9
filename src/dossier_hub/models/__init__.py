# src/dossier_hub/models/__init__.py
"""SQLAlchemy models for the Dossier Hub application."""

from .stored_document import StoredDocument

__all__ = ["StoredDocument"]
