"""Domain error taxonomy shared by services and the HTTP layer.

Services raise these exceptions; ``dossier_hub.main`` registers a handler that
turns each one into a JSON ``{"detail": message}`` response carrying the
class's ``status_code``. Storage corruption has no class here: the store
recovers from it with default document shapes instead of raising.
"""

from __future__ import annotations

from fastapi import status


class DossierHubError(Exception):
    """Base class for errors reported back to the caller."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidInputError(DossierHubError):
    """A required field is missing or a value is unusable."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(DossierHubError):
    """An agent, contact, conversation, message, dossier or notification is unknown."""

    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(DossierHubError):
    """The requested state already exists (duplicate contact request)."""

    status_code = status.HTTP_409_CONFLICT


class ForbiddenError(DossierHubError):
    """The caller is not allowed to perform the action (messaging a non-contact)."""

    status_code = status.HTTP_403_FORBIDDEN


class StorageIOError(DossierHubError):
    """The document store could not be read or written."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
