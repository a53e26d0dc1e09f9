"""Dossier (post) and comment Pydantic schemas."""

from __future__ import annotations

from pydantic import Field

from .common import CamelModel, MediaRef


class Comment(CamelModel):
    """Comment on a dossier; replies point at their parent through ``parent_id``."""

    id: int
    text: str
    author: str
    timestamp: str
    parent_id: int | None = None
    likes: list[str] = Field(default_factory=list)
    modified: bool = False


class Dossier(CamelModel):
    """A user-authored post with media references and social reactions."""

    id: int
    title: str
    desc: str
    media: list[MediaRef] = Field(default_factory=list)
    author: str
    comments: list[Comment] = Field(default_factory=list)
    likes: list[str] = Field(default_factory=list)
    dislikes: list[str] = Field(default_factory=list)
    reposts: list[str] = Field(default_factory=list)
    is_hidden: bool = False
    image_hidden: bool = False

    def find_comment(self, comment_id: int) -> Comment | None:
        return next((comment for comment in self.comments if comment.id == comment_id), None)


class DossiersDocument(CamelModel):
    """Shape of the ``dossiers`` document, newest first."""

    dossiers: list[Dossier] = Field(default_factory=list)

    def find(self, dossier_id: int) -> Dossier | None:
        return next((dossier for dossier in self.dossiers if dossier.id == dossier_id), None)


class DossierCreate(CamelModel):
    """Body of ``POST /dossiers``."""

    title: str
    desc: str
    author: str
    media: list[MediaRef] = Field(default_factory=list)
    is_hidden: bool = False
    image_hidden: bool = False


class DossierUpdate(CamelModel):
    """Body of ``PUT /dossiers/{id}``; only supplied fields change."""

    title: str | None = None
    desc: str | None = None
    author: str | None = None
    media: list[MediaRef] | None = None
    is_hidden: bool | None = None
    image_hidden: bool | None = None
    action_performer: str | None = None


class ActionPerformer(CamelModel):
    """Optional body naming who performed a destructive action."""

    action_performer: str | None = None


class DossierReactionToggle(CamelModel):
    """Body of ``POST /dossiers/{id}/like``; ``is_like=False`` toggles a dislike."""

    agent_name: str = Field(..., min_length=1)
    is_like: bool = True


class RepostToggle(CamelModel):
    """Body of ``POST /dossiers/{id}/repost``."""

    agent_name: str = Field(..., min_length=1)


class CommentCreate(CamelModel):
    """Body of ``POST /dossiers/{id}/comments``."""

    text: str
    author: str
    parent_id: int | None = None


class CommentUpdate(CamelModel):
    """Body of ``PUT /dossiers/{id}/comments/{comment_id}``."""

    text: str
    action_performer: str | None = None
    no_modified_tag: bool = False


class CommentLikeToggle(CamelModel):
    """Body of ``POST /dossiers/{id}/comments/{comment_id}/like``."""

    agent_name: str = Field(..., min_length=1)
