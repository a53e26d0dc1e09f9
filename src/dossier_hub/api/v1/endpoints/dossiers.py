"""Dossier and comment endpoints for the Dossier Hub API."""

from __future__ import annotations

from fastapi import APIRouter, status

from dossier_hub.api.v1.dependencies import DossierServiceDep
from dossier_hub.schemas.common import Ack
from dossier_hub.schemas.dossier import (
    ActionPerformer,
    Comment,
    CommentCreate,
    CommentLikeToggle,
    CommentUpdate,
    Dossier,
    DossierCreate,
    DossierReactionToggle,
    DossierUpdate,
    RepostToggle,
)

router = APIRouter(prefix="/dossiers", tags=["dossiers"])


@router.get("/", response_model=list[Dossier])
async def list_dossiers(dossiers: DossierServiceDep) -> list[Dossier]:
    """List dossiers, newest first."""
    return dossiers.list_dossiers()


@router.post("/", response_model=Dossier, status_code=status.HTTP_201_CREATED)
async def create_dossier(body: DossierCreate, dossiers: DossierServiceDep) -> Dossier:
    """Publish a new dossier.

    Args:
        body: Title, description, author and optional media references
        dossiers: Dossier service

    Returns:
        The stored dossier
    """
    return dossiers.create_dossier(body)


@router.put("/{dossier_id}", response_model=Dossier)
async def update_dossier(
    dossier_id: int, body: DossierUpdate, dossiers: DossierServiceDep
) -> Dossier:
    """Update the supplied fields of a dossier."""
    return dossiers.update_dossier(dossier_id, body)


@router.delete("/{dossier_id}", response_model=Ack)
async def delete_dossier(
    dossier_id: int,
    dossiers: DossierServiceDep,
    body: ActionPerformer | None = None,
) -> Ack:
    dossiers.delete_dossier(dossier_id, body.action_performer if body else None)
    return Ack(message="Dossier deleted.")


@router.post("/{dossier_id}/like")
async def toggle_dossier_reaction(
    dossier_id: int, body: DossierReactionToggle, dossiers: DossierServiceDep
) -> dict[str, int]:
    """Toggle a like, or a dislike when ``isLike`` is false."""
    return dossiers.toggle_reaction(dossier_id, body.agent_name, is_like=body.is_like)


@router.post("/{dossier_id}/repost")
async def toggle_repost(
    dossier_id: int, body: RepostToggle, dossiers: DossierServiceDep
) -> dict[str, int]:
    return dossiers.toggle_repost(dossier_id, body.agent_name)


@router.post(
    "/{dossier_id}/comments", response_model=Comment, status_code=status.HTTP_201_CREATED
)
async def add_comment(
    dossier_id: int, body: CommentCreate, dossiers: DossierServiceDep
) -> Comment:
    """Comment on a dossier or reply to one of its comments."""
    return dossiers.add_comment(dossier_id, body.text, body.author, parent_id=body.parent_id)


@router.put("/{dossier_id}/comments/{comment_id}", response_model=Comment)
async def edit_comment(
    dossier_id: int, comment_id: int, body: CommentUpdate, dossiers: DossierServiceDep
) -> Comment:
    return dossiers.edit_comment(
        dossier_id,
        comment_id,
        body.text,
        action_performer=body.action_performer,
        no_modified_tag=body.no_modified_tag,
    )


@router.delete("/{dossier_id}/comments/{comment_id}", response_model=Ack)
async def delete_comment(
    dossier_id: int,
    comment_id: int,
    dossiers: DossierServiceDep,
    body: ActionPerformer | None = None,
) -> Ack:
    """Delete a comment and every reply beneath it."""
    dossiers.delete_comment(
        dossier_id, comment_id, action_performer=body.action_performer if body else None
    )
    return Ack(message="Comment deleted.")


@router.post("/{dossier_id}/comments/{comment_id}/like")
async def toggle_comment_like(
    dossier_id: int, comment_id: int, body: CommentLikeToggle, dossiers: DossierServiceDep
) -> dict[str, int]:
    return dossiers.toggle_comment_like(dossier_id, comment_id, body.agent_name)
