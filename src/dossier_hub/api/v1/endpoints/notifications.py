"""Notification endpoints."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter

from dossier_hub.api.v1.dependencies import AgentServiceDep, NotificationServiceDep
from dossier_hub.schemas.common import Ack
from dossier_hub.schemas.notification import MarkReadRequest

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("/{agent_name}")
async def list_notifications(
    agent_name: str,
    notifications: NotificationServiceDep,
    agents: AgentServiceDep,
) -> list[dict[str, Any]]:
    """Return the notifications visible to an agent with a ``read`` flag each."""
    return notifications.list_visible(agents.canonical(agent_name))


@router.put("/mark-read/{notification_id}", response_model=Ack)
async def mark_notification_read(
    notification_id: int,
    body: MarkReadRequest,
    notifications: NotificationServiceDep,
    agents: AgentServiceDep,
) -> Ack:
    notifications.mark_read(notification_id, agents.canonical(body.agent_name))
    return Ack(message="Notification marked as read.")


@router.delete("/all/{agent_name}", response_model=Ack)
async def mark_all_read(
    agent_name: str,
    notifications: NotificationServiceDep,
    agents: AgentServiceDep,
) -> Ack:
    """Mark every broadcast read and delete the agent's direct notifications."""
    notifications.mark_all_read(agents.canonical(agent_name))
    return Ack(message="All notifications marked as read.")


@router.delete("/{notification_id}", response_model=Ack)
async def delete_notification(notification_id: int, notifications: NotificationServiceDep) -> Ack:
    notifications.delete_notification(notification_id)
    return Ack(message="Notification deleted.")
