"""Private messaging endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from dossier_hub.api.v1.dependencies import ConversationServiceDep
from dossier_hub.schemas.message import Message, MessageCreate, Reaction, ReactionCreate

router = APIRouter(prefix="/messages", tags=["messages"])


@router.get("/{agent1}/{agent2}", response_model=list[Message])
async def get_conversation(
    agent1: str, agent2: str, conversations: ConversationServiceDep
) -> list[Message]:
    """Return the messages exchanged by two agents, oldest first."""
    return conversations.get_conversation(agent1, agent2)


@router.post("/", response_model=Message, status_code=status.HTTP_201_CREATED)
async def send_message(body: MessageCreate, conversations: ConversationServiceDep) -> Message:
    """Send a private message to an accepted contact."""
    return conversations.send_message(
        body.sender,
        body.recipient,
        text=body.text,
        media=body.media,
        transfer_from_message_id=body.transfer_from_message_id,
    )


@router.post("/{message_id}/react", response_model=list[Reaction])
async def react_to_message(
    message_id: int, body: ReactionCreate, conversations: ConversationServiceDep
) -> list[Reaction]:
    """Toggle an emoji reaction and return the message's reactions."""
    return conversations.react(message_id, body.agent_name, body.emoji)
