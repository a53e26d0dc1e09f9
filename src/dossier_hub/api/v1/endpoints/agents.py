"""Agent directory endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from dossier_hub.api.v1.dependencies import AgentServiceDep
from dossier_hub.schemas.agent import AgentResponse

router = APIRouter(prefix="/agents", tags=["agents"])


@router.get("/", response_model=list[AgentResponse])
async def list_agents(agents: AgentServiceDep) -> list[AgentResponse]:
    """List every known agent without its access code."""
    return [AgentResponse(name=agent.name) for agent in agents.list_agents()]
