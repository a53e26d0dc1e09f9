"""Agent-related Pydantic schemas."""

from pydantic import BaseModel, Field


class Agent(BaseModel):
    """Stored agent identity; ``name`` is the identity key."""

    name: str = Field(..., min_length=1)
    code: str = ""


class AgentResponse(BaseModel):
    """Public view of an agent; the access code is never returned."""

    name: str


class AgentsDocument(BaseModel):
    """Shape of the ``agents`` document."""

    agents: list[Agent] = Field(default_factory=list)
