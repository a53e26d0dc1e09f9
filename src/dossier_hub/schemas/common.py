"""Shared Pydantic schemas for common API elements."""
from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model whose wire format uses camelCase keys.

    Fields are declared in snake_case and may be populated by either name.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MediaRef(CamelModel):
    """Reference to an uploaded image or video."""

    url: str = Field(..., min_length=1, description="Public URL of the stored file")
    type: Literal["image", "video"] = Field("image", description="Media kind")


class Ack(BaseModel):
    """Short human-readable acknowledgement returned by mutating endpoints."""

    message: str
