"""External request schemas for shelf scans."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class PipelineRequest(BaseModel):
    """One uploaded photo, held in memory for the lifetime of a request."""

    image_bytes: bytes
    mime_type: str = Field(min_length=1)
    filename: str | None = None

    model_config = ConfigDict(extra="forbid", frozen=True)


__all__ = ["PipelineRequest"]
