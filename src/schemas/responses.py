"""External response schemas for shelf scans."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict


class PipelineResult(BaseModel):
    csv: str
    raw_csv: str
    stage: Literal["extracted", "verified"]
    runtime_ms: int | None = None

    model_config = ConfigDict(extra="forbid")


class ProcessPhotoResponse(BaseModel):
    csv: str


class ErrorResponse(BaseModel):
    error: str


__all__ = ["ErrorResponse", "PipelineResult", "ProcessPhotoResponse"]
