"""Shelf scan runner service for CLI/API reuse."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from core.config import Settings, get_settings
from llm.gateway import ModelGateway
from llm.templates import load_extraction_prompt, load_verification_prompt
from pipelines.shelf_scan import ShelfScanPipeline
from schemas.requests import PipelineRequest
from schemas.responses import PipelineResult

logger = logging.getLogger(__name__)


def build_pipeline(
    settings: Settings | None = None,
    *,
    gateway: ModelGateway | None = None,
) -> ShelfScanPipeline:
    """Wire the gateway and prompt assets selected by settings.

    Raises ConfigurationError when no credential is configured and no gateway
    is supplied.
    """
    settings = settings or get_settings()
    if gateway is None:
        gateway = ModelGateway.from_settings(settings)

    verification_prompt = load_verification_prompt() if settings.verify_enabled else None
    pipeline = ShelfScanPipeline(
        gateway,
        extraction_prompt=load_extraction_prompt(settings.extraction_variant),
        verification_prompt=verification_prompt,
    )
    logger.info(
        "Shelf scan pipeline ready (variant=%s, verification=%s)",
        settings.extraction_variant,
        "on" if pipeline.verifies else "off",
    )
    return pipeline


def run_shelf_scan(
    request: PipelineRequest | Mapping[str, Any],
    pipeline: ShelfScanPipeline,
) -> PipelineResult:
    """Run one scan; UpstreamError propagates to the caller."""
    request_obj = (
        request if isinstance(request, PipelineRequest) else PipelineRequest.model_validate(request)
    )
    logger.info(
        "Processing photo (%d bytes, %s)", len(request_obj.image_bytes), request_obj.mime_type
    )
    result = pipeline.run(request_obj)
    logger.info("Photo processed at stage %s in %s ms", result.stage, result.runtime_ms)
    return result


__all__ = ["build_pipeline", "run_shelf_scan"]
