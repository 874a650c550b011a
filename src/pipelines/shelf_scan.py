"""Two-stage shelf scan: literal extraction, then knowledge-based verification.

State flow per request::

    received -> extracted -> verified
        \\           \\
         +-----------+--> failed

The CSV text is passed through untouched between stages and to the caller;
nothing here parses or repairs it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from time import perf_counter

from core.errors import UpstreamError
from llm.gateway import ImageInput, ModelGateway
from llm.templates import build_verification_prompt
from schemas.requests import PipelineRequest
from schemas.responses import PipelineResult

logger = logging.getLogger(__name__)


class PipelineStage(str, Enum):
    RECEIVED = "received"
    EXTRACTED = "extracted"
    VERIFIED = "verified"
    FAILED = "failed"


@dataclass
class PipelineRun:
    stage: PipelineStage = PipelineStage.RECEIVED
    raw_csv: str | None = None
    csv: str | None = None

    def advance(self, stage: PipelineStage) -> None:
        logger.debug("Pipeline stage %s -> %s", self.stage.value, stage.value)
        self.stage = stage


class ShelfScanPipeline:
    """Run the extraction prompt on an image, then optionally verify the CSV.

    ``verification_prompt=None`` configures an extraction-only deployment: the
    verification call is never made and the stage-one CSV is the result. When a
    verification prompt is set, a failed verification call fails the whole run.
    """

    def __init__(
        self,
        gateway: ModelGateway,
        *,
        extraction_prompt: str,
        verification_prompt: str | None = None,
    ) -> None:
        if not extraction_prompt.strip():
            raise ValueError("extraction_prompt must be non-empty")
        self.gateway = gateway
        self.extraction_prompt = extraction_prompt
        self.verification_prompt = verification_prompt

    @property
    def verifies(self) -> bool:
        return self.verification_prompt is not None

    def run(self, request: PipelineRequest) -> PipelineResult:
        start = perf_counter()
        state = PipelineRun()

        image = ImageInput(data=request.image_bytes, mime_type=request.mime_type)
        state.raw_csv = self._call(state, "extraction", self.extraction_prompt, image)
        state.advance(PipelineStage.EXTRACTED)

        if self.verification_prompt is None:
            state.csv = state.raw_csv
        else:
            prompt = build_verification_prompt(state.raw_csv, template=self.verification_prompt)
            state.csv = self._call(state, "verification", prompt)
            state.advance(PipelineStage.VERIFIED)

        return PipelineResult(
            csv=state.csv,
            raw_csv=state.raw_csv,
            stage=state.stage.value,
            runtime_ms=int((perf_counter() - start) * 1000),
        )

    def _call(
        self,
        state: PipelineRun,
        stage_name: str,
        prompt: str,
        image: ImageInput | None = None,
    ) -> str:
        try:
            return self.gateway.generate(prompt, image)
        except UpstreamError as exc:
            state.advance(PipelineStage.FAILED)
            logger.error("%s stage failed: %s", stage_name.capitalize(), exc)
            raise UpstreamError(str(exc), stage=stage_name) from exc


__all__ = ["PipelineRun", "PipelineStage", "ShelfScanPipeline"]
