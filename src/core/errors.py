"""Error taxonomy shared by the gateway, pipeline and HTTP layer."""

from __future__ import annotations


class LitLensError(Exception):
    """Base class for all service errors."""


class ConfigurationError(LitLensError):
    """Fatal misconfiguration detected at startup; the process must not serve."""


class ValidationError(LitLensError):
    """The client request is unusable (e.g. no image uploaded)."""


class UpstreamError(LitLensError):
    """The external model call failed or timed out."""

    def __init__(self, message: str, *, stage: str | None = None) -> None:
        super().__init__(message)
        self.stage = stage


__all__ = ["ConfigurationError", "LitLensError", "UpstreamError", "ValidationError"]
