"""Schema package for external and internal contracts."""

from .books import BookRecord, BookTable
from .requests import PipelineRequest
from .responses import ErrorResponse, PipelineResult, ProcessPhotoResponse

__all__ = [
    "BookRecord",
    "BookTable",
    "ErrorResponse",
    "PipelineRequest",
    "PipelineResult",
    "ProcessPhotoResponse",
]
