"""Request pipelines."""

from .shelf_scan import PipelineStage, ShelfScanPipeline

__all__ = ["PipelineStage", "ShelfScanPipeline"]
