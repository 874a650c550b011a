import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, File, Request, UploadFile
from fastapi.concurrency import run_in_threadpool

from core.errors import ConfigurationError, ValidationError
from pipelines.shelf_scan import ShelfScanPipeline
from schemas.requests import PipelineRequest
from schemas.responses import ErrorResponse, ProcessPhotoResponse
from services.shelf_runner import run_shelf_scan

logger = logging.getLogger(__name__)

router = APIRouter()

MISSING_IMAGE_MESSAGE = "Please provide an image file to process."
_DEFAULT_MIME_TYPE = "application/octet-stream"


def get_pipeline(request: Request) -> ShelfScanPipeline:
    pipeline = getattr(request.app.state, "pipeline", None)
    if pipeline is None:
        raise ConfigurationError("Missing API key. Cannot process request.")
    return pipeline


@router.post(
    "/api/processphoto",
    response_model=ProcessPhotoResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    tags=["Pipeline"],
)
async def process_photo(
    pipeline: Annotated[ShelfScanPipeline, Depends(get_pipeline)],
    image: Annotated[Optional[UploadFile], File()] = None,
):
    """
    Detect the books in an uploaded bookshelf photo.

    Returns the model's CSV (title, author, coordinates) under ``csv``.
    """
    logger.info("Received request for /api/processphoto")
    # Browsers send an empty file part with filename="" when nothing was picked.
    if image is None or not image.filename:
        raise ValidationError(MISSING_IMAGE_MESSAGE)

    content = await image.read()
    request_data = PipelineRequest(
        image_bytes=content,
        mime_type=image.content_type or _DEFAULT_MIME_TYPE,
        filename=image.filename,
    )
    result = await run_in_threadpool(run_shelf_scan, request_data, pipeline)
    return ProcessPhotoResponse(csv=result.csv)
