from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.actions import health, photos
from core.config import Settings, get_settings
from core.errors import ConfigurationError, UpstreamError, ValidationError
from litlens import __version__
from pipelines.shelf_scan import ShelfScanPipeline
from services.shelf_runner import build_pipeline

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    *,
    pipeline: ShelfScanPipeline | None = None,
) -> FastAPI:
    """
    Build the LitLens API.

    The pipeline (and with it the model gateway) is built eagerly, so a
    missing credential raises ConfigurationError here, before anything is
    served.
    """
    settings = settings or get_settings()
    if pipeline is None:
        pipeline = build_pipeline(settings)

    app = FastAPI(title="LitLens API", version=__version__)
    app.state.settings = settings
    app.state.pipeline = pipeline

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(photos.router)

    app.add_exception_handler(ValidationError, _handle_validation_error)
    app.add_exception_handler(RequestValidationError, _handle_request_validation_error)
    app.add_exception_handler(ConfigurationError, _handle_configuration_error)
    app.add_exception_handler(UpstreamError, _handle_upstream_error)
    return app


async def _handle_validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    logger.info("Request failed: %s", exc)
    return JSONResponse(status_code=400, content={"error": str(exc)})


async def _handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    logger.info("Request failed: invalid form data: %s", exc.errors())
    return JSONResponse(status_code=400, content={"error": photos.MISSING_IMAGE_MESSAGE})


async def _handle_configuration_error(request: Request, exc: ConfigurationError) -> JSONResponse:
    logger.error("%s", exc)
    return JSONResponse(
        status_code=500, content={"error": "Server is missing API key configuration."}
    )


async def _handle_upstream_error(request: Request, exc: UpstreamError) -> JSONResponse:
    logger.error("Error calling model API (%s stage): %s", exc.stage or "unknown", exc)
    return JSONResponse(status_code=500, content={"error": "Failed to process photo."})


__all__ = ["create_app"]
