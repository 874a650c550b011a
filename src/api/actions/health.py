from fastapi import APIRouter
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from litlens import __version__

router = APIRouter()

class HealthResponse(BaseModel):
    status: str
    version: str

@router.get("/", response_class=PlainTextResponse, tags=["System"])
async def liveness():
    return "LitLens Backend is running!"

@router.get("/health", response_model=HealthResponse, tags=["System"])
async def health_check():
    """Check the health of the API."""
    return HealthResponse(status="ok", version=__version__)
