"""Core configuration and shared utilities."""

from dotenv import load_dotenv

from .config import Settings, get_settings
from .errors import ConfigurationError, LitLensError, UpstreamError, ValidationError

load_dotenv()

__all__ = [
    "ConfigurationError",
    "LitLensError",
    "Settings",
    "UpstreamError",
    "ValidationError",
    "get_settings",
]
