"""Model gateway and prompt assets."""

from .gateway import ImageInput, ModelGateway
from .templates import (
    build_verification_prompt,
    load_extraction_prompt,
    load_verification_prompt,
)

__all__ = [
    "ImageInput",
    "ModelGateway",
    "build_verification_prompt",
    "load_extraction_prompt",
    "load_verification_prompt",
]
