"""Single entry point for calls to the external multimodal model."""

from __future__ import annotations

import base64
import logging
from dataclasses import dataclass
from typing import Any, Protocol, TYPE_CHECKING

from core.config import Settings
from core.errors import ConfigurationError, UpstreamError

if TYPE_CHECKING:
    from langchain_core.messages import BaseMessage

logger = logging.getLogger(__name__)


class ChatModelLike(Protocol):
    def invoke(self, input: object) -> Any: ...


@dataclass(frozen=True)
class ImageInput:
    data: bytes
    mime_type: str

    def to_data_url(self) -> str:
        encoded = base64.b64encode(self.data).decode("ascii")
        return f"data:{self.mime_type};base64,{encoded}"


class ModelGateway:
    """Generate text from a prompt plus an optional image.

    No caching and no retries: every call is exactly one outbound request, and
    any failure surfaces as :class:`UpstreamError`.
    """

    def __init__(self, llm: ChatModelLike, *, model_name: str | None = None) -> None:
        self._llm = llm
        self.model_name = model_name

    @classmethod
    def from_settings(cls, settings: Settings) -> "ModelGateway":
        api_key = settings.api_key
        if not api_key:
            raise ConfigurationError("GEMINI_API_KEY is not set.")
        return cls(_init_chat_model(settings, api_key), model_name=settings.model)

    def generate(self, prompt: str, image: ImageInput | None = None) -> str:
        if not prompt or not prompt.strip():
            raise ValueError("prompt must be non-empty text")
        if image is not None and not image.mime_type:
            raise ValueError("image requires a MIME type")

        messages = _build_messages(prompt, image)
        try:
            raw = self._llm.invoke(messages)
        except Exception as exc:
            raise UpstreamError(f"Model call failed: {exc}") from exc

        return _content_text(getattr(raw, "content", raw))


def _init_chat_model(settings: Settings, api_key: str) -> ChatModelLike:
    from langchain.chat_models import init_chat_model

    kwargs: dict[str, Any] = {
        "model_provider": settings.model_provider,
        "max_retries": 0,
    }
    if settings.temperature is not None:
        kwargs["temperature"] = settings.temperature
    if settings.model_provider == "google_genai":
        kwargs["google_api_key"] = api_key
    else:
        kwargs["api_key"] = api_key

    logger.info("Using model %s (%s)", settings.model, settings.model_provider)
    return init_chat_model(settings.model, **kwargs)


def _build_messages(prompt: str, image: ImageInput | None) -> "list[BaseMessage]":
    from langchain_core.messages import HumanMessage

    if image is None:
        return [HumanMessage(content=prompt)]
    return [
        HumanMessage(
            content=[
                {"type": "text", "text": prompt},
                {"type": "image_url", "image_url": {"url": image.to_data_url()}},
            ]
        )
    ]


def _content_text(content: Any) -> str:
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts: list[str] = []
        for part in content:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict) and part.get("type") == "text":
                parts.append(str(part.get("text") or ""))
        return "".join(parts)
    return str(content)


__all__ = ["ChatModelLike", "ImageInput", "ModelGateway"]
