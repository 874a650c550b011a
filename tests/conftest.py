# tests/conftest.py
from __future__ import annotations

from typing import Callable

import pytest

from core.config import Settings
from llm.gateway import ModelGateway
from services.shelf_runner import build_pipeline

RAW_CSV = (
    "title,author,coordinates\n"
    '"The Crtcher in the Tye","J.D. Salnger","[0.25,0.1,0.45,0.15]"'
)
VERIFIED_CSV = (
    "title,author,coordinates\n"
    '"The Catcher in the Rye","J.D. Salinger","[0.25,0.1,0.45,0.15]"'
)


class DummyResponse:
    def __init__(self, content: object) -> None:
        self.content = content


class ScriptedLLM:
    """Chat model stand-in that replays canned replies in order.

    An Exception instance in the script is raised instead of returned.
    """

    def __init__(self, *replies: object) -> None:
        self._replies = list(replies)
        self.calls: list[object] = []

    def invoke(self, messages: object) -> DummyResponse:
        self.calls.append(messages)
        reply = self._replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return DummyResponse(reply)


def make_settings(**values: object) -> Settings:
    payload: dict[str, object] = {"GEMINI_API_KEY": "test-key"}
    payload.update(values)
    return Settings(_env_file=None, **payload)


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def scripted() -> Callable[..., tuple[ModelGateway, ScriptedLLM]]:
    def _factory(*replies: object) -> tuple[ModelGateway, ScriptedLLM]:
        llm = ScriptedLLM(*replies)
        return ModelGateway(llm, model_name="dummy"), llm

    return _factory


@pytest.fixture
def pipeline_factory(scripted):
    def _factory(*replies: object, **setting_values: object):
        gateway, llm = scripted(*replies)
        pipeline = build_pipeline(make_settings(**setting_values), gateway=gateway)
        return pipeline, llm

    return _factory


@pytest.fixture
def settings_factory() -> Callable[..., Settings]:
    return make_settings


@pytest.fixture
def raw_csv() -> str:
    return RAW_CSV


@pytest.fixture
def verified_csv() -> str:
    return VERIFIED_CSV
