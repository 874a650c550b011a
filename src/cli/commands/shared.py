"""Shared helpers for CLI subcommands."""

from __future__ import annotations

import json
import mimetypes
from pathlib import Path
from typing import Any

import typer

from llm.templates import available_variants

_DEFAULT_MIME_TYPE = "application/octet-stream"


def emit_json(data: Any) -> None:
    typer.echo(json.dumps(data, ensure_ascii=False, indent=2))


def guess_mime_type(path: Path) -> str:
    mime_type, _ = mimetypes.guess_type(path.name)
    return mime_type or _DEFAULT_MIME_TYPE


def validate_variant(variant: str | None) -> str | None:
    if variant is None:
        return None
    if variant not in available_variants():
        raise typer.BadParameter(
            f"expected one of {', '.join(available_variants())}", param_hint="--variant"
        )
    return variant
