"""Configuration inspection commands."""

from __future__ import annotations

import typer

from core.config import Settings, get_settings
from .shared import emit_json


app = typer.Typer(
    help="Inspect the effective configuration",
    context_settings={"help_option_names": ["-h", "--help"]},
    add_completion=False,
    no_args_is_help=True,
)


@app.command("show", help="Show the effective configuration (API key masked)")
def show_config(
    json_out: bool = typer.Option(True, "--json/--no-json", help="Print JSON"),
) -> None:
    payload = _masked_payload(get_settings())
    if json_out:
        emit_json(payload)
        return
    for key, value in payload.items():
        typer.echo(f"{key}={value}")


@app.command("diff", help="Show values that differ from the defaults")
def diff_config() -> None:
    current = _masked_payload(get_settings())
    defaults = _masked_payload(Settings.model_construct())
    diff = {
        key: {"value": value, "default": defaults.get(key)}
        for key, value in current.items()
        if value != defaults.get(key)
    }
    emit_json(diff)


def _masked_payload(settings: Settings) -> dict:
    payload = settings.model_dump(mode="json")
    payload["gemini_api_key"] = "**********" if settings.api_key else None
    return payload
