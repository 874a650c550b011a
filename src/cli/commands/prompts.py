"""Prompt asset inspection commands."""

from __future__ import annotations

import typer

from llm.templates import available_prompts, load_prompt


app = typer.Typer(
    help="Inspect the extraction and verification prompts",
    context_settings={"help_option_names": ["-h", "--help"]},
    add_completion=False,
    no_args_is_help=True,
)


@app.command("list", help="List prompt names")
def list_prompts() -> None:
    for name in available_prompts():
        typer.echo(name)


@app.command("show", help="Print one prompt")
def show_prompt(
    name: str = typer.Argument(..., help="Prompt name, see `litlens prompts list`"),
) -> None:
    try:
        text = load_prompt(name)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="NAME") from exc
    typer.echo(text)
