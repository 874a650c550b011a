"""Typer CLI entrypoint for LitLens."""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from cli.commands import config as config_command
from cli.commands import prompts as prompts_command
from cli.commands.shared import emit_json, guess_mime_type, validate_variant
from core.config import get_settings
from core.errors import ConfigurationError, UpstreamError
from core.logging import configure_logging
from litlens import __version__
from schemas.requests import PipelineRequest
from services.shelf_runner import build_pipeline, run_shelf_scan
from utils.book_csv import check_book_csv, parse_book_csv

logger = logging.getLogger(__name__)
console = Console()

app = typer.Typer(
    help="LitLens: detect the books on a bookshelf photo",
    context_settings={"help_option_names": ["-h", "--help"]},
    invoke_without_command=True,
    add_completion=True,
)
app.add_typer(config_command.app, name="config")
app.add_typer(prompts_command.app, name="prompts")


@app.callback()
def root(
    ctx: typer.Context,
    version_flag: bool = typer.Option(
        False,
        "-v",
        "--version",
        help="Print the version and exit",
    ),
) -> None:
    if version_flag:
        typer.echo(__version__)
        raise typer.Exit()
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


@app.command(help="Serve the HTTP API")
def serve(
    host: str | None = typer.Option(None, "--host", help="Bind address (default: HOST)"),
    port: int | None = typer.Option(None, "--port", help="Port (default: PORT)"),
) -> None:
    import uvicorn

    from api.main import create_app

    settings = get_settings()
    configure_logging(settings.log_level)
    try:
        application = create_app(settings)
    except ConfigurationError as exc:
        logger.error("Error: %s", exc)
        raise typer.Exit(code=1)

    bind_host = host or settings.host
    bind_port = port or settings.port
    logger.info("LitLens backend server listening on http://%s:%s", bind_host, bind_port)
    uvicorn.run(application, host=bind_host, port=bind_port, log_level=settings.log_level)


@app.command(help="Scan a local bookshelf photo and print the CSV")
def scan(
    image_path: Path = typer.Argument(
        ...,
        exists=True,
        dir_okay=False,
        readable=True,
        metavar="IMAGE",
    ),
    verify: bool | None = typer.Option(
        None,
        "--verify/--no-verify",
        help="Run the verification stage (default: LITLENS_VERIFY_ENABLED)",
    ),
    variant: str | None = typer.Option(
        None,
        "--variant",
        help="Extraction prompt variant: normalized|quadrilateral",
    ),
    mime_type: str | None = typer.Option(
        None,
        "--mime-type",
        help="Override the MIME type guessed from the file name",
    ),
    table: bool = typer.Option(False, "--table", help="Render the parsed books as a table"),
    json_out: bool = typer.Option(False, "--json", help="Print the full result as JSON"),
) -> None:
    settings = get_settings()
    configure_logging(settings.log_level)

    overrides: dict[str, object] = {}
    if verify is not None:
        overrides["verify_enabled"] = verify
    if validate_variant(variant):
        overrides["extraction_variant"] = variant
    if overrides:
        settings = settings.model_copy(update=overrides)

    try:
        pipeline = build_pipeline(settings)
    except ConfigurationError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1)

    request = PipelineRequest(
        image_bytes=image_path.read_bytes(),
        mime_type=mime_type or guess_mime_type(image_path),
        filename=image_path.name,
    )
    try:
        result = run_shelf_scan(request, pipeline)
    except UpstreamError as exc:
        typer.echo(f"Error: failed to process photo ({exc.stage} stage): {exc}", err=True)
        raise typer.Exit(code=1)

    if json_out:
        emit_json(result.model_dump())
        return
    if table:
        _print_table(result.csv)
        return
    typer.echo(result.csv)


@app.command(help="Check a CSV file against the book CSV contract")
def check(
    csv_path: Path = typer.Argument(
        ...,
        exists=True,
        dir_okay=False,
        readable=True,
        metavar="CSV",
    ),
) -> None:
    problems = check_book_csv(csv_path.read_text(encoding="utf-8"))
    if problems:
        for problem in problems:
            typer.echo(problem)
        raise typer.Exit(code=1)
    typer.echo("OK")


def _print_table(csv_text: str) -> None:
    try:
        books = parse_book_csv(csv_text)
    except ValueError as exc:
        typer.echo(f"Warning: could not parse CSV ({exc}); raw output follows.", err=True)
        typer.echo(csv_text)
        return

    table = Table(title=f"{len(books.records)} book(s)")
    table.add_column("#", justify="right")
    table.add_column("Title")
    table.add_column("Author")
    table.add_column("Coordinates")
    for index, record in enumerate(books.records, start=1):
        table.add_row(
            str(index),
            record.title,
            record.author,
            record.coordinates,
            style=None if record.is_identified else "dim",
        )
    console.print(table)


def main() -> None:
    app()


__all__ = ["app", "main"]
