"""Typer CLI entrypoint for the extraction pipeline."""

from __future__ import annotations

from pathlib import Path
from typing import Any, List, Optional

import typer
from pydantic import ValidationError

from .config import load_settings_file
from .container import create_container
from .core import parse_search_path
from .core.components import describe, render_annotations
from .errors import PathExtractionError
from .logging import configure_logging
from .schemas import SearchPathSpec

app = typer.Typer(help="Search path extraction over JSON and YAML documents.")


@app.command()
def run(
    documents: Path = typer.Option(..., exists=True, readable=True, dir_okay=False, help="Document file (JSON, JSONL or YAML)."),
    output: Optional[Path] = typer.Option(
        None,
        exists=False,
        file_okay=True,
        dir_okay=False,
        resolve_path=True,
        help="Output JSON path; matches are printed when omitted.",
    ),
    path: Optional[List[str]] = typer.Option(None, "--path", "-p", help="Search path, e.g. '(foo bar)'. Repeatable."),
    config: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="YAML config path."),
    document_format: Optional[str] = typer.Option(None, "--format", help="Override format detection (json, jsonl, yaml)."),
    relative: Optional[bool] = typer.Option(None, "--relative/--absolute", help="Let search paths start at any depth."),
    case_insensitive: Optional[bool] = typer.Option(None, "--case-insensitive/--case-sensitive", help="Compare names ignoring case."),
    step_out: int = typer.Option(0, min=0, help="Step-out count returned by callbacks of --path search paths."),
    log_level: str = typer.Option("INFO", help="Log level for structured logging."),
) -> None:
    """Run search paths over every document of a file."""
    configure_logging(log_level)

    try:
        settings: dict[str, Any] = load_settings_file(config) if config else {}
        extractor_settings = dict(settings.get("extractor") or {})
        if relative is not None:
            extractor_settings["match_relative_paths"] = relative
        if case_insensitive is not None:
            extractor_settings["match_case_insensitive"] = case_insensitive
        settings["extractor"] = extractor_settings

        container = create_container(settings=settings)
        pipeline = container.pipeline()
        results = pipeline.run(
            documents_path=documents,
            output_path=output,
            search_paths=[
                SearchPathSpec.model_construct(path=text, step_out=step_out)
                for text in path or []
            ],
            fmt=document_format,
        )
    except (PathExtractionError, ValidationError) as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    if output is None:
        for record in results:
            typer.echo(f"{record['search_path']} {record['location']} {record['value']!r}")
    typer.echo(f"Found {len(results)} matches.")


@app.command()
def check(text: str = typer.Argument(..., help="Search path text to validate.")) -> None:
    """Parse a search path and print its components."""
    try:
        parsed = parse_search_path(text)
    except PathExtractionError as exc:
        typer.echo(f"Invalid: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    if parsed.annotations:
        typer.echo(f"anchor annotations: {render_annotations(parsed.annotations)}")
    if not parsed.components:
        typer.echo("matches the root value")
    for depth, component in enumerate(parsed.components, start=1):
        typer.echo(f"{depth}: {type(component).__name__} {describe(component)}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
