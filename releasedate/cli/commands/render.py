"""Render command - preview the comment a release date annotation emits."""

from __future__ import annotations

from pathlib import Path

import typer

from releasedate.changelog.annotation import ReleaseAnnotation
from releasedate.cli.context import build_context
from releasedate.core.errors import ErrorCode
from releasedate.core.result import is_err


def render(
    released: str = typer.Argument(..., help="Release date, e.g. 2021-06-15."),
    parse_pattern: str | None = typer.Option(
        None, "--parse-pattern", help="Pattern used to read the date (default: %Y-%m-%d)."
    ),
    format_pattern: str | None = typer.Option(
        None, "--format-pattern", help="Pattern used in the comment (default: %B %d, %Y)."
    ),
    comment_text: str | None = typer.Option(
        None, "--comment-text", help="Comment template, {} is replaced with the date."
    ),
    config: Path | None = typer.Option(None, "--config", help="TOML config file."),
) -> None:
    """Print the comment generated for a release date."""
    ctx = build_context(config)

    annotation = ReleaseAnnotation.from_config(ctx.config.release_date, console=ctx.console)
    if parse_pattern is not None:
        annotation.parse_pattern = parse_pattern
    if format_pattern is not None:
        annotation.format_pattern = format_pattern
    if comment_text is not None:
        annotation.comment_text = comment_text

    if is_err(annotation.set_release_date(released)):
        ctx.console.error(f"no release date set for {released!r}")
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    typer.echo(annotation.render_comment())
