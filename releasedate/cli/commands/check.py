"""Check command - run the release filter on a single change set."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import typer

from releasedate.changelog.annotation import ReleaseAnnotation
from releasedate.changelog.filter import ReleaseFilter
from releasedate.changelog.patterns import DEFAULT_PARSE, compile_or
from releasedate.cli.context import build_context
from releasedate.core.config import DEFAULT_PARSE_PATTERN
from releasedate.core.errors import ErrorCode
from releasedate.core.result import Err


@dataclass(frozen=True, slots=True)
class _ChangeSet:
    id: str
    changes: list[object] = field(default_factory=list)


def check(
    installed: str = typer.Option(..., "--installed", help="Installation date."),
    released: str | None = typer.Option(
        None, "--released", help="Release date of the change set (omit for none)."
    ),
    accept_if_missing: bool = typer.Option(
        False, "--accept-if-missing", help="Accept change sets without a release date."
    ),
    change_set_id: str = typer.Option("cli", "--id", help="Change set id used in diagnostics."),
    config: Path | None = typer.Option(None, "--config", help="TOML config file."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show filter diagnostics."),
) -> None:
    """Tell whether a change set would be applied to an installation."""
    ctx = build_context(config, verbose=verbose)
    settings = ctx.config.release_date

    pattern, pattern_error = compile_or(settings.parse_pattern, DEFAULT_PARSE)
    if pattern_error is not None:
        ctx.console.warning(f"{pattern_error.pretty()}; falling back to {DEFAULT_PARSE_PATTERN!r}")

    installation = pattern.parse(installed)
    if isinstance(installation, Err):
        ctx.console.error(installation.error.pretty())
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    change_set = _ChangeSet(id=change_set_id)
    if released is not None:
        annotation = ReleaseAnnotation.from_config(settings, console=ctx.console)
        annotation.set_release_date(released)
        change_set.changes.append(annotation)

    release_filter = ReleaseFilter(
        installation.value,
        accept_if_missing or settings.accept_if_not_exists,
        console=ctx.console,
    )
    decision = release_filter.decide(change_set)
    verdict = "accepted" if decision.accepted else "rejected"
    typer.echo(f"{verdict} ({decision.reason.replace('_', ' ')})")
