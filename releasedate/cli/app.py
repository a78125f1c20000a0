from __future__ import annotations

import typer

from releasedate import __version__
from releasedate.cli.commands.check import check
from releasedate.cli.commands.render import render


app = typer.Typer(
    add_completion=False,
    help="Inspect release date annotations and filtering.",
)


# Commands
app.command()(render)
app.command()(check)


@app.callback(invoke_without_command=True)
def _main(  # pyright: ignore[reportUnusedFunction]
    ctx: typer.Context,
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
) -> None:
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(code=0)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
