from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from releasedate.core.config import Config, load_config
from releasedate.core.errors import ErrorCode
from releasedate.core.result import Err
from releasedate.output.console import ConsoleProtocol, RichConsole

# Picked up from the working directory when --config is not given
DEFAULT_CONFIG_NAME = "releasedate.toml"


@dataclass(frozen=True, slots=True)
class CLIContext:
    config: Config
    console: ConsoleProtocol


def build_context(config_path: Path | None = None, *, verbose: bool = False) -> CLIContext:
    console = RichConsole(verbose=verbose)

    path = config_path
    if path is None:
        default = Path.cwd() / DEFAULT_CONFIG_NAME
        path = default if default.is_file() else None

    config = Config()
    if path is not None:
        result = load_config(path)
        if isinstance(result, Err):
            console.error(result.error.message)
            raise typer.Exit(code=int(ErrorCode.CONFIG_ERROR))
        config = result.value
        console.debug(f"config: {path}")

    return CLIContext(config=config, console=console)
