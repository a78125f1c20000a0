"""Console output abstraction.

Annotations and filters report diagnostics through a ``ConsoleProtocol``
injected at construction instead of a global logger. Production code uses
``RichConsole``; tests inject ``MockConsole`` and assert on what was emitted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Protocol

__all__ = [
    "Style",
    "ConsoleProtocol",
    "RichConsole",
    "MockConsole",
    "OutputRecord",
]


class Style(Enum):
    """Diagnostic levels, each rendered with its own style."""

    DEBUG = auto()
    WARNING = auto()
    ERROR = auto()


class ConsoleProtocol(Protocol):
    """Diagnostics sink used by annotations, filters and the CLI."""

    def debug(self, message: str) -> None:
        """Emit a diagnostic only shown in verbose mode."""
        ...

    def warning(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


class RichConsole:
    """Console implementation using Rich library.

    Diagnostics go to stderr so they never mix with generated output.
    """

    def __init__(self, *, verbose: bool = False, stderr: bool = True) -> None:
        # Import Rich lazily to avoid import-time dependency
        from rich.console import Console

        self._console = Console(stderr=stderr, highlight=False)
        self.verbose = verbose

    def debug(self, message: str) -> None:
        if self.verbose:
            self._console.print(f"[dim]debug:[/dim] {_escape(message)}")

    def warning(self, message: str) -> None:
        self._console.print(f"[yellow]warning:[/yellow] {_escape(message)}")

    def error(self, message: str) -> None:
        self._console.print(f"[red bold]error:[/red bold] {_escape(message)}")


def _escape(message: str) -> str:
    from rich.markup import escape

    return escape(message)


@dataclass
class OutputRecord:
    """A single output record for MockConsole."""

    message: str
    style: Style


def _empty_outputs() -> list[OutputRecord]:
    return []


@dataclass
class MockConsole:
    """Console implementation that captures output for testing."""

    outputs: list[OutputRecord] = field(default_factory=_empty_outputs)

    def debug(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"debug: {message}", Style.DEBUG))

    def warning(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"warning: {message}", Style.WARNING))

    def error(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"error: {message}", Style.ERROR))

    # Test helper methods

    @property
    def messages(self) -> list[str]:
        return [o.message for o in self.outputs]

    def has_warning(self) -> bool:
        return any(o.style == Style.WARNING for o in self.outputs)

    def find(self, substring: str) -> list[OutputRecord]:
        """Find all outputs containing a substring."""
        return [o for o in self.outputs if substring in o.message]

    def count(self, style: Style) -> int:
        return sum(1 for o in self.outputs if o.style == style)
