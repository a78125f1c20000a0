"""Structural types shared with the host migration engine.

The engine owns change sets, changes and statement execution. This module
only describes the surface the release-date extension reads and produces.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .annotation import ReleaseAnnotation

__all__ = [
    "Change",
    "ChangeSet",
    "ChangeSetFilter",
    "CommentStatement",
    "ReleaseAnnotated",
    "Statement",
]


@dataclass(frozen=True, slots=True)
class CommentStatement:
    """A comment emitted into the generated migration output."""

    text: str


type Statement = CommentStatement


class Change(Protocol):
    """A single declarative entry inside a change set."""

    def confirmation_message(self) -> str: ...

    def generate_statements(self, target: object = None) -> list[Statement]: ...


class ChangeSet(Protocol):
    """A named, ordered unit of migration work."""

    @property
    def id(self) -> str: ...

    @property
    def changes(self) -> Sequence[object]: ...


@runtime_checkable
class ReleaseAnnotated(Protocol):
    """Capability of a change entry that carries a release annotation."""

    def release_annotation(self) -> ReleaseAnnotation: ...


class ChangeSetFilter(Protocol):
    """Predicate registered with the engine's change set filtering pipeline."""

    def accepts(self, change_set: ChangeSet) -> bool: ...
