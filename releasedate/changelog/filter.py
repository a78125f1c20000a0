"""Change set filter gating on release dates.

An installer knows when the installed release was built. Change sets
released on or before that date are already part of the installation, so
only change sets released strictly after it are accepted.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime
from typing import Literal

from releasedate.core.config import ReleaseDateConfig
from releasedate.output.console import ConsoleProtocol, RichConsole

from .annotation import ReleaseAnnotation
from .model import ChangeSet, ReleaseAnnotated

__all__ = [
    "FilterDecision",
    "FilterReason",
    "ReleaseFilter",
    "find_release_annotation",
]

FilterReason = Literal[
    "released_after_install",
    "released_before_install",
    "release_date_unset",
    "missing_accepted",
    "missing_rejected",
]


@dataclass(frozen=True, slots=True)
class FilterDecision:
    """Outcome of filtering one change set."""

    accepted: bool
    reason: FilterReason
    change_set_id: str


def find_release_annotation(changes: Iterable[object]) -> ReleaseAnnotation | None:
    """Return the first release annotation among changes.

    Only one annotation per change set is meaningful; later ones are ignored.
    """
    for change in changes:
        if isinstance(change, ReleaseAnnotated):
            return change.release_annotation()
    return None


class ReleaseFilter:
    """Accept change sets released after the installation date.

    Args:
        installation_date: Reference date. A datetime is reduced to its date.
        accept_if_not_exists: Accept change sets without a release annotation.
        console: Diagnostics sink.
    """

    def __init__(
        self,
        installation_date: date,
        accept_if_not_exists: bool = False,
        *,
        console: ConsoleProtocol | None = None,
    ) -> None:
        if isinstance(installation_date, datetime):
            installation_date = installation_date.date()
        self._installation_date = installation_date
        self.accept_if_not_exists = accept_if_not_exists
        self._console: ConsoleProtocol = console if console is not None else RichConsole()

    @classmethod
    def from_config(
        cls,
        installation_date: date,
        config: ReleaseDateConfig,
        *,
        console: ConsoleProtocol | None = None,
    ) -> ReleaseFilter:
        return cls(installation_date, config.accept_if_not_exists, console=console)

    @property
    def installation_date(self) -> date:
        return self._installation_date

    def accepts(self, change_set: ChangeSet) -> bool:
        return self.decide(change_set).accepted

    def decide(self, change_set: ChangeSet) -> FilterDecision:
        change_set_id = change_set.id
        annotation = find_release_annotation(change_set.changes)

        if annotation is None:
            if self.accept_if_not_exists:
                self._console.debug(
                    f"Change set '{change_set_id}' has no release date; accepted by policy"
                )
                return FilterDecision(True, "missing_accepted", change_set_id)
            self._console.debug(
                f"Change set '{change_set_id}' has no release date; "
                "the filter is configured to not accept such change sets"
            )
            return FilterDecision(False, "missing_rejected", change_set_id)

        released_on = annotation.released_on
        if released_on is None:
            self._console.warning(
                f"Change set '{change_set_id}' has a release date annotation "
                "without a valid date; not accepted"
            )
            return FilterDecision(False, "release_date_unset", change_set_id)

        if released_on > self._installation_date:
            return FilterDecision(True, "released_after_install", change_set_id)

        self._console.debug(
            f"Change set '{change_set_id}' not accepted: released before the current "
            f"installation ({released_on.isoformat()} <= {self._installation_date.isoformat()})"
        )
        return FilterDecision(False, "released_before_install", change_set_id)
