"""Tests for releasedate.changelog.filter module."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime

from releasedate.changelog.annotation import ReleaseAnnotation
from releasedate.changelog.filter import FilterDecision, ReleaseFilter, find_release_annotation
from releasedate.changelog.model import ChangeSetFilter, CommentStatement, Statement
from releasedate.core.config import ReleaseDateConfig
from releasedate.output.console import MockConsole, Style

INSTALLED = date(2020, 1, 1)


@dataclass
class FakeChangeSet:
    id: str
    changes: list[object] = field(default_factory=list)


class SqlChange:
    """A non-annotation change entry."""

    def confirmation_message(self) -> str:
        return "sql executed"

    def generate_statements(self, target: object = None) -> list[Statement]:
        return [CommentStatement("sql")]


class WrappedAnnotation:
    """A change entry exposing an annotation it does not inherit from."""

    def __init__(self, annotation: ReleaseAnnotation) -> None:
        self._annotation = annotation

    def release_annotation(self) -> ReleaseAnnotation:
        return self._annotation


def _released(text: str | None) -> ReleaseAnnotation:
    annotation = ReleaseAnnotation(console=MockConsole())
    if text is not None:
        annotation.set_release_date(text)
    return annotation


def _change_set(*changes: object, change_set_id: str = "cs-1") -> FakeChangeSet:
    return FakeChangeSet(id=change_set_id, changes=list(changes))


class TestAccepts:
    """Test the acceptance rule."""

    def test_released_after_installation(self) -> None:
        """A release after the installation date is accepted."""
        release_filter = ReleaseFilter(INSTALLED, console=MockConsole())
        assert release_filter.accepts(_change_set(_released("2021-06-15"))) is True

    def test_released_before_installation(self) -> None:
        """A release before the installation date is rejected."""
        release_filter = ReleaseFilter(INSTALLED, console=MockConsole())
        assert release_filter.accepts(_change_set(_released("2019-01-01"))) is False

    def test_release_timestamp_is_gated_by_its_date(self) -> None:
        """A release date with a time of day is still compared by date."""
        release_filter = ReleaseFilter(INSTALLED, console=MockConsole())
        decision = release_filter.decide(_change_set(_released("2021-06-15T10:30:00")))
        assert decision.reason == "released_after_install"

    def test_released_on_installation_day(self) -> None:
        """A release on the installation day is rejected."""
        release_filter = ReleaseFilter(INSTALLED, console=MockConsole())
        assert release_filter.accepts(_change_set(_released("2020-01-01"))) is False

    def test_missing_annotation_rejected_by_default(self) -> None:
        """Change sets without annotation are rejected by default."""
        release_filter = ReleaseFilter(INSTALLED, console=MockConsole())
        assert release_filter.accepts(_change_set(SqlChange())) is False

    def test_missing_annotation_accepted_by_policy(self) -> None:
        """accept_if_not_exists accepts change sets without annotation."""
        release_filter = ReleaseFilter(INSTALLED, accept_if_not_exists=True, console=MockConsole())
        assert release_filter.accepts(_change_set(SqlChange())) is True
        assert release_filter.accepts(_change_set()) is True

    def test_policy_can_be_changed(self) -> None:
        """accept_if_not_exists can be changed after construction."""
        release_filter = ReleaseFilter(INSTALLED, console=MockConsole())
        release_filter.accept_if_not_exists = True
        assert release_filter.accepts(_change_set()) is True

    def test_unset_release_date_rejected_with_warning(self) -> None:
        """An annotation without a valid date is rejected with a warning."""
        console = MockConsole()
        release_filter = ReleaseFilter(INSTALLED, accept_if_not_exists=True, console=console)
        change_set = _change_set(_released("not-a-date"), change_set_id="cs-9")
        assert release_filter.accepts(change_set) is False
        assert console.has_warning()
        assert console.find("'cs-9'")

    def test_first_annotation_wins(self) -> None:
        """Only the first annotation of a change set counts."""
        release_filter = ReleaseFilter(INSTALLED, console=MockConsole())
        change_set = _change_set(SqlChange(), _released("2019-01-01"), _released("2021-06-15"))
        assert release_filter.accepts(change_set) is False

    def test_capability_not_concrete_type(self) -> None:
        """Any entry exposing release_annotation() is recognised."""
        release_filter = ReleaseFilter(INSTALLED, console=MockConsole())
        change_set = _change_set(SqlChange(), WrappedAnnotation(_released("2021-06-15")))
        assert release_filter.accepts(change_set) is True

    def test_datetime_installation_date(self) -> None:
        """A datetime installation date compares by its date."""
        release_filter = ReleaseFilter(datetime(2021, 6, 15, 23, 59), console=MockConsole())
        assert release_filter.installation_date == date(2021, 6, 15)
        assert release_filter.accepts(_change_set(_released("2021-06-15"))) is False
        assert release_filter.accepts(_change_set(_released("2021-06-16"))) is True

    def test_idempotent(self) -> None:
        """Deciding twice gives the same answer."""
        release_filter = ReleaseFilter(INSTALLED, console=MockConsole())
        for change_set in (
            _change_set(_released("2021-06-15")),
            _change_set(_released("2019-01-01")),
            _change_set(),
        ):
            assert release_filter.accepts(change_set) == release_filter.accepts(change_set)

    def test_satisfies_filter_protocol(self) -> None:
        """ReleaseFilter can stand in for ChangeSetFilter."""
        release_filter: ChangeSetFilter = ReleaseFilter(INSTALLED, console=MockConsole())
        assert release_filter.accepts(_change_set()) is False


class TestDecide:
    """Test decision reasons and diagnostics."""

    def test_reasons(self) -> None:
        """Each outcome carries its reason."""
        release_filter = ReleaseFilter(INSTALLED, console=MockConsole())
        assert release_filter.decide(_change_set(_released("2021-06-15"))) == FilterDecision(
            True, "released_after_install", "cs-1"
        )
        assert release_filter.decide(_change_set(_released("2019-01-01"))).reason == (
            "released_before_install"
        )
        assert release_filter.decide(_change_set(_released(None))).reason == "release_date_unset"
        assert release_filter.decide(_change_set()).reason == "missing_rejected"
        release_filter.accept_if_not_exists = True
        assert release_filter.decide(_change_set()).reason == "missing_accepted"

    def test_rejection_by_date_reports_id_and_dates(self) -> None:
        """Rejection by date reports the id and both dates."""
        console = MockConsole()
        release_filter = ReleaseFilter(INSTALLED, console=console)
        release_filter.decide(_change_set(_released("2019-01-01"), change_set_id="add-users"))
        assert console.count(Style.DEBUG) == 1
        message = console.messages[0]
        assert "'add-users'" in message
        assert "2019-01-01" in message
        assert "2020-01-01" in message

    def test_missing_annotation_reported(self) -> None:
        """Rejection for a missing annotation reports the id."""
        console = MockConsole()
        ReleaseFilter(INSTALLED, console=console).decide(_change_set(change_set_id="no-date"))
        assert console.count(Style.DEBUG) == 1
        assert console.find("'no-date'")

    def test_acceptance_by_date_is_quiet(self) -> None:
        """Accepting by date emits nothing."""
        console = MockConsole()
        ReleaseFilter(INSTALLED, console=console).decide(_change_set(_released("2021-06-15")))
        assert console.outputs == []

    def test_from_config(self) -> None:
        """from_config takes the policy from the config."""
        release_filter = ReleaseFilter.from_config(
            INSTALLED, ReleaseDateConfig(accept_if_not_exists=True), console=MockConsole()
        )
        assert release_filter.accept_if_not_exists is True
        assert release_filter.accepts(_change_set()) is True


class TestFindReleaseAnnotation:
    """Test the capability scan."""

    def test_none(self) -> None:
        """No annotation among the changes gives None."""
        assert find_release_annotation([SqlChange(), "text", 3]) is None

    def test_first(self) -> None:
        """The first annotation is returned."""
        first = _released("2021-06-15")
        assert find_release_annotation([SqlChange(), first, _released("2022-01-01")]) is first

    def test_unwraps_capability(self) -> None:
        """The capability's annotation is returned, not the entry."""
        inner = _released("2021-06-15")
        assert find_release_annotation([WrappedAnnotation(inner)]) is inner
