"""Release-date annotation for a change set.

The annotation is a change entry the host engine finds in a change set. It
holds the date the change set was released and renders it into a comment
statement, e.g. ``-- released on: June 15, 2021``. Installers use the date
to skip change sets that were already part of the installed release (see
``releasedate.changelog.filter``).

Bad configuration never aborts a migration run: a malformed parse pattern
falls back to ``DEFAULT_PARSE_PATTERN``, a malformed format pattern to
``DEFAULT_FORMAT_PATTERN``, and an unparsable date leaves the previous value
in place.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date

from releasedate.core.config import (
    DEFAULT_COMMENT_TEXT,
    DEFAULT_FORMAT_PATTERN,
    DEFAULT_PARSE_PATTERN,
    ReleaseDateConfig,
)
from releasedate.core.result import Err, Ok, Result
from releasedate.output.console import ConsoleProtocol, RichConsole

from .errors import DateParseError
from .model import CommentStatement, Statement
from .patterns import DEFAULT_FORMAT, DEFAULT_PARSE, DatePattern, compile_or

__all__ = ["ReleaseAnnotation", "PLACEHOLDER"]

PLACEHOLDER = "{}"

# Changelog attribute names, in the order they must be applied
_ATTR_PARSE_PATTERN = "parsePattern"
_ATTR_FORMAT_PATTERN = "formatPattern"
_ATTR_COMMENT_TEXT = "commentText"
_ATTR_RELEASED_ON = "releasedOn"


class ReleaseAnnotation:
    """Gives a change set a release date.

    Attributes:
        parse_pattern: Pattern for reading the incoming date string.
        format_pattern: Pattern for rendering the date into the comment.
        comment_text: Comment template; every ``{}`` is replaced with the
            formatted date.
    """

    name = "releaseDate"
    description = "Enables the user to transparently control the release of a change set."
    priority = 1

    def __init__(
        self,
        *,
        parse_pattern: str = DEFAULT_PARSE_PATTERN,
        format_pattern: str = DEFAULT_FORMAT_PATTERN,
        comment_text: str = DEFAULT_COMMENT_TEXT,
        console: ConsoleProtocol | None = None,
    ) -> None:
        self.parse_pattern = parse_pattern
        self.format_pattern = format_pattern
        self.comment_text = comment_text
        self._console: ConsoleProtocol = console if console is not None else RichConsole()
        self._released_on: date | None = None

    @classmethod
    def from_config(
        cls, config: ReleaseDateConfig, *, console: ConsoleProtocol | None = None
    ) -> ReleaseAnnotation:
        return cls(
            parse_pattern=config.parse_pattern,
            format_pattern=config.format_pattern,
            comment_text=config.comment_text,
            console=console,
        )

    @classmethod
    def from_attributes(
        cls,
        attributes: Mapping[str, object],
        *,
        config: ReleaseDateConfig | None = None,
        console: ConsoleProtocol | None = None,
    ) -> ReleaseAnnotation:
        """Build an annotation from a changelog entry's attributes.

        Patterns are applied before ``releasedOn`` is parsed, whatever the
        order of the mapping. Non-string values are reported and ignored.
        """
        annotation = cls.from_config(config or ReleaseDateConfig(), console=console)

        parse_pattern = annotation._attribute(attributes, _ATTR_PARSE_PATTERN)
        if parse_pattern is not None:
            annotation.parse_pattern = parse_pattern
        format_pattern = annotation._attribute(attributes, _ATTR_FORMAT_PATTERN)
        if format_pattern is not None:
            annotation.format_pattern = format_pattern
        comment_text = annotation._attribute(attributes, _ATTR_COMMENT_TEXT)
        if comment_text is not None:
            annotation.comment_text = comment_text

        released_on = annotation._attribute(attributes, _ATTR_RELEASED_ON)
        if released_on is not None:
            annotation.set_release_date(released_on)
        return annotation

    def _attribute(self, attributes: Mapping[str, object], key: str) -> str | None:
        value = attributes.get(key)
        if value is None or isinstance(value, str):
            return value
        self._console.warning(
            f"Ignoring {self.name} attribute '{key}': expected text, got {type(value).__name__}"
        )
        return None

    @property
    def released_on(self) -> date | None:
        """The parsed release date, None until a parse succeeded."""
        return self._released_on

    def set_release_date(self, text: str) -> Result[date, DateParseError]:
        """Parse text with ``parse_pattern`` and store the date.

        On failure the failure is reported to the console, returned as
        ``Err`` and the previously stored date is kept.
        """
        result = self._resolve_parse_pattern().parse(text)
        match result:
            case Ok(value=released_on):
                self._released_on = released_on
            case Err(error=error):
                self._console.warning(f"Ignoring release date: {error.pretty()}")
        return result

    def _resolve_parse_pattern(self) -> DatePattern:
        pattern, error = compile_or(self.parse_pattern, DEFAULT_PARSE)
        if error is not None:
            self._console.warning(f"{error.pretty()}; falling back to {DEFAULT_PARSE_PATTERN!r}")
        return pattern

    def _resolve_format_pattern(self) -> DatePattern:
        pattern, _ = compile_or(self.format_pattern, DEFAULT_FORMAT)
        return pattern

    def render_comment(self) -> str:
        """Render ``comment_text`` with the formatted release date.

        Raises:
            ValueError: No release date is set. Check ``released_on`` first.
        """
        if self._released_on is None:
            raise ValueError("release date is not set")
        formatted = self._resolve_format_pattern().format(self._released_on)
        return self.comment_text.replace(PLACEHOLDER, formatted)

    def release_annotation(self) -> ReleaseAnnotation:
        return self

    def confirmation_message(self) -> str:
        if self._released_on is None:
            return "release date not set"
        return self.render_comment()

    def generate_statements(self, target: object = None) -> list[Statement]:
        """Return the comment statement, or nothing when no date is set.

        ``target`` is the engine's database handle; comments do not depend
        on it.
        """
        if self._released_on is None:
            return []
        return [CommentStatement(self.render_comment())]

    def __repr__(self) -> str:
        return (
            f"ReleaseAnnotation(released_on={self._released_on!r}, "
            f"parse_pattern={self.parse_pattern!r})"
        )
