"""Error payloads for the changelog extension.

None of these are raised. They travel inside ``Err`` results so callers can
decide whether a bad pattern or date is fatal for them.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class PatternError:
    """A parse or format pattern is malformed."""

    pattern: str
    message: str

    def pretty(self) -> str:
        return f"invalid date pattern {self.pattern!r}: {self.message}"


@dataclass(frozen=True, slots=True)
class DateParseError:
    """Input text does not match a (well-formed) date pattern."""

    text: str
    pattern: str
    message: str

    def pretty(self) -> str:
        return f"cannot parse {self.text!r} with {self.pattern!r}: {self.message}"
