"""strftime-style date patterns with lenient parsing.

Supported directives: %Y %y %m %d %j %B %b %A %a and the %% escape. Names
are always English, whatever the process locale.

Parsing is lenient: out-of-range months roll into neighbouring years, then
the day is counted from the first of the resulting month, so "2024-02-30"
reads as 2024-03-01 and "2021-06-00" as 2021-05-31.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, timedelta

from releasedate.core.config import DEFAULT_FORMAT_PATTERN, DEFAULT_PARSE_PATTERN
from releasedate.core.result import Err, Ok, Result

from .errors import DateParseError, PatternError

__all__ = [
    "DatePattern",
    "DEFAULT_PARSE",
    "DEFAULT_FORMAT",
    "compile_or",
    "compile_pattern",
    "parse_date",
    "format_date",
]

_MONTHS = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)
_WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


def _names(names: tuple[str, ...]) -> str:
    return "(" + "|".join(re.escape(n) for n in names) + ")"


_DIRECTIVE_RE: dict[str, str] = {
    "Y": r"(\d{4})",
    "y": r"(\d{2})",
    "m": r"(\d{1,2})",
    "d": r"(\d{1,2})",
    "j": r"(\d{1,3})",
    "B": _names(_MONTHS + tuple(m[:3] for m in _MONTHS)),
    "b": _names(tuple(m[:3] for m in _MONTHS)),
    "A": _names(_WEEKDAYS),
    "a": _names(tuple(w[:3] for w in _WEEKDAYS)),
}

# Fields a lenient parse falls back to when the pattern does not set them
_EPOCH_YEAR = 1970


@dataclass(frozen=True, slots=True)
class _Literal:
    text: str


@dataclass(frozen=True, slots=True)
class _Directive:
    code: str


type _Token = _Literal | _Directive


@dataclass(frozen=True, slots=True)
class DatePattern:
    """A validated pattern, usable for both parsing and formatting."""

    source: str
    tokens: tuple[_Token, ...]

    @property
    def directives(self) -> tuple[str, ...]:
        return tuple(t.code for t in self.tokens if isinstance(t, _Directive))

    def _regex(self) -> re.Pattern[str]:
        parts: list[str] = []
        for token in self.tokens:
            match token:
                case _Literal(text=text):
                    # Whitespace runs in the pattern match any whitespace run
                    parts.append(
                        r"\s+".join(re.escape(chunk) for chunk in re.split(r"\s+", text))
                    )
                case _Directive(code=code):
                    parts.append(_DIRECTIVE_RE[code])
        return re.compile("".join(parts), re.IGNORECASE)

    def parse(self, text: str) -> Result[date, DateParseError]:
        """Leniently parse text into a calendar date.

        Only a prefix has to match; trailing text such as a time of day is
        ignored.
        """
        m = self._regex().match(text.lstrip())
        if m is None:
            return Err(DateParseError(text, self.source, "input does not match pattern"))

        year, month, day = _EPOCH_YEAR, 1, 1
        day_of_year: int | None = None
        for code, raw in zip(self.directives, m.groups()):
            match code:
                case "Y":
                    year = int(raw)
                case "y":
                    short = int(raw)
                    year = 2000 + short if short < 69 else 1900 + short
                case "m":
                    month = int(raw)
                case "d":
                    day = int(raw)
                case "j":
                    day_of_year = int(raw)
                case "B" | "b":
                    month = _month_index(raw) + 1
                case _:
                    # Weekday names are accepted but carry no information
                    pass

        try:
            if day_of_year is not None:
                return Ok(date(year, 1, 1) + timedelta(days=day_of_year - 1))
            carry, month_index = divmod(month - 1, 12)
            first = date(year + carry, month_index + 1, 1)
            return Ok(first + timedelta(days=day - 1))
        except (ValueError, OverflowError):
            return Err(DateParseError(text, self.source, "date is out of range"))

    def format(self, value: date) -> str:
        out: list[str] = []
        for token in self.tokens:
            match token:
                case _Literal(text=text):
                    out.append(text)
                case _Directive(code=code):
                    out.append(_format_directive(code, value))
        return "".join(out)


def _month_index(name: str) -> int:
    prefix = name[:3].lower()
    for i, month in enumerate(_MONTHS):
        if month[:3].lower() == prefix:
            return i
    raise AssertionError(f"unexpected month name: {name}")


def _format_directive(code: str, value: date) -> str:
    match code:
        case "Y":
            return f"{value.year:04d}"
        case "y":
            return f"{value.year % 100:02d}"
        case "m":
            return f"{value.month:02d}"
        case "d":
            return f"{value.day:02d}"
        case "j":
            return f"{value.timetuple().tm_yday:03d}"
        case "B":
            return _MONTHS[value.month - 1]
        case "b":
            return _MONTHS[value.month - 1][:3]
        case "A":
            return _WEEKDAYS[value.weekday()]
        case "a":
            return _WEEKDAYS[value.weekday()][:3]
        case _:
            raise AssertionError(f"unexpected directive: %{code}")


def compile_pattern(pattern: str) -> Result[DatePattern, PatternError]:
    """Validate a pattern and split it into literals and directives."""
    tokens: list[_Token] = []
    literal: list[str] = []
    i = 0
    while i < len(pattern):
        ch = pattern[i]
        if ch != "%":
            literal.append(ch)
            i += 1
            continue
        if i + 1 == len(pattern):
            return Err(PatternError(pattern, "pattern ends with a lone '%'"))
        code = pattern[i + 1]
        i += 2
        if code == "%":
            literal.append("%")
            continue
        if code not in _DIRECTIVE_RE:
            return Err(PatternError(pattern, f"unsupported directive '%{code}'"))
        if literal:
            tokens.append(_Literal("".join(literal)))
            literal.clear()
        tokens.append(_Directive(code))
    if literal:
        tokens.append(_Literal("".join(literal)))

    if not any(isinstance(t, _Directive) for t in tokens):
        return Err(PatternError(pattern, "pattern contains no date directive"))
    return Ok(DatePattern(source=pattern, tokens=tuple(tokens)))


def _builtin(pattern: str) -> DatePattern:
    match compile_pattern(pattern):
        case Ok(value=compiled):
            return compiled
        case Err(error=error):
            raise AssertionError(error.pretty())


DEFAULT_PARSE = _builtin(DEFAULT_PARSE_PATTERN)
DEFAULT_FORMAT = _builtin(DEFAULT_FORMAT_PATTERN)


def compile_or(pattern: str, fallback: DatePattern) -> tuple[DatePattern, PatternError | None]:
    """Compile pattern, or return fallback together with the reason."""
    match compile_pattern(pattern):
        case Ok(value=compiled):
            return compiled, None
        case Err(error=error):
            return fallback, error


def parse_date(text: str, pattern: str) -> Result[date, PatternError | DateParseError]:
    """Compile pattern and parse text with it, without any fallback."""
    compiled = compile_pattern(pattern)
    if isinstance(compiled, Err):
        return compiled
    return compiled.value.parse(text)


def format_date(value: date, pattern: str) -> Result[str, PatternError]:
    compiled = compile_pattern(pattern)
    if isinstance(compiled, Err):
        return compiled
    return Ok(compiled.value.format(value))
