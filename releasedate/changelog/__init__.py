"""Release-date extension for migration changelogs."""

from .annotation import PLACEHOLDER, ReleaseAnnotation
from .errors import DateParseError, PatternError
from .filter import FilterDecision, ReleaseFilter, find_release_annotation
from .model import Change, ChangeSet, ChangeSetFilter, CommentStatement, ReleaseAnnotated
from .patterns import DatePattern, compile_pattern, format_date, parse_date

__all__ = [
    "PLACEHOLDER",
    "Change",
    "ChangeSet",
    "ChangeSetFilter",
    "CommentStatement",
    "DateParseError",
    "DatePattern",
    "FilterDecision",
    "PatternError",
    "ReleaseAnnotated",
    "ReleaseAnnotation",
    "ReleaseFilter",
    "compile_pattern",
    "find_release_annotation",
    "format_date",
    "parse_date",
]
