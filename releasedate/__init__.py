"""Release-date annotations and change set filtering for migration changelogs."""

__version__ = "0.3.0"
