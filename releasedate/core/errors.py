"""Error codes for CLI exit status."""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for the ``releasedate`` commands.

    These values are used as process exit codes and should remain stable:
    - 0: Success
    - 1: User error (unparsable date, bad arguments)
    - 2: Config error (config file unreadable or invalid)
    """

    OK = 0
    USER_ERROR = 1
    CONFIG_ERROR = 2
