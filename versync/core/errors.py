"""Error codes for CLI exit status.

The release pipeline aborts on any non-zero status, so the values only need
to stay stable, not fine-grained:
- 0: Success
- 1: User error (bad arguments, wrong base version, missing or drifted site)
- 2: Config error (unreadable or malformed versync.toml)
- 5: I/O error (file could not be read or written)
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands."""

    OK = 0
    USER_ERROR = 1
    CONFIG_ERROR = 2
    IO_ERROR = 5
