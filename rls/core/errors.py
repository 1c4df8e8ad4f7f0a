"""Exit codes for the rls command.

Errors start at 10 so they never collide with shell conventions for 1 and 2.
"""

from __future__ import annotations

from enum import IntEnum

__all__ = ["ErrorCode"]

# Status click exits with on a usage error (unknown option, bad value).
_CLICK_USAGE_STATUS = 2


class ErrorCode(IntEnum):
    """Process exit codes.

    These values are part of the command's public contract and must stay stable.
    """

    OK = 0
    ERROR = 10
    PARSE_FLAGS_ERROR = 11
    BAD_ARGS = 12
    TOKEN_NOT_FOUND = 13
    OWNER_NOT_FOUND = 14

    @classmethod
    def from_exit_status(cls, status: object) -> ErrorCode:
        """Map a SystemExit status from the CLI framework onto an ErrorCode."""
        if status is None:
            return cls.OK
        if status == _CLICK_USAGE_STATUS:
            return cls.PARSE_FLAGS_ERROR
        if isinstance(status, int) and status in cls._value2member_map_:
            return cls(status)
        return cls.ERROR
