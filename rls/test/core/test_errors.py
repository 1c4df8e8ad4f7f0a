"""Tests for rls.core.errors module."""

import pytest

from rls.core.errors import ErrorCode


def test_exit_codes_are_stable() -> None:
    assert ErrorCode.OK == 0
    assert ErrorCode.ERROR == 10
    assert ErrorCode.PARSE_FLAGS_ERROR == 11
    assert ErrorCode.BAD_ARGS == 12
    assert ErrorCode.TOKEN_NOT_FOUND == 13
    assert ErrorCode.OWNER_NOT_FOUND == 14


@pytest.mark.parametrize(
    ("status", "expected"),
    [
        (None, ErrorCode.OK),
        (0, ErrorCode.OK),
        (2, ErrorCode.PARSE_FLAGS_ERROR),
        (1, ErrorCode.ERROR),
        (12, ErrorCode.BAD_ARGS),
        (13, ErrorCode.TOKEN_NOT_FOUND),
        (99, ErrorCode.ERROR),
        ("boom", ErrorCode.ERROR),
    ],
)
def test_from_exit_status(status: object, expected: ErrorCode) -> None:
    assert ErrorCode.from_exit_status(status) is expected
