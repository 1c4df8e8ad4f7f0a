"""Core types shared by every layer."""

from .cancel import CancelToken
from .errors import ErrorCode
from .result import Err, Ok, Result

__all__ = [
    # cancel
    "CancelToken",
    # errors
    "ErrorCode",
    # result
    "Err",
    "Ok",
    "Result",
]
