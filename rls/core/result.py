"""Result type for explicit error handling.

Remote calls, git commands and config resolution all return a Result instead
of raising, so every failure is visible at the call site:

    match gateway.delete_release(42):
        case Ok(_):
            console.success("release deleted")
        case Err(error):
            console.error(str(error))
"""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["Ok", "Err", "Result"]


@dataclass(frozen=True, slots=True)
class Ok[T]:
    """A successful result.

    Attributes:
        value: The success value.
    """

    value: T

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err[E]:
    """A failed result.

    Attributes:
        error: The error value.
    """

    error: E

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


type Result[T, E] = Ok[T] | Err[E]
