"""Cooperative cancellation for a single rls invocation.

A CancelToken is handed to every remote call and to the settle wait, so an
interrupted run stops at the next boundary instead of hanging.

Usage:
    token = CancelToken()
    with token.install_sigint():
        reconciler.reconcile(request, recreate=True, cancel=token)
"""

from __future__ import annotations

import signal
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from types import FrameType

__all__ = ["CancelToken"]


class CancelToken:
    """A one-shot cancellation flag backed by threading.Event."""

    def __init__(self) -> None:
        self._event = threading.Event()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        self._event.set()

    def wait(self, seconds: float) -> bool:
        """Block for up to `seconds`.

        Returns:
            True if the token was cancelled before the time elapsed.
        """
        if seconds <= 0:
            return self.cancelled
        return self._event.wait(seconds)

    @contextmanager
    def install_sigint(self) -> Iterator[CancelToken]:
        """Route SIGINT to this token while the block runs.

        Only valid on the main thread; the previous handler is restored on exit.
        """

        def _handler(signum: int, frame: FrameType | None) -> None:
            del signum, frame
            self.cancel()

        previous = signal.signal(signal.SIGINT, _handler)
        try:
            yield self
        finally:
            signal.signal(signal.SIGINT, previous)
