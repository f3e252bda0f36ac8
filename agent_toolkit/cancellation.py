"""Cooperative cancellation for reasoning loops."""
from __future__ import annotations

import time
from typing import Optional

__all__ = ["CancellationToken"]


class CancellationToken:
    """Signals a reasoning loop to stop at its next checkpoint.

    The token never interrupts work in flight. A ``deadline`` (seconds from
    construction) makes it report cancelled once that much time has passed.
    """

    def __init__(self, deadline: Optional[float] = None) -> None:
        self._cancelled = False
        self._expires_at = time.monotonic() + deadline if deadline is not None else None
        self.reason: Optional[str] = None

    def cancel(self, reason: str = "aborted") -> None:
        if not self._cancelled:
            self._cancelled = True
            self.reason = reason

    @property
    def cancelled(self) -> bool:
        if not self._cancelled and self._expires_at is not None and time.monotonic() >= self._expires_at:
            self.cancel("deadline")
        return self._cancelled

    def __repr__(self) -> str:
        return f"CancellationToken(cancelled={self._cancelled}, reason={self.reason!r})"
