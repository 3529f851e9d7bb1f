"""Cancellation and deadline carrier for blocking API calls.

Every resolver and cursor operation accepts an optional
:class:`RequestContext`. A context may carry a deadline (set with
:meth:`RequestContext.with_timeout`) and can be cancelled from another
thread with :meth:`RequestContext.cancel`. The fetch client refuses to
start a request on a cancelled or expired context and discards a response
that arrives after cancellation; both surface as
:class:`~pokesdk.exceptions.TransportError`.

Example::

    ctx = RequestContext.with_timeout(2.5)
    resolver.pokemon("pikachu").get(ctx)
"""

from __future__ import annotations

import threading
import time
from typing import Optional


class RequestContext:
    """A deadline plus a thread-safe cancellation flag.

    Args:
        deadline: Absolute :func:`time.monotonic` timestamp after which the
            context is expired, or ``None`` for no deadline.
    """

    def __init__(self, deadline: Optional[float] = None) -> None:
        self._deadline = deadline
        self._cancelled = threading.Event()

    @classmethod
    def background(cls) -> RequestContext:
        """Return a context that never expires and is never cancelled."""
        return cls()

    @classmethod
    def with_timeout(cls, seconds: float) -> RequestContext:
        """Return a context expiring *seconds* from now."""
        return cls(deadline=time.monotonic() + seconds)

    @property
    def deadline(self) -> Optional[float]:
        return self._deadline

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def cancel(self) -> None:
        """Mark the context as cancelled. Safe to call from any thread."""
        self._cancelled.set()

    def remaining(self) -> Optional[float]:
        """Seconds left before the deadline (never negative), or ``None`` without one."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    @property
    def expired(self) -> bool:
        remaining = self.remaining()
        return remaining is not None and remaining <= 0

    def error_reason(self) -> Optional[str]:
        """Why the context can no longer be used, or ``None`` while it is live."""
        if self.cancelled:
            return "context cancelled"
        if self.expired:
            return "context deadline exceeded"
        return None
