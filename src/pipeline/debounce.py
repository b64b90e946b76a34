"""Cancellable delayed call on the running asyncio loop."""

import asyncio
import logging
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)


class Debouncer:
    """Runs a callback once input has been quiet for ``delay_seconds``.

    Each ``trigger`` cancels the pending call and schedules a new one, so a
    burst of triggers results in a single call with the last arguments.
    Must be used from inside a running event loop.
    """

    def __init__(self, delay_seconds: float) -> None:
        if delay_seconds < 0:
            msg = f"delay_seconds must be >= 0, got {delay_seconds}"
            raise ValueError(msg)
        self._delay = delay_seconds
        self._handle: asyncio.TimerHandle | None = None

    @property
    def delay(self) -> float:
        return self._delay

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def trigger(self, callback: Callable[..., Any], *args: Any) -> None:
        self.cancel()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self._delay, self._fire, callback, args)

    def cancel(self) -> bool:
        """Drop the pending call, if any. Returns True if one was cancelled."""
        if self._handle is None:
            return False
        self._handle.cancel()
        self._handle = None
        return True

    def _fire(self, callback: Callable[..., Any], args: tuple[Any, ...]) -> None:
        self._handle = None
        logger.debug("Debounce window elapsed, running %s", getattr(callback, "__name__", callback))
        callback(*args)
