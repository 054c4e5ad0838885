"""Debounce and throttle helpers for interactive render requests."""
from __future__ import annotations
import threading
import time
from typing import Any, Callable, Optional, Tuple


class Debouncer:
    """
    Delay a call until ``delay`` seconds pass without another ``trigger``.

    Each trigger replaces the pending arguments and restarts the timer, so
    only the last call of a burst runs.
    """

    def __init__(self, delay: float, callback: Callable[..., Any]) -> None:
        if delay < 0:
            raise ValueError("delay must be >= 0")
        self.delay = delay
        self._callback = callback
        self._lock = threading.Lock()
        self._timer: Optional[threading.Timer] = None
        self._pending: Optional[Tuple[tuple, dict]] = None
        self._token = 0

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._pending is not None

    def trigger(self, *args, **kwargs) -> None:
        with self._lock:
            self._cancel_timer()
            self._token += 1
            self._pending = (args, kwargs)
            self._timer = threading.Timer(self.delay, self._fire, args=(self._token,))
            self._timer.daemon = True
            self._timer.start()

    def cancel(self) -> None:
        with self._lock:
            self._cancel_timer()
            self._pending = None

    def flush(self) -> bool:
        """Run the pending call immediately. Returns False if nothing was pending."""
        with self._lock:
            self._cancel_timer()
            pending, self._pending = self._pending, None
        if pending is None:
            return False
        args, kwargs = pending
        self._callback(*args, **kwargs)
        return True

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _fire(self, token: int) -> None:
        with self._lock:
            # A later trigger or cancel already replaced this timer.
            if token != self._token or self._pending is None:
                return
            pending, self._pending = self._pending, None
            self._timer = None
        args, kwargs = pending
        self._callback(*args, **kwargs)


class Throttle:
    """Allow an action at most once per ``interval`` seconds."""

    def __init__(self, interval: float, clock: Callable[[], float] = time.monotonic) -> None:
        if interval < 0:
            raise ValueError("interval must be >= 0")
        self.interval = interval
        self._clock = clock
        self._last: Optional[float] = None

    def allow(self) -> bool:
        now = self._clock()
        if self._last is not None and now - self._last < self.interval:
            return False
        self._last = now
        return True

    def reset(self) -> None:
        self._last = None
