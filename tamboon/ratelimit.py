"""Pausing shared by workers, and retrying calls that hit a rate limit."""

from __future__ import annotations

import threading
from typing import Callable, TypeVar

T = TypeVar("T")

RETRY_BACKOFF_SECONDS = 5


class RateLimitExceededError(RuntimeError):
    """Raised when a call is still rate limited after every retry."""


class RateLimiter:
    """A gate that, while paused, holds every caller of :meth:`wait_if_paused`."""

    def __init__(self) -> None:
        self._condition = threading.Condition()
        self._paused = False

    @property
    def is_paused(self) -> bool:
        return self._paused

    def pause(self) -> None:
        with self._condition:
            self._paused = True

    def resume(self) -> None:
        with self._condition:
            self._paused = False
            self._condition.notify_all()

    def wait_if_paused(self) -> None:
        with self._condition:
            self._condition.wait_for(lambda: not self._paused)


def is_rate_limit_error(error: BaseException | None) -> bool:
    return error is not None and "rate limit" in str(error)


def call_with_rate_limit(
    call: Callable[[], T], limiter: RateLimiter, max_retries: int
) -> T:
    """Run ``call``, pausing ``limiter`` and retrying, with a growing wait, while rate limited."""
    retries = 0
    while True:
        try:
            return call()
        except Exception as exc:
            if not is_rate_limit_error(exc):
                raise
            if retries >= max_retries:
                raise RateLimitExceededError("rate limit: exceeded max retries") from exc
            limiter.pause()
            timer = threading.Timer(RETRY_BACKOFF_SECONDS * (retries + 1), limiter.resume)
            timer.daemon = True
            timer.start()
            limiter.wait_if_paused()
            retries += 1