"""Call-rate and retry wrappers for plain callables.

``debounce`` runs the wrapped callable on a :class:`threading.Timer`, so the
call happens on a background thread.  ``with_retry`` supports both regular
and ``async def`` callables with identical retry semantics.
"""

from __future__ import annotations

import asyncio
import functools
import inspect
import logging
import threading
import time
from collections.abc import Callable
from typing import Any, TypeVar

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

T = TypeVar("T")

__all__ = ["RetryPolicy", "debounce", "once", "throttle", "with_retry"]


def _require_callable(fn: Any) -> None:
    if not callable(fn):
        raise TypeError("Expected a function")


def debounce(fn: Callable[..., Any], delay: float = 0) -> Callable[..., None]:
    """Delay calls to *fn* until *delay* seconds pass without a new call.

    Only the arguments of the last call are used.  The returned wrapper has
    a ``cancel()`` attribute that drops any pending call.
    """
    _require_callable(fn)
    lock = threading.Lock()
    timer: threading.Timer | None = None

    @functools.wraps(fn)
    def wrapper(*args: Any, **kwargs: Any) -> None:
        nonlocal timer
        with lock:
            if timer is not None:
                timer.cancel()
            timer = threading.Timer(delay or 0, fn, args=args, kwargs=kwargs)
            timer.daemon = True
            timer.start()

    def cancel() -> None:
        nonlocal timer
        with lock:
            if timer is not None:
                timer.cancel()
                timer = None

    wrapper.cancel = cancel  # type: ignore[attr-defined]
    return wrapper


def throttle(fn: Callable[..., T], limit: float = 0) -> Callable[..., T | None]:
    """Run *fn* at most once per *limit* seconds; extra calls return ``None``."""
    _require_callable(fn)
    lock = threading.Lock()
    last_call: float | None = None

    @functools.wraps(fn)
    def wrapper(*args: Any, **kwargs: Any) -> T | None:
        nonlocal last_call
        now = time.monotonic()
        with lock:
            if last_call is not None and now - last_call < (limit or 0):
                return None
            last_call = now
        return fn(*args, **kwargs)

    return wrapper


def once(fn: Callable[..., T]) -> Callable[..., T]:
    """Run *fn* on the first call only; later calls return the first result."""
    _require_callable(fn)
    lock = threading.Lock()
    called = False
    result: Any = None

    @functools.wraps(fn)
    def wrapper(*args: Any, **kwargs: Any) -> T:
        nonlocal called, result
        with lock:
            if not called:
                result = fn(*args, **kwargs)
                called = True
        return result

    return wrapper


class RetryPolicy(BaseModel):
    """Tuneable parameters for :func:`with_retry`."""

    max_attempts: int = Field(
        default=3,
        ge=1,
        description="Total attempts, including the first call.",
    )
    delay: float = Field(
        default=1.0,
        ge=0.0,
        description="Seconds to wait between attempts.",
    )


def with_retry(
    fn: Callable[..., Any],
    max_attempts: int = 3,
    delay: float = 1.0,
    on_retry: Callable[[Exception, int], Any] | None = None,
) -> Callable[..., Any]:
    """Wrap *fn* so that failing calls are retried.

    Parameters
    ----------
    fn:
        Callable to wrap.  ``async def`` callables produce an ``async``
        wrapper that sleeps with ``asyncio.sleep``.
    max_attempts:
        Total attempts before the last exception is re-raised.
    delay:
        Seconds between attempts.
    on_retry:
        Called as ``on_retry(exc, attempt)`` before each retry.

    Returns
    -------
    Callable
        The retrying wrapper.
    """
    _require_callable(fn)
    policy = RetryPolicy(max_attempts=max_attempts, delay=delay)

    def _after_failure(exc: Exception, attempt: int) -> None:
        logger.warning("Attempt %d/%d failed: %s", attempt, policy.max_attempts, exc)
        if on_retry is not None:
            on_retry(exc, attempt)

    if inspect.iscoroutinefunction(fn):

        @functools.wraps(fn)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            for attempt in range(1, policy.max_attempts + 1):
                try:
                    return await fn(*args, **kwargs)
                except Exception as exc:
                    if attempt >= policy.max_attempts:
                        raise
                    _after_failure(exc, attempt)
                    await asyncio.sleep(policy.delay)
            raise AssertionError("unreachable")

        return async_wrapper

    @functools.wraps(fn)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        for attempt in range(1, policy.max_attempts + 1):
            try:
                return fn(*args, **kwargs)
            except Exception as exc:
                if attempt >= policy.max_attempts:
                    raise
                _after_failure(exc, attempt)
                time.sleep(policy.delay)
        raise AssertionError("unreachable")

    return wrapper
