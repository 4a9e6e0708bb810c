# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Retry and circuit-breaker policy for outbound HTTP calls.

A call is retried only when repeating it cannot duplicate a side effect the
remote already performed: the connection was never established, or the remote
answered 429/5xx. A read timeout on a POST is not retried, the request may
already have been accepted.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Awaitable, Callable
from typing import TypeVar

import httpx
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from messagely.shared.config import ResilienceConfig
from messagely.shared.logging import logger

T = TypeVar("T")

_UNSENT_ERRORS = (httpx.ConnectError, httpx.ConnectTimeout, httpx.PoolTimeout)


class CircuitOpenError(RuntimeError):
    pass


def is_transient(exc: BaseException) -> bool:
    if isinstance(exc, httpx.HTTPStatusError):
        status = exc.response.status_code
        return status == 429 or status >= 500
    return isinstance(exc, _UNSENT_ERRORS)


def is_remote_fault(exc: BaseException) -> bool:
    """4xx answers other than 429 mean the remote is healthy and rejected our input."""
    if isinstance(exc, httpx.HTTPStatusError):
        return is_transient(exc)
    return True


class CircuitBreaker:
    """Counts consecutive remote faults; refuses calls while open.

    After ``reset_timeout`` one trial call is let through. A fault during the
    trial reopens the circuit immediately.
    """

    def __init__(self, failure_threshold: int, reset_timeout: float) -> None:
        self.failure_threshold = failure_threshold
        self.reset_timeout = reset_timeout
        self._failures = 0
        self._opened_at: float | None = None

    @property
    def failures(self) -> int:
        return self._failures

    @property
    def is_open(self) -> bool:
        return self._opened_at is not None

    def allow(self) -> bool:
        if self._opened_at is None:
            return True
        if time.monotonic() - self._opened_at >= self.reset_timeout:
            logger.info("breaker: half-open, allowing trial call")
            self._opened_at = None
            self._failures = self.failure_threshold - 1
            return True
        return False

    def on_success(self) -> None:
        self._failures = 0
        self._opened_at = None

    def on_failure(self) -> None:
        self._failures += 1
        if self._failures >= self.failure_threshold and self._opened_at is None:
            self._opened_at = time.monotonic()
            logger.error(f"breaker: open after {self._failures} consecutive failures")


def _log_retry(label: str) -> Callable[[RetryCallState], None]:
    def before_sleep(state: RetryCallState) -> None:
        exc = state.outcome.exception() if state.outcome else None
        logger.warning(
            f"resilience: {label} attempt={state.attempt_number} "
            f"failed {type(exc).__name__}, retrying"
        )

    return before_sleep


async def resilient_call(  # noqa: UP047
    call: Callable[[], Awaitable[T]],
    *,
    config: ResilienceConfig,
    breaker: CircuitBreaker,
    timeout: float | None = None,
    label: str = "call",
) -> T:
    """Await ``call()`` under the retry policy, a per-attempt timeout and ``breaker``.

    The last failure is re-raised unchanged once retries are exhausted or the
    failure is not transient. Raises ``CircuitOpenError`` without calling when
    the breaker is open.
    """
    if not breaker.allow():
        logger.warning(f"resilience: {label} refused, circuit open")
        raise CircuitOpenError(f"{label}: circuit open")

    per_attempt = timeout or config.default_timeout
    retrying = AsyncRetrying(
        stop=stop_after_attempt(config.max_retries + 1),
        wait=wait_exponential(multiplier=config.backoff_base, max=config.backoff_cap),
        retry=retry_if_exception(is_transient),
        before_sleep=_log_retry(label),
        reraise=True,
    )

    try:
        async for attempt in retrying:
            with attempt:
                result = await asyncio.wait_for(call(), timeout=per_attempt)
    except Exception as exc:
        if is_remote_fault(exc):
            breaker.on_failure()
        raise

    breaker.on_success()
    return result


__all__ = [
    "CircuitBreaker",
    "CircuitOpenError",
    "is_remote_fault",
    "is_transient",
    "resilient_call",
]
