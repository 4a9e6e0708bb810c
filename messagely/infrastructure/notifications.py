# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Outbound SMS notifications and the background loop that sends them."""

from __future__ import annotations

import asyncio
import threading
from collections.abc import Coroutine
from concurrent.futures import Future
from typing import Any

import httpx

from messagely.domain.messages.repositories import NotificationPort
from messagely.infrastructure.resilience import CircuitBreaker, resilient_call
from messagely.shared.config import ResilienceConfig, TwilioConfig
from messagely.shared.logging import logger


class TwilioSmsNotifier(NotificationPort):
    def __init__(
        self,
        config: TwilioConfig,
        resilience: ResilienceConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        breaker: CircuitBreaker | None = None,
    ) -> None:
        self._config = config
        self._resilience = resilience
        self._transport = transport
        self._breaker = breaker or CircuitBreaker(
            failure_threshold=resilience.circuit_fail_threshold,
            reset_timeout=resilience.circuit_reset_timeout,
        )

    @property
    def _messages_url(self) -> str:
        return f"{self._config.api_base}/Accounts/{self._config.account_sid}/Messages.json"

    async def send_sms(self, body: str) -> None:
        form = {"From": self._config.from_phone, "To": self._config.to_phone, "Body": body}
        auth = (self._config.account_sid or "", self._config.auth_token or "")

        async with httpx.AsyncClient(
            timeout=self._config.timeout, auth=auth, transport=self._transport
        ) as http:

            async def post() -> httpx.Response:
                response = await http.post(self._messages_url, data=form)
                response.raise_for_status()
                return response

            response = await resilient_call(
                post,
                config=self._resilience,
                breaker=self._breaker,
                timeout=self._config.timeout,
                label="twilio.messages",
            )
        logger.info(f"sms.send: ok sid={response.json().get('sid')}")


class NullNotifier(NotificationPort):
    async def send_sms(self, body: str) -> None:
        logger.debug("sms.send: notifications disabled, skipping")


class NotificationDispatcher:
    """Runs notification coroutines on a private event loop thread.

    ``dispatch`` returns immediately; failures are logged, never raised.
    """

    def __init__(self) -> None:
        self._loop: asyncio.AbstractEventLoop | None = None
        self._thread: threading.Thread | None = None
        self._lock = threading.Lock()

    @staticmethod
    def _run_loop(loop: asyncio.AbstractEventLoop) -> None:
        asyncio.set_event_loop(loop)
        try:
            loop.run_forever()
        except Exception:
            logger.exception("notifications: loop error")
        finally:
            loop.close()
            logger.debug("notifications: loop closed")

    def _ensure_started(self) -> asyncio.AbstractEventLoop:
        with self._lock:
            if self._loop is None:
                self._loop = asyncio.new_event_loop()
                self._thread = threading.Thread(
                    target=self._run_loop, args=(self._loop,), daemon=True, name="NotificationLoop"
                )
                self._thread.start()
                logger.debug(f"notifications: loop started thread={self._thread.name}")
            return self._loop

    def dispatch(self, coro: Coroutine[Any, Any, Any]) -> Future:
        loop = self._ensure_started()
        future = asyncio.run_coroutine_threadsafe(coro, loop)
        future.add_done_callback(self._log_outcome)
        return future

    @staticmethod
    def _log_outcome(future: Future) -> None:
        if future.cancelled():
            logger.warning("notifications: task cancelled")
            return
        exc = future.exception()
        if exc is not None:
            logger.opt(exception=exc).error(
                f"notifications: task failed {type(exc).__name__}"
            )

    def stop(self) -> None:
        with self._lock:
            if self._loop is None or self._thread is None:
                return
            self._loop.call_soon_threadsafe(self._loop.stop)
            self._thread.join(timeout=2.0)
            self._loop = None
            self._thread = None


__all__ = ["NotificationDispatcher", "NullNotifier", "TwilioSmsNotifier"]
