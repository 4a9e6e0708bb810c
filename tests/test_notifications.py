from __future__ import annotations

import asyncio
import base64
import threading
from urllib.parse import parse_qs

import httpx
import pytest

from messagely.infrastructure.notifications import (
    NotificationDispatcher,
    NullNotifier,
    TwilioSmsNotifier,
)
from messagely.infrastructure.resilience import CircuitBreaker, CircuitOpenError
from messagely.shared.config import ResilienceConfig, TwilioConfig


@pytest.fixture()
def twilio_config() -> TwilioConfig:
    return TwilioConfig(
        TWILIO_ACCOUNT_SID="AC123",
        TWILIO_AUTH_TOKEN="tok",
        TWILIO_FROM_PHONE="+15550000001",
        TWILIO_TO_PHONE="+15550000002",
    )


@pytest.fixture()
def resilience() -> ResilienceConfig:
    return ResilienceConfig(RESILIENCE_RETRIES=1, RESILIENCE_BACKOFF_BASE=0, RESILIENCE_BACKOFF_CAP=0)


def test_twilio_config_enabled_only_when_complete(twilio_config: TwilioConfig) -> None:
    assert twilio_config.enabled is True
    assert twilio_config.model_copy(update={"to_phone": None}).enabled is False


def test_twilio_notifier_posts_form(twilio_config: TwilioConfig, resilience: ResilienceConfig) -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(201, json={"sid": "SM1"})

    notifier = TwilioSmsNotifier(
        twilio_config, resilience, transport=httpx.MockTransport(handler)
    )

    asyncio.run(notifier.send_sms("test1 says to test2: hi"))

    assert len(seen) == 1
    request = seen[0]
    assert request.url.path == "/2010-04-01/Accounts/AC123/Messages.json"
    form = parse_qs(request.content.decode())
    assert form == {
        "From": ["+15550000001"],
        "To": ["+15550000002"],
        "Body": ["test1 says to test2: hi"],
    }
    expected = base64.b64encode(b"AC123:tok").decode()
    assert request.headers["Authorization"] == f"Basic {expected}"


def test_twilio_notifier_retries_transport_errors(
    twilio_config: TwilioConfig, resilience: ResilienceConfig
) -> None:
    attempts = []

    def handler(request: httpx.Request) -> httpx.Response:
        attempts.append(request)
        if len(attempts) == 1:
            raise httpx.ConnectError("boom", request=request)
        return httpx.Response(201, json={"sid": "SM2"})

    notifier = TwilioSmsNotifier(
        twilio_config, resilience, transport=httpx.MockTransport(handler)
    )

    asyncio.run(notifier.send_sms("hi"))

    assert len(attempts) == 2


def test_twilio_notifier_raises_on_error_status(
    twilio_config: TwilioConfig, resilience: ResilienceConfig
) -> None:
    notifier = TwilioSmsNotifier(
        twilio_config,
        resilience,
        transport=httpx.MockTransport(lambda request: httpx.Response(400, json={"code": 21211})),
    )

    with pytest.raises(httpx.HTTPStatusError):
        asyncio.run(notifier.send_sms("hi"))


def test_null_notifier_does_nothing() -> None:
    asyncio.run(NullNotifier().send_sms("hi"))


def test_dispatcher_runs_in_background_and_survives_failures() -> None:
    dispatcher = NotificationDispatcher()
    release = threading.Event()
    done = threading.Event()

    async def slow() -> None:
        while not release.is_set():
            await asyncio.sleep(0.01)
        done.set()

    async def broken() -> None:
        raise RuntimeError("nope")

    try:
        slow_future = dispatcher.dispatch(slow())
        assert not slow_future.done()

        broken_future = dispatcher.dispatch(broken())
        with pytest.raises(RuntimeError):
            broken_future.result(timeout=5)

        release.set()
        slow_future.result(timeout=5)
        assert done.is_set()
    finally:
        dispatcher.stop()


def test_server_errors_are_retried_and_open_the_breaker(twilio_config: TwilioConfig) -> None:
    resilience = ResilienceConfig(
        RESILIENCE_RETRIES=2,
        RESILIENCE_BACKOFF_BASE=0,
        RESILIENCE_BACKOFF_CAP=0,
        RESILIENCE_CIRCUIT_THRESHOLD=2,
    )
    attempts: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        attempts.append(request)
        return httpx.Response(503, json={"message": "unavailable"})

    breaker = CircuitBreaker(failure_threshold=2, reset_timeout=60.0)
    notifier = TwilioSmsNotifier(
        twilio_config, resilience, transport=httpx.MockTransport(handler), breaker=breaker
    )

    for _ in range(2):
        with pytest.raises(httpx.HTTPStatusError):
            asyncio.run(notifier.send_sms("hi"))

    assert len(attempts) == 6
    assert breaker.is_open

    with pytest.raises(CircuitOpenError):
        asyncio.run(notifier.send_sms("hi"))
    assert len(attempts) == 6


def test_client_errors_are_not_retried_and_keep_breaker_closed(
    twilio_config: TwilioConfig, resilience: ResilienceConfig
) -> None:
    attempts: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        attempts.append(request)
        return httpx.Response(400, json={"code": 21211})

    breaker = CircuitBreaker(failure_threshold=1, reset_timeout=60.0)
    notifier = TwilioSmsNotifier(
        twilio_config, resilience, transport=httpx.MockTransport(handler), breaker=breaker
    )

    with pytest.raises(httpx.HTTPStatusError):
        asyncio.run(notifier.send_sms("hi"))

    assert len(attempts) == 1
    assert breaker.failures == 0
    assert not breaker.is_open


def test_read_timeout_is_not_retried(
    twilio_config: TwilioConfig, resilience: ResilienceConfig
) -> None:
    attempts: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        attempts.append(request)
        raise httpx.ReadTimeout("slow", request=request)

    breaker = CircuitBreaker(failure_threshold=5, reset_timeout=60.0)
    notifier = TwilioSmsNotifier(
        twilio_config, resilience, transport=httpx.MockTransport(handler), breaker=breaker
    )

    with pytest.raises(httpx.ReadTimeout):
        asyncio.run(notifier.send_sms("hi"))

    assert len(attempts) == 1
    assert breaker.failures == 1


def test_circuit_breaker_opens_after_threshold() -> None:
    breaker = CircuitBreaker(failure_threshold=2, reset_timeout=60.0)

    breaker.on_failure()
    assert breaker.allow() is True
    breaker.on_failure()
    assert breaker.allow() is False
    breaker.on_success()
    assert breaker.allow() is True


def test_circuit_breaker_trial_failure_reopens() -> None:
    breaker = CircuitBreaker(failure_threshold=3, reset_timeout=0.0)
    for _ in range(3):
        breaker.on_failure()
    assert breaker.is_open

    assert breaker.allow() is True
    assert not breaker.is_open
    breaker.on_failure()
    assert breaker.is_open
