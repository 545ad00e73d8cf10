from __future__ import annotations

import time

import pytest

from venice_providers.base.errors import ErrorCode, ProviderError
from venice_providers.base.resilience.retry import RetryConfig, retry


class _Flaky:
    def __init__(self, fail_times: int, code: ErrorCode):
        self.calls = 0
        self.fail_times = fail_times
        self.code = code

    def __call__(self):
        self.calls += 1
        if self.calls <= self.fail_times:
            raise ProviderError(code=self.code, message="boom", provider="venice")
        return "ok"


def test_retry_succeeds_after_transient(monkeypatch):
    sleeps = []
    monkeypatch.setattr(time, "sleep", lambda s: sleeps.append(s))
    attempt_log = []

    cfg = RetryConfig(max_attempts=3, delay_base=2.0, attempt_logger=lambda **kw: attempt_log.append(kw))
    flaky = _Flaky(fail_times=2, code=ErrorCode.TRANSIENT)

    @retry(cfg)
    def run():
        return flaky()

    assert run() == "ok"  # nosec B101
    assert flaky.calls == 3  # nosec B101
    assert sleeps == [1.0, 2.0]  # nosec B101
    assert attempt_log[-1]["error"] is None  # nosec B101
    assert [e["attempt"] for e in attempt_log] == [0, 1, 2]  # nosec B101


def test_retry_stops_on_non_retryable():
    flaky = _Flaky(fail_times=99, code=ErrorCode.AUTH)

    @retry(RetryConfig(max_attempts=4, delay_base=1.0))
    def run():
        return flaky()

    with pytest.raises(ProviderError) as ei:
        run()
    assert ei.value.code is ErrorCode.AUTH  # nosec B101
    assert flaky.calls == 1  # nosec B101


def test_retry_exhausts_and_reraises_last_error(monkeypatch):
    monkeypatch.setattr(time, "sleep", lambda *_: None)
    flaky = _Flaky(fail_times=99, code=ErrorCode.RATE_LIMIT)

    @retry(RetryConfig(max_attempts=3))
    def run():
        return flaky()

    with pytest.raises(ProviderError) as ei:
        run()
    assert ei.value.code is ErrorCode.RATE_LIMIT  # nosec B101
    assert flaky.calls == 3  # nosec B101


def test_non_provider_errors_propagate_immediately():
    calls = []

    @retry()
    def run():
        calls.append(1)
        raise KeyError("x")

    with pytest.raises(KeyError):
        run()
    assert calls == [1]  # nosec B101


def test_attempt_logger_sees_no_delay_when_giving_up(monkeypatch):
    monkeypatch.setattr(time, "sleep", lambda *_: None)
    seen = []
    flaky = _Flaky(fail_times=99, code=ErrorCode.TIMEOUT)

    @retry(RetryConfig(max_attempts=2, attempt_logger=lambda **kw: seen.append(kw)))
    def run():
        return flaky()

    with pytest.raises(ProviderError):
        run()
    assert [(e["attempt"], e["delay"]) for e in seen] == [(0, 1.0), (1, None)]  # nosec B101
    assert RetryConfig().next_delay(0, ProviderError(code=ErrorCode.AUTH, message="x", provider="venice")) is None  # nosec B101
