from __future__ import annotations

import asyncio

import httpx
import pytest
import requests

from venice_providers.base.errors import (
    ConfigurationError,
    EmptyBody,
    ErrorCode,
    ProviderError,
    RequestFailed,
    TransportInterrupted,
    classify_exception,
    code_for_status,
)


class _StatusErr(Exception):
    def __init__(self, status_code: int):
        super().__init__(f"status {status_code}")
        self.status_code = status_code


class _Resp:
    def __init__(self, status_code: int):
        self.status_code = status_code


class _RespErr(Exception):
    def __init__(self, status_code: int):
        super().__init__("resp error")
        self.response = _Resp(status_code)


@pytest.mark.parametrize(
    "status,code",
    [
        (400, ErrorCode.VALIDATION),
        (401, ErrorCode.AUTH),
        (402, ErrorCode.AUTH),
        (404, ErrorCode.NOT_FOUND),
        (429, ErrorCode.RATE_LIMIT),
        (500, ErrorCode.SERVER_ERROR),
        (502, ErrorCode.TRANSIENT),
        (503, ErrorCode.UNAVAILABLE),
        (504, ErrorCode.TIMEOUT),
        (599, ErrorCode.SERVER_ERROR),
        (418, ErrorCode.UNKNOWN),
    ],
)
def test_code_for_status(status, code):
    assert code_for_status(status) is code  # nosec B101
    assert classify_exception(_StatusErr(status)) is code  # nosec B101


def test_status_from_response_attribute():
    assert classify_exception(_RespErr(429)) is ErrorCode.RATE_LIMIT  # nosec B101


@pytest.mark.parametrize(
    "exc",
    [TimeoutError(), asyncio.TimeoutError(), httpx.ReadTimeout("slow"), httpx.ConnectTimeout("slow")],
)
def test_timeouts(exc):
    assert classify_exception(exc) is ErrorCode.TIMEOUT  # nosec B101


def test_httpx_transport_errors_are_transient():
    assert classify_exception(httpx.ConnectError("refused")) is ErrorCode.TRANSIENT  # nosec B101
    assert classify_exception(httpx.RemoteProtocolError("peer closed")) is ErrorCode.TRANSIENT  # nosec B101


def test_requests_errors_from_model_listing():
    assert classify_exception(requests.ConnectTimeout("slow")) is ErrorCode.TIMEOUT  # nosec B101
    assert classify_exception(requests.ConnectionError("refused")) is ErrorCode.TRANSIENT  # nosec B101


def test_provider_error_passthrough():
    err = ProviderError(code=ErrorCode.CONFLICT, message="x", provider="venice")
    assert classify_exception(err) is ErrorCode.CONFLICT  # nosec B101


def test_message_heuristics_and_fallback():
    assert classify_exception(Exception("Rate limit exceeded")) is ErrorCode.RATE_LIMIT  # nosec B101
    assert classify_exception(Exception("invalid api key")) is ErrorCode.AUTH  # nosec B101
    assert classify_exception(Exception("something odd")) is ErrorCode.UNKNOWN  # nosec B101


def test_venice_error_defaults():
    assert ConfigurationError(message="no key").code is ErrorCode.CONFIGURATION  # nosec B101
    assert not ConfigurationError(message="no key").retryable  # nosec B101
    empty = EmptyBody()
    assert empty.code is ErrorCode.TRANSIENT and empty.retryable  # nosec B101
    assert isinstance(empty, RequestFailed)  # nosec B101
    assert TransportInterrupted().code is ErrorCode.TRANSIENT  # nosec B101
    assert RequestFailed().provider == "venice"  # nosec B101
