"""Tests for :mod:`imago.errors`."""

from __future__ import annotations

import pytest

from imago.errors import (
    ApiError,
    ApiResponseError,
    DecodeError,
    MissingApiKeyError,
    NetworkError,
    NoImageDataError,
    RequestTimeoutError,
    ResponseFormatError,
    SafetyFilterError,
)


@pytest.mark.parametrize(
    "error, retryable",
    [
        (NetworkError("reset"), True),
        (RequestTimeoutError(), True),
        (ApiError(500, "x"), True),
        (ApiError(503, "x"), True),
        (ApiError(599, "x"), True),
        (ApiError(400, "x"), False),
        (ApiError(429, "x"), False),
        (ApiResponseError("x"), False),
        (SafetyFilterError("x"), False),
        (NoImageDataError(), False),
        (DecodeError("x"), False),
        (MissingApiKeyError(), False),
    ],
)
def test_is_retryable(error, retryable):
    assert error.is_retryable is retryable


def test_messages():
    assert str(ApiError(500, "boom")) == "API error (status 500): boom"
    assert str(SafetyFilterError("SAFETY")) == (
        "Safety filter blocked image generation. Reason: SAFETY"
    )
    assert str(NoImageDataError()) == "No image data found in response"
    assert str(ResponseFormatError("bad")) == "Invalid response format: bad"


def test_format_error_is_an_api_response_error():
    error = ResponseFormatError("bad")

    assert isinstance(error, ApiResponseError)
    assert error.tried == []
