"""Unit tests for remote API failure types."""

from __future__ import annotations

import pytest

from barista_client import BaristaClientFailure, DecodeFailure, TransportFailure

URL = "https://barista.example.com/api/version/"


def test_transport_failure_message_and_fields() -> None:
    failure = TransportFailure(url=URL, cause="HTTP 502 Bad Gateway", status_code=502, raw="")

    assert isinstance(failure, BaristaClientFailure)
    assert str(failure) == f"Remote API problem while hitting {URL}: HTTP 502 Bad Gateway"
    assert failure.url == URL
    assert failure.cause == "HTTP 502 Bad Gateway"
    assert failure.status_code == 502


def test_decode_failure_includes_original_content() -> None:
    failure = DecodeFailure(url=URL, cause="1 validation error", raw='{"v": 1}')

    assert isinstance(failure, BaristaClientFailure)
    assert str(failure) == (
        f"Remote API content problem while hitting {URL}: 1 validation error, " '{"v": 1}'
    )


def test_decode_failure_without_content() -> None:
    failure = DecodeFailure(url=URL, cause="invalid JSON")

    assert failure.raw is None
    assert str(failure) == f"Remote API content problem while hitting {URL}: invalid JSON"


@pytest.mark.parametrize(
    "failure",
    [
        TransportFailure(url=URL, cause="boom"),
        DecodeFailure(url=URL, cause="bad"),
    ],
)
def test_failures_are_caught_as_one_kind(failure: BaristaClientFailure) -> None:
    with pytest.raises(BaristaClientFailure):
        raise failure
