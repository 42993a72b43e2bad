# core/api/errors.py
from __future__ import annotations

from typing import Optional


class BaristaClientFailure(Exception):
    """
    Fatal error of a single remote barista API interaction.

    Every operation of the client raises this kind (through one of its two
    variants) and nothing else for remote problems. Fields stay available for
    programmatic inspection; `str()` gives the human-readable message.
    """

    def __init__(self, message: str, *, url: str, cause: str, raw: Optional[str] = None):
        self.url = url
        self.cause = cause
        self.raw = raw
        super().__init__(message)


class TransportFailure(BaristaClientFailure):
    """The HTTP exchange did not complete or returned a non-success status."""

    def __init__(
        self,
        *,
        url: str,
        cause: str,
        status_code: Optional[int] = None,
        raw: Optional[str] = None,
    ):
        self.status_code = status_code
        super().__init__(
            f"Remote API problem while hitting {url}: {cause}",
            url=url,
            cause=cause,
            raw=raw,
        )


class DecodeFailure(BaristaClientFailure):
    """The exchange completed but the body does not match the declared shape."""

    def __init__(self, *, url: str, cause: str, raw: Optional[str] = None):
        message = f"Remote API content problem while hitting {url}: {cause}"
        if raw is not None:
            message = f"{message}, {raw}"
        super().__init__(message, url=url, cause=cause, raw=raw)


__all__ = [
    "BaristaClientFailure",
    "DecodeFailure",
    "TransportFailure",
]
