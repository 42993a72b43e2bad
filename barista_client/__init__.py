"""Typed client for the remote barista HTTP/JSON API."""

from barista_client.core.api import (
    AsyncBaristaClient,
    BaristaClientBase,
    BaristaClientFailure,
    DecodeFailure,
    Params,
    SyncBaristaClient,
    TransportFailure,
)
from barista_client.schemas import Currency, Record, Version

__version__ = "1.0.0"

__all__ = [
    "AsyncBaristaClient",
    "BaristaClientBase",
    "BaristaClientFailure",
    "Currency",
    "DecodeFailure",
    "Params",
    "Record",
    "SyncBaristaClient",
    "TransportFailure",
    "Version",
]
