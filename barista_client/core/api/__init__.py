from barista_client.core.api.client import AsyncBaristaClient, BaristaClientBase, SyncBaristaClient
from barista_client.core.api.errors import BaristaClientFailure, DecodeFailure, TransportFailure
from barista_client.core.api.urls import Params, build_url, normalize_base_url

__all__ = [
    "AsyncBaristaClient",
    "BaristaClientBase",
    "BaristaClientFailure",
    "DecodeFailure",
    "Params",
    "SyncBaristaClient",
    "TransportFailure",
    "build_url",
    "normalize_base_url",
]
