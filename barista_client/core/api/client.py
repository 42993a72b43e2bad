# core/api/client.py
from __future__ import annotations

import functools
import json
import time
import uuid
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from barista_client.config.settings import Settings, settings as default_settings
from barista_client.core.api.errors import DecodeFailure, TransportFailure
from barista_client.core.api.urls import Params, build_url, normalize_base_url
from barista_client.core.logger import setup_logger
from barista_client.schemas.api.base import Record, Version
from barista_client.schemas.api.references.currency import Currency

logger = setup_logger("barista_client")
T = TypeVar("T")
TRecord = TypeVar("TRecord", bound=Record)


@functools.lru_cache(maxsize=128)
def _type_adapter(response_model: Any) -> TypeAdapter:
    return TypeAdapter(response_model)


class BaristaClientBase(ABC):
    """
    Client algebra of the remote barista API.

    Adapters implement the three primitives (`get`, `post`, `delete`) for one
    concurrency model. Everything else is defined here on top of them and
    returns whatever the adapter's `get` returns: a value for the blocking
    adapter, an awaitable for the asyncio one.

    Every request carries:
      • `Accept: application/json`
      • `Authorization: Key <key>:<secret>`
    The read timeout is unbounded, only connecting is time-limited.
    """

    # Filters that would change the shape of a record list response
    RECORDS_CONTROL_KEYS = ("page", "page_size", "format", "_fields")
    UNPAGINATED_PAGE_SIZE = "-1"

    # limits for body previews in the logs
    REQ_PREVIEW_LIMIT = 64_000   # bytes
    RESP_PREVIEW_LIMIT = 64_000  # chars

    def __init__(
        self,
        url: str,
        key: str,
        secret: str,
        *,
        connect_timeout: float = 30.0,
    ) -> None:
        if not all([url, key, secret]):
            raise ValueError("Barista API URL, key and secret are all required.")

        self.base_url = normalize_base_url(url)
        self._default_headers = {
            "Accept": "application/json",
            "Authorization": f"Key {key}:{secret}",
        }
        self._masked_auth = f"Key {key}:****"
        self._timeout = httpx.Timeout(connect_timeout, read=None)

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None, **kwargs: Any):
        """Build a client from the configuration layer (environment / .env)."""
        settings = settings or default_settings
        return cls(
            url=settings.barista_url,
            key=settings.barista_key,
            secret=settings.barista_secret,
            connect_timeout=settings.barista_connect_timeout,
            **kwargs,
        )

    # ------------------------ helpers ------------------------

    def build_url(self, path: str, params: Optional[Params] = None) -> str:
        return build_url(self.base_url, path, params)

    @staticmethod
    def _new_trace_id() -> str:
        return uuid.uuid4().hex[:12]

    @staticmethod
    def _prettify_json(text: str) -> str:
        try:
            obj = json.loads(text)
            return json.dumps(obj, ensure_ascii=False, indent=2)
        except ValueError:
            return text

    @staticmethod
    def _serialize_payload(data: Any) -> Any:
        if isinstance(data, BaseModel):
            return data.model_dump(mode="json")
        if isinstance(data, list):
            return [x.model_dump(mode="json") if isinstance(x, BaseModel) else x for x in data]
        if isinstance(data, dict):
            return data
        raise TypeError(f"Unsupported data type for POST: {type(data)}")

    @classmethod
    def _records_params(cls, filters: Optional[Params]) -> Dict[str, str]:
        params = {k: v for k, v in (filters or {}).items() if k not in cls.RECORDS_CONTROL_KEYS}
        params["page_size"] = cls.UNPAGINATED_PAGE_SIZE
        return params

    def _build_request(
        self,
        client: httpx.Client | httpx.AsyncClient,
        method: str,
        url: str,
        payload: Any = None,
    ) -> httpx.Request:
        headers = dict(self._default_headers)
        if payload is not None:
            headers["Content-Type"] = "application/json"
        return client.build_request(
            method, url, headers=headers, json=payload, timeout=self._timeout
        )

    def _log_request(self, trace_id: str, req: httpx.Request) -> None:
        body_bytes = req.content or b""
        body_preview = body_bytes[: self.REQ_PREVIEW_LIMIT].decode("utf-8", errors="replace")
        logger.info("↗️  [trace:%s] %s %s | send=%dB | auth=%s",
                    trace_id, req.method, req.url, len(body_bytes), self._masked_auth)
        if body_bytes:
            logger.debug("Request body (preview): %s", self._prettify_json(body_preview))

    def _log_response(self, trace_id: str, url: str, resp: httpx.Response, elapsed_ms: float) -> None:
        raw = resp.content or b""
        logger.info("↘️  [trace:%s] %s -> %s in %.1fms | recv=%dB",
                    trace_id, url, resp.status_code, elapsed_ms, len(raw))
        logger.debug("Response body (preview): %s",
                     self._prettify_json(resp.text[: self.RESP_PREVIEW_LIMIT]))

    @staticmethod
    def _request_failure(trace_id: str, url: str, exc: httpx.RequestError) -> TransportFailure:
        logger.error("[trace:%s] Request to %s failed: %s", trace_id, url, exc)
        return TransportFailure(url=url, cause=f"{type(exc).__name__}: {exc}")

    @staticmethod
    def _check_status(trace_id: str, url: str, resp: httpx.Response) -> None:
        if resp.is_success:
            return
        text = resp.text
        cause = f"HTTP {resp.status_code} {resp.reason_phrase}"
        if text:
            cause = f"{cause}: {text}"
        logger.error("[trace:%s] %s answered %s", trace_id, url, resp.status_code)
        raise TransportFailure(url=url, cause=cause, status_code=resp.status_code, raw=text)

    @staticmethod
    def _decode(trace_id: str, url: str, resp: httpx.Response, response_model: Any) -> Any:
        try:
            return _type_adapter(response_model).validate_json(resp.content)
        except ValidationError as e:
            logger.error("[trace:%s] Unexpected content from %s: %s", trace_id, url, e)
            raise DecodeFailure(url=url, cause=str(e), raw=resp.text) from e

    # ---------------------- primitives ------------------------

    @abstractmethod
    def get(self, path: str, response_model: Type[T] = Any, params: Optional[Params] = None):
        """GET the resource(s) at `path` and decode them into `response_model`."""

    @abstractmethod
    def post(
        self,
        path: str,
        payload: Any,
        response_model: Type[T] = Any,
        params: Optional[Params] = None,
    ):
        """POST `payload` as JSON to `path` and decode the answer into `response_model`."""

    @abstractmethod
    def delete(self, path: str, params: Optional[Params] = None):
        """DELETE the resource(s) at `path`. The response body is ignored."""

    # ---------------------- conveniences ----------------------

    def get_records(self, path: str, model: Type[TRecord], filters: Optional[Params] = None):
        """
        Return all records at `path` matching `filters`, in the order the server sends them.

        Pagination and format parameters are removed from the filters and the
        unpaginated variant of the list is requested instead.
        """
        return self.get(path, List[model], self._records_params(filters))

    def version(self):
        """Return the remote API version."""
        return self.get("version", Version)

    def currencies(self):
        """Return the list of defined currencies."""
        return self.get("currencies", List[Currency], {"universe": "1"})


class SyncBaristaClient(BaristaClientBase):
    """Blocking barista client over `httpx.Client`."""

    def __init__(
        self,
        url: str,
        key: str,
        secret: str,
        *,
        connect_timeout: float = 30.0,
        http_client: Optional[httpx.Client] = None,
    ) -> None:
        super().__init__(url, key, secret, connect_timeout=connect_timeout)
        # a caller supplied client is reused and left open on close()
        self.client = http_client or httpx.Client(timeout=self._timeout, follow_redirects=True)
        self._owns_http = http_client is None

        logger.debug("SyncBaristaClient initialized: base_url=%s", self.base_url)

    def _send(self, method: str, path: str, params: Optional[Params], payload: Any = None):
        url = self.build_url(path, params)
        trace_id = self._new_trace_id()
        req = self._build_request(self.client, method, url, payload)
        self._log_request(trace_id, req)

        t0 = time.perf_counter()
        try:
            resp = self.client.send(req)
        except httpx.RequestError as e:
            raise self._request_failure(trace_id, url, e) from e
        self._log_response(trace_id, url, resp, (time.perf_counter() - t0) * 1000.0)

        self._check_status(trace_id, url, resp)
        return trace_id, url, resp

    def get(self, path: str, response_model: Type[T] = Any, params: Optional[Params] = None) -> T:
        trace_id, url, resp = self._send("GET", path, params)
        return self._decode(trace_id, url, resp, response_model)

    def post(
        self,
        path: str,
        payload: Any,
        response_model: Type[T] = Any,
        params: Optional[Params] = None,
    ) -> T:
        data = self._serialize_payload(payload)
        trace_id, url, resp = self._send("POST", path, params, data)
        return self._decode(trace_id, url, resp, response_model)

    def delete(self, path: str, params: Optional[Params] = None) -> None:
        self._send("DELETE", path, params)

    # ---------------------- lifecycle -------------------------

    def close(self) -> None:
        if self._owns_http:
            logger.debug("Closing httpx.Client")
            self.client.close()

    def __enter__(self) -> "SyncBaristaClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class AsyncBaristaClient(BaristaClientBase):
    """Asyncio barista client over `httpx.AsyncClient`. Every operation is awaitable."""

    def __init__(
        self,
        url: str,
        key: str,
        secret: str,
        *,
        connect_timeout: float = 30.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        super().__init__(url, key, secret, connect_timeout=connect_timeout)
        # a caller supplied client is reused and left open on aclose()
        self.client = http_client or httpx.AsyncClient(timeout=self._timeout, follow_redirects=True)
        self._owns_http = http_client is None

        logger.debug("AsyncBaristaClient initialized: base_url=%s", self.base_url)

    async def _send(self, method: str, path: str, params: Optional[Params], payload: Any = None):
        url = self.build_url(path, params)
        trace_id = self._new_trace_id()
        req = self._build_request(self.client, method, url, payload)
        self._log_request(trace_id, req)

        t0 = time.perf_counter()
        try:
            resp = await self.client.send(req)
        except httpx.RequestError as e:
            raise self._request_failure(trace_id, url, e) from e
        self._log_response(trace_id, url, resp, (time.perf_counter() - t0) * 1000.0)

        self._check_status(trace_id, url, resp)
        return trace_id, url, resp

    async def get(self, path: str, response_model: Type[T] = Any, params: Optional[Params] = None) -> T:
        trace_id, url, resp = await self._send("GET", path, params)
        return self._decode(trace_id, url, resp, response_model)

    async def post(
        self,
        path: str,
        payload: Any,
        response_model: Type[T] = Any,
        params: Optional[Params] = None,
    ) -> T:
        data = self._serialize_payload(payload)
        trace_id, url, resp = await self._send("POST", path, params, data)
        return self._decode(trace_id, url, resp, response_model)

    async def delete(self, path: str, params: Optional[Params] = None) -> None:
        await self._send("DELETE", path, params)

    # ---------------------- lifecycle -------------------------

    async def aclose(self) -> None:
        if self._owns_http:
            logger.debug("Closing httpx.AsyncClient")
            await self.client.aclose()

    async def __aenter__(self) -> "AsyncBaristaClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()


__all__ = [
    "AsyncBaristaClient",
    "BaristaClientBase",
    "SyncBaristaClient",
]
