"""Remote API URL construction."""

from __future__ import annotations

from typing import Mapping, Optional
from urllib.parse import urlencode

Params = Mapping[str, str]


def normalize_base_url(url: str) -> str:
    """Strip surrounding whitespace and every trailing separator from `url`."""
    return url.strip().rstrip("/")


def build_url(base_url: str, path: str, params: Optional[Params] = None) -> str:
    """
    Build the full URL of a remote endpoint.

    The path is joined to the base URL with exactly one separator and always ends
    with one, which is what the barista endpoints expect. Parameters are
    serialized as a query string; an empty mapping yields none.
    """
    base = normalize_base_url(base_url)
    segment = path.strip("/")
    url = f"{base}/{segment}/" if segment else f"{base}/"
    if params:
        url = f"{url}?{urlencode(dict(params))}"
    return url


__all__ = ["Params", "build_url", "normalize_base_url"]
