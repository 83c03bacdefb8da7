"""Postman documenter collection loader.

Fetches a published collection from the documenter gateway (or reads a local
export) and validates it into :class:`CollectionItem` models.
"""

import json
import logging
import re
from pathlib import Path
from urllib.parse import urlsplit

import httpx
from pydantic import ValidationError

from postman_api_gen.exceptions import (
    CollectionFetchError,
    CollectionParseError,
    ConfigurationError,
)
from .base import CollectionItem

logger = logging.getLogger(__name__)

GATEWAY_PATH = "/api/collections/{owner}/{collection}?segregateAuth=true&versionTag=latest"
FETCH_TIMEOUT = 60.0

_VIEW_RE = re.compile(r"^/view/(?P<owner>[^/]+)/(?P<collection>[^/]+)")


def resolve_collection_path(source: str) -> str:
    """Turn a documenter URL (or a gateway path) into the gateway path to fetch.

    ``https://documenter.getpostman.com/view/123/abc`` resolves to
    ``/api/collections/123/abc?segregateAuth=true&versionTag=latest``.
    """
    source = source.strip()
    if source.startswith("/"):
        return source

    parts = urlsplit(source)
    if parts.scheme not in ("http", "https") or not parts.netloc:
        raise ConfigurationError(f"Incorrect URL: {source!r}")

    match = _VIEW_RE.match(parts.path)
    if match:
        return GATEWAY_PATH.format(**match.groupdict())
    if parts.path.startswith("/api/collections/"):
        return parts.path + (f"?{parts.query}" if parts.query else "")

    raise ConfigurationError(f"Incorrect URL: {source!r}")


def fetch_collection(path: str, host: str) -> dict:
    """GET ``https://{host}{path}`` and return the decoded JSON body."""
    url = f"https://{host}{path}"
    logger.info("Fetching collection from %s", url)
    try:
        response = httpx.get(url, timeout=FETCH_TIMEOUT, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise CollectionFetchError(
            f"Server returned {e.response.status_code} for {url}"
        ) from e
    except httpx.HTTPError as e:
        raise CollectionFetchError(f"Failed to fetch {url}: {e}") from e

    return _decode(response.text, source=url)


def load_collection_file(file_path: Path) -> dict:
    """Read a collection exported to a local JSON file."""
    text = file_path.read_text(encoding="utf-8")
    return _decode(text, source=str(file_path))


def parse_collection(document: dict) -> CollectionItem:
    """Validate a decoded collection document into the root folder item."""
    if not isinstance(document, dict):
        raise CollectionParseError("Collection must be a JSON object")

    root = dict(document)
    root.setdefault("item", [])
    try:
        return CollectionItem.model_validate(root)
    except ValidationError as e:
        raise CollectionParseError(f"Not a valid collection: {e}") from e


def _decode(text: str, source: str) -> dict:
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise CollectionParseError(f"{source} is not valid JSON: {e}") from e
