"""Load the SoftLayer metadata document.

Fetched with a single GET from the metadata endpoint (no retries), or read
from a local JSON copy when the URL uses the file:// scheme.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any
from urllib.parse import urlparse
from urllib.request import url2pathname

import httpx

from .errors import FetchError, SchemaDecodeError, UnexpectedStatusError
from .logging_config import get_logger
from .models import Entity, decode_schema

logger = get_logger(__name__)

METADATA_URL = "https://api.softlayer.com/metadata/v3.1"
DEFAULT_TIMEOUT = 60.0


def fetch_schema_text(
    url: str = METADATA_URL,
    client: httpx.Client | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> str:
    """GET the metadata document and return the response body."""
    logger.info("Retrieving metadata from %s", url)
    try:
        if client is None:
            resp = httpx.get(url, timeout=timeout, follow_redirects=True)
        else:
            resp = client.get(url, timeout=timeout, follow_redirects=True)
    except (httpx.HTTPError, httpx.InvalidURL) as err:
        raise FetchError(f"Error retrieving metadata API: {err}") from err

    if resp.status_code != 200:
        raise UnexpectedStatusError(url, resp.status_code)
    return resp.text


def parse_schema(text: str | bytes) -> dict[str, Entity]:
    """Decode a JSON metadata document into entities."""
    try:
        data: Any = json.loads(text)
    except ValueError as err:
        raise SchemaDecodeError(f"Error unmarshaling json response: {err}") from err
    return decode_schema(data)


def load_schema_file(path: Path) -> dict[str, Entity]:
    """Read a metadata document saved on disk."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as err:
        raise FetchError(f"Error reading metadata file {path}: {err}") from err
    return parse_schema(text)


def load_schema(
    url: str = METADATA_URL,
    client: httpx.Client | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> dict[str, Entity]:
    """Fetch and decode the metadata document at ``url``."""
    parsed = urlparse(url)
    if parsed.scheme == "file":
        return load_schema_file(Path(url2pathname(parsed.path)))
    return parse_schema(fetch_schema_text(url, client=client, timeout=timeout))
