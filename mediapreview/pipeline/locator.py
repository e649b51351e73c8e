"""Resolve attachment locators (URLs, file paths, data URIs) to bytes."""

import base64
import binascii
import logging
from pathlib import Path
from urllib.parse import unquote, urlparse
from urllib.request import url2pathname

import requests

logger = logging.getLogger(__name__)


class LocatorResolveError(Exception):
    """Raised when a locator cannot be resolved to content."""
    pass


def _decode_data_uri(locator: str) -> bytes:
    header, sep, payload = locator.partition(",")
    if not sep:
        raise LocatorResolveError("Malformed data URI: missing ','")
    if header.endswith(";base64"):
        try:
            return base64.b64decode(payload, validate=True)
        except (binascii.Error, ValueError) as e:
            raise LocatorResolveError(f"Malformed base64 payload in data URI: {e}") from e
    return unquote(payload).encode("utf-8")


def _fetch_http(locator: str, timeout: float) -> bytes:
    try:
        response = requests.get(locator, timeout=timeout)
        response.raise_for_status()
    except requests.exceptions.RequestException as e:
        raise LocatorResolveError(f"Failed to fetch {locator}: {e}") from e
    return response.content


def _read_file(path: Path, locator: str) -> bytes:
    try:
        return path.read_bytes()
    except FileNotFoundError as e:
        raise LocatorResolveError(f"File not found: {locator}") from e
    except OSError as e:
        raise LocatorResolveError(f"Failed to read {locator}: {e}") from e


def resolve_locator(locator: str, timeout: float = 10.0) -> bytes:
    """Fetch the content a locator points at.

    Supports http(s) URLs (fetched with requests), file:// URLs, plain file
    paths and data: URIs. Blocking; callers on an event loop run it in an
    executor.

    Args:
        locator: Locator string
        timeout: Timeout in seconds for HTTP fetches

    Returns:
        Raw content bytes

    Raises:
        LocatorResolveError: If the locator is malformed or cannot be fetched
    """
    if not locator:
        raise LocatorResolveError("Empty locator")

    if locator.startswith("data:"):
        return _decode_data_uri(locator)

    parsed = urlparse(locator)
    scheme = parsed.scheme.lower()
    if scheme in ("http", "https"):
        logger.debug(f"Fetching {locator}")
        return _fetch_http(locator, timeout)
    if scheme == "file":
        return _read_file(Path(url2pathname(parsed.path)), locator)
    # Windows drive letters parse as a one-letter scheme
    if scheme and len(scheme) > 1:
        raise LocatorResolveError(f"Unsupported locator scheme '{scheme}': {locator}")
    return _read_file(Path(locator), locator)
