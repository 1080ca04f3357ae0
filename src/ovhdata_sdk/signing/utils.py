"""
Utility functions for request signing

This module provides URL resolution, path segment escaping, body serialization
and server time parsing used while building signed requests.
"""

import json
import logging
import re
from typing import Any, Dict, Iterable, Mapping, Optional
from urllib.parse import quote, urlparse

from .types import (
    FALLBACK_TIMESTAMP,
    HEADER_OVH_APPLICATION,
    HEADER_OVH_CONSUMER,
    HEADER_OVH_SIGNATURE,
)

logger = logging.getLogger(__name__)

# Characters allowed verbatim inside a single path segment (RFC 3986 pchar
# without "/"); everything else is percent-encoded.
PATH_SEGMENT_SAFE = "!$&'()*+,;=:@"

DOT_SEGMENTS = ('.', '..')

_TIMESTAMP_PATTERN = re.compile(r'^\s*[0-9]+\s*$')

MASKED_HEADERS = (HEADER_OVH_APPLICATION, HEADER_OVH_CONSUMER, HEADER_OVH_SIGNATURE)


def normalize_endpoint(url: str) -> str:
    """
    Normalize the base endpoint URL.

    Args:
        url: Base URL of the API (for example https://eu.api.ovh.com/1.0)

    Returns:
        str: URL without trailing slash

    Raises:
        ValueError: If the URL has no scheme or host
    """
    if not url:
        raise ValueError("Endpoint URL cannot be empty")

    parsed = urlparse(url)
    if parsed.scheme not in ('http', 'https') or not parsed.netloc:
        raise ValueError(f"Invalid endpoint URL format: {url}")

    if parsed.query or parsed.fragment:
        raise ValueError(f"Endpoint URL cannot carry a query or fragment: {url}")

    return url.rstrip('/')


def encode_path_segment(segment: str) -> str:
    """
    Percent-encode one path segment.

    A "/" inside a segment is encoded so that it never introduces a new
    path level.
    """
    return quote(str(segment), safe=PATH_SEGMENT_SAFE)


def resolve_url(base_url: str, segments: Iterable[str]) -> str:
    """
    Append path segments to a base URL, escaping each one independently.

    Args:
        base_url: Normalized base endpoint
        segments: Path segments, not encoded

    Returns:
        str: Resolved URL

    Raises:
        ValueError: If a segment is "." or "..", which the transport would
            collapse into another path level
    """
    segments = [str(segment) for segment in segments]
    for segment in segments:
        if segment in DOT_SEGMENTS:
            raise ValueError(f"Invalid path segment: '{segment}'")

    path = "".join(f"/{encode_path_segment(segment)}" for segment in segments)
    return f"{base_url.rstrip('/')}{path}"


def serialize_body(body: Any) -> Optional[str]:
    """
    Serialize a request body to the compact JSON text that is signed and sent.

    Objects exposing ``to_dict`` (domain records) are converted first.

    Returns:
        Optional[str]: JSON text, or None when there is no body
    """
    if body is None:
        return None

    if hasattr(body, 'to_dict'):
        body = body.to_dict()

    return json.dumps(body, separators=(',', ':'), ensure_ascii=False)


def parse_remote_time(text: str) -> int:
    """
    Parse the body of the time endpoint.

    Anything that is not a plain non-negative integer gives the fallback
    timestamp. The server rejects requests signed with it, so the anomaly is
    logged.

    Args:
        text: Raw body returned by /auth/time

    Returns:
        int: Server time in seconds, or FALLBACK_TIMESTAMP
    """
    if text is not None and _TIMESTAMP_PATTERN.match(text):
        return int(text)

    logger.warning(
        f"Unable to parse server time {text!r}, falling back to timestamp {FALLBACK_TIMESTAMP}"
    )
    return FALLBACK_TIMESTAMP


def masked_headers(headers: Mapping[str, str]) -> Dict[str, str]:
    """
    Copy headers for logging, hiding the credential-bound values.
    """
    masked = {}
    for name, value in headers.items():
        if any(name.lower() == hidden.lower() for hidden in MASKED_HEADERS):
            masked[name] = "[hidden]"
        else:
            masked[name] = value
    return masked


def format_headers(headers: Mapping[str, str]) -> str:
    """Format headers as a single log-friendly line."""
    return "; ".join(f"{name!r}: {value!r}" for name, value in masked_headers(headers).items())
