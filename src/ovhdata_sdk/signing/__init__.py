"""
OVHcloud Data Python SDK - Request Signing Module

OVH API v6 "$1$" signature computation and the helpers needed to build the
exact URL and body that are signed.
"""

from .types import (
    Credentials,
    SignatureInput,
    HttpMethod,
    HEADER_OVH_APPLICATION,
    HEADER_OVH_TIMESTAMP,
    HEADER_OVH_SIGNATURE,
    HEADER_OVH_CONSUMER,
    REQUEST_ID,
    JSON_CONTENT_TYPE,
    FALLBACK_TIMESTAMP,
)

from .signer import (
    build_signature,
    sign,
)

from .utils import (
    normalize_endpoint,
    encode_path_segment,
    resolve_url,
    serialize_body,
    parse_remote_time,
    masked_headers,
)

# Public API exports
__all__ = [
    # Types
    'Credentials',
    'SignatureInput',
    'HttpMethod',
    'HEADER_OVH_APPLICATION',
    'HEADER_OVH_TIMESTAMP',
    'HEADER_OVH_SIGNATURE',
    'HEADER_OVH_CONSUMER',
    'REQUEST_ID',
    'JSON_CONTENT_TYPE',
    'FALLBACK_TIMESTAMP',
    # Signing
    'build_signature',
    'sign',
    # Utilities
    'normalize_endpoint',
    'encode_path_segment',
    'resolve_url',
    'serialize_body',
    'parse_remote_time',
    'masked_headers',
]
