"""
OVHcloud Data Python SDK
Signed OVH API v6 client and Data Integration calls
"""

from .version import __version__
from .exceptions import (
    OvhDataSDKError,
    ValidationError,
    ConfigError,
    TransportError,
    ApiResponseError,
    DecodeError,
)
from .http_client import (
    OvhApiV6Client,
    RequestWrapper,
    ResponseWrapper,
    Success,
    TransportFailure,
    ProtocolFailure,
    Decoded,
    DecodeFailure,
    extract_error_message,
    parse_response,
)
from .signing import (
    Credentials,
    HttpMethod,
    build_signature,
    sign,
)
from .api import (
    OvhDataClient,
    create_client,
)

# Public API exports
__all__ = [
    '__version__',
    # Exceptions
    'OvhDataSDKError',
    'ValidationError',
    'ConfigError',
    'TransportError',
    'ApiResponseError',
    'DecodeError',
    # Core client
    'OvhApiV6Client',
    'RequestWrapper',
    'ResponseWrapper',
    'Success',
    'TransportFailure',
    'ProtocolFailure',
    'Decoded',
    'DecodeFailure',
    'extract_error_message',
    'parse_response',
    # Signing
    'Credentials',
    'HttpMethod',
    'build_signature',
    'sign',
    # Domain client
    'OvhDataClient',
    'create_client',
]
