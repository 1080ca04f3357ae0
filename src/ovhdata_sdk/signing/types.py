"""
Type definitions for OVH API v6 request signing

This module provides the header names, constants and data classes used to
compute the `$1$` signature expected by the OVH API.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union


# Required headers for authentication
HEADER_OVH_APPLICATION = "X-Ovh-Application"
HEADER_OVH_TIMESTAMP = "X-Ovh-Timestamp"
HEADER_OVH_SIGNATURE = "X-Ovh-Signature"
HEADER_OVH_CONSUMER = "X-Ovh-Consumer"

# Request id header name, only used to correlate log lines
REQUEST_ID = "X-Request-Id"

JSON_CONTENT_TYPE = "application/json; charset=utf-8"

SIGNATURE_PREFIX = "$1$"
SIGNATURE_SEPARATOR = "+"

# Timestamp used when the time endpoint answers something that is not a number
FALLBACK_TIMESTAMP = 1


class HttpMethod(str, Enum):
    """HTTP methods used against the OVH API"""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"


@dataclass(frozen=True)
class Credentials:
    """
    OVH API v6 credentials

    Attributes:
        application_key: Key identifying the calling application
        application_secret: Secret paired with the application key
        consumer_key: Key of the authorized session
    """
    application_key: str
    application_secret: str
    consumer_key: str

    def __post_init__(self):
        """Validate credentials"""
        for name in ("application_key", "application_secret", "consumer_key"):
            if not getattr(self, name):
                raise ValueError(f"{name} cannot be empty")

    def __repr__(self) -> str:
        return (
            f"Credentials(application_key='{self.application_key}', "
            f"application_secret='[hidden_secret]', consumer_key='[hidden_secret]')"
        )


@dataclass(frozen=True)
class SignatureInput:
    """
    Everything the signature is computed over

    Attributes:
        application_secret: Application secret
        consumer_key: Consumer key
        method: HTTP method
        url: Fully resolved URL, query string included
        body: Exact body text sent, empty string when there is no body
        timestamp: Server timestamp in seconds
    """
    application_secret: str
    consumer_key: str
    method: Union[HttpMethod, str]
    url: str
    body: str
    timestamp: Union[int, str]

    def __repr__(self) -> str:
        return f"SignatureInput(method='{self.method_name}', url='{self.url}', timestamp='{self.timestamp}')"

    @property
    def method_name(self) -> str:
        if isinstance(self.method, HttpMethod):
            return self.method.value
        return str(self.method).upper()
