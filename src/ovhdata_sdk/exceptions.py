"""
Exception classes for OVHcloud Data Python SDK
"""

from typing import Optional, Dict, Any


class OvhDataSDKError(Exception):
    """Base exception for all OVHcloud Data SDK errors"""

    def __init__(self, message: str, error_code: str = "UNKNOWN_ERROR", details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.error_code = error_code
        self.details = details or {}


class ValidationError(OvhDataSDKError):
    """Exception raised for validation failures"""
    pass


class ConfigError(OvhDataSDKError):
    """Exception raised for configuration or context file errors"""

    def __init__(self, message: str, code: str = "CONFIG_ERROR", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code, details)
        self.code = code


class TransportError(OvhDataSDKError):
    """Exception raised when the HTTP exchange could not be completed"""

    def __init__(self, original_error: Exception, details: Optional[Dict[str, Any]] = None):
        super().__init__(f"request error: {original_error}", "TRANSPORT_ERROR", details)
        self.original_error = original_error


class ApiResponseError(OvhDataSDKError):
    """Exception raised when the server answers with a non-tolerated status"""

    def __init__(self, http_status: int, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(f"response error: {http_status}: {message}", "HTTP_ERROR", details)
        self.http_status = http_status
        self.message = message


class DecodeError(OvhDataSDKError):
    """Exception raised when a successful response does not match the expected schema"""

    def __init__(self, parse_error: Exception, raw_body: str):
        super().__init__(
            f"deserialize error: {parse_error}, string is {raw_body}",
            "DECODE_ERROR",
            {"raw_body": raw_body}
        )
        self.parse_error = parse_error
        self.raw_body = raw_body
