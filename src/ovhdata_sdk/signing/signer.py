"""
OVH API v6 request signer

The signature is the SHA-1 of the "+"-joined application secret, consumer
key, method, full URL, body and timestamp, hex encoded and prefixed with
"$1$". The server recomputes it from the request it receives, so the URL
and body given here must be exactly the ones that are sent.
"""

import hashlib
from typing import Union

from .types import (
    SignatureInput,
    HttpMethod,
    SIGNATURE_PREFIX,
    SIGNATURE_SEPARATOR,
)


def build_signature(signature_input: SignatureInput) -> str:
    """
    Compute the signature for a request.

    Args:
        signature_input: Request components and credentials

    Returns:
        str: Value for the X-Ovh-Signature header
    """
    to_sign = SIGNATURE_SEPARATOR.join([
        signature_input.application_secret,
        signature_input.consumer_key,
        signature_input.method_name,
        signature_input.url,
        signature_input.body,
        str(signature_input.timestamp),
    ])

    digest = hashlib.sha1(to_sign.encode('utf-8')).hexdigest()
    return SIGNATURE_PREFIX + digest


def sign(
    method: Union[HttpMethod, str],
    url: str,
    body: str,
    timestamp: Union[int, str],
    application_secret: str,
    consumer_key: str,
) -> str:
    """
    Compute the signature from individual components.

    Args:
        method: HTTP method
        url: Full request URL including the query string
        body: Body text, empty string when there is no body
        timestamp: Server timestamp
        application_secret: Application secret
        consumer_key: Consumer key

    Returns:
        str: "$1$" followed by the lowercase hex SHA-1 digest
    """
    return build_signature(SignatureInput(
        application_secret=application_secret,
        consumer_key=consumer_key,
        method=method,
        url=url,
        body=body or "",
        timestamp=timestamp,
    ))
