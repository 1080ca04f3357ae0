"""
Signed HTTP client for the OVH API v6

This module builds authenticated requests (server clock synchronisation,
"$1$" signature, authentication headers), sends them, classifies the
responses and decodes their bodies into typed values.

Every step reports failures as values: `send` returns an `Outcome`
(`Success`, `TransportFailure` or `ProtocolFailure`) and `parse` returns a
`DecodeResult` (`Decoded` or `DecodeFailure`). Call `unwrap()` on either to
get the value or the matching exception.
"""

import json
import logging
import sys
import uuid
from dataclasses import dataclass, field
from typing import (
    Any, Callable, Collection, Generic, Iterable, Mapping, Optional,
    Sequence, Tuple, TypeVar, Union
)

import requests
from requests.adapters import HTTPAdapter
from requests.structures import CaseInsensitiveDict

from .exceptions import (
    ApiResponseError,
    DecodeError,
    TransportError,
    ValidationError,
)
from .models.utils import ResponseError
from .signing import (
    Credentials,
    HttpMethod,
    HEADER_OVH_APPLICATION,
    HEADER_OVH_CONSUMER,
    HEADER_OVH_SIGNATURE,
    HEADER_OVH_TIMESTAMP,
    JSON_CONTENT_TYPE,
    REQUEST_ID,
    normalize_endpoint,
    parse_remote_time,
    resolve_url,
    serialize_body,
    sign,
)
from .signing.utils import format_headers
from .version import __version__

logger = logging.getLogger(__name__)

T = TypeVar('T')

QueryParams = Sequence[Tuple[str, str]]
Decoder = Callable[[Any], T]

USER_AGENT = f"ovhdata-cli/{__version__} ({sys.platform})"


@dataclass
class RequestWrapper:
    """
    A prepared request and the id used to correlate its log lines.

    Attributes:
        request_id: Unique id of this request
        prepared: Request exactly as it will be sent
        timestamp: Server timestamp used to sign it, None when unsigned
    """
    request_id: uuid.UUID
    prepared: requests.PreparedRequest
    timestamp: Optional[int] = None

    @property
    def method(self) -> str:
        return self.prepared.method

    @property
    def url(self) -> str:
        return self.prepared.url

    @property
    def headers(self) -> CaseInsensitiveDict:
        return self.prepared.headers

    def body_str(self) -> str:
        """Body text as sent, empty string when there is no body."""
        body = self.prepared.body
        if body is None:
            return ""
        if isinstance(body, bytes):
            try:
                return body.decode('utf-8')
            except UnicodeDecodeError:
                return "<error decoding body as utf8>"
        if isinstance(body, str):
            return body
        return "<stream data>"


@dataclass
class ResponseWrapper:
    """
    A received response with its body buffered as text.

    Attributes:
        request_id: Id of the request this answers
        status_code: HTTP status
        headers: Response headers
        text: Full body decoded as text
        url: Final URL of the response
    """
    request_id: uuid.UUID
    status_code: int
    headers: Mapping[str, str]
    text: str
    url: str = ""
    response: Optional[requests.Response] = field(default=None, repr=False, compare=False)

    @classmethod
    def from_response(cls, request_id: uuid.UUID, response: requests.Response) -> 'ResponseWrapper':
        text = _decode_text(response)
        logger.debug(f"Response body read as text ({REQUEST_ID}={request_id}): {text}")
        return cls(
            request_id=request_id,
            status_code=response.status_code,
            headers=response.headers,
            text=text,
            url=response.url or "",
            response=response,
        )

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


# Classified outcomes of `send`

@dataclass(frozen=True)
class Success:
    """The exchange completed with a 2xx or tolerated status."""
    response: ResponseWrapper

    is_success = True

    def unwrap(self) -> ResponseWrapper:
        return self.response


@dataclass(frozen=True)
class TransportFailure:
    """The exchange could not be completed (connection, timeout, TLS...)."""
    error: Exception

    is_success = False

    def unwrap(self) -> ResponseWrapper:
        raise TransportError(self.error) from self.error


@dataclass(frozen=True)
class ProtocolFailure:
    """The server answered with a status the caller does not accept."""
    status: int
    message: str

    is_success = False

    def unwrap(self) -> ResponseWrapper:
        raise ApiResponseError(self.status, self.message)


Outcome = Union[Success, TransportFailure, ProtocolFailure]


# Results of `parse`

@dataclass(frozen=True)
class Decoded(Generic[T]):
    """Body successfully decoded into the requested type."""
    value: T

    is_success = True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class DecodeFailure:
    """Body did not match the requested type. Keeps the raw text."""
    error: Exception
    raw_body: str

    is_success = False

    def unwrap(self):
        raise DecodeError(self.error, self.raw_body) from self.error


DecodeResult = Union[Decoded, DecodeFailure]


def declared_charset(content_type: Optional[str]) -> Optional[str]:
    """Charset parameter of a Content-Type header, if any."""
    if not content_type:
        return None

    for param in content_type.split(';')[1:]:
        key, _, value = param.strip().partition('=')
        if key.strip().lower() == 'charset' and value.strip():
            return value.strip().strip('"\'')
    return None


def _decode_text(response: requests.Response) -> str:
    # requests assumes ISO-8859-1 for text/* without a charset; only a
    # declared charset overrides UTF-8 here.
    encoding = declared_charset(response.headers.get('Content-Type')) or 'utf-8'
    try:
        return response.content.decode(encoding, errors='replace')
    except LookupError:
        return response.content.decode('utf-8', errors='replace')


def extract_error_message(body: str) -> str:
    """
    Get the error message out of an error response body.

    Uses the "message" field of a JSON object body, or the raw text when the
    body has another shape.
    """
    try:
        return ResponseError.from_dict(json.loads(body)).message
    except (ValueError, KeyError, TypeError):
        return body


def parse_response(
    response: Union[ResponseWrapper, str],
    decoder: Optional[Decoder] = None
) -> DecodeResult:
    """
    Decode a response body.

    Args:
        response: Response, or raw body text
        decoder: Callable turning the JSON value into the target type
            (for example `Source.from_dict` or `list_of(Source.from_dict)`); the JSON
            value is returned as is when omitted

    Returns:
        DecodeResult: Decoded value, or DecodeFailure with the raw body
    """
    body = response.text if isinstance(response, ResponseWrapper) else response

    try:
        value = json.loads(body)
        if decoder is not None:
            value = decoder(value)
    except (ValueError, KeyError, TypeError, AttributeError) as e:
        logger.debug(f"Unable to decode response body: {e}")
        return DecodeFailure(e, body)

    return Decoded(value)


class OvhApiV6Client:
    """
    HTTP client for the OVH API v6.

    Holds the endpoint and the credentials, both fixed at construction. The
    client keeps no other state, so independent calls can run from several
    threads at once. It never retries: timeouts and retries are left to the
    caller.
    """

    def __init__(
        self,
        endpoint_url: str,
        application_key: str,
        application_secret: str,
        consumer_key: str,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
        verify_ssl: bool = True,
    ):
        """
        Initialize the client.

        Args:
            endpoint_url: Base URL of the API, e.g. https://eu.api.ovh.com/1.0
            application_key: OVH application key
            application_secret: OVH application secret
            consumer_key: OVH consumer key
            session: Optional requests session to send requests with
            timeout: Optional timeout in seconds handed to the transport
            verify_ssl: Whether to verify TLS certificates

        Raises:
            ValidationError: On an invalid endpoint or empty credential
        """
        try:
            self.endpoint_url = normalize_endpoint(endpoint_url)
            self._credentials = Credentials(
                application_key=application_key,
                application_secret=application_secret,
                consumer_key=consumer_key,
            )
        except ValueError as e:
            raise ValidationError(str(e)) from e

        if timeout is not None and timeout <= 0:
            raise ValidationError("Timeout must be positive")

        self.timeout = timeout
        self.verify_ssl = verify_ssl
        self.session = session or self._create_session()

        logger.info(f"Initialized OVH API client for endpoint: {self.endpoint_url}")

    def __repr__(self) -> str:
        return f"OvhApiV6Client(endpoint_url='{self.endpoint_url}')"

    @property
    def application_key(self) -> str:
        return self._credentials.application_key

    def _create_session(self) -> requests.Session:
        """Create HTTP session without any retry."""
        session = requests.Session()

        adapter = HTTPAdapter(max_retries=0)
        session.mount("http://", adapter)
        session.mount("https://", adapter)

        return session

    # Clock sync

    def remote_time(self) -> int:
        """
        Ask the server for its current time.

        Returns:
            int: Server time in seconds since epoch; 1 if the body is not a number

        Raises:
            TransportError: If the time endpoint cannot be reached
            ApiResponseError: If the time endpoint answers with an error status
        """
        request = self.build_request_without_auth(HttpMethod.GET, ["auth", "time"])
        response = self.send(request).unwrap()
        return parse_remote_time(response.text)

    # Request builder

    def build_request_without_auth(
        self,
        method: Union[HttpMethod, str],
        path: Iterable[str],
        query: QueryParams = (),
        headers: Optional[Mapping[str, str]] = None,
        body: Any = None,
    ) -> RequestWrapper:
        """
        Build a request without authentication headers.

        Args:
            method: HTTP method
            path: Path segments appended to the endpoint, each escaped on its own
            query: Query parameters as (key, value) pairs
            headers: Extra headers
            body: Optional JSON-serializable body or domain record

        Returns:
            RequestWrapper: Prepared request

        Raises:
            ValidationError: If a path segment is "." or ".."
        """
        method_name = method.value if isinstance(method, HttpMethod) else str(method).upper()
        try:
            url = resolve_url(self.endpoint_url, path)
        except ValueError as e:
            raise ValidationError(str(e)) from e

        request_headers = {'User-Agent': USER_AGENT}
        if headers:
            request_headers.update(headers)

        data = None
        body_text = serialize_body(body)
        if body_text is not None:
            data = body_text.encode('utf-8')
            request_headers['Content-Type'] = JSON_CONTENT_TYPE

        request = requests.Request(
            method=method_name,
            url=url,
            params=list(query),
            headers=request_headers,
            data=data,
        )
        prepared = self.session.prepare_request(request)

        return RequestWrapper(request_id=uuid.uuid4(), prepared=prepared)

    def build_request(
        self,
        method: Union[HttpMethod, str],
        path: Iterable[str],
        query: QueryParams = (),
        headers: Optional[Mapping[str, str]] = None,
        body: Any = None,
    ) -> RequestWrapper:
        """
        Build a signed request.

        The server time is fetched once per request, right before signing.
        The signature covers the prepared URL (query string included) and
        the exact body bytes.

        Args:
            method: HTTP method
            path: Path segments appended to the endpoint
            query: Query parameters as (key, value) pairs
            headers: Extra headers
            body: Optional JSON-serializable body or domain record

        Returns:
            RequestWrapper: Prepared request with authentication headers

        Raises:
            ValidationError: If a path segment is "." or ".."
            TransportError: If the server time cannot be fetched
            ApiResponseError: If the time endpoint answers with an error status
        """
        request = self.build_request_without_auth(method, path, query, headers, body)

        timestamp = self.remote_time()
        signature = sign(
            request.method,
            request.url,
            request.body_str(),
            timestamp,
            self._credentials.application_secret,
            self._credentials.consumer_key,
        )

        request.headers[HEADER_OVH_APPLICATION] = self._credentials.application_key
        request.headers[HEADER_OVH_CONSUMER] = self._credentials.consumer_key
        request.headers[HEADER_OVH_TIMESTAMP] = str(timestamp)
        request.headers[HEADER_OVH_SIGNATURE] = signature
        request.headers['Accept'] = JSON_CONTENT_TYPE
        request.headers['Content-Type'] = JSON_CONTENT_TYPE
        request.timestamp = timestamp

        return request

    # Transport and response classification

    def send(self, request: RequestWrapper, tolerated_statuses: Collection[int] = ()) -> Outcome:
        """
        Send a request and classify the result.

        Args:
            request: Request built by this client
            tolerated_statuses: Non-2xx statuses to treat as success for this call

        Returns:
            Outcome: Success, TransportFailure or ProtocolFailure
        """
        logger.info(f"SEND {request.method} {request.url} {REQUEST_ID}={request.request_id}")
        logger.debug(f"Request headers: {format_headers(request.headers)}")
        logger.debug(f"Request body: {request.body_str()}")

        try:
            settings = self.session.merge_environment_settings(
                request.url, {}, None, self.verify_ssl, None
            )
            response = self.session.send(request.prepared, timeout=self.timeout, **settings)
            wrapped = ResponseWrapper.from_response(request.request_id, response)
        except requests.RequestException as e:
            logger.error(f"[KO] Was unable to execute request {REQUEST_ID}={request.request_id}: {e}")
            return TransportFailure(e)

        logger.info(
            f"[{wrapped.status_code:6}] {request.method} {request.url} {REQUEST_ID}={request.request_id}"
        )
        logger.debug(f"Response headers: {format_headers(wrapped.headers)}")

        if wrapped.ok or wrapped.status_code in tolerated_statuses:
            return Success(wrapped)

        return ProtocolFailure(wrapped.status_code, extract_error_message(wrapped.text))

    # Typed decoding

    def parse(self, response: Union[ResponseWrapper, str], decoder: Optional[Decoder] = None) -> DecodeResult:
        """Decode a response body, see `parse_response`."""
        return parse_response(response, decoder)

    # Shortcuts used by the API mixins

    def call(
        self,
        method: Union[HttpMethod, str],
        path: Iterable[str],
        decoder: Optional[Decoder] = None,
        query: QueryParams = (),
        body: Any = None,
        tolerated_statuses: Collection[int] = (),
    ) -> Any:
        """
        Build, send and decode in one go.

        Raises:
            TransportError, ApiResponseError, DecodeError
        """
        request = self.build_request(method, path, query, body=body)
        response = self.send(request, tolerated_statuses).unwrap()
        return self.parse(response, decoder).unwrap()

    def call_no_content(
        self,
        method: Union[HttpMethod, str],
        path: Iterable[str],
        query: QueryParams = (),
        body: Any = None,
        tolerated_statuses: Collection[int] = (),
    ) -> None:
        """
        Build and send, ignoring the response body.

        Raises:
            TransportError, ApiResponseError
        """
        request = self.build_request(method, path, query, body=body)
        self.send(request, tolerated_statuses).unwrap()

    def close(self):
        """Close the HTTP session."""
        self.session.close()
        logger.debug("HTTP session closed")

    def __enter__(self) -> 'OvhApiV6Client':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
