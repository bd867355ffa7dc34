"""
Transport adapters: one HTTP attempt per call, never raising for
transport-level failures.
"""
import errno
import logging
from typing import Any, Optional, Protocol

import httpx

from .types import AttemptResult, HttpResponse, RequestDescriptor, TransportFailure

logger = logging.getLogger("habrok.transport")


DEFAULT_TIMEOUT_SECONDS = 30.0

# Methods whose 3xx responses are followed to their target
REDIRECTED_METHODS = ("GET", "HEAD")

# Checked in order; subclasses before their bases
HTTPX_ERROR_CODES: tuple[tuple[type[Exception], str], ...] = (
    (httpx.ConnectTimeout, "ETIMEDOUT"),
    (httpx.TimeoutException, "ESOCKETTIMEDOUT"),
    (httpx.ConnectError, "ECONNREFUSED"),
    (httpx.ReadError, "ECONNRESET"),
    (httpx.WriteError, "ECONNRESET"),
    (httpx.RemoteProtocolError, "ECONNRESET"),
)


class TransportAdapter(Protocol):
    """Performs exactly one asynchronous attempt."""

    async def attempt(self, descriptor: RequestDescriptor) -> AttemptResult:
        ...


class SyncTransportAdapter(Protocol):
    """Performs exactly one synchronous attempt."""

    def attempt(self, descriptor: RequestDescriptor) -> AttemptResult:
        ...


def _errno_code(error: Optional[BaseException]) -> Optional[str]:
    """Find a symbolic errno name on the error or its cause chain."""
    if error is None:
        return None
    if isinstance(error, OSError) and error.errno in errno.errorcode:
        return errno.errorcode[error.errno]
    return _errno_code(error.__cause__ or error.__context__)


def error_code(error: BaseException) -> Optional[str]:
    """
    Derive a machine-readable code for a transport error.

    An explicit string ``code`` attribute wins, then an errno found on the
    error or its causes, then the httpx exception type.

    Args:
        error: The error raised while attempting the request

    Returns:
        Code such as ``ECONNRESET``, or None when nothing is known
    """
    code = getattr(error, "code", None)
    if isinstance(code, str):
        return code

    code = _errno_code(error)
    if code is not None:
        return code

    for error_type, mapped in HTTPX_ERROR_CODES:
        if isinstance(error, error_type):
            return mapped
    return None


def to_transport_failure(error: BaseException) -> TransportFailure:
    """Wrap a raised error as a TransportFailure."""
    return TransportFailure(error=error, code=error_code(error))


def _request_headers(descriptor: RequestDescriptor) -> dict[str, str]:
    headers = dict(descriptor.headers)
    if descriptor.json_mode and "accept" not in {k.lower() for k in headers}:
        headers["accept"] = "application/json"
    return headers


def read_body(response: httpx.Response, json_mode: bool) -> Any:
    """
    Read a response body.

    In JSON mode the body is parsed, falling back to text when it is not
    valid JSON; an empty body is None.
    """
    if not json_mode:
        return response.text
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def to_http_response(response: httpx.Response, json_mode: bool) -> HttpResponse:
    """Convert an httpx response to an HttpResponse."""
    return HttpResponse(
        status_code=response.status_code,
        headers=dict(response.headers),
        body=read_body(response, json_mode),
    )


class HttpxTransportAdapter:
    """
    Async transport adapter backed by httpx.

    Example:
        adapter = HttpxTransportAdapter()
        result = await adapter.attempt(descriptor)
    """

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        *,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self._owns_client = client is None
        self._client = client if client is not None else httpx.AsyncClient(timeout=timeout)

    async def attempt(self, descriptor: RequestDescriptor) -> AttemptResult:
        """Send one request and return its outcome."""
        logger.debug(f"HttpxTransportAdapter.attempt: {descriptor.method} {descriptor.uri}")
        try:
            response = await self._client.request(
                descriptor.method,
                descriptor.uri,
                headers=_request_headers(descriptor),
                follow_redirects=descriptor.method in REDIRECTED_METHODS,
            )
        except (httpx.TransportError, httpx.TooManyRedirects, httpx.InvalidURL, OSError) as error:
            failure = to_transport_failure(error)
            logger.debug(f"HttpxTransportAdapter.attempt: transport failure code={failure.code}: {error}")
            return failure

        logger.debug(f"HttpxTransportAdapter.attempt: status={response.status_code}")
        return to_http_response(response, descriptor.json_mode)

    async def aclose(self) -> None:
        """Close the underlying client if this adapter created it"""
        if self._owns_client:
            await self._client.aclose()


class SyncHttpxTransportAdapter:
    """
    Synchronous transport adapter backed by httpx.

    For async applications, use HttpxTransportAdapter instead.
    """

    def __init__(
        self,
        client: Optional[httpx.Client] = None,
        *,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self._owns_client = client is None
        self._client = client if client is not None else httpx.Client(timeout=timeout)

    def attempt(self, descriptor: RequestDescriptor) -> AttemptResult:
        """Send one request and return its outcome."""
        logger.debug(f"SyncHttpxTransportAdapter.attempt: {descriptor.method} {descriptor.uri}")
        try:
            response = self._client.request(
                descriptor.method,
                descriptor.uri,
                headers=_request_headers(descriptor),
                follow_redirects=descriptor.method in REDIRECTED_METHODS,
            )
        except (httpx.TransportError, httpx.TooManyRedirects, httpx.InvalidURL, OSError) as error:
            failure = to_transport_failure(error)
            logger.debug(f"SyncHttpxTransportAdapter.attempt: transport failure code={failure.code}: {error}")
            return failure

        logger.debug(f"SyncHttpxTransportAdapter.attempt: status={response.status_code}")
        return to_http_response(response, descriptor.json_mode)

    def close(self) -> None:
        """Close the underlying client if this adapter created it"""
        if self._owns_client:
            self._client.close()
