"""
HTTP transport for the Serialized provider API.

HTTPTransport turns an operation into one request/response round trip:
build the request, send it, compare the status code with the one the
operation expects, and decode the JSON body into a model.

Features:
- Credential and content headers on every request
- Path segment escaping for caller-supplied names and ids
- Transport failures wrapped in APIConnectionError
- Optional OpenTelemetry CLIENT span per request

Example:
    >>> transport = HTTPTransport(ClientConfig(access_key="k", secret_access_key="s"))
    >>> request = transport.new_request("GET", "/reactions")
    >>> reactions = await transport.fetch(
    ...     request,
    ...     expected_status=200,
    ...     response_model=ReactionList,
    ...     operation="reactions.list",
    ... )
"""

from __future__ import annotations

import logging
import time
from collections.abc import Collection, Mapping
from typing import Any, TypeVar
from urllib.parse import quote

import httpx
from pydantic import ValidationError
from pydantic_core import to_json

from serialized_client.config import ClientConfig
from serialized_client.exceptions import (
    APIConnectionError,
    ClientClosedError,
    ResponseDecodeError,
    UnexpectedStatusError,
)
from serialized_client.models import SerializedModel
from serialized_client.observability import (
    ATTR_ERROR_TYPE,
    ATTR_HTTP_METHOD,
    ATTR_HTTP_STATUS_CODE,
    ATTR_SERVER_ADDRESS,
    ATTR_URL_PATH,
    SpanKindEnum,
    Tracer,
    create_tracer,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=SerializedModel)

ACCESS_KEY_HEADER = "Serialized-Access-Key"
SECRET_ACCESS_KEY_HEADER = "Serialized-Secret-Access-Key"
JSON_CONTENT_TYPE = "application/json"

# Longest response body excerpt kept on UnexpectedStatusError
_MAX_ERROR_BODY = 2048


def path_segment(value: str | int) -> str:
    """Percent-encode a single path segment, including any '/'."""
    return quote(str(value), safe="")


def request_path(request: httpx.Request) -> str:
    """The escaped path of a request, without its query string."""
    return request.url.raw_path.split(b"?", 1)[0].decode("ascii")


def _format_expected(expected_status: int | Collection[int]) -> str:
    if isinstance(expected_status, int):
        return str(expected_status)
    return " or ".join(str(status) for status in sorted(expected_status))


class HTTPTransport:
    """
    Request/response plumbing shared by all resource APIs.

    The transport owns its httpx.AsyncClient unless one is injected. An
    injected client is never closed by the transport.

    Args:
        config: Connection settings
        http_client: Pre-configured AsyncClient (e.g., with a MockTransport)
        tracer: Tracer for request spans (default: based on config.enable_tracing)
    """

    def __init__(
        self,
        config: ClientConfig,
        http_client: httpx.AsyncClient | None = None,
        tracer: Tracer | None = None,
    ) -> None:
        self._config = config
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=config.timeout)
        self._tracer = tracer or create_tracer(__name__, config.enable_tracing)
        self._closed = False

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def tracer(self) -> Tracer:
        return self._tracer

    def url_for(self, path: str) -> str:
        """Join an API path onto the configured base URL."""
        return self._config.base_url.rstrip("/") + "/" + path.lstrip("/")

    def default_headers(self, has_body: bool = False) -> dict[str, str]:
        headers = {
            "Accept": JSON_CONTENT_TYPE,
            "User-Agent": self._config.user_agent,
        }
        if has_body:
            headers["Content-Type"] = JSON_CONTENT_TYPE
        if self._config.has_credentials:
            headers[ACCESS_KEY_HEADER] = self._config.access_key or ""
            headers[SECRET_ACCESS_KEY_HEADER] = self._config.secret_access_key or ""
        return headers

    def new_request(
        self,
        method: str,
        path: str,
        body: SerializedModel | Mapping[str, Any] | None = None,
        params: Mapping[str, str | int] | None = None,
    ) -> httpx.Request:
        """
        Build a request for an API path.

        Args:
            method: HTTP method
            path: Path relative to the base URL, with segments already escaped
            body: Model or mapping encoded as the JSON request body (optional)
            params: Query string parameters (optional)

        Returns:
            An unsent httpx.Request

        Raises:
            ClientClosedError: If the transport has been closed
        """
        if self._closed:
            raise ClientClosedError()

        content: bytes | None = None
        if isinstance(body, SerializedModel):
            content = body.to_json()
        elif body is not None:
            content = to_json(body)
        return self._client.build_request(
            method,
            self.url_for(path),
            params=dict(params) if params else None,
            content=content,
            headers=self.default_headers(has_body=content is not None),
        )

    async def do(
        self,
        request: httpx.Request,
        expected_status: int | Collection[int],
        *,
        operation: str,
        attributes: dict[str, Any] | None = None,
    ) -> httpx.Response:
        """
        Send a request and check its status code.

        Args:
            request: Request built by new_request()
            expected_status: Status code, or collection of status codes, treated
                as success
            operation: Operation name used for the span (e.g., "feeds.get")
            attributes: Extra span attributes describing the resource

        Returns:
            The response, with its body already read

        Raises:
            ClientClosedError: If the transport has been closed
            APIConnectionError: If no response was received
            UnexpectedStatusError: If the status is not an expected one
        """
        if self._closed:
            raise ClientClosedError()

        method = request.method
        path = request_path(request)
        accepted = (
            {expected_status} if isinstance(expected_status, int) else set(expected_status)
        )
        span_attributes: dict[str, Any] = {
            ATTR_HTTP_METHOD: method,
            ATTR_URL_PATH: path,
            ATTR_SERVER_ADDRESS: request.url.host,
        }
        if attributes:
            span_attributes.update(attributes)

        with self._tracer.span_with_kind(
            f"serialized.{operation}",
            kind=SpanKindEnum.CLIENT,
            attributes=span_attributes,
        ) as span:
            logger.debug("Sending %s %s", method, path)
            started = time.perf_counter()
            try:
                response = await self._client.send(request)
            except httpx.HTTPError as exc:
                logger.warning(
                    "%s %s failed: %s",
                    method,
                    path,
                    exc,
                    extra={"method": method, "path": path, "error_type": type(exc).__name__},
                )
                if span:
                    span.set_attribute(ATTR_ERROR_TYPE, type(exc).__name__)
                raise APIConnectionError(method, path, str(exc) or type(exc).__name__) from exc

            if span:
                span.set_attribute(ATTR_HTTP_STATUS_CODE, response.status_code)

            logger.debug(
                "Received %d for %s %s in %.3fs",
                response.status_code,
                method,
                path,
                time.perf_counter() - started,
            )

            if response.status_code not in accepted:
                logger.warning(
                    "Unexpected status %d for %s %s (expected %s)",
                    response.status_code,
                    method,
                    path,
                    _format_expected(expected_status),
                    extra={
                        "method": method,
                        "path": path,
                        "status": response.status_code,
                        "expected_status": expected_status,
                    },
                )
                if span:
                    span.set_attribute(ATTR_ERROR_TYPE, str(response.status_code))
                raise UnexpectedStatusError(
                    status_code=response.status_code,
                    expected_status=expected_status,
                    method=method,
                    path=path,
                    body=response.text[:_MAX_ERROR_BODY],
                )

        return response

    async def fetch(
        self,
        request: httpx.Request,
        expected_status: int | Collection[int],
        response_model: type[ModelT],
        *,
        operation: str,
        attributes: dict[str, Any] | None = None,
    ) -> ModelT:
        """
        Send a request, check its status code and decode the JSON body.

        Raises:
            ResponseDecodeError: If the body does not match response_model
        """
        response = await self.do(
            request,
            expected_status,
            operation=operation,
            attributes=attributes,
        )
        return self.decode(response, response_model)

    @staticmethod
    def decode(response: httpx.Response, model: type[ModelT]) -> ModelT:
        """
        Decode a JSON response body into a model.

        Raises:
            ResponseDecodeError: If the body is not JSON or does not match
        """
        try:
            return model.model_validate_json(response.content)
        except ValidationError as exc:
            raise ResponseDecodeError(
                request_path(response.request),
                f"body does not match {model.__name__}: {exc}",
            ) from exc

    async def aclose(self) -> None:
        """Close the transport. Owned HTTP clients are closed too."""
        if self._closed:
            return
        self._closed = True
        if self._owns_client:
            await self._client.aclose()
        logger.debug("Closed transport for %s", self._config.base_url)


__all__ = [
    "HTTPTransport",
    "path_segment",
    "request_path",
    "ACCESS_KEY_HEADER",
    "SECRET_ACCESS_KEY_HEADER",
]
