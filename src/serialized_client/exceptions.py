"""Library exceptions for the serialized_client package."""

from collections.abc import Collection


class SerializedError(Exception):
    """Base exception for serialized_client library."""

    pass


class APIConnectionError(SerializedError):
    """
    Raised when a request never produced an HTTP response.

    Wraps connection failures, timeouts and protocol errors raised by the
    underlying HTTP transport. The original exception is available as
    ``__cause__``.

    Attributes:
        method: HTTP method of the failed request
        path: Request path relative to the provider base URL
    """

    def __init__(self, method: str, path: str, message: str) -> None:
        self.method = method
        self.path = path
        super().__init__(f"{method} {path} failed: {message}")


class UnexpectedStatusError(SerializedError):
    """
    Raised when the provider answers with a status code other than the one
    the operation expects.

    Attributes:
        status_code: Status code returned by the provider
        expected_status: Status code (or codes) the operation accepts
        method: HTTP method of the request
        path: Request path relative to the provider base URL
        body: Response body text (may be empty)

    Example:
        >>> try:
        ...     await client.projections.get_definition("missing")
        ... except UnexpectedStatusError as e:
        ...     if e.status_code == 404:
        ...         print("no such definition")
    """

    def __init__(
        self,
        status_code: int,
        expected_status: int | Collection[int],
        method: str,
        path: str,
        body: str = "",
    ) -> None:
        self.status_code = status_code
        self.expected_status = expected_status
        self.method = method
        self.path = path
        self.body = body
        if isinstance(expected_status, int):
            expected = str(expected_status)
        else:
            expected = " or ".join(str(status) for status in sorted(expected_status))
        super().__init__(
            f"unexpected status code: {status_code} (expected {expected} for {method} {path})"
        )


class ResponseDecodeError(SerializedError):
    """Raised when a response body or header cannot be decoded."""

    def __init__(self, path: str, message: str) -> None:
        self.path = path
        super().__init__(f"Could not decode response from {path}: {message}")


class ClientClosedError(SerializedError):
    """Raised when a request is issued on a client that has been closed."""

    def __init__(self) -> None:
        super().__init__("Client has been closed; create a new SerializedClient")


__all__ = [
    "SerializedError",
    "APIConnectionError",
    "UnexpectedStatusError",
    "ResponseDecodeError",
    "ClientClosedError",
]
