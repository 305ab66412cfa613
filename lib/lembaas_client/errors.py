from __future__ import annotations


class LembaasClientError(Exception):
    """Base client error."""


class ConfigError(LembaasClientError):
    """Client misconfigured; raised before any network call."""


class TransportError(LembaasClientError):
    """Transport/network layer error (DNS, connect, timeout)."""


class DecodeError(LembaasClientError):
    """Response body is not JSON or does not match the expected shape."""


class ApiError(LembaasClientError):
    """Status matched but the body carries an error/message field."""

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class UnexpectedStatusError(LembaasClientError):
    """Status code outside the endpoint's accepted set.

    ``expected`` is always a tuple of accepted codes, even for endpoints that
    accept a single one: test membership (``404 in exc.expected``) or compare
    with ``(204,)``. ``actual`` is the code the server sent.
    """

    def __init__(self, expected: tuple[int, ...], actual: int, body_error_text: str | None = None):
        self.expected = expected
        self.actual = actual
        self.body_error_text = body_error_text
        super().__init__(self._format())

    @property
    def status_code(self) -> int:
        return self.actual

    def _format(self) -> str:
        want = " or ".join(str(code) for code in self.expected)
        msg = f"expected status {want}, got {self.actual}"
        if self.body_error_text:
            msg += f" ({self.body_error_text})"
        return msg


class NotFoundError(UnexpectedStatusError):
    """404 on a lookup-by-identifier endpoint."""


class AuthError(UnexpectedStatusError):
    """401/403 from the API."""
