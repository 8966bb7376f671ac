"""
Error taxonomy for the automation API client.

Every failure the helper layer can report is an ``ApiError``.  The HTTP
outcomes the suite deliberately provokes (400, 401, 404) get their own
subclasses so scenarios can assert on them with ``pytest.raises`` instead
of comparing raw status codes.

Nothing here is retried: an error is either the expected target of a
test case or a setup failure that aborts the test.
"""

from __future__ import annotations

import logging
from typing import Any

import requests

logger = logging.getLogger(__name__)

# Longest body excerpt carried into an exception message.
BODY_EXCERPT_LENGTH = 200


class ApiError(Exception):
    """Base class for automation API failures."""

    def __init__(self, message: str, status_code: int | None = None, body: Any = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.body = body

    def __str__(self) -> str:
        if self.status_code is None:
            return self.message
        return f"{self.message} (HTTP {self.status_code})"


class AuthError(ApiError):
    """The token endpoint was unreachable or did not issue a token."""


class DecodeError(ApiError):
    """A response body was not valid JSON or did not have the expected shape."""


class ValidationError(ApiError):
    """The server rejected the request payload with 400 Bad Request."""


class UnauthorizedError(ApiError):
    """The server rejected the bearer token with 401 Unauthorized."""


class NotFoundError(ApiError):
    """The server answered 404 Not Found for the requested resource id."""


STATUS_ERRORS: dict[int, type[ApiError]] = {
    400: ValidationError,
    401: UnauthorizedError,
    404: NotFoundError,
}


def body_excerpt(response: requests.Response) -> str:
    """Return the start of a response body for use in error messages."""
    text = response.text or ""
    if len(text) > BODY_EXCERPT_LENGTH:
        return text[:BODY_EXCERPT_LENGTH] + "..."
    return text


def raise_for_status(response: requests.Response) -> None:
    """
    Map a non-2xx response onto the error taxonomy.

    Args:
        response: The response returned by ``requests``.

    Raises:
        ValidationError: On 400.
        UnauthorizedError: On 401.
        NotFoundError: On 404.
        ApiError: On any other status outside the 2xx range.
    """
    status = response.status_code
    if 200 <= status < 300:
        return

    error_class = STATUS_ERRORS.get(status, ApiError)
    request = response.request
    method = getattr(request, "method", None) or "?"
    url = getattr(request, "url", None) or response.url
    logger.warning("%s %s answered %s", method, url, status)
    raise error_class(
        f"{method} {url} failed: {body_excerpt(response)!r}",
        status_code=status,
        body=response.text,
    )
