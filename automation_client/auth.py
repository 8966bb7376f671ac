"""
Token acquisition for the automation API.

The API uses the OAuth2 resource-owner password flow: fixed credentials are
posted as a URL-encoded form to ``/token`` and the response carries an
``access_token``.  That token is then sent on every other request as
``Authorization: Bearer <token>``.

There is no refresh or expiry tracking.  Each test acquires a fresh token
during setup and wraps it in a ``Session`` that is passed explicitly to
the resource clients.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any

import requests

from .errors import AuthError, body_excerpt

logger = logging.getLogger(__name__)

TOKEN_PATH = "/token"


@dataclass(frozen=True)
class Credentials:
    """Static login credentials for the token endpoint."""

    username: str
    password: str
    grant_type: str = "password"

    def form(self) -> dict[str, str]:
        """Return the form fields the token endpoint expects."""
        return {
            "Username": self.username,
            "Password": self.password,
            "grant_type": self.grant_type,
        }


@dataclass(frozen=True)
class Session:
    """
    Per-test connection context.

    Attributes:
        base_url: Root URL of the service (without a trailing slash).
        token: Bearer token attached to every request.
        timeout: Seconds to wait for a response, or None for the
            transport default.
    """

    base_url: str
    token: str
    timeout: float | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

    def auth_headers(self) -> dict[str, str]:
        """Build the JSON request headers carrying the bearer token."""
        return {
            "Authorization": f"Bearer {self.token}",
            "Accept": "application/json",
        }

    def with_token(self, token: str) -> Session:
        """Return a copy of this session presenting a different token."""
        return replace(self, token=token)


def _parse_token(response: requests.Response) -> str:
    """Extract a non-empty ``access_token`` from a token response."""
    try:
        payload: Any = response.json()
    except ValueError as exc:
        raise AuthError(
            f"Token response is not JSON: {body_excerpt(response)!r}",
            status_code=response.status_code,
            body=response.text,
        ) from exc

    if not isinstance(payload, dict):
        raise AuthError(
            "Token response is not a JSON object",
            status_code=response.status_code,
            body=response.text,
        )

    token = payload.get("access_token")
    if not isinstance(token, str) or not token:
        raise AuthError(
            "Token response lacks a non-empty 'access_token'",
            status_code=response.status_code,
            body=response.text,
        )
    return token


def acquire_token(
    base_url: str,
    credentials: Credentials,
    timeout: float | None = None,
) -> str:
    """
    Exchange credentials for a bearer token.

    Makes exactly one request and never retries.

    Args:
        base_url: Root URL of the service.
        credentials: Username, password and grant type to submit.
        timeout: Optional request timeout in seconds.

    Returns:
        The raw ``access_token`` string.

    Raises:
        AuthError: If the endpoint is unreachable, answers with an error
            status, or does not return a usable token.
    """
    url = base_url.rstrip("/") + TOKEN_PATH
    logger.info("Requesting token for %s from %s", credentials.username, url)

    try:
        # Passing a dict as ``data`` sends application/x-www-form-urlencoded.
        response = requests.post(url, data=credentials.form(), timeout=timeout)
    except requests.RequestException as exc:
        raise AuthError(f"Token endpoint {url} is unreachable: {exc}") from exc

    if not 200 <= response.status_code < 300:
        raise AuthError(
            f"Token endpoint {url} refused credentials: {body_excerpt(response)!r}",
            status_code=response.status_code,
            body=response.text,
        )

    return _parse_token(response)


def open_session(
    base_url: str,
    credentials: Credentials,
    timeout: float | None = None,
) -> Session:
    """Acquire a token and wrap it in a ``Session`` for the resource clients."""
    token = acquire_token(base_url, credentials, timeout=timeout)
    return Session(base_url=base_url, token=token, timeout=timeout)
