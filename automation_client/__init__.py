"""
Client helpers for the automation CRUD API.

Exposes token acquisition, the generic resource client and the response
decoder used by the companies/employees test suites.
"""

from __future__ import annotations

from .auth import Credentials, Session, acquire_token, open_session
from .decoding import ResourceRecord, decode_collection, decode_record
from .errors import (
    ApiError,
    AuthError,
    DecodeError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
    raise_for_status,
)
from .resources import COMPANIES, EMPLOYEES, RESOURCES, CrudResource, ResourceClient

__all__ = [
    "ApiError",
    "AuthError",
    "COMPANIES",
    "Credentials",
    "CrudResource",
    "DecodeError",
    "EMPLOYEES",
    "NotFoundError",
    "RESOURCES",
    "ResourceClient",
    "ResourceRecord",
    "Session",
    "UnauthorizedError",
    "ValidationError",
    "acquire_token",
    "decode_collection",
    "decode_record",
    "open_session",
    "raise_for_status",
]
