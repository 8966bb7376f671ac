"""
Generic CRUD client for automation API resources.

Companies and employees share one contract, so a single ``ResourceClient``
parameterised by the resource name serves both:

    GET    /api/automation/<resource>          - list all records
    GET    /api/automation/<resource>/id/<id>  - fetch one record (no id in body)
    POST   /api/automation/<resource>          - create from {"Name": ...}
    DELETE /api/automation/<resource>/id/<id>  - delete one record

Payloads are passed through untouched; validation is the server's job.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

import requests

from .auth import Session
from .decoding import ResourceRecord, decode_collection, decode_record
from .errors import raise_for_status

logger = logging.getLogger(__name__)

COMPANIES = "companies"
EMPLOYEES = "employees"
RESOURCES = (COMPANIES, EMPLOYEES)

RESOURCE_PREFIX = "/api/automation"


class CrudResource(Protocol):
    """Capability interface shared by every resource client."""

    def list_all(self) -> list[ResourceRecord]: ...

    def get_by_id(self, record_id: int) -> ResourceRecord: ...

    def create(self, name: str) -> None: ...

    def delete_by_id(self, record_id: int) -> None: ...


class ResourceClient:
    """
    Authenticated CRUD helper bound to one resource base URL.

    Args:
        session: Connection context carrying base URL, token and timeout.
        resource: Resource name, e.g. ``"companies"``.
    """

    def __init__(self, session: Session, resource: str):
        self.session = session
        self.resource = resource
        self.base_url = f"{session.base_url}{RESOURCE_PREFIX}/{resource}"

    def __repr__(self) -> str:
        return f"<ResourceClient {self.base_url}>"

    def with_session(self, session: Session) -> ResourceClient:
        """Return a client for the same resource using another session."""
        return ResourceClient(session, self.resource)

    def send(self, method: str, path: str = "", *, json: Any = None) -> requests.Response:
        """
        Issue a raw authenticated request relative to the resource URL.

        The response is returned whatever its status code so callers can
        inspect the exact wire body.

        Args:
            method: HTTP method name.
            path: Suffix appended to the resource URL, e.g. ``"/id/3"``.
            json: Optional body, serialised as JSON as given.

        Returns:
            The ``requests.Response``.
        """
        url = self.base_url + path
        logger.debug("%s %s", method, url)
        return requests.request(
            method=method,
            url=url,
            headers=self.session.auth_headers(),
            json=json,
            timeout=self.session.timeout,
        )

    def list_all(self) -> list[ResourceRecord]:
        """Return every record of this resource (possibly empty)."""
        response = self.send("GET")
        raise_for_status(response)
        return decode_collection(response.content)

    def get_by_id(self, record_id: int) -> ResourceRecord:
        """
        Fetch one record; the body carries only its name.

        Raises:
            NotFoundError: If no record has this id.
        """
        response = self.send("GET", f"/id/{record_id}")
        raise_for_status(response)
        return decode_record(response.content)

    def create(self, name: str) -> None:
        """Create a record; the server assigns its id."""
        response = self.send("POST", json={"Name": name})
        raise_for_status(response)

    def delete_by_id(self, record_id: int) -> None:
        """
        Delete one record.

        Raises:
            NotFoundError: If no record has this id.
        """
        response = self.send("DELETE", f"/id/{record_id}")
        raise_for_status(response)

    def clear(self) -> int:
        """
        Delete every record of this resource.

        Not transactional: a failure part-way propagates and leaves the
        remaining records in place.

        Returns:
            Number of records deleted.
        """
        records = self.list_all()
        for record in records:
            self.delete_by_id(record.id)
        logger.info("Cleared %d %s", len(records), self.resource)
        return len(records)
