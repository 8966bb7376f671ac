"""
Response decoding for automation API payloads.

List endpoints return ``[{"id": 1, "name": "..."}, ...]``; the fetch-by-id
endpoint returns ``{"name": "..."}`` without an ``id``.  Field names are
matched case-insensitively so ``Name`` and ``name`` decode alike.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from .errors import DecodeError


@dataclass(frozen=True)
class ResourceRecord:
    """
    A company or employee as seen on the wire.

    Attributes:
        name: Display name of the record.
        id: Server-assigned identifier, or None when the payload omitted
            it.  An id of 0 is kept as 0.
    """

    name: str
    id: int | None = None

    @property
    def has_id(self) -> bool:
        return self.id is not None


def _load(raw: Any) -> Any:
    """Parse ``str``/``bytes`` bodies as JSON and pass other values through."""
    if isinstance(raw, (bytes, bytearray)):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DecodeError(f"Body is not UTF-8: {exc}", body=raw) from exc
    if isinstance(raw, str):
        try:
            return json.loads(raw)
        except ValueError as exc:
            raise DecodeError(f"Body is not valid JSON: {exc}", body=raw) from exc
    return raw


def _fields(payload: dict[str, Any]) -> dict[str, Any]:
    """Lower-case the keys of a JSON object, rejecting clashing duplicates."""
    fields: dict[str, Any] = {}
    for key, value in payload.items():
        lowered = str(key).lower()
        if lowered in fields:
            raise DecodeError(f"Duplicate field {key!r} in record", body=payload)
        fields[lowered] = value
    return fields


def _record_from_object(payload: Any) -> ResourceRecord:
    if not isinstance(payload, dict):
        raise DecodeError(
            f"Expected a JSON object, got {type(payload).__name__}", body=payload
        )

    fields = _fields(payload)

    name = fields.get("name")
    if not isinstance(name, str):
        raise DecodeError("Record lacks a string 'name'", body=payload)

    if "id" not in fields:
        return ResourceRecord(name=name)

    record_id = fields["id"]
    # bool is a subclass of int; a true/false id is a contract violation.
    if isinstance(record_id, bool) or not isinstance(record_id, int):
        raise DecodeError(f"Record 'id' is not an integer: {record_id!r}", body=payload)
    return ResourceRecord(name=name, id=record_id)


def decode_record(raw: Any) -> ResourceRecord:
    """
    Decode a single-item body into a ``ResourceRecord``.

    Args:
        raw: Response body as ``str``/``bytes``, or already-parsed JSON.

    Returns:
        The decoded record.

    Raises:
        DecodeError: If the body is not a JSON object with a string name
            and an optional integer id.
    """
    return _record_from_object(_load(raw))


def decode_collection(raw: Any) -> list[ResourceRecord]:
    """
    Decode a list body into records, preserving server order.

    Raises:
        DecodeError: If the body is not a JSON array of valid records.
    """
    payload = _load(raw)
    if not isinstance(payload, list):
        raise DecodeError(
            f"Expected a JSON array, got {type(payload).__name__}", body=payload
        )
    return [_record_from_object(item) for item in payload]
