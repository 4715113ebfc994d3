"""Field checks applied before a thread mutation reaches the store.

The request body arrives here raw (not pre-parsed by FastAPI) so that the
authentication, existence and ownership guards always run first. Fields are
checked in a fixed order (``title`` before ``body``) and each field is fully
checked (presence, then type) before the next one, so the error is
deterministic when several inputs are invalid at once.
"""
from __future__ import annotations

import json
from typing import Any, Iterable, Mapping

from pydantic import TypeAdapter, ValidationError as PydanticValidationError

from forum.core.errors import ValidationError

__all__ = [
    "THREAD_FIELDS",
    "decode_payload",
    "extract_fields",
    "ensure_filled",
    "validate_required",
    "validate_present",
]

THREAD_FIELDS: tuple[str, ...] = ("title", "body")

_TEXT = TypeAdapter(str)


def decode_payload(raw: Any) -> Any:
    """Decode a raw request body. An empty body decodes to ``None``."""
    if not isinstance(raw, (bytes, bytearray, str)):
        return raw
    if not raw.strip():
        return None
    try:
        return json.loads(raw)
    except ValueError as e:
        raise ValidationError("payload", "json") from e


def extract_fields(payload: Any, names: Iterable[str] = THREAD_FIELDS) -> dict[str, Any]:
    """Pick the thread fields out of a request body; other keys are dropped.

    A missing body counts as an empty object.
    """
    payload = decode_payload(payload)
    if payload is None:
        return {}
    if not isinstance(payload, Mapping):
        raise ValidationError("payload", "object")
    return {name: payload[name] for name in names if name in payload}


def ensure_filled(field: str, value: Any) -> str:
    if value is None or value == "":
        raise ValidationError(field, "required")
    try:
        return _TEXT.validate_python(value)
    except PydanticValidationError as e:
        raise ValidationError(field, "string") from e


def validate_required(fields: Mapping[str, Any], names: Iterable[str] = THREAD_FIELDS) -> dict[str, str]:
    """Create-time gate: every name must be present, non-empty text."""
    return {name: ensure_filled(name, fields.get(name)) for name in names}


def validate_present(fields: Mapping[str, Any], names: Iterable[str] = THREAD_FIELDS) -> dict[str, str]:
    """Partial-update gate: absent names are skipped, present ones must be non-empty text."""
    return {name: ensure_filled(name, fields[name]) for name in names if name in fields}
