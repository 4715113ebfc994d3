# Re-export the dependency-free policy helpers. Store and guard modules import
# the ORM models and are imported explicitly by their callers.
from .validation import (
    THREAD_FIELDS,
    decode_payload,
    extract_fields,
    ensure_filled,
    validate_required,
    validate_present,
)
from .ownership import can_modify, ensure_can_modify

__all__ = [
    "THREAD_FIELDS",
    "decode_payload",
    "extract_fields",
    "ensure_filled",
    "validate_required",
    "validate_present",
    "can_modify",
    "ensure_can_modify",
]
