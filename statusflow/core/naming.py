"""Naming helpers: record ids, timestamps, and status name normalisation."""

import uuid
from datetime import datetime, timezone


def new_record_id() -> str:
    """Generate a new opaque record identifier."""
    return str(uuid.uuid4())


def utc_timestamp() -> str:
    """Current UTC time as an ISO-8601 string."""
    return datetime.now(timezone.utc).isoformat()


def normalize_status_name(name) -> str:
    """
    Normalise a human-facing status name for storage and comparison.

    Args:
        name: Raw name from the caller (may be None).

    Returns:
        Name with surrounding whitespace removed ("" for None).
    """
    if name is None:
        return ""
    return str(name).strip()
