from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, Mapping, Optional

from ..core.exceptions import DomainError, StoreError

logger = logging.getLogger(__name__)


@contextmanager
def store_operation(operation: str) -> Iterator[None]:
    """Wrap store failures with operation context.

    Domain errors raised inside pass through untouched.
    """
    try:
        yield
    except DomainError:
        raise
    except Exception as e:
        logger.error("store operation failed: %s (%s)", operation, e)
        raise StoreError(f"{operation}: {e}") from e


def build_document(required: Mapping[str, Any], **optional: Any) -> Dict[str, Any]:
    """Build a write payload from required fields plus truthy optional fields.

    Optional fields that are unset or empty are omitted, never written as None.
    """
    missing = [k for k, v in required.items() if v is None]
    if missing:
        raise ValueError(f"required document fields missing: {', '.join(sorted(missing))}")

    doc = dict(required)
    for key, value in optional.items():
        if value:
            doc[key] = value
    return doc


def ensure_no_absence_markers(payload: Mapping[str, Any]) -> None:
    """The store fails the whole write if any field is None."""
    bad = [k for k, v in payload.items() if v is None]
    if bad:
        raise StoreError(f"absence marker in fields: {', '.join(sorted(bad))}")


def to_datetime(value: Any) -> Optional[datetime]:
    """Normalize Firestore timestamps.

    firebase-admin returns DatetimeWithNanoseconds (a datetime subclass); older
    payloads may carry ISO strings.
    """
    if value is None or value == "":
        return None
    if isinstance(value, str):
        value = datetime.fromisoformat(value)
    if isinstance(value, datetime):
        # Naive values are UTC.
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value
    raise TypeError(f"Unsupported timestamp value type: {type(value)!r}")
