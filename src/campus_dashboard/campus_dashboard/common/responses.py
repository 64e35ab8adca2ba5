from __future__ import annotations

import logging
from dataclasses import fields, is_dataclass
from datetime import date, datetime
from enum import Enum

from flask import jsonify

from ..core.exceptions import (
    AuthorizationError,
    ConfigurationError,
    DomainError,
    InvalidStateError,
    StoreError,
    ValidationError,
)

logger = logging.getLogger(__name__)

STATUS_BY_ERROR = (
    (ValidationError, 400),
    (AuthorizationError, 403),
    (InvalidStateError, 409),
    (StoreError, 502),
    (ConfigurationError, 500),
)


def ok(data=None, status: int = 200):
    body = {"ok": True}
    if data is not None:
        body["data"] = data
    return jsonify(body), status


def error_response(exc: Exception, fallback_message: str):
    """Translate an exception raised by a use case into a JSON error.

    Domain errors keep their message; configuration errors and anything else
    get fallback_message.
    """
    if isinstance(exc, DomainError):
        for cls, status in STATUS_BY_ERROR:
            if isinstance(exc, cls):
                if status >= 500:
                    logger.error("%s: %s", fallback_message, exc)
                if isinstance(exc, ConfigurationError):
                    return jsonify({"ok": False, "error": fallback_message}), status
                return jsonify({"ok": False, "error": str(exc) or fallback_message}), status
        return jsonify({"ok": False, "error": str(exc) or fallback_message}), 400

    logger.exception(fallback_message)
    return jsonify({"ok": False, "error": fallback_message}), 500


def serialize(value):
    """Dataclasses/enums/datetimes to JSON-friendly values."""
    if is_dataclass(value) and not isinstance(value, type):
        return {f.name: serialize(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (list, tuple)):
        return [serialize(v) for v in value]
    if isinstance(value, dict):
        return {k: serialize(v) for k, v in value.items()}
    return value
