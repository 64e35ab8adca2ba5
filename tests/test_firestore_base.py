from __future__ import annotations

from datetime import datetime, timezone

import pytest

from src.campus_dashboard.campus_dashboard.core.enums import RequestStatus
from src.campus_dashboard.campus_dashboard.core.exceptions import StoreError, ValidationError
from src.campus_dashboard.campus_dashboard.database.firestore_base import (
    build_document,
    ensure_no_absence_markers,
    store_operation,
    to_datetime,
)
from src.campus_dashboard.campus_dashboard.mentor_requests.model import build_review_update

NOW = datetime(2026, 10, 19, tzinfo=timezone.utc)


def test_build_document_merges_only_truthy_optionals():
    doc = build_document({"a": 1, "b": ""}, c="x", d="", e=None)

    assert doc == {"a": 1, "b": "", "c": "x"}


def test_build_document_rejects_missing_required():
    with pytest.raises(ValueError):
        build_document({"a": None})


def test_absence_markers_fail_the_write():
    with pytest.raises(StoreError):
        ensure_no_absence_markers({"pendingMentorId": None})

    ensure_no_absence_markers({"pendingMentorId": ""})


def test_store_operation_wraps_with_context():
    with pytest.raises(StoreError, match="^update user: permission denied$"):
        with store_operation("update user"):
            raise RuntimeError("permission denied")


def test_store_operation_passes_domain_errors_through():
    with pytest.raises(ValidationError):
        with store_operation("update user"):
            raise ValidationError("bad")


def test_review_update_omits_empty_notes():
    update = build_review_update(status=RequestStatus.APPROVED, reviewed_by="a1", reviewed_at=NOW, admin_notes=None)

    assert update == {"status": "approved", "reviewedAt": NOW, "reviewedBy": "a1"}


def test_review_update_cannot_stay_pending():
    with pytest.raises(ValueError):
        build_review_update(status=RequestStatus.PENDING, reviewed_by="a1", reviewed_at=NOW)


def test_to_datetime_treats_naive_values_as_utc():
    assert to_datetime("2026-10-19T00:00:00") == NOW
    assert to_datetime(datetime(2026, 10, 19)) == NOW
    assert to_datetime("2026-10-19T05:30:00+05:30") == NOW
    assert to_datetime(None) is None
    assert to_datetime("") is None
