from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from ..core.enums import RequestStatus
from ..database.firestore_base import build_document


@dataclass(frozen=True)
class MentorChangeRequest:
    """A student's proposal to move to a requested mentor.

    Names and emails are snapshots taken at creation; later profile edits are
    not reflected here.
    """

    request_id: str
    student_id: str
    requested_mentor_id: str
    status: RequestStatus
    created_at: Optional[datetime]
    student_name: str = ""
    student_email: str = ""
    requested_mentor_name: str = ""
    requested_mentor_email: str = ""
    current_mentor_id: Optional[str] = None
    current_mentor_name: Optional[str] = None
    reason: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    reviewed_by: Optional[str] = None
    admin_notes: Optional[str] = None

    @property
    def is_pending(self) -> bool:
        return self.status == RequestStatus.PENDING


def build_request_record(
    *,
    student_id: str,
    student_name: str,
    student_email: str,
    requested_mentor_id: str,
    requested_mentor_name: str,
    requested_mentor_email: str,
    created_at: datetime,
    current_mentor_id: Optional[str] = None,
    current_mentor_name: Optional[str] = None,
    reason: Optional[str] = None,
) -> Dict[str, Any]:
    """Create payload for a new request. Unset optional fields are omitted."""

    return build_document(
        {
            "studentId": student_id,
            "studentName": student_name,
            "studentEmail": student_email,
            "requestedMentorId": requested_mentor_id,
            "requestedMentorName": requested_mentor_name,
            "requestedMentorEmail": requested_mentor_email,
            "status": RequestStatus.PENDING.value,
            "createdAt": created_at,
        },
        currentMentorId=current_mentor_id,
        currentMentorName=current_mentor_name,
        reason=reason,
    )


def build_review_update(
    *,
    status: RequestStatus,
    reviewed_by: str,
    reviewed_at: datetime,
    admin_notes: Optional[str] = None,
) -> Dict[str, Any]:
    """Update payload for leaving PENDING. adminNotes only when non-empty."""

    if status == RequestStatus.PENDING:
        raise ValueError("review update must move out of pending")
    return build_document(
        {
            "status": status.value,
            "reviewedAt": reviewed_at,
            "reviewedBy": reviewed_by,
        },
        adminNotes=admin_notes,
    )
