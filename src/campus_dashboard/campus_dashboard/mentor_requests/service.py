from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import now_utc
from ..common.validators import optional_text, require_non_empty
from ..core.enums import RequestStatus
from ..core.exceptions import InvalidStateError, ValidationError
from ..users.model import User
from ..users.repository import UserRepository
from .model import MentorChangeRequest, build_request_record, build_review_update
from .repository import MentorRequestRepository

logger = logging.getLogger(__name__)

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


def _age_key(req: MentorChangeRequest) -> datetime:
    # Records without createdAt sort as oldest.
    return req.created_at or _OLDEST


@dataclass(frozen=True)
class UnreconciledRequest:
    """A decided request whose student pointer update did not land."""

    request: MentorChangeRequest
    student_mentor_id: str
    student_pending_mentor_id: str
    problem: str


class MentorRequestService:
    """Use cases for the mentor change request lifecycle.

    Each transition is two store writes (request, then student) without a
    transaction. The student write only happens after the request write
    succeeded; find_unreconciled() reports requests where it did not.
    """

    def __init__(
        self,
        requests: MentorRequestRepository,
        users: UserRepository,
        *,
        clock: Callable[[], datetime] = now_utc,
    ):
        self._requests = requests
        self._users = users
        self._clock = clock

    def _require_user(self, user_id: str, label: str) -> User:
        user = self._users.get_by_id(user_id)
        if not user:
            raise ValidationError(f"{label} not found")
        return user

    def create_request(
        self,
        *,
        student_id: str,
        requested_mentor_id: str,
        current_mentor_id: Optional[str] = None,
        reason: Optional[str] = None,
    ) -> str:
        student_id = require_non_empty(student_id, "Student id")
        requested_mentor_id = require_non_empty(requested_mentor_id, "Requested mentor id")
        current_mentor_id = optional_text(current_mentor_id)

        student = self._require_user(student_id, "Student")
        mentor = self._require_user(requested_mentor_id, "Requested mentor")
        current = self._require_user(current_mentor_id, "Current mentor") if current_mentor_id else None

        if student.pending_mentor_id:
            raise ValidationError("Student already has a pending mentor request")
        if requested_mentor_id == (current_mentor_id or student.mentor_id):
            raise ValidationError("Requested mentor is already the current mentor")

        record = build_request_record(
            student_id=student.user_id,
            student_name=student.name,
            student_email=student.email,
            requested_mentor_id=mentor.user_id,
            requested_mentor_name=mentor.name,
            requested_mentor_email=mentor.email,
            created_at=self._clock(),
            current_mentor_id=current.user_id if current else None,
            current_mentor_name=current.name if current else None,
            reason=optional_text(reason),
        )
        request_id = self._requests.create(record)
        self._users.update_fields(student.user_id, {"pendingMentorId": mentor.user_id})

        logger.info("mentor request %s created: student=%s mentor=%s", request_id, student.user_id, mentor.user_id)
        return request_id

    def _decide(self, *, request_id: str, admin_id: str, status: RequestStatus, notes: Optional[str]) -> MentorChangeRequest:
        request_id = require_non_empty(request_id, "Request id")
        admin_id = require_non_empty(admin_id, "Admin id")

        req = self._requests.get(request_id)
        if not req:
            raise InvalidStateError("Request not found")
        if not req.is_pending:
            raise InvalidStateError(f"Request already {req.status.value}")

        update = build_review_update(
            status=status,
            reviewed_by=admin_id,
            reviewed_at=self._clock(),
            admin_notes=optional_text(notes),
        )
        # Another reviewer may have decided it since the read above.
        if not self._requests.decide_if_pending(request_id, update):
            raise InvalidStateError("Request was already reviewed")
        return req

    def approve(self, *, request_id: str, admin_id: str, notes: Optional[str] = None) -> None:
        req = self._decide(request_id=request_id, admin_id=admin_id, status=RequestStatus.APPROVED, notes=notes)
        self._users.update_fields(
            req.student_id,
            {"mentorId": req.requested_mentor_id, "pendingMentorId": ""},
        )
        logger.info("mentor request %s approved by %s", req.request_id, admin_id)

    def reject(self, *, request_id: str, admin_id: str, notes: Optional[str] = None) -> None:
        req = self._decide(request_id=request_id, admin_id=admin_id, status=RequestStatus.REJECTED, notes=notes)
        self._users.update_fields(req.student_id, {"pendingMentorId": ""})
        logger.info("mentor request %s rejected by %s", req.request_id, admin_id)

    def list_requests(self, *, status: Optional[RequestStatus] = None, limit: int = 200) -> Sequence[MentorChangeRequest]:
        return self._requests.list(status=status, limit=limit)

    def list_pending(self) -> Sequence[MentorChangeRequest]:
        return self._requests.list(status=RequestStatus.PENDING, limit=500)

    def find_unreconciled(self, *, limit: int = 500) -> list[UnreconciledRequest]:
        """Report requests whose student pointers disagree with the request state.

        Nothing is repaired here.
        """
        pending = list(self._requests.list(status=RequestStatus.PENDING, limit=limit))
        pending_students = {r.student_id for r in pending}

        latest: dict[str, MentorChangeRequest] = {}
        for status in (RequestStatus.APPROVED, RequestStatus.REJECTED):
            for req in self._requests.list(status=status, limit=limit):
                prev = latest.get(req.student_id)
                if prev is None or _age_key(req) > _age_key(prev):
                    latest[req.student_id] = req

        out: list[UnreconciledRequest] = []
        for req in pending:
            student = self._users.get_by_id(req.student_id)
            if student and student.pending_mentor_id != req.requested_mentor_id:
                out.append(
                    UnreconciledRequest(
                        request=req,
                        student_mentor_id=student.mentor_id,
                        student_pending_mentor_id=student.pending_mentor_id,
                        problem="pending mentor pointer not set",
                    )
                )

        for student_id, req in latest.items():
            if student_id in pending_students:
                continue
            student = self._users.get_by_id(student_id)
            if not student:
                continue

            if student.pending_mentor_id == req.requested_mentor_id:
                problem = "pending mentor pointer not cleared"
            elif req.status == RequestStatus.APPROVED and student.mentor_id != req.requested_mentor_id:
                problem = "mentor pointer not updated"
            else:
                continue

            out.append(
                UnreconciledRequest(
                    request=req,
                    student_mentor_id=student.mentor_id,
                    student_pending_mentor_id=student.pending_mentor_id,
                    problem=problem,
                )
            )
        return out
