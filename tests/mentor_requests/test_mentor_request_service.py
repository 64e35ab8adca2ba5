from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timedelta, timezone

import pytest

from src.campus_dashboard.campus_dashboard.core.enums import RequestStatus, Role
from src.campus_dashboard.campus_dashboard.core.exceptions import InvalidStateError, StoreError, ValidationError
from src.campus_dashboard.campus_dashboard.database.firestore_base import ensure_no_absence_markers
from src.campus_dashboard.campus_dashboard.mentor_requests.model import MentorChangeRequest
from src.campus_dashboard.campus_dashboard.mentor_requests.service import MentorRequestService
from src.campus_dashboard.campus_dashboard.users.model import User

NOW = datetime(2026, 10, 19, 4, 0, tzinfo=timezone.utc)

USER_FIELDS = {"mentorId": "mentor_id", "pendingMentorId": "pending_mentor_id", "name": "name"}


class InMemoryUsers:
    def __init__(self, users):
        self.users = {u.user_id: u for u in users}
        self.updates: list[tuple[str, dict]] = []

    def get_by_id(self, user_id):
        return self.users.get(user_id)

    def list_by_role(self, role):
        return [u for u in self.users.values() if u.role == role]

    def list_students_of_mentor(self, mentor_id):
        return [u for u in self.users.values() if u.role == Role.STUDENT and u.mentor_id == mentor_id]

    def update_fields(self, user_id, fields):
        ensure_no_absence_markers(fields)
        self.updates.append((user_id, dict(fields)))
        self.users[user_id] = replace(self.users[user_id], **{USER_FIELDS[k]: v for k, v in fields.items()})


class InMemoryRequests:
    def __init__(self):
        self.docs: dict[str, dict] = {}
        self.writes: list[tuple[str, str, dict]] = []

    def create(self, record):
        ensure_no_absence_markers(record)
        rid = f"req-{len(self.docs) + 1}"
        self.docs[rid] = dict(record)
        self.writes.append(("create", rid, dict(record)))
        return rid

    def get(self, request_id):
        d = self.docs.get(request_id)
        if d is None:
            return None
        return MentorChangeRequest(
            request_id=request_id,
            student_id=d["studentId"],
            requested_mentor_id=d["requestedMentorId"],
            status=RequestStatus(d["status"]),
            created_at=d.get("createdAt"),
            current_mentor_id=d.get("currentMentorId"),
            reason=d.get("reason"),
            reviewed_by=d.get("reviewedBy"),
            admin_notes=d.get("adminNotes"),
        )

    def list(self, *, status=None, limit=200):
        out = [self.get(rid) for rid in self.docs]
        return [r for r in out if status is None or r.status == status][:limit]

    def decide_if_pending(self, request_id, update):
        ensure_no_absence_markers(update)
        d = self.docs.get(request_id)
        if not d or d["status"] != RequestStatus.PENDING.value:
            return False
        d.update(update)
        self.writes.append(("decide", request_id, dict(update)))
        return True


def make_users(**student_overrides):
    student = User(user_id="s1", name="Asha", email="asha@example.com", role=Role.STUDENT)
    return InMemoryUsers(
        [
            replace(student, **student_overrides),
            User(user_id="m1", name="Meera", email="meera@example.com", role=Role.MENTOR),
            User(user_id="m2", name="Ravi", email="ravi@example.com", role=Role.MENTOR),
            User(user_id="a1", name="Admin", email="admin@example.com", role=Role.ADMIN),
        ]
    )


def make_service(users=None, requests=None):
    users = users or make_users()
    requests = requests or InMemoryRequests()
    return MentorRequestService(requests, users, clock=lambda: NOW), users, requests


def test_create_without_current_mentor_or_reason_omits_those_keys():
    svc, users, requests = make_service()

    rid = svc.create_request(student_id="s1", requested_mentor_id="m2", reason="")

    record = requests.docs[rid]
    assert "currentMentorId" not in record
    assert "currentMentorName" not in record
    assert "reason" not in record
    assert record["status"] == "pending"
    assert users.get_by_id("s1").pending_mentor_id == "m2"


def test_create_with_optional_fields_stores_them_and_snapshots_names():
    svc, _, requests = make_service(make_users(mentor_id="m1"))

    rid = svc.create_request(student_id="s1", requested_mentor_id="m2", current_mentor_id="m1", reason="Schedule clash")

    record = requests.docs[rid]
    assert record["currentMentorId"] == "m1"
    assert record["currentMentorName"] == "Meera"
    assert record["reason"] == "Schedule clash"
    assert record["studentName"] == "Asha"
    assert record["requestedMentorEmail"] == "ravi@example.com"
    assert record["createdAt"] == NOW


def test_create_writes_request_before_student_pointer():
    svc, users, requests = make_service()

    svc.create_request(student_id="s1", requested_mentor_id="m2")

    assert [w[0] for w in requests.writes] == ["create"]
    assert users.updates == [("s1", {"pendingMentorId": "m2"})]


@pytest.mark.parametrize(
    "student_id, mentor_id",
    [("", "m2"), ("s1", ""), ("   ", "m2"), ("nobody", "m2"), ("s1", "nobody")],
)
def test_create_rejects_missing_or_unknown_users(student_id, mentor_id):
    svc, users, requests = make_service()

    with pytest.raises(ValidationError):
        svc.create_request(student_id=student_id, requested_mentor_id=mentor_id)

    assert requests.writes == []
    assert users.updates == []


def test_create_rejects_second_pending_request():
    svc, _, _ = make_service(make_users(pending_mentor_id="m1"))

    with pytest.raises(ValidationError):
        svc.create_request(student_id="s1", requested_mentor_id="m2")


def test_create_rejects_current_mentor():
    svc, _, _ = make_service(make_users(mentor_id="m2"))

    with pytest.raises(ValidationError):
        svc.create_request(student_id="s1", requested_mentor_id="m2")


def test_approve_without_notes_sets_mentor_and_clears_pending():
    svc, users, requests = make_service(make_users(mentor_id="m1"))
    rid = svc.create_request(student_id="s1", requested_mentor_id="m2", current_mentor_id="m1")

    svc.approve(request_id=rid, admin_id="a1")

    record = requests.docs[rid]
    assert record["status"] == "approved"
    assert record["reviewedBy"] == "a1"
    assert record["reviewedAt"] == NOW
    assert "adminNotes" not in requests.writes[-1][2]
    student = users.get_by_id("s1")
    assert student.mentor_id == "m2"
    assert student.pending_mentor_id == ""


def test_approve_with_notes_stores_admin_notes():
    svc, _, requests = make_service()
    rid = svc.create_request(student_id="s1", requested_mentor_id="m2")

    svc.approve(request_id=rid, admin_id="a1", notes="  Good fit  ")

    assert requests.docs[rid]["adminNotes"] == "Good fit"


def test_reject_clears_pending_and_keeps_mentor():
    svc, users, requests = make_service(make_users(mentor_id="m1"))
    rid = svc.create_request(student_id="s1", requested_mentor_id="m2")

    svc.reject(request_id=rid, admin_id="a1", notes="Mentor is full")

    assert requests.docs[rid]["status"] == "rejected"
    assert requests.docs[rid]["adminNotes"] == "Mentor is full"
    student = users.get_by_id("s1")
    assert student.mentor_id == "m1"
    assert student.pending_mentor_id == ""
    assert users.updates[-1] == ("s1", {"pendingMentorId": ""})


@pytest.mark.parametrize("first", ["approve", "reject"])
@pytest.mark.parametrize("second", ["approve", "reject"])
def test_decided_request_is_terminal(first, second):
    svc, users, requests = make_service()
    rid = svc.create_request(student_id="s1", requested_mentor_id="m2")
    getattr(svc, first)(request_id=rid, admin_id="a1")
    writes_before = list(requests.writes)
    updates_before = list(users.updates)

    with pytest.raises(InvalidStateError):
        getattr(svc, second)(request_id=rid, admin_id="a1")

    assert requests.writes == writes_before
    assert users.updates == updates_before


def test_unknown_request_is_invalid_state():
    svc, _, _ = make_service()

    with pytest.raises(InvalidStateError):
        svc.approve(request_id="missing", admin_id="a1")


def test_concurrent_review_loses_compare_and_swap():
    class RacingRequests(InMemoryRequests):
        def decide_if_pending(self, request_id, update):
            # Another admin decided it between our read and our write.
            self.docs[request_id]["status"] = RequestStatus.REJECTED.value
            return super().decide_if_pending(request_id, update)

    svc, users, requests = make_service(requests=RacingRequests())
    rid = svc.create_request(student_id="s1", requested_mentor_id="m2")

    with pytest.raises(InvalidStateError):
        svc.approve(request_id=rid, admin_id="a1")

    assert users.get_by_id("s1").mentor_id == ""


def test_failed_request_write_skips_student_update():
    class FailingRequests(InMemoryRequests):
        def decide_if_pending(self, request_id, update):
            raise StoreError("review mentor request: permission denied")

    svc, users, _ = make_service(requests=FailingRequests())
    rid = svc.create_request(student_id="s1", requested_mentor_id="m2")
    updates_before = list(users.updates)

    with pytest.raises(StoreError, match="review mentor request"):
        svc.approve(request_id=rid, admin_id="a1")

    assert users.updates == updates_before


def test_find_unreconciled_reports_approval_without_pointer_update():
    svc, users, requests = make_service()
    rid = svc.create_request(student_id="s1", requested_mentor_id="m2")
    requests.decide_if_pending(rid, {"status": "approved", "reviewedBy": "a1", "reviewedAt": NOW})

    items = svc.find_unreconciled()

    assert len(items) == 1
    assert items[0].request.request_id == rid
    assert items[0].problem == "pending mentor pointer not cleared"

    users.update_fields("s1", {"pendingMentorId": ""})
    assert svc.find_unreconciled()[0].problem == "mentor pointer not updated"

    users.update_fields("s1", {"mentorId": "m2"})
    assert svc.find_unreconciled() == []


def test_find_unreconciled_reports_pending_without_pointer():
    svc, users, requests = make_service()
    rid = requests.create(
        {"studentId": "s1", "requestedMentorId": "m2", "status": "pending", "createdAt": NOW - timedelta(hours=1)}
    )

    items = svc.find_unreconciled()

    assert [(i.request.request_id, i.problem) for i in items] == [(rid, "pending mentor pointer not set")]


def test_find_unreconciled_tolerates_requests_without_created_at():
    svc, users, requests = make_service()
    requests.create({"studentId": "s1", "requestedMentorId": "m1", "status": "rejected"})
    latest = requests.create(
        {"studentId": "s1", "requestedMentorId": "m2", "status": "approved", "createdAt": NOW}
    )
    requests.create({"studentId": "s1", "requestedMentorId": "m1", "status": "rejected"})

    items = svc.find_unreconciled()

    assert [(i.request.request_id, i.problem) for i in items] == [(latest, "mentor pointer not updated")]


def test_find_unreconciled_ignores_pending_pointer_for_another_mentor():
    svc, users, requests = make_service(users=make_users(pending_mentor_id="m1"))
    requests.create({"studentId": "s1", "requestedMentorId": "m2", "status": "rejected", "createdAt": NOW})

    assert svc.find_unreconciled() == []
