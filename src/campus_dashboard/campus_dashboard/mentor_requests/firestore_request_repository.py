from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from firebase_admin import firestore
from google.cloud.firestore_v1.base_query import FieldFilter

from ..core.constants import MENTOR_REQUESTS_COLLECTION
from ..core.enums import RequestStatus
from ..database.connection import FirestoreConnection
from ..database.firestore_base import ensure_no_absence_markers, store_operation, to_datetime
from .model import MentorChangeRequest
from .repository import MentorRequestRepository


def _to_request(request_id: str, d: Mapping[str, Any]) -> MentorChangeRequest:
    return MentorChangeRequest(
        request_id=request_id,
        student_id=d["studentId"],
        requested_mentor_id=d["requestedMentorId"],
        status=RequestStatus(d.get("status") or RequestStatus.PENDING.value),
        created_at=to_datetime(d.get("createdAt")),
        student_name=d.get("studentName") or "",
        student_email=d.get("studentEmail") or "",
        requested_mentor_name=d.get("requestedMentorName") or "",
        requested_mentor_email=d.get("requestedMentorEmail") or "",
        current_mentor_id=d.get("currentMentorId"),
        current_mentor_name=d.get("currentMentorName"),
        reason=d.get("reason"),
        reviewed_at=to_datetime(d.get("reviewedAt")),
        reviewed_by=d.get("reviewedBy"),
        admin_notes=d.get("adminNotes"),
    )


class FirestoreMentorRequestRepository(MentorRequestRepository):
    def __init__(self, conn_factory: FirestoreConnection):
        self._conn_factory = conn_factory

    def _requests(self):
        return self._conn_factory.collection(MENTOR_REQUESTS_COLLECTION)

    def create(self, record: Mapping[str, Any]) -> str:
        payload = dict(record)
        ensure_no_absence_markers(payload)
        with store_operation("create mentor request"):
            _, ref = self._requests().add(payload)
            return ref.id

    def get(self, request_id: str) -> Optional[MentorChangeRequest]:
        with store_operation("get mentor request"):
            snap = self._requests().document(str(request_id)).get()
            if not snap.exists:
                return None
            return _to_request(snap.id, snap.to_dict() or {})

    def list(self, *, status: Optional[RequestStatus] = None, limit: int = 200) -> Sequence[MentorChangeRequest]:
        with store_operation("list mentor requests"):
            q = self._requests()
            if status is not None:
                q = q.where(filter=FieldFilter("status", "==", status.value))
            docs = q.order_by("createdAt", direction=firestore.Query.DESCENDING).limit(int(limit)).stream()
            return [_to_request(doc.id, doc.to_dict() or {}) for doc in docs]

    def decide_if_pending(self, request_id: str, update: Mapping[str, Any]) -> bool:
        payload = dict(update)
        ensure_no_absence_markers(payload)

        @firestore.transactional
        def _decide(transaction, ref) -> bool:
            snap = ref.get(transaction=transaction)
            if not snap.exists or (snap.to_dict() or {}).get("status") != RequestStatus.PENDING.value:
                return False
            transaction.update(ref, payload)
            return True

        with store_operation("review mentor request"):
            ref = self._requests().document(str(request_id))
            return _decide(self._conn_factory.client().transaction(), ref)
