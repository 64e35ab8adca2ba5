from __future__ import annotations

from typing import Any, Mapping, Sequence

from firebase_admin import firestore

from ..common.datetime_utils import now_utc
from ..core.constants import BUG_REPORTS_COLLECTION
from ..database.connection import FirestoreConnection
from ..database.firestore_base import ensure_no_absence_markers, store_operation, to_datetime
from .model import BugReport
from .repository import BugReportRepository


class FirestoreBugReportRepository(BugReportRepository):
    def __init__(self, conn_factory: FirestoreConnection):
        self._conn_factory = conn_factory

    def _reports(self):
        return self._conn_factory.collection(BUG_REPORTS_COLLECTION)

    def create(self, record: Mapping[str, Any]) -> str:
        payload = dict(record)
        ensure_no_absence_markers(payload)
        with store_operation("submit bug report"):
            _, ref = self._reports().add(payload)
            return ref.id

    def list_all(self) -> Sequence[BugReport]:
        with store_operation("list bug reports"):
            docs = self._reports().order_by("submittedAt", direction=firestore.Query.DESCENDING).stream()
            out: list[BugReport] = []
            for doc in docs:
                d = doc.to_dict() or {}
                out.append(
                    BugReport(
                        report_id=doc.id,
                        description=d.get("description") or "",
                        console_logs=d.get("consoleLogs") or "",
                        user_id=d.get("userId") or "anonymous",
                        user_name=d.get("userName") or "Anonymous User",
                        user_email=d.get("userEmail") or "",
                        reviewed=bool(d.get("reviewed", False)),
                        submitted_at=to_datetime(d.get("submittedAt")) or now_utc(),
                    )
                )
            return out

    def mark_reviewed(self, report_id: str) -> None:
        with store_operation("update bug report"):
            self._reports().document(str(report_id)).update({"reviewed": True})
