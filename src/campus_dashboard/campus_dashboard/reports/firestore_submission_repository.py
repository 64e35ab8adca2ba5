from __future__ import annotations

from datetime import datetime
from typing import Sequence, Set

from google.cloud.firestore_v1.base_query import FieldFilter

from ..core.constants import USERS_COLLECTION
from ..core.enums import Role
from ..database.connection import FirestoreConnection
from ..database.firestore_base import store_operation
from .model import StudentRef
from .repository import SubmissionRepository


class FirestoreSubmissionRepository(SubmissionRepository):
    def __init__(self, conn_factory: FirestoreConnection):
        self._conn_factory = conn_factory

    def list_students(self) -> Sequence[StudentRef]:
        with store_operation("fetch students"):
            docs = (
                self._conn_factory.collection(USERS_COLLECTION)
                .where(filter=FieldFilter("role", "==", Role.STUDENT.value))
                .stream()
            )
            return [StudentRef(student_id=doc.id, name=(doc.to_dict() or {}).get("name") or "Unknown") for doc in docs]

    def list_submitter_ids(self, collection: str, *, start: datetime, end: datetime) -> Set[str]:
        with store_operation(f"fetch {collection}"):
            docs = (
                self._conn_factory.collection(collection)
                .where(filter=FieldFilter("created_at", ">=", start))
                .where(filter=FieldFilter("created_at", "<", end))
                .stream()
            )
            ids: Set[str] = set()
            for doc in docs:
                student_id = (doc.to_dict() or {}).get("student_id")
                if student_id:
                    ids.add(student_id)
            return ids
