from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from google.cloud.firestore_v1.base_query import FieldFilter

from ..core.constants import USERS_COLLECTION
from ..core.enums import Role
from ..database.connection import FirestoreConnection
from ..database.firestore_base import ensure_no_absence_markers, store_operation
from .model import User
from .repository import UserRepository


def _to_user(user_id: str, d: Mapping[str, Any]) -> User:
    try:
        role = Role(d.get("role") or Role.STUDENT.value)
    except ValueError:
        role = Role.STUDENT
    max_mentees = d.get("maxMentees")
    return User(
        user_id=user_id,
        name=d.get("name") or "Unknown",
        email=d.get("email") or "",
        role=role,
        mentor_id=d.get("mentorId") or "",
        pending_mentor_id=d.get("pendingMentorId") or "",
        campus=d.get("campus") or "",
        house=d.get("house") or "",
        phase=d.get("phase") or "",
        max_mentees=int(max_mentees) if max_mentees not in (None, "") else None,
    )


class FirestoreUserRepository(UserRepository):
    def __init__(self, conn_factory: FirestoreConnection):
        self._conn_factory = conn_factory

    def _users(self):
        return self._conn_factory.collection(USERS_COLLECTION)

    def get_by_id(self, user_id: str) -> Optional[User]:
        with store_operation("get user"):
            snap = self._users().document(str(user_id)).get()
            if not snap.exists:
                return None
            return _to_user(snap.id, snap.to_dict() or {})

    def list_by_role(self, role: Role) -> Sequence[User]:
        with store_operation("list users by role"):
            docs = self._users().where(filter=FieldFilter("role", "==", role.value)).stream()
            return [_to_user(doc.id, doc.to_dict() or {}) for doc in docs]

    def list_students_of_mentor(self, mentor_id: str) -> Sequence[User]:
        with store_operation("list mentees"):
            docs = (
                self._users()
                .where(filter=FieldFilter("role", "==", Role.STUDENT.value))
                .where(filter=FieldFilter("mentorId", "==", str(mentor_id)))
                .stream()
            )
            return [_to_user(doc.id, doc.to_dict() or {}) for doc in docs]

    def update_fields(self, user_id: str, fields: Mapping[str, Any]) -> None:
        payload = dict(fields)
        ensure_no_absence_markers(payload)
        with store_operation("update user"):
            self._users().document(str(user_id)).update(payload)
