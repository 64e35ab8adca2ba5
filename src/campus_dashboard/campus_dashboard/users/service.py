from __future__ import annotations

from typing import Optional

from ..common.validators import require_non_empty
from ..core.exceptions import ValidationError
from ..database.firestore_base import build_document
from .model import User
from .repository import UserRepository


class UserService:
    """Use cases: read and edit user profiles."""

    def __init__(self, users: UserRepository):
        self._users = users

    def get_profile(self, user_id: str) -> User:
        user_id = require_non_empty(user_id, "User id")
        user = self._users.get_by_id(user_id)
        if not user:
            raise ValidationError("User not found")
        return user

    def update_profile(
        self,
        user_id: str,
        *,
        name: Optional[str] = None,
        campus: Optional[str] = None,
        house: Optional[str] = None,
        phase: Optional[str] = None,
    ) -> User:
        self.get_profile(user_id)

        # Blank input leaves the stored value as is.
        fields = build_document(
            {},
            name=(name or "").strip(),
            campus=(campus or "").strip(),
            house=(house or "").strip(),
            phase=(phase or "").strip(),
        )
        if not fields:
            raise ValidationError("Nothing to update")

        self._users.update_fields(user_id, fields)
        return self.get_profile(user_id)
