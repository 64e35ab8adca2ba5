from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence

from ..core.enums import Role
from .model import User


class UserRepository(Protocol):
    """Repository interface for User.

    Note: services depend on this interface, not on a concrete store.
    """

    def get_by_id(self, user_id: str) -> Optional[User]:
        raise NotImplementedError

    def list_by_role(self, role: Role) -> Sequence[User]:
        raise NotImplementedError

    def list_students_of_mentor(self, mentor_id: str) -> Sequence[User]:
        raise NotImplementedError

    def update_fields(self, user_id: str, fields: Mapping[str, Any]) -> None:
        """Partial update. Keys use the stored (camelCase) field names."""

        raise NotImplementedError
