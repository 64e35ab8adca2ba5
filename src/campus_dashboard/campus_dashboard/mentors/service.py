from __future__ import annotations

from typing import Optional, Sequence, TypeVar

from ..core.constants import DEFAULT_MAX_MENTEES, MENTOR_LIST_BATCH_SIZE
from ..core.enums import Role
from ..core.exceptions import ValidationError
from ..users.repository import UserRepository
from .model import MentorCapacity, MentorFilters

T = TypeVar("T")


def load_more(items: Sequence[T], shown: int, batch_size: int = MENTOR_LIST_BATCH_SIZE) -> list[T]:
    """Next slice for a lazy "load more" list."""
    if shown < 0 or batch_size <= 0:
        raise ValidationError("Invalid page window")
    return list(items[shown : shown + batch_size])


class MentorCapacityService:
    def __init__(self, users: UserRepository, *, max_mentees: int = DEFAULT_MAX_MENTEES):
        self._users = users
        self._max_mentees = int(max_mentees)

    def list_mentors_with_capacity(self, filters: Optional[MentorFilters] = None) -> list[MentorCapacity]:
        # Full scan on every call: mentors x students, no caching.
        filters = filters or MentorFilters()
        out: list[MentorCapacity] = []
        for mentor in self._users.list_by_role(Role.MENTOR):
            if not filters.matches(mentor):
                continue
            count = len(self._users.list_students_of_mentor(mentor.user_id))
            limit = mentor.max_mentees if mentor.max_mentees is not None else self._max_mentees
            out.append(
                MentorCapacity(
                    mentor=mentor,
                    current_mentee_count=count,
                    max_mentees=limit,
                    available_slots=max(0, limit - count),
                )
            )
        out.sort(key=lambda m: m.mentor.name.lower())
        return out
