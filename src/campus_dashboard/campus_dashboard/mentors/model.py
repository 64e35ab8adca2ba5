from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..users.model import User


@dataclass(frozen=True)
class MentorFilters:
    """Exact-match post filters; None/empty means no filter."""

    campus: Optional[str] = None
    house: Optional[str] = None
    phase: Optional[str] = None

    def matches(self, mentor: User) -> bool:
        if self.campus and mentor.campus != self.campus:
            return False
        if self.house and mentor.house != self.house:
            return False
        if self.phase and mentor.phase != self.phase:
            return False
        return True


@dataclass(frozen=True)
class MentorCapacity:
    mentor: User
    current_mentee_count: int
    max_mentees: int
    available_slots: int
