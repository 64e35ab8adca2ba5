from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: User.

    Note: Plain data object, no store access. Empty strings mean "not set"
    for mentor_id/pending_mentor_id, matching what the store holds.
    """

    user_id: str
    name: str
    email: str
    role: Role
    mentor_id: str = ""
    pending_mentor_id: str = ""
    campus: str = ""
    house: str = ""
    phase: str = ""
    max_mentees: Optional[int] = None
