from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles used for authorization."""

    ADMIN = "admin"
    MENTOR = "mentor"
    STUDENT = "student"
    ACADEMIC_ASSOCIATE = "academic_associate"


class RequestStatus(str, Enum):
    """Mentor change request lifecycle. PENDING is the only non-terminal state."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class ReportKind(str, Enum):
    GOALS = "goals"
    REFLECTIONS = "reflections"
