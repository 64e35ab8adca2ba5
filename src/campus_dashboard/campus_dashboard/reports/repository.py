from __future__ import annotations

from datetime import datetime
from typing import Protocol, Sequence, Set

from .model import StudentRef


class SubmissionRepository(Protocol):
    def list_students(self) -> Sequence[StudentRef]:
        raise NotImplementedError

    def list_submitter_ids(self, collection: str, *, start: datetime, end: datetime) -> Set[str]:
        """Distinct student ids with a submission created in [start, end)."""

        raise NotImplementedError
