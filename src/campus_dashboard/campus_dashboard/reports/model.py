from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Sequence


@dataclass(frozen=True)
class StudentRef:
    student_id: str
    name: str


@dataclass(frozen=True)
class AttendanceSummary:
    """Read-model for one day's submission attendance."""

    report_date: date
    present: Sequence[StudentRef]
    absent: Sequence[StudentRef]

    @property
    def present_count(self) -> int:
        return len(self.present)

    @property
    def absent_count(self) -> int:
        return len(self.absent)

    @property
    def total(self) -> int:
        return self.present_count + self.absent_count

    @property
    def percentage(self) -> float:
        if not self.total:
            return 0.0
        return self.present_count / self.total * 100

    @property
    def percentage_text(self) -> str:
        return f"{self.percentage:.1f}"

    @property
    def absent_names(self) -> list[str]:
        return sorted(s.name for s in self.absent)


def summarize(*, report_date: date, students: Iterable[StudentRef], submitter_ids: Iterable[str]) -> AttendanceSummary:
    """Partition students by whether they submitted. Unknown submitter ids are ignored."""
    submitted = set(submitter_ids)
    present: list[StudentRef] = []
    absent: list[StudentRef] = []
    for s in students:
        (present if s.student_id in submitted else absent).append(s)
    return AttendanceSummary(report_date=report_date, present=present, absent=absent)
