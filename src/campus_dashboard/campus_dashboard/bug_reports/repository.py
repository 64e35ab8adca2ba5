from __future__ import annotations

from typing import Any, Mapping, Protocol, Sequence

from .model import BugReport


class BugReportRepository(Protocol):
    def create(self, record: Mapping[str, Any]) -> str:
        raise NotImplementedError

    def list_all(self) -> Sequence[BugReport]:
        """Newest first."""

        raise NotImplementedError

    def mark_reviewed(self, report_id: str) -> None:
        raise NotImplementedError
