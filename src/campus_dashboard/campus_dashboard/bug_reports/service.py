from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import now_utc
from ..common.validators import require_non_empty
from ..core.exceptions import StoreError
from .model import BugReport
from .repository import BugReportRepository

logger = logging.getLogger(__name__)


class BugReportService:
    def __init__(self, reports: BugReportRepository, *, clock: Callable[[], datetime] = now_utc):
        self._reports = reports
        self._clock = clock

    def submit(
        self,
        *,
        description: str,
        console_logs: str = "",
        user_id: Optional[str] = None,
        user_name: Optional[str] = None,
        user_email: Optional[str] = None,
    ) -> str:
        description = require_non_empty(description, "Description")
        # Empty strings rather than None: the store rejects absence markers.
        report_id = self._reports.create(
            {
                "description": description,
                "consoleLogs": console_logs or "",
                "userId": user_id or "anonymous",
                "userName": user_name or "Anonymous User",
                "userEmail": user_email or "",
                "reviewed": False,
                "submittedAt": self._clock(),
            }
        )
        logger.info("bug report %s submitted", report_id)
        return report_id

    def list_all(self) -> Sequence[BugReport]:
        return self._reports.list_all()

    def mark_reviewed(self, report_id: str) -> None:
        self._reports.mark_reviewed(require_non_empty(report_id, "Report id"))

    def unreviewed_count(self) -> int:
        try:
            reports = self._reports.list_all()
        except StoreError:
            logger.exception("could not count unreviewed bug reports")
            return 0
        return sum(1 for r in reports if not r.reviewed)
