from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, Optional

from ..common.datetime_utils import IST, ist_day_bounds, now_utc
from ..core.constants import DAILY_GOALS_COLLECTION, DAILY_REFLECTIONS_COLLECTION
from ..core.enums import ReportKind
from .formatter import build_failure_embed, build_goal_embed, build_reflection_embed
from .model import AttendanceSummary, summarize
from .repository import SubmissionRepository
from .webhook import WebhookClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReportDefinition:
    name: str
    collection: str
    build_embed: Callable[..., Dict[str, Any]]


REPORTS: Dict[ReportKind, ReportDefinition] = {
    ReportKind.GOALS: ReportDefinition(
        name="daily goal attendance report",
        collection=DAILY_GOALS_COLLECTION,
        build_embed=build_goal_embed,
    ),
    ReportKind.REFLECTIONS: ReportDefinition(
        name="daily reflection attendance report",
        collection=DAILY_REFLECTIONS_COLLECTION,
        build_embed=build_reflection_embed,
    ),
}


class AttendanceReporter:
    """One scheduled run: fetch, count, format, post."""

    def __init__(
        self,
        kind: ReportKind,
        submissions: SubmissionRepository,
        webhook: WebhookClient,
        *,
        clock: Callable[[], datetime] = now_utc,
    ):
        self._definition = REPORTS[kind]
        self._submissions = submissions
        self._webhook = webhook
        self._clock = clock

    def build_summary(self) -> Optional[AttendanceSummary]:
        now = self._clock()
        start, end = ist_day_bounds(now)
        logger.info("%s for %s (IST)", self._definition.name, start.date().isoformat())

        students = self._submissions.list_students()
        logger.info("found %d students", len(students))
        if not students:
            return None

        submitter_ids = self._submissions.list_submitter_ids(self._definition.collection, start=start, end=end)
        summary = summarize(report_date=start.date(), students=students, submitter_ids=submitter_ids)
        logger.info(
            "present %d/%d (%s%%), absent %d",
            summary.present_count,
            summary.total,
            summary.percentage_text,
            summary.absent_count,
        )
        return summary

    def run(self) -> int:
        """Return the process exit code."""
        try:
            summary = self.build_summary()
            if summary is None:
                logger.warning("no students found; nothing to report")
                return 0
            embed = self._definition.build_embed(summary, timestamp=self._clock().astimezone(IST))
            self._webhook.post({"embeds": [embed]})
        except Exception as e:
            logger.exception("%s failed", self._definition.name)
            self._notify_failure(e)
            return 1

        logger.info("%s completed", self._definition.name)
        return 0

    def _notify_failure(self, error: Exception) -> None:
        try:
            embed = build_failure_embed(self._definition.name, error, timestamp=self._clock().astimezone(IST))
            self._webhook.post({"embeds": [embed]})
        except Exception as notify_error:
            logger.error("failed to send error notification: %s", notify_error)
