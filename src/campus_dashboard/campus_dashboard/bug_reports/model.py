from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class BugReport:
    report_id: str
    description: str
    console_logs: str
    user_id: str
    user_name: str
    user_email: str
    reviewed: bool
    submitted_at: datetime
