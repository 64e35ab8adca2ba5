"""Daily goal attendance report.

Scheduled for 09:20 IST. Posts present/absent counts and the names of absent
students to the Discord webhook. Safe to run on demand.

Requires FIREBASE_SERVICE_ACCOUNT and DISCORD_WEBHOOK_URL.
"""

from __future__ import annotations

import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from src.campus_dashboard.campus_dashboard.core.enums import ReportKind
from src.campus_dashboard.campus_dashboard.reports.cli import main


if __name__ == "__main__":
    raise SystemExit(main(ReportKind.GOALS))
