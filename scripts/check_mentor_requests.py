"""List mentor change requests whose student pointers did not get updated.

Read-only: prints what an admin should look at, fixes nothing.
"""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.campus_dashboard.campus_dashboard.container import build_container


def main() -> int:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    container = build_container(firebase_config=settings.FIREBASE_CONFIG)

    items = container.mentor_request_service.find_unreconciled()
    for item in items:
        req = item.request
        print(
            f"{req.request_id} [{req.status.value}] student={req.student_id} "
            f"requested={req.requested_mentor_id} mentorId={item.student_mentor_id or '-'} "
            f"pendingMentorId={item.student_pending_mentor_id or '-'}: {item.problem}"
        )
    print(f"OK: {len(items)} request(s) need attention")
    return 1 if items else 0


if __name__ == "__main__":
    raise SystemExit(main())
