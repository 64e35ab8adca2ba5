from __future__ import annotations

from dataclasses import dataclass

from .bug_reports.firestore_bug_report_repository import FirestoreBugReportRepository
from .bug_reports.service import BugReportService
from .core.constants import DEFAULT_MAX_MENTEES
from .database.connection import FirestoreConfig, FirestoreConnection
from .mentor_requests.firestore_request_repository import FirestoreMentorRequestRepository
from .mentor_requests.service import MentorRequestService
from .mentors.service import MentorCapacityService
from .users.firestore_user_repository import FirestoreUserRepository
from .users.repository import UserRepository
from .users.service import UserService


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository

    user_service: UserService
    mentor_request_service: MentorRequestService
    mentor_capacity_service: MentorCapacityService
    bug_report_service: BugReportService


def build_container(*, firebase_config: dict, max_mentees: int = DEFAULT_MAX_MENTEES) -> Container:
    config = FirestoreConfig(
        service_account_json=str(firebase_config.get("service_account_json") or ""),
        service_account_path=str(firebase_config.get("service_account_path") or ""),
    )
    # Missing credentials are fatal at startup.
    config.credential_source()
    conn = FirestoreConnection.get_instance(config)

    users_repo = FirestoreUserRepository(conn)
    requests_repo = FirestoreMentorRequestRepository(conn)
    bug_reports_repo = FirestoreBugReportRepository(conn)

    return Container(
        users_repo=users_repo,
        user_service=UserService(users_repo),
        mentor_request_service=MentorRequestService(requests_repo, users_repo),
        mentor_capacity_service=MentorCapacityService(users_repo, max_mentees=max_mentees),
        bug_report_service=BugReportService(bug_reports_repo),
    )
