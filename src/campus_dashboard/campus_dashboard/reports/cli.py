from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from ..core.enums import ReportKind
from ..core.exceptions import ConfigurationError
from ..database.connection import FirestoreConfig, FirestoreConnection
from .firestore_submission_repository import FirestoreSubmissionRepository
from .service import AttendanceReporter
from .webhook import DiscordWebhookClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReporterSettings:
    firestore: FirestoreConfig
    webhook_url: str

    @classmethod
    def from_env(cls, environ: Mapping[str, str]) -> "ReporterSettings":
        service_account = (environ.get("FIREBASE_SERVICE_ACCOUNT") or "").strip()
        webhook_url = (environ.get("DISCORD_WEBHOOK_URL") or "").strip()
        if not service_account:
            raise ConfigurationError("FIREBASE_SERVICE_ACCOUNT environment variable is not set")
        if not webhook_url:
            raise ConfigurationError("DISCORD_WEBHOOK_URL environment variable is not set")

        firestore_config = FirestoreConfig(service_account_json=service_account)
        # Fail fast on unparsable credentials.
        firestore_config.credential_source()
        return cls(firestore=firestore_config, webhook_url=webhook_url)


def main(kind: ReportKind, environ: Optional[Mapping[str, str]] = None) -> int:
    logging.basicConfig(
        level=os.environ.get("LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        settings = ReporterSettings.from_env(os.environ if environ is None else environ)
    except ConfigurationError as e:
        logger.error("%s", e)
        return 1

    conn = FirestoreConnection.get_instance(settings.firestore)
    reporter = AttendanceReporter(
        kind,
        FirestoreSubmissionRepository(conn),
        DiscordWebhookClient(settings.webhook_url),
    )
    return reporter.run()
