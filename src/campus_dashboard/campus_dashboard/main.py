from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .container import Container, build_container
from .bug_reports.controller import register as register_bug_reports
from .mentor_requests.controller import register as register_mentor_requests
from .mentors.controller import register as register_mentors
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("campus-dashboard settings=%s", settings_module)

    if container is None:
        container = build_container(
            firebase_config=getattr(settings, "FIREBASE_CONFIG"),
            max_mentees=int(getattr(settings, "MAX_MENTEES", 5)),
        )

    register_users(app, container)
    register_mentor_requests(app, container)
    register_mentors(app, container)
    register_bug_reports(app, container)

    return app
