from __future__ import annotations

import logging
from typing import Callable, Optional

from ..core.exceptions import DomainError
from ..notifications.banner import BannerController, BannerState
from .service import MentorRequestService

logger = logging.getLogger(__name__)

ACTION_SUCCESS_MESSAGES = {
    "approve": "Mentor request approved",
    "reject": "Mentor request rejected",
}


def resolve_error_message(action: str, exc: Exception) -> str:
    """Domain errors carry a user-facing message; anything else gets a generic one."""
    if isinstance(exc, DomainError) and str(exc):
        return str(exc)
    return f"Failed to {action} request"


class MentorApprovalPanel:
    """Admin view-model for reviewing pending mentor change requests."""

    def __init__(self, service: MentorRequestService, *, admin_id: str, banner: Optional[BannerController] = None):
        self._service = service
        self._admin_id = admin_id
        self.banner = banner or BannerController()

    @property
    def state(self) -> BannerState:
        return self.banner.state

    def pending(self):
        return self._service.list_pending()

    def approve(self, request_id: str, notes: str = "") -> bool:
        return self._run(
            "approve",
            request_id,
            lambda: self._service.approve(request_id=request_id, admin_id=self._admin_id, notes=notes),
        )

    def reject(self, request_id: str, notes: str = "") -> bool:
        return self._run(
            "reject",
            request_id,
            lambda: self._service.reject(request_id=request_id, admin_id=self._admin_id, notes=notes),
        )

    def _run(self, action: str, request_id: str, call: Callable[[], None]) -> bool:
        if not self.banner.begin(request_id):
            logger.debug("ignoring %s for %s: already processing", action, request_id)
            return False
        try:
            call()
        except Exception as e:
            logger.exception("mentor request %s failed for %s", action, request_id)
            self.banner.fail(resolve_error_message(action, e))
            return False
        self.banner.succeed(ACTION_SUCCESS_MESSAGES[action])
        return True
