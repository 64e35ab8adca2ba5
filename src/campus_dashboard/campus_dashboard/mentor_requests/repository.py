from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence

from ..core.enums import RequestStatus
from .model import MentorChangeRequest


class MentorRequestRepository(Protocol):
    def create(self, record: Mapping[str, Any]) -> str:
        """Persist a payload built by build_request_record and return its id."""

        raise NotImplementedError

    def get(self, request_id: str) -> Optional[MentorChangeRequest]:
        raise NotImplementedError

    def list(self, *, status: Optional[RequestStatus] = None, limit: int = 200) -> Sequence[MentorChangeRequest]:
        raise NotImplementedError

    def decide_if_pending(self, request_id: str, update: Mapping[str, Any]) -> bool:
        """Apply update only if the stored status is still PENDING.

        Returns False when the request is gone or already decided.
        """

        raise NotImplementedError
