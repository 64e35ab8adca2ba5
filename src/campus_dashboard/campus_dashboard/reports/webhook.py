from __future__ import annotations

import logging
from typing import Any, Mapping, Protocol

import requests

from ..core.constants import WEBHOOK_TIMEOUT_SECONDS
from ..core.exceptions import TransportError

logger = logging.getLogger(__name__)


class WebhookClient(Protocol):
    def post(self, payload: Mapping[str, Any]) -> None:
        raise NotImplementedError


class DiscordWebhookClient(WebhookClient):
    SUCCESS_CODES = (200, 204)

    def __init__(self, url: str, *, timeout: float = WEBHOOK_TIMEOUT_SECONDS):
        self._url = url
        self._timeout = timeout

    def post(self, payload: Mapping[str, Any]) -> None:
        try:
            r = requests.post(self._url, json=dict(payload), timeout=self._timeout)
        except requests.RequestException as e:
            raise TransportError(f"webhook post failed: {e}") from e

        if r.status_code not in self.SUCCESS_CODES:
            logger.error("webhook responded %s: %s", r.status_code, r.text[:500])
            raise TransportError(f"webhook responded with status {r.status_code}")
        logger.info("webhook notification sent")
