from __future__ import annotations

import pytest
import requests

from src.campus_dashboard.campus_dashboard.core.enums import ReportKind
from src.campus_dashboard.campus_dashboard.core.exceptions import ConfigurationError, TransportError
from src.campus_dashboard.campus_dashboard.reports import webhook as webhook_module
from src.campus_dashboard.campus_dashboard.reports.cli import ReporterSettings, main
from src.campus_dashboard.campus_dashboard.reports.webhook import DiscordWebhookClient


class FakeResponse:
    def __init__(self, status_code, text=""):
        self.status_code = status_code
        self.text = text


def test_webhook_accepts_200_and_204(monkeypatch):
    sent = []

    def fake_post(url, json, timeout):
        sent.append((url, json, timeout))
        return FakeResponse(204 if len(sent) == 1 else 200)

    monkeypatch.setattr(webhook_module.requests, "post", fake_post)
    client = DiscordWebhookClient("https://discord.example/hook", timeout=3)

    client.post({"embeds": []})
    client.post({"embeds": []})

    assert sent[0] == ("https://discord.example/hook", {"embeds": []}, 3)


def test_webhook_rejects_other_status(monkeypatch):
    monkeypatch.setattr(webhook_module.requests, "post", lambda url, json, timeout: FakeResponse(429, "slow down"))

    with pytest.raises(TransportError, match="429"):
        DiscordWebhookClient("https://discord.example/hook").post({"embeds": []})


def test_webhook_wraps_network_errors(monkeypatch):
    def boom(url, json, timeout):
        raise requests.ConnectionError("no route to host")

    monkeypatch.setattr(webhook_module.requests, "post", boom)

    with pytest.raises(TransportError):
        DiscordWebhookClient("https://discord.example/hook").post({"embeds": []})


@pytest.mark.parametrize(
    "environ",
    [
        {},
        {"FIREBASE_SERVICE_ACCOUNT": '{"type": "service_account"}'},
        {"DISCORD_WEBHOOK_URL": "https://discord.example/hook"},
        {"FIREBASE_SERVICE_ACCOUNT": "not json", "DISCORD_WEBHOOK_URL": "https://discord.example/hook"},
    ],
)
def test_settings_require_credentials_and_webhook(environ):
    with pytest.raises(ConfigurationError):
        ReporterSettings.from_env(environ)


def test_settings_from_env():
    settings = ReporterSettings.from_env(
        {"FIREBASE_SERVICE_ACCOUNT": '{"type": "service_account"}', "DISCORD_WEBHOOK_URL": " https://discord.example/hook "}
    )

    assert settings.webhook_url == "https://discord.example/hook"


def test_main_exits_non_zero_without_configuration():
    assert main(ReportKind.GOALS, environ={}) == 1
