from __future__ import annotations

import pytest

from config import get_settings_module


@pytest.mark.parametrize(
    "env, expected",
    [
        ("production", "config.production"),
        (" Prod ", "config.production"),
        ("test", "config.testing"),
        ("", "config.development"),
        ("staging", "config.development"),
    ],
)
def test_settings_module_by_env(env, expected):
    assert get_settings_module(env) == expected


def test_settings_module_reads_app_env(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")

    assert get_settings_module() == "config.testing"
