import os

SETTINGS_BY_ENV = {
    "development": "config.development",
    "dev": "config.development",
    "production": "config.production",
    "prod": "config.production",
    "testing": "config.testing",
    "test": "config.testing",
}


def get_settings_module(env=None) -> str:
    """Dotted path of the settings module for APP_ENV (development if unknown)."""
    key = (env if env is not None else os.getenv("APP_ENV", "")).strip().lower()
    return SETTINGS_BY_ENV.get(key, "config.development")
