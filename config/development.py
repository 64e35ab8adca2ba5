import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

FIREBASE_CONFIG = {
    "service_account_json": os.getenv("FIREBASE_SERVICE_ACCOUNT", ""),
    "service_account_path": os.getenv("FIREBASE_SERVICE_ACCOUNT_PATH", "serviceAccount.json"),
}

DISCORD_WEBHOOK_URL = os.getenv("DISCORD_WEBHOOK_URL", "")

MAX_MENTEES = int(os.getenv("MAX_MENTEES", "5"))

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
