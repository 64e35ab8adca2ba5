import os

SECRET_KEY = "test-secret"

FIREBASE_CONFIG = {
    "service_account_json": os.getenv("FIREBASE_SERVICE_ACCOUNT", ""),
    "service_account_path": os.getenv("FIREBASE_SERVICE_ACCOUNT_PATH", ""),
}

DISCORD_WEBHOOK_URL = ""

MAX_MENTEES = 5

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"
