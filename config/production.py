import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

FIREBASE_CONFIG = {
    "service_account_json": os.getenv("FIREBASE_SERVICE_ACCOUNT", ""),
    "service_account_path": os.getenv("FIREBASE_SERVICE_ACCOUNT_PATH", ""),
}

DISCORD_WEBHOOK_URL = os.getenv("DISCORD_WEBHOOK_URL", "")

MAX_MENTEES = int(os.getenv("MAX_MENTEES", "5"))

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
