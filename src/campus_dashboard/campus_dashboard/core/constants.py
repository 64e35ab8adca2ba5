"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_MAX_MENTEES = 5
MENTOR_LIST_BATCH_SIZE = 10

SUCCESS_DISMISS_SECONDS = 3
ERROR_DISMISS_SECONDS = 5

IST_OFFSET_MINUTES = 330
WEBHOOK_TIMEOUT_SECONDS = 10
WEBHOOK_FIELD_LIMIT = 1000

USERS_COLLECTION = "users"
MENTOR_REQUESTS_COLLECTION = "mentor_change_requests"
BUG_REPORTS_COLLECTION = "bug_reports"
DAILY_GOALS_COLLECTION = "daily_goals"
DAILY_REFLECTIONS_COLLECTION = "daily_reflections"
