"""Server-wide constants."""

PROJECT_NAME = "JobDispatch"
API_V1_STR = "/api/v1"
VERSION = "1.0.0"
SCHEMA_VERSION = "v1"

# Clients poll the notification feed on this interval.
NOTIFICATION_POLL_INTERVAL_SECONDS = 30
NOTIFICATION_DEFAULT_LIMIT = 50
NOTIFICATION_MAX_LIMIT = 100

PENDING_COMPANIES_LIMIT = 10
REPORT_JOB_CARDS_LIMIT = 100
REPORT_RECENT_DAYS = 30
