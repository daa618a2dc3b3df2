# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Nothing here is imported by the application.
"""

ENV_VARS = {
    # App / logging
    "SITE_SCHEDULE_APP_NAME": "App display name (default: site-schedule).",
    "SITE_SCHEDULE_LOG_LEVEL": "Console logging level (default: INFO). The file log is always DEBUG.",
    "SITE_SCHEDULE_DATA_DIR": "Local data directory for logs (default: .local/site_schedule).",
    # Front-ends
    "SITE_SCHEDULE_CONSOLE_ENABLED": "Interactive console (true/false). When false, only the refresh loop runs.",
    # Dashboard API
    "SITE_SCHEDULE_API_BASE_URL": "Task API base URL (default: http://localhost:5000/api).",
    "SITE_SCHEDULE_API_TIMEOUT_SECONDS": "Per-request timeout in seconds (default: 10, minimum 1).",
    "SITE_SCHEDULE_PROJECT_ID": "Optional project id; scopes the task list to /tasks/project/<id>.",
    # Views
    "SITE_SCHEDULE_REFRESH_INTERVAL_SECONDS": "Periodic full refresh interval (default: 30, minimum 0.5).",
    "SITE_SCHEDULE_GANTT_DAY_WIDTH": "Pixels per day column on the timeline (default: 50).",
}
