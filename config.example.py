# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Do NOT commit session files: they contain a bearer token. Everything under
.local/ is gitignored.

This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "TASKDECK_APP_NAME": "App display name (default: taskdeck).",
    "TASKDECK_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    # Remote service
    "TASKDECK_API_BASE_URL": (
        "Task service base URL (default: https://ccbtodoapp-production.up.railway.app)."
    ),
    "TASKDECK_REQUEST_TIMEOUT_SECONDS": "Per-request timeout (default: httpx default).",
    # Paths (gitignored)
    "TASKDECK_DATA_DIR": "Local data directory for logs and session (default: .local/taskdeck).",
    "TASKDECK_SESSION_PATH": "Session JSON path (default: <data_dir>/session.json).",
    "TASKDECK_PERSIST_SESSION": "Keep the login across restarts (true/false, default: true).",
}
