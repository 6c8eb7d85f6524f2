# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "TASKTRACKER_APP_NAME": "Menu title (default: Task Manager CLI).",
    "TASKTRACKER_LOG_LEVEL": "Console logging level (default: WARNING). The log file always gets DEBUG.",
    # Paths (gitignored)
    "TASKTRACKER_DATA_DIR": "Local data directory (default: .local/task_tracker).",
    "TASKTRACKER_DB_PATH": "SQLite database path (default: <data_dir>/tasks.db).",
    "TASKTRACKER_AUDIT_LOG_PATH": "Append-only audit log (default: <data_dir>/task_manager.log).",
    "TASKTRACKER_EXPORT_PATH": "iCalendar export file, overwritten on each export (default: <data_dir>/tasks.ics).",
    # Reminders
    "TASKTRACKER_REMINDERS_ENABLED": "Run the due-today reminder thread (true/false, default: true).",
    "TASKTRACKER_REMINDER_INTERVAL": "Seconds between reminder ticks (default: 60).",
    # Identity
    "TASKTRACKER_DEFAULT_USER_ID": "User id the session acts as (default: 1).",
    "TASKTRACKER_DEFAULT_ADMIN_NAME": "Name of the admin created on an empty database (default: Admin User).",
}
