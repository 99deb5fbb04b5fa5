# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "TASKPROPS_APP_NAME": "App display name (default: taskprops).",
    "TASKPROPS_LOG_LEVEL": "Console logging level (default: WARNING). The log file always gets DEBUG.",
    # Paths (gitignored)
    "TASKPROPS_DATA_DIR": "Local data directory (default: .local/taskprops).",
    "TASKPROPS_TASKS_DB_PATH": "TaskStore SQLite path (default: <data_dir>/tasks.sqlite3).",
    # Session
    "TASKPROPS_USER_ID": "User id recorded as task creator and subtask owner (default: 1).",
    # Parsing
    "TASKPROPS_COMMAND_PREFIX": "Character that starts a command line (default: backslash).",
    "TASKPROPS_TIMEZONE": "IANA zone for date commands, e.g. Europe/Berlin (default: host zone).",
    # Project defaults
    "TASKPROPS_PRIORITY_START": "Lowest priority of new projects (default: 0).",
    "TASKPROPS_PRIORITY_END": "Highest priority of new projects (default: 3).",
    "TASKPROPS_PRIORITY_DEFAULT": "Priority of new tasks (default: priority start).",
}
