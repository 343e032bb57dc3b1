# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a
local .env file in the working directory). Real environment variables win over
.env values.
"""

ENV_VARS = {
    # App / logging
    "TODO_APP_NAME": "App display name (default: todo).",
    "TODO_LOG_LEVEL": "Console logging level on stderr (default: WARNING).",
    "TODO_LOG_DIR": "Directory for a full debug log file todo.log (default: unset, no file log).",
    # Paths
    "TODO_DB_PATH": "SQLite database file (default: ~/.todo.db).",
    # Output
    "NO_COLOR": "Any non-empty value disables colored output (https://no-color.org).",
}
