"""Defaults shared across the lifecycle, store and CLI modules."""

# Status defaults
DEFAULT_STATUS_COLOR = "#6b7280"
COMPLETED_STATUS = "Completed"

# Deletion policies
POLICY_REASSIGN_TASKS = "reassign_tasks"
POLICY_DELETE_TASKS = "delete_tasks"

# Activity log
ACTION_STATUS_CHANGED = "status_changed"

# Data directory layout
DATA_DIR_ENV_VAR = "STATUSFLOW_DATA_DIR"
COMPLETED_STATUS_ENV_VAR = "STATUSFLOW_COMPLETED_STATUS"
DEFAULT_DATA_DIR_NAME = ".statusflow"
STATUSES_FILE = "statuses.jsonl"
TRANSITIONS_FILE = "transitions.jsonl"
TASKS_FILE = "tasks.jsonl"
ACTIVITY_FILE = "activity.jsonl"
LOCK_FILE = ".lock"
