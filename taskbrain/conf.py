import os

DEFAULT_TZ = os.getenv(
    "DEFAULT_TZ", "Europe/Oslo"
)

DATABASE_URL = os.getenv(
    "DATABASE_URL", "sqlite:///./taskbrain.db"
)

POOL_SIZE = int(os.getenv("DB_POOL_SIZE", 10))
MAX_OVERFLOW = int(os.getenv("DB_MAX_OVERFLOW", 20))
POOL_TIMEOUT = int(os.getenv("DB_POOL_TIMEOUT", 30))
DB_LOG_ENABLED = bool(int(os.getenv("BACKEND_DB_LOG", 0)))

# How often the recurring task job looks for due templates
SCHEDULER_INTERVAL_SECONDS = int(os.getenv("SCHEDULER_INTERVAL_SECONDS", 60))
SCHEDULER_MAX_WORKERS = int(os.getenv("SCHEDULER_MAX_WORKERS", 10))
RECURRING_TASK_JOB_ID = "recurring-tasks"
