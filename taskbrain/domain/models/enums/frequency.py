from enum import Enum

class Frequency(str, Enum):
    daily = "daily"
    weekly = "weekly"          # same weekday as the start date
    monthly = "monthly"        # same day every month
    bi_monthly = "bi-monthly"  # same day every second month
    quarterly = "quarterly"    # same day every third month
    yearly = "yearly"          # same month & day every year
    once = "once"


class DbFrequency(str, Enum):
    """Stored form of a frequency (column values in the recurring_tasks table)."""
    DAILY = "DAILY"
    WEEKLY = "WEEKLY"
    MONTHLY = "MONTHLY"
    BI_MONTHLY = "BI_MONTHLY"
    QUARTERLY = "QUARTERLY"
    YEARLY = "YEARLY"
    ONCE = "ONCE"


class DueStatus(str, Enum):
    overdue = "overdue"
    due_today = "due_today"
    upcoming = "upcoming"
    expired = "expired"      # a one-off task that already produced its instance


class TaskStatus(str, Enum):
    pending = "pending"
    done = "done"
