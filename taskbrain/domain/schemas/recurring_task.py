from datetime import datetime, timezone
from sqlalchemy import (
    Column, String, Boolean, Date, DateTime, Enum, ForeignKey, Text, UniqueConstraint
)
import uuid
from taskbrain.domain.schemas.database import Base
from taskbrain.domain.models.enums.frequency import DbFrequency, TaskStatus


def _uuid() -> str:
    return str(uuid.uuid4())


def _now() -> datetime:
    return datetime.now(timezone.utc)


class RecurringTaskDB(Base):
    """A client task that repeats, e.g. 'MVA-melding' every second month."""
    __tablename__ = "recurring_tasks"

    id = Column(String, primary_key=True, default=_uuid, unique=True, nullable=False)
    client_name = Column(String, nullable=False)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    assigned_to = Column(String, nullable=True)
    enabled = Column(Boolean, default=True)

    # Recurrence: the label as typed, and what it was normalized to
    frequency_label = Column(String, nullable=False)  # e.g. "2 vær mnd"
    frequency = Column(Enum(DbFrequency, native_enum=False, length=16), nullable=False)
    start_date = Column(Date, nullable=False)
    next_due_date = Column(Date, nullable=False)

    # Tracking
    last_generated_at = Column(DateTime(timezone=True), nullable=True)

    # Timestamps
    created_at = Column(DateTime(timezone=True), default=_now)
    updated_at = Column(DateTime(timezone=True), default=_now, onupdate=_now)


class TaskDB(Base):
    """One concrete task generated from a recurring template."""
    __tablename__ = "tasks"
    __table_args__ = (
        UniqueConstraint("recurring_task_id", "due_date", name="uq_tasks_recurring_due"),
    )

    id = Column(String, primary_key=True, default=_uuid, unique=True, nullable=False)
    recurring_task_id = Column(
        String, ForeignKey("recurring_tasks.id", ondelete="SET NULL"), nullable=True
    )
    client_name = Column(String, nullable=False)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    assigned_to = Column(String, nullable=True)
    priority = Column(String, default="medium")
    status = Column(String, default=TaskStatus.pending.value)
    due_date = Column(Date, nullable=False)
    completed_at = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), default=_now)
