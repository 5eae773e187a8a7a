from __future__ import annotations

from datetime import date, datetime, timezone
from typing import List, Optional

from fastapi import HTTPException

from taskbrain.domain.schemas.recurring_task import RecurringTaskDB, TaskDB
from taskbrain.domain.models.dtos import (
    RecurringTaskCreate,
    RecurringTaskUpdate,
    RecurringTaskOut,
    RecurringTaskOverview,
    TaskOut,
)
from taskbrain.domain.models.enums.frequency import Frequency, TaskStatus

from taskbrain.core.log.logging_service import get_logger
logger = get_logger(__name__)
from taskbrain.core.frequency import (
    first_occurrence_on_or_after,
    from_db_frequency,
    next_occurrence,
    to_db_frequency,
    today as current_date,
)
from taskbrain.core.due_status import due_in_month, template_status
from taskbrain.infrastructure.persistence.recurring_task_repository import (
    RecurringTaskRepository,
    TaskRepository,
)

class RecurringTaskService:
    def __init__(
        self,
        repo: Optional[RecurringTaskRepository] = None,
        task_repo: Optional[TaskRepository] = None,
    ):
        self.repo = repo or RecurringTaskRepository()
        self.task_repo = task_repo or TaskRepository()

    def create(self, body: RecurringTaskCreate, on: Optional[date] = None) -> RecurringTaskOut:
        on = on or current_date()
        db_frequency = to_db_frequency(body.frequency_label)
        t = RecurringTaskDB(
            **body.model_dump(),
            frequency=db_frequency,
            next_due_date=self._first_due_date(from_db_frequency(db_frequency), body.start_date, on),
        )
        t = self.repo.create(t)
        logger.info(f"Created recurring task '{t.title}' for {t.client_name}: {t.frequency.value} from {t.next_due_date}")
        return self._to_out(t)

    def list(self) -> List[RecurringTaskOut]:
        return [self._to_out(t) for t in self.repo.list()]

    def get(self, id_: str) -> RecurringTaskOut:
        return self._to_out(self._get_or_404(id_))

    def update(self, id_: str, body: RecurringTaskUpdate, on: Optional[date] = None) -> RecurringTaskOut:
        t = self._get_or_404(id_)

        data = body.model_dump(exclude_unset=True)
        for k, v in data.items():
            setattr(t, k, v)

        # A new label or anchor restarts the schedule
        if "frequency_label" in data or "start_date" in data:
            t.frequency = to_db_frequency(t.frequency_label)
            t.next_due_date = self._first_due_date(
                from_db_frequency(t.frequency), t.start_date, on or current_date()
            )

        t = self.repo.update(t)
        return self._to_out(t)

    def delete(self, id_: str) -> None:
        t = self._get_or_404(id_)
        self.repo.delete(t)

    def overview(self, on: Optional[date] = None) -> List[RecurringTaskOverview]:
        """Dashboard rows: how each template stands relative to ``on``."""
        on = on or current_date()
        rows = []
        for t in self.repo.list():
            frequency = from_db_frequency(t.frequency)
            rows.append(
                RecurringTaskOverview(
                    id=t.id,
                    client_name=t.client_name,
                    title=t.title,
                    frequency=frequency,
                    frequency_label=t.frequency_label,
                    next_due_date=t.next_due_date,
                    status=template_status(frequency, t.next_due_date, on, generated=t.last_generated_at is not None),
                    due_this_month=due_in_month(frequency, t.start_date, on),
                )
            )
        return rows

    def process_due_tasks(self, on: Optional[date] = None) -> List[TaskOut]:
        """
        Generate task instances for every enabled template that is due.

        Each template yields at most one instance per run; a template that is
        several periods behind catches up over the following runs.
        """
        on = on or current_date()
        due = self.repo.list_due(on)
        logger.info(f"Processing {len(due)} due recurring task(s) for {on}")

        created = []
        for t in due:
            try:
                task = self._generate_next_instance(t)
            except Exception:
                logger.exception(f"Failed to generate task for recurring task {t.id} ('{t.title}')")
                continue
            if task is not None:
                created.append(self._to_task_out(task))
        return created

    def list_instances(self, id_: str) -> List[TaskOut]:
        t = self._get_or_404(id_)
        return [self._to_task_out(task) for task in self.task_repo.list_for(t.id)]

    def complete_instance(self, task_id: str) -> TaskOut:
        task = self.task_repo.get(task_id)
        if not task:
            raise HTTPException(status_code=404, detail="Task not found")
        task.status = TaskStatus.done.value
        task.completed_at = datetime.now(timezone.utc)
        return self._to_task_out(self.task_repo.update(task))

    # ---------- Internal methods ----------

    def _get_or_404(self, id_: str) -> RecurringTaskDB:
        t = self.repo.get(id_)
        if not t:
            raise HTTPException(status_code=404, detail="Recurring task not found")
        return t

    @staticmethod
    def _first_due_date(frequency: Frequency, start_date: date, on: date) -> date:
        # Same series the generator advances through, so the dashboard agrees with it
        return first_occurrence_on_or_after(frequency, start_date, on)

    def _generate_next_instance(self, t: RecurringTaskDB) -> Optional[TaskDB]:
        frequency = from_db_frequency(t.frequency)
        due_date = t.next_due_date

        task = None
        if self.task_repo.find(t.id, due_date) is None:
            task = self.task_repo.create(
                TaskDB(
                    recurring_task_id=t.id,
                    client_name=t.client_name,
                    title=t.title,
                    description=t.description or f"Recurring task: {t.title}",
                    assigned_to=t.assigned_to,
                    priority="medium",
                    status=TaskStatus.pending.value,
                    due_date=due_date,
                )
            )
            logger.info(f"Created task '{t.title}' for {t.client_name} due {due_date}")
        else:
            logger.debug(f"Task '{t.title}' due {due_date} already exists, advancing schedule")

        if frequency is Frequency.once:
            t.enabled = False
        else:
            t.next_due_date = next_occurrence(frequency, t.start_date, due_date)
        # When the job ran, for auditing; due dates only ever follow ``on``
        t.last_generated_at = datetime.now(timezone.utc)
        self.repo.update(t)
        return task

    @staticmethod
    def _to_out(t: RecurringTaskDB) -> RecurringTaskOut:
        """Convert database model to output DTO."""
        return RecurringTaskOut.model_validate(t, from_attributes=True)

    @staticmethod
    def _to_task_out(task: TaskDB) -> TaskOut:
        return TaskOut.model_validate(task, from_attributes=True)
