from datetime import date
from typing import List, Optional
from taskbrain.domain.schemas.recurring_task import RecurringTaskDB, TaskDB
from taskbrain.domain.schemas.database import SessionLocal

class RecurringTaskRepository:
    def __init__(self, session_factory=SessionLocal):
        self.session_factory = session_factory

    def create(self, t: RecurringTaskDB) -> RecurringTaskDB:
        with self.session_factory() as db:
            db.add(t)
            db.commit()
            db.refresh(t)
            return t

    def list(self) -> List[RecurringTaskDB]:
        with self.session_factory() as db:
            return (
                db.query(RecurringTaskDB)
                .order_by(RecurringTaskDB.next_due_date, RecurringTaskDB.title)
                .all()
            )

    def list_due(self, on: date) -> List[RecurringTaskDB]:
        with self.session_factory() as db:
            return (
                db.query(RecurringTaskDB)
                .filter(RecurringTaskDB.enabled.is_(True))
                .filter(RecurringTaskDB.next_due_date <= on)
                .order_by(RecurringTaskDB.next_due_date)
                .all()
            )

    def get(self, id_: str) -> Optional[RecurringTaskDB]:
        with self.session_factory() as db:
            return db.get(RecurringTaskDB, id_)

    def update(self, t: RecurringTaskDB) -> RecurringTaskDB:
        with self.session_factory() as db:
            merged = db.merge(t)
            db.commit()
            db.refresh(merged)
            return merged

    def delete(self, t: RecurringTaskDB) -> None:
        with self.session_factory() as db:
            # Generated tasks outlive their template
            db.query(TaskDB).filter(TaskDB.recurring_task_id == t.id).update(
                {TaskDB.recurring_task_id: None}, synchronize_session=False
            )
            db.delete(db.merge(t))
            db.commit()


class TaskRepository:
    def __init__(self, session_factory=SessionLocal):
        self.session_factory = session_factory

    def create(self, t: TaskDB) -> TaskDB:
        with self.session_factory() as db:
            db.add(t)
            db.commit()
            db.refresh(t)
            return t

    def get(self, id_: str) -> Optional[TaskDB]:
        with self.session_factory() as db:
            return db.get(TaskDB, id_)

    def find(self, recurring_task_id: str, due_date: date) -> Optional[TaskDB]:
        with self.session_factory() as db:
            return (
                db.query(TaskDB)
                .filter(TaskDB.recurring_task_id == recurring_task_id)
                .filter(TaskDB.due_date == due_date)
                .first()
            )

    def list_for(self, recurring_task_id: str) -> List[TaskDB]:
        with self.session_factory() as db:
            return (
                db.query(TaskDB)
                .filter(TaskDB.recurring_task_id == recurring_task_id)
                .order_by(TaskDB.due_date.desc())
                .all()
            )

    def update(self, t: TaskDB) -> TaskDB:
        with self.session_factory() as db:
            merged = db.merge(t)
            db.commit()
            db.refresh(merged)
            return merged
