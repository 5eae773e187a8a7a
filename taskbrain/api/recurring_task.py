from fastapi import APIRouter, Depends, Request
from taskbrain.domain.models.dtos import (
    RecurringTaskCreate,
    RecurringTaskUpdate,
    RecurringTaskOut,
    RecurringTaskOverview,
    SchedulerStatus,
    TaskOut,
)
from taskbrain.core.recurring_task_service import RecurringTaskService
from taskbrain.infrastructure.scheduler.scheduler_service import scheduler_status
from typing import List

router = APIRouter(prefix="/recurring-tasks", tags=["Recurring tasks"])


def get_service() -> RecurringTaskService:
    return RecurringTaskService()

def get_scheduler(request: Request):
    return getattr(request.app.state, "scheduler", None)

@router.post("", response_model=RecurringTaskOut, status_code=201)
def create_recurring_task(body: RecurringTaskCreate, service: RecurringTaskService = Depends(get_service)):
    return service.create(body)

@router.get("", response_model=List[RecurringTaskOut])
def list_recurring_tasks(service: RecurringTaskService = Depends(get_service)):
    return service.list()

@router.get("/overview", response_model=List[RecurringTaskOverview])
def recurring_task_overview(service: RecurringTaskService = Depends(get_service)):
    return service.overview()

@router.get("/scheduler/status", response_model=SchedulerStatus)
def get_scheduler_status(scheduler=Depends(get_scheduler)):
    return scheduler_status(scheduler)

@router.post("/scheduler/trigger", response_model=List[TaskOut])
def trigger_scheduler(service: RecurringTaskService = Depends(get_service)):
    """Run the generation job now instead of waiting for the next interval."""
    return service.process_due_tasks()

@router.post("/tasks/{task_id}/complete", response_model=TaskOut)
def complete_task(task_id: str, service: RecurringTaskService = Depends(get_service)):
    return service.complete_instance(task_id)

@router.get("/{id}", response_model=RecurringTaskOut)
def get_recurring_task(id: str, service: RecurringTaskService = Depends(get_service)):
    return service.get(id)

@router.patch("/{id}", response_model=RecurringTaskOut)
def update_recurring_task(id: str, body: RecurringTaskUpdate, service: RecurringTaskService = Depends(get_service)):
    return service.update(id, body)

@router.delete("/{id}")
def delete_recurring_task(id: str, service: RecurringTaskService = Depends(get_service)):
    service.delete(id)
    return {"ok": True}

@router.get("/{id}/instances", response_model=List[TaskOut])
def list_task_instances(id: str, service: RecurringTaskService = Depends(get_service)):
    return service.list_instances(id)
