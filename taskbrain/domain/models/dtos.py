from datetime import date, datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from taskbrain.domain.models.enums.frequency import DbFrequency, DueStatus, Frequency, TaskStatus


def _require_label(value: Optional[str]) -> Optional[str]:
    if value is not None and not value.strip():
        raise ValueError("Frequency label must not be empty")
    return value


class RecurringTaskBase(BaseModel):
    client_name: str = Field(..., examples=["Fjordkraft Regnskap AS"])
    title: str = Field(..., examples=["MVA-melding"])
    description: Optional[str] = None
    assigned_to: Optional[str] = None
    enabled: bool = True
    frequency_label: str = Field(
        ..., examples=["2 vær mnd"], description="Frequency as typed, Norwegian or English"
    )
    start_date: date

    @field_validator("frequency_label")
    @classmethod
    def validate_label(cls, value):
        return _require_label(value)


class RecurringTaskCreate(RecurringTaskBase):
    pass


class RecurringTaskUpdate(BaseModel):
    client_name: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    assigned_to: Optional[str] = None
    enabled: Optional[bool] = None
    frequency_label: Optional[str] = None
    start_date: Optional[date] = None

    # Omitting a field leaves it alone; an explicit null cannot clear a required column
    @field_validator("client_name", "title", "enabled", "frequency_label", "start_date")
    @classmethod
    def reject_null(cls, value, info):
        if value is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return value

    @field_validator("frequency_label")
    @classmethod
    def validate_label(cls, value):
        return _require_label(value)


class RecurringTaskOut(RecurringTaskBase):
    model_config = ConfigDict(from_attributes=True)

    id: str
    frequency: DbFrequency
    next_due_date: date
    last_generated_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class RecurringTaskOverview(BaseModel):
    id: str
    client_name: str
    title: str
    frequency: Frequency
    frequency_label: str
    next_due_date: date
    status: DueStatus
    due_this_month: bool


class TaskOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    recurring_task_id: Optional[str] = None
    client_name: str
    title: str
    description: Optional[str] = None
    assigned_to: Optional[str] = None
    priority: str
    status: TaskStatus
    due_date: date
    completed_at: Optional[datetime] = None
    created_at: datetime


class NormalizeRequest(BaseModel):
    label: str = Field(..., examples=["Annenhver måned"])


class NormalizeResponse(BaseModel):
    label: str
    frequency: Frequency
    db_value: DbFrequency


class NextOccurrenceRequest(BaseModel):
    frequency: str = Field(..., examples=["monthly", "kvartalsvis"])
    start_date: str = Field(..., examples=["2024-01-15"])
    from_date: Optional[str] = Field(None, examples=["2024-03-01"])


class NextOccurrenceResponse(BaseModel):
    frequency: Frequency
    next_occurrence: date


class SchedulerStatus(BaseModel):
    running: bool
    next_run_time: Optional[datetime] = None
    message: str
