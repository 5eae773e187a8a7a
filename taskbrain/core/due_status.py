import calendar
from datetime import date
from typing import Union

from taskbrain.core.frequency import DateLike, first_occurrence_on_or_after, to_date
from taskbrain.domain.models.enums.frequency import DueStatus, Frequency


def classify_due(due_date: DateLike, today: date) -> DueStatus:
    due = to_date(due_date, "due_date")
    if due < today:
        return DueStatus.overdue
    if due == today:
        return DueStatus.due_today
    return DueStatus.upcoming


def due_in_month(
    frequency: Union[Frequency, str],
    start_date: DateLike,
    today: date,
) -> bool:
    """
    True when the task has an occurrence in the calendar month of ``today``.

    Occurrences are followed from the start date the same way the generator
    advances a template, so quarterly and bi-monthly tasks keep their phase.
    """
    frequency = Frequency(frequency)
    start = to_date(start_date, "start_date")
    first_of_month = today.replace(day=1)
    last_of_month = today.replace(day=calendar.monthrange(today.year, today.month)[1])

    if start > last_of_month:
        return False
    if frequency is Frequency.once:
        return start >= first_of_month

    occurrence = first_occurrence_on_or_after(frequency, start, first_of_month)
    return occurrence <= last_of_month


def template_status(
    frequency: Union[Frequency, str],
    next_due_date: DateLike,
    today: date,
    generated: bool = False,
) -> DueStatus:
    """Dashboard status of a recurring template; generated one-off tasks expire after their date."""
    status = classify_due(next_due_date, today)
    if Frequency(frequency) is Frequency.once and generated and status is DueStatus.overdue:
        return DueStatus.expired
    return status
