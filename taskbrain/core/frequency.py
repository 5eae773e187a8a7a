"""
Recurrence helpers for client tasks.

Frequencies arrive as free text (Norwegian or English, sometimes misspelled,
sometimes imported from old spreadsheets) and are reduced to a canonical
``Frequency`` before anything is stored. ``next_occurrence`` then turns a
canonical frequency plus a start date into the next due date.
"""
import re
import unicodedata
from datetime import date, datetime, timedelta
from types import MappingProxyType
from typing import Optional, Union

from dateutil.parser import isoparse
from dateutil.relativedelta import relativedelta
from dateutil.tz import gettz

from taskbrain import conf
from taskbrain.core.log.logging_service import get_logger
from taskbrain.domain.models.enums.frequency import DbFrequency, Frequency

logger = get_logger(__name__)

DateLike = Union[date, datetime, str]


class InvalidDateError(ValueError):
    """Raised when a start or reference date cannot be read as a calendar date."""


class DateOutOfRangeError(InvalidDateError):
    """Raised when an occurrence would fall outside the supported calendar (after year 9999)."""


# Norwegian labels, including spellings found in imported client data
NB_TO_EN = MappingProxyType({
    "daglig": Frequency.daily,
    "ukentlig": Frequency.weekly,
    "månedlig": Frequency.monthly,
    "maanedlig": Frequency.monthly,
    "mnd": Frequency.monthly,
    "annenhver måned": Frequency.bi_monthly,
    "annenhver mnd": Frequency.bi_monthly,
    "2 hver mnd": Frequency.bi_monthly,
    "2 vær mnd": Frequency.bi_monthly,
    "kvartalsvis": Frequency.quarterly,
    "årlig": Frequency.yearly,
    "aarlig": Frequency.yearly,
    "engangs": Frequency.once,
    "engang": Frequency.once,
    "spesifikk dato": Frequency.once,
    "bestemt dato": Frequency.once,
    "løpende": Frequency.daily,  # ongoing bookkeeping is followed up daily
})

EN_ALIAS = MappingProxyType({
    "daily": Frequency.daily,
    "day": Frequency.daily,
    "weekly": Frequency.weekly,
    "week": Frequency.weekly,
    "monthly": Frequency.monthly,
    "month": Frequency.monthly,
    "bi-monthly": Frequency.bi_monthly,
    "bimonthly": Frequency.bi_monthly,
    "quarterly": Frequency.quarterly,
    "yearly": Frequency.yearly,
    "annual": Frequency.yearly,
    "once": Frequency.once,
    "specific_date": Frequency.once,  # legacy name
})

_BI_MONTHLY_HINT = re.compile(r"(2|annenhver).*(mån|mnd)")

DB_TO_FREQUENCY = MappingProxyType({
    DbFrequency.DAILY: Frequency.daily,
    DbFrequency.WEEKLY: Frequency.weekly,
    DbFrequency.MONTHLY: Frequency.monthly,
    DbFrequency.BI_MONTHLY: Frequency.bi_monthly,
    DbFrequency.QUARTERLY: Frequency.quarterly,
    DbFrequency.YEARLY: Frequency.yearly,
    DbFrequency.ONCE: Frequency.once,
})

FREQUENCY_TO_DB = MappingProxyType({v: k for k, v in DB_TO_FREQUENCY.items()})


def normalize_frequency(label: Optional[str]) -> Frequency:
    """
    Map any frequency label to a canonical ``Frequency``.

    Never raises: labels that match nothing fall back to monthly, which does
    less damage than guessing a shorter period for an unknown term.
    """
    key = unicodedata.normalize("NFC", str(label) if label else "").strip().lower()

    if key in NB_TO_EN:
        return NB_TO_EN[key]

    if key in EN_ALIAS:
        return EN_ALIAS[key]

    # "annenhver måned" and friends in their many spellings
    if _BI_MONTHLY_HINT.search(key):
        return Frequency.bi_monthly

    logger.warning(f"Unknown frequency label {label!r}, defaulting to monthly")
    return Frequency.monthly


def to_db_frequency(label: Optional[str]) -> DbFrequency:
    return FREQUENCY_TO_DB[normalize_frequency(label)]


def from_db_frequency(value: Union[DbFrequency, str]) -> Frequency:
    try:
        return DB_TO_FREQUENCY[DbFrequency(value)]
    except ValueError:
        # Rows written before the column was an enum hold free text
        return normalize_frequency(value)


def today() -> date:
    """Current calendar date in the firm's timezone."""
    return datetime.now(gettz(conf.DEFAULT_TZ)).date()


def to_date(value: Optional[DateLike], name: str = "date") -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return isoparse(value.strip()).date()
        except (ValueError, OverflowError) as e:
            raise InvalidDateError(f"Invalid {name}: {value!r}") from e
    raise InvalidDateError(f"Invalid {name}: {value!r}")


def rolled_date(year: int, month: int, day: int) -> date:
    """
    Build a date letting overflow spill forward, so day 31 of a 30-day month
    is the 1st of the next one and February 31 lands in early March.
    ``month`` may be outside 1..12.
    """
    try:
        first_of_month = date(year, 1, 1) + relativedelta(months=month - 1)
        return first_of_month + timedelta(days=day - 1)
    except (ValueError, OverflowError) as e:
        raise DateOutOfRangeError(f"No calendar date for {year}-{month}-{day}") from e


def add_months(d: date, months: int) -> date:
    return rolled_date(d.year, d.month + months, d.day)


def next_occurrence(
    frequency: Union[Frequency, str],
    start_date: DateLike,
    from_date: Optional[DateLike] = None,
) -> date:
    """
    Compute the next due date of a recurring task.

    Args:
        frequency: Canonical frequency (or its value, e.g. "bi-monthly").
        start_date: First date the task is valid; it anchors the weekday,
            day of month and month-and-day of every later occurrence.
        from_date: Reference date, defaults to today. The result is strictly
            after it, except for one-off tasks and tasks that have not started.

    Returns:
        date: The next occurrence. For ``once`` this is always ``start_date``,
        even when it is already in the past; callers decide about expiry.

    Raises:
        InvalidDateError: If either date cannot be read.
        DateOutOfRangeError: If the occurrence falls after year 9999.
    """
    start = to_date(start_date, "start_date")
    reference = today() if from_date is None else to_date(from_date, "from_date")

    try:
        frequency = Frequency(frequency)
    except ValueError:
        logger.warning(f"next_occurrence called with unknown frequency {frequency!r}")
        return reference

    if frequency is Frequency.once:
        return start

    # Not started yet: the anchor itself is the first occurrence
    if start > reference:
        return start

    try:
        return _recurring_occurrence(frequency, start, reference)
    except OverflowError as e:
        raise DateOutOfRangeError(f"No {frequency.value} occurrence after {reference}") from e


def _recurring_occurrence(frequency: Frequency, start: date, reference: date) -> date:
    if frequency is Frequency.daily:
        return reference + timedelta(days=1)

    if frequency is Frequency.weekly:
        candidate = reference + timedelta(days=1)
        return candidate + timedelta(days=(start.weekday() - candidate.weekday()) % 7)

    if frequency is Frequency.yearly:
        candidate = rolled_date(reference.year, start.month, start.day)
        if candidate <= reference:
            candidate = rolled_date(candidate.year + 1, candidate.month, candidate.day)
        return candidate

    step = {
        Frequency.monthly: 1,
        Frequency.bi_monthly: 2,
        Frequency.quarterly: 3,
    }[frequency]
    candidate = rolled_date(reference.year, reference.month, start.day)
    while candidate <= reference:
        candidate = add_months(candidate, step)
    return candidate


def first_occurrence_on_or_after(
    frequency: Union[Frequency, str],
    start_date: DateLike,
    on: DateLike,
) -> date:
    """
    First date of the series ``start_date, next_occurrence(f, start, start), ...``
    that is on or after ``on``.

    This is the series the task generator walks, so a template created or
    restarted late gets the same due dates it would have had from the start.
    A one-off task returns ``start_date`` whatever ``on`` is.
    """
    frequency = Frequency(frequency)
    start = to_date(start_date, "start_date")
    target = to_date(on, "on")

    if frequency is Frequency.once or start >= target:
        return start

    # Daily and weekly series are plain arithmetic from the start, no need to walk
    if frequency in (Frequency.daily, Frequency.weekly):
        return next_occurrence(frequency, start, target - timedelta(days=1))

    occurrence = start
    while occurrence < target:
        occurrence = next_occurrence(frequency, start, occurrence)
    return occurrence
