from datetime import datetime
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.executors.pool import ThreadPoolExecutor
from apscheduler.jobstores.base import JobLookupError
from apscheduler.triggers.interval import IntervalTrigger
from dateutil.tz import gettz
from taskbrain import conf
from taskbrain.core.log.logging_service import get_logger
from taskbrain.domain.models.dtos import SchedulerStatus

logger = get_logger(__name__)

def build_scheduler() -> AsyncIOScheduler:
    executors = {
        "default": ThreadPoolExecutor(max_workers=conf.SCHEDULER_MAX_WORKERS),
    }
    job_defaults = {"coalesce": True, "max_instances": 1}

    tz = gettz(conf.DEFAULT_TZ)
    sched = AsyncIOScheduler(
        executors=executors,
        job_defaults=job_defaults,
        timezone=tz,
    )
    return sched

def register_recurring_job(scheduler, service, interval_seconds: int = None, run_now: bool = False):
    """
    Run ``service.process_due_tasks`` on a fixed interval, replacing any earlier job.

    With ``run_now`` the first run fires immediately on the scheduler's executor
    instead of waiting one full interval.
    """
    interval_seconds = interval_seconds or conf.SCHEDULER_INTERVAL_SECONDS
    remove_job_if_exists(scheduler, conf.RECURRING_TASK_JOB_ID)
    extra = {"next_run_time": datetime.now(gettz(conf.DEFAULT_TZ))} if run_now else {}
    job = scheduler.add_job(
        func=service.process_due_tasks,
        trigger=IntervalTrigger(seconds=interval_seconds),
        id=conf.RECURRING_TASK_JOB_ID,
        replace_existing=True,
        misfire_grace_time=interval_seconds,
        **extra,
    )
    logger.info(f"Recurring task job scheduled every {interval_seconds}s")
    return job

def remove_job_if_exists(scheduler, job_id: str):
    try:
        scheduler.remove_job(job_id)
    except JobLookupError:
        pass

def scheduler_status(scheduler) -> SchedulerStatus:
    running = bool(scheduler and scheduler.running)
    job = scheduler.get_job(conf.RECURRING_TASK_JOB_ID) if scheduler else None
    next_run_time = getattr(job, "next_run_time", None) if job else None
    return SchedulerStatus(
        running=running,
        next_run_time=next_run_time,
        message="Scheduler is running" if running else "Scheduler is stopped",
    )
