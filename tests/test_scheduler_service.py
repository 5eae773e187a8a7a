"""Tests for scheduler wiring."""

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from taskbrain import conf
from taskbrain.infrastructure.scheduler.scheduler_service import (
    build_scheduler,
    register_recurring_job,
    remove_job_if_exists,
    scheduler_status,
)


class StubService:
    def __init__(self):
        self.calls = 0

    def process_due_tasks(self):
        self.calls += 1


class TestScheduler:
    def test_build_scheduler(self):
        sched = build_scheduler()

        assert isinstance(sched, AsyncIOScheduler)
        assert sched.running is False

    def test_register_recurring_job(self):
        sched = build_scheduler()
        service = StubService()

        register_recurring_job(sched, service, interval_seconds=30)

        job = sched.get_job(conf.RECURRING_TASK_JOB_ID)
        assert job is not None
        assert isinstance(job.trigger, IntervalTrigger)
        assert job.trigger.interval.total_seconds() == 30
        assert job.func == service.process_due_tasks

    def test_register_twice_keeps_one_job(self):
        sched = build_scheduler()
        service = StubService()

        register_recurring_job(sched, service)
        register_recurring_job(sched, service)

        assert len(sched.get_jobs()) == 1

    def test_remove_missing_job_is_noop(self):
        sched = build_scheduler()

        remove_job_if_exists(sched, "missing")

        assert sched.get_jobs() == []

    def test_status_of_stopped_scheduler(self):
        sched = build_scheduler()

        status = scheduler_status(sched)

        assert status.running is False
        assert status.message == "Scheduler is stopped"

    def test_status_without_scheduler(self):
        status = scheduler_status(None)

        assert status.running is False
        assert status.next_run_time is None

    def test_run_now_schedules_immediate_first_run(self):
        sched = build_scheduler()

        register_recurring_job(sched, StubService(), run_now=True)

        job = sched.get_job(conf.RECURRING_TASK_JOB_ID)
        assert job.next_run_time is not None
        assert scheduler_status(sched).next_run_time == job.next_run_time

    def test_without_run_now_first_run_waits_for_trigger(self):
        sched = build_scheduler()

        register_recurring_job(sched, StubService())

        job = sched.get_job(conf.RECURRING_TASK_JOB_ID)
        assert getattr(job, "next_run_time", None) is None
