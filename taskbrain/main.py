# main.py
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from taskbrain.domain.schemas.database import Base, engine
from taskbrain.core.recurring_task_service import RecurringTaskService
from taskbrain.infrastructure.scheduler.scheduler_service import build_scheduler, register_recurring_job
from taskbrain.api import frequency, recurring_task

app = FastAPI(title="Recurring Task API", version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"], allow_credentials=True, allow_methods=["*"], allow_headers=["*"],
)

# Keep a reference on the app state
app.state.scheduler = None

@app.on_event("startup")
async def on_startup():
    # DB init
    Base.metadata.create_all(bind=engine)

    # Scheduler init
    sched = build_scheduler()
    sched.start()
    app.state.scheduler = sched

    # First run fires right away, then keeps checking on an interval
    register_recurring_job(sched, RecurringTaskService(), run_now=True)


@app.on_event("shutdown")
async def on_shutdown():
    sched = getattr(app.state, "scheduler", None)
    if sched:
        sched.shutdown(wait=False)


app.include_router(frequency.router)
app.include_router(recurring_task.router)
