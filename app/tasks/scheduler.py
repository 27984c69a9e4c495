# app/tasks/scheduler.py
from __future__ import annotations

import atexit
import os

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger

from app.tasks.pipelines import run_late_borrow_notifications, run_reservation_lifecycle

LATE_BORROWS_JOB_ID = "late_borrows_job"
RESERVATIONS_JOB_ID = "reservation_lifecycle_job"


def _today(app):
    return app.extensions["batch_clock"]()


def make_jobs(app):
    """
    Zero-argument entry points bound to the app's gateway, notifier and clock.
    Both run inside the app context; a GatewayError propagates to the caller.
    """

    def late_borrows():
        with app.app_context():
            return run_late_borrow_notifications(
                app.extensions["record_gateway"],
                app.extensions["notifier"],
                _today(app),
            )

    def reservation_lifecycle():
        with app.app_context():
            return run_reservation_lifecycle(
                app.extensions["record_gateway"],
                app.extensions["notifier"],
                _today(app),
            )

    return {
        LATE_BORROWS_JOB_ID: (late_borrows, app.config["BATCH_LATE_BORROWS_CRON"]),
        RESERVATIONS_JOB_ID: (reservation_lifecycle, app.config["BATCH_RESERVATIONS_CRON"]),
    }


def build_scheduler(app) -> BackgroundScheduler:
    timezone = app.config.get("SCHEDULER_TIMEZONE", "UTC")
    scheduler = BackgroundScheduler(timezone=timezone)

    for job_id, (func, cron) in make_jobs(app).items():

        def _job_wrapper(func=func, job_id=job_id):
            try:
                func()
            except Exception as ex:
                # next tick retries from a fresh fetch
                app.logger.exception(f"[scheduler] {job_id} error: {ex}")

        scheduler.add_job(
            func=_job_wrapper,
            trigger=CronTrigger.from_crontab(cron, timezone=timezone),
            id=job_id,
            name=job_id,
            replace_existing=True,
            max_instances=1,        # same job never overlaps itself
            coalesce=True,          # missed ticks collapse into one run
            misfire_grace_time=300,
        )
        app.logger.info(f"[scheduler] {job_id} registered ({cron}).")

    return scheduler


def start_scheduler(app):
    """
    - Skipped when SCHEDULER_ENABLED is off (tests, one-off commands).
    - Debug reloader runs two processes; only the real one schedules.
    """
    if not app.config.get("SCHEDULER_ENABLED", True):
        app.logger.info("[scheduler] Disabled by config.")
        return None

    if app.debug and os.environ.get("WERKZEUG_RUN_MAIN") != "true":
        app.logger.info("[scheduler] Debug reloader secondary process: scheduler skipped.")
        return None

    scheduler = build_scheduler(app)
    scheduler.start()
    app.extensions["apscheduler"] = scheduler
    atexit.register(shutdown_scheduler, app)
    app.logger.info("[scheduler] Batch jobs started.")
    return scheduler


def shutdown_scheduler(app):
    sch = app.extensions.get("apscheduler")
    if sch and getattr(sch, "running", False):
        sch.shutdown(wait=False)
        app.logger.info("[scheduler] Scheduler shutdown.")
