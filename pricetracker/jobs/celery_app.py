"""Celery configuration for scheduled price updates."""

from __future__ import annotations

import os

from celery import Celery
from celery.schedules import crontab

from pricetracker.utils.dates import timezone_name

broker_url = os.environ.get("REDIS_URL", "redis://redis:6379/0")
backend_url = os.environ.get("REDIS_URL", "redis://redis:6379/0")

celery_app = Celery("pricetracker", broker=broker_url, backend=backend_url, include=["pricetracker.jobs.update"])
celery_app.conf.timezone = timezone_name()
celery_app.conf.beat_schedule = {
    "update-prices": {
        "task": "pricetracker.jobs.update.run_update",
        "schedule": crontab(minute=os.environ.get("UPDATE_CRON_MINUTE", "0"), hour=os.environ.get("UPDATE_CRON_HOUR", "*")),
    },
}
# One update at a time; overlapping runs would share the database directory.
celery_app.conf.worker_concurrency = 1


@celery_app.task(name="pricetracker.jobs.update.run_update")
def run_update_task():  # pragma: no cover - executed by worker
    import asyncio

    from dotenv import load_dotenv

    from pricetracker.jobs.update import run_update

    load_dotenv()
    stats = asyncio.run(run_update())
    return stats.to_dict()
