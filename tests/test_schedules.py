from celery.schedules import crontab

from pricetracker.jobs.celery_app import celery_app


def test_update_prices_is_scheduled_hourly():
    entry = celery_app.conf.beat_schedule["update-prices"]
    assert entry["task"] == "pricetracker.jobs.update.run_update"
    assert entry["schedule"] == crontab(minute="0", hour="*")


def test_update_task_is_registered():
    assert "pricetracker.jobs.update.run_update" in celery_app.tasks
