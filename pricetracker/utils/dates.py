"""Datetime helpers."""

from __future__ import annotations

import os

import pendulum

DEFAULT_TZ = "UTC"


def timezone_name() -> str:
    return os.environ.get("TIMEZONE", DEFAULT_TZ)


def utc_now() -> pendulum.DateTime:
    return pendulum.now("UTC")


def iso_timestamp(value: pendulum.DateTime) -> str:
    """Format as UTC ISO-8601 with milliseconds, e.g. ``2024-05-01T12:00:00.000Z``."""
    return value.in_timezone("UTC").format("YYYY-MM-DD[T]HH:mm:ss.SSS[Z]")


def iso_timestamp_now() -> str:
    return iso_timestamp(utc_now())


def epoch_millis(value: pendulum.DateTime) -> int:
    return int(value.timestamp() * 1000)
