"""Effort to duration conversion."""

import math

from ..models.task import Task

HOURS_PER_DAY = 8
DEFAULT_DAILY_HOURS = 4


def task_duration_days(task: Task, hours_per_day: float = HOURS_PER_DAY) -> int:
    """Whole-day scheduling duration of a task.

    ``ceil(estimated_hours / hours_per_day)``, at least one day for any
    positive estimate. Tasks without an estimate take no scheduling time.
    """
    hours = task.estimated_hours
    if not hours or hours <= 0 or hours_per_day <= 0:
        return 0
    return max(1, math.ceil(hours / hours_per_day))


def daily_hours(task: Task, span_days: int, default_daily_hours: float = DEFAULT_DAILY_HOURS) -> float:
    """Hours a task claims on each day of its ``span_days`` long interval.

    Tasks without an estimate (missing or zero) claim the placeholder.
    """
    if not task.estimated_hours:
        return default_daily_hours
    return task.estimated_hours / max(span_days, 1)
