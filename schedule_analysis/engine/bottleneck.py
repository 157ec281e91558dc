"""Bottleneck detection over daily workload samples."""

import logging
from datetime import date
from typing import Any, Dict, List, Optional

from ..models.results import BottleneckDay, PeriodStats, WorkloadSample
from ..models.task import Resource, Task, TaskPriority
from ..utils.config import get_default_config
from ..utils.datetime_utils import DateLike, as_date, date_range
from .workload import WorkloadAggregator

logger = logging.getLogger(__name__)


def detect_project_bottleneck(
    day: DateLike,
    samples: List[WorkloadSample],
    active_task_count: int,
    config: Optional[Dict[str, Any]] = None,
) -> BottleneckDay:
    """Flag a day whose average workload or task density is too high.

    Either condition alone makes the day a bottleneck; ``triggers`` names
    the conditions that fired.
    """
    bottleneck_config = (config or get_default_config()).get('bottleneck', {})
    workload_threshold = bottleneck_config.get('average_workload_percent', 80)
    task_threshold = bottleneck_config.get('max_active_tasks', 5)

    average = average_workload_percent(samples)
    triggers = []
    if average > workload_threshold:
        triggers.append('workload')
    if active_task_count > task_threshold:
        triggers.append('tasks')

    return BottleneckDay(
        day=as_date(day),
        average_workload_percent=average,
        max_workload_percent=max((sample.workload_percent for sample in samples), default=0),
        active_task_count=active_task_count,
        is_bottleneck=bool(triggers),
        triggers=triggers,
        overloaded_resource_ids=detect_resource_bottlenecks(samples),
    )


def detect_resource_bottlenecks(samples: List[WorkloadSample]) -> List[str]:
    """Resources whose own workload exceeds 100%."""
    return [sample.resource_id for sample in samples if sample.workload_percent > 100]


def average_workload_percent(samples: List[WorkloadSample]) -> float:
    if not samples:
        return 0.0
    return sum(sample.workload_percent for sample in samples) / len(samples)


def count_active_tasks(tasks: List[Task], day: DateLike) -> int:
    return sum(1 for task in tasks if task.is_active_on(day))


def is_high_risk_day(day: BottleneckDay, config: Optional[Dict[str, Any]] = None) -> bool:
    """One resource far above capacity, or several overloaded at once."""
    bottleneck_config = (config or get_default_config()).get('bottleneck', {})
    peak_threshold = bottleneck_config.get('high_risk_workload_percent', 120)
    overloaded_limit = bottleneck_config.get('high_risk_overloaded_resources', 1)
    return day.max_workload_percent > peak_threshold or len(day.overloaded_resource_ids) > overloaded_limit


def find_bottleneck_days(
    resources: List[Resource],
    tasks: List[Task],
    start: DateLike,
    end: DateLike,
    config: Optional[Dict[str, Any]] = None,
) -> List[BottleneckDay]:
    """Run the daily bottleneck check for every day in ``[start, end]``."""
    report = WorkloadAggregator(config).aggregate_range(resources, tasks, start, end)

    samples_by_day: Dict[date, List[WorkloadSample]] = {day: [] for day in date_range(start, end)}
    for sample in report.samples:
        samples_by_day[sample.period_start].append(sample)

    days = [
        detect_project_bottleneck(day, samples, count_active_tasks(tasks, day), config)
        for day, samples in samples_by_day.items()
    ]

    flagged = sum(1 for day in days if day.is_bottleneck)
    if flagged:
        logger.info(f"{flagged} bottleneck days between {as_date(start)} and {as_date(end)}")

    return days


def summarize_period(
    days: List[BottleneckDay],
    tasks: List[Task],
    start: DateLike,
    end: DateLike,
    config: Optional[Dict[str, Any]] = None,
) -> PeriodStats:
    """Roll daily checks up into counts for the period.

    The average workload is the mean of the daily averages over every
    calendar day of the period.
    """
    calendar_days = date_range(start, end)
    unique_tasks = {task.task_id for task in tasks for day in calendar_days if task.is_active_on(day)}
    urgent_days = [
        day for day in calendar_days
        if any(task.priority is TaskPriority.URGENT and task.is_active_on(day) for task in tasks)
    ]
    total_workload = sum(day.average_workload_percent for day in days)

    return PeriodStats(
        period_start=as_date(start),
        period_end=as_date(end),
        bottleneck_days=sum(1 for day in days if day.is_bottleneck),
        high_risk_days=sum(1 for day in days if is_high_risk_day(day, config)),
        urgent_task_days=len(urgent_days),
        average_workload_percent=total_workload / len(calendar_days) if calendar_days else 0.0,
        total_tasks=len(unique_tasks),
        average_daily_tasks=len(unique_tasks) / len(calendar_days) if calendar_days else 0.0,
        max_daily_tasks=max((day.active_task_count for day in days), default=0),
    )
