"""Planned versus actual date reconciliation and delay breakdown."""

import logging
import math
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

from ..models.results import (
    DelayAnalysis,
    DelayBreakdown,
    DelayFactor,
    OverdueTask,
    ProjectStatus,
)
from ..models.task import Project, Task, TaskPriority
from ..utils.config import get_default_config
from ..utils.datetime_utils import days_between, to_datetime

logger = logging.getLogger(__name__)

# Stable tie-break when several factors share the maximum
DOMINANT_FACTOR_ORDER = [
    DelayFactor.SCHEDULE,
    DelayFactor.PROGRESS,
    DelayFactor.OVERDUE,
    DelayFactor.TASKS,
]


def reconcile_dates(
    project: Project,
    tasks: List[Task],
    now: datetime,
    config: Optional[Dict[str, Any]] = None,
) -> DelayAnalysis:
    """Compare a project's planned dates with the dates implied by its tasks.

    The reported delay is the worst of four independent estimates (task
    dates, elapsed schedule, progress rate, overdue tasks). Factors are
    computed regardless of the final status classification.
    """
    delay_config = (config or get_default_config()).get('delay', {})
    now = to_datetime(now)

    dated_tasks = [task for task in tasks if task.has_dates]
    undated_task_ids = [task.task_id for task in tasks if not task.has_dates]
    if undated_task_ids:
        logger.warning(f"Project {project.project_id}: {len(undated_task_ids)} tasks without dates excluded from date reconciliation")

    actual_start = min((t.start_date for t in dated_tasks if t.start_date), default=None)
    end_dates = [t.end_date for t in dated_tasks if t.end_date] + [t.completed_at for t in dated_tasks if t.completed_at]
    actual_end = max(end_dates, default=None)

    completion = completion_percent(tasks)
    overdue_tasks = find_overdue_tasks(tasks, now)
    planned_end = project.end_date

    breakdown = calculate_delay_breakdown(
        task_based=task_based_delay(actual_end, planned_end),
        schedule_based=schedule_based_delay(now, planned_end),
        progress_based=progress_based_delay(now, completion, planned_end, actual_start),
        overdue_based=sum(overdue.days_overdue for overdue in overdue_tasks),
    )

    status = classify_status(completion, breakdown.delay_days, actual_end, planned_end)

    estimated_end = planned_end + timedelta(days=breakdown.delay_days) if planned_end else None
    days_remaining = days_between(estimated_end, now) if estimated_end else None

    logger.info(
        f"Project {project.project_id}: delay {breakdown.delay_days} days "
        f"(dominant: {breakdown.dominant_factor.value}), status {status.value}"
    )

    return DelayAnalysis(
        project_id=project.project_id,
        planned_start=project.start_date,
        planned_end=planned_end,
        actual_start=actual_start,
        actual_end=actual_end,
        completion_percent=completion,
        breakdown=breakdown,
        status=status,
        is_delayed=breakdown.delay_days > 0,
        estimated_end_date=estimated_end,
        days_remaining=days_remaining,
        severity=delay_severity(breakdown.delay_days, delay_config.get('severity')),
        overdue_tasks=overdue_tasks,
        attention_task_ids=attention_tasks(
            tasks,
            delay_config.get('attention_priorities', ['HIGH', 'URGENT', 'CRITICAL']),
            delay_config.get('attention_limit', 5),
        ),
        undated_task_ids=undated_task_ids,
    )


def completion_percent(tasks: List[Task]) -> float:
    """Share of completed tasks, 0 for an empty project."""
    if not tasks:
        return 0.0
    completed = sum(1 for task in tasks if task.is_completed)
    return 100.0 * completed / len(tasks)


def task_based_delay(actual_end: Optional[datetime], planned_end: Optional[datetime]) -> int:
    if actual_end is None or planned_end is None:
        return 0
    return max(0, days_between(actual_end, planned_end))


def schedule_based_delay(now: datetime, planned_end: Optional[datetime]) -> int:
    if planned_end is None:
        return 0
    return max(0, days_between(now, planned_end))


def progress_based_delay(
    now: datetime,
    completion: float,
    planned_end: Optional[datetime],
    actual_start: Optional[datetime],
) -> int:
    """Remaining time extrapolated from the observed rate of progress."""
    if completion >= 100 or planned_end is None or actual_start is None:
        return 0
    # No completed work means no observed rate
    if completion <= 0:
        return 0
    elapsed = max(0, days_between(now, actual_start))
    return math.ceil((100 - completion) / max(completion, 1) * elapsed)


def find_overdue_tasks(tasks: List[Task], now: datetime) -> List[OverdueTask]:
    """Incomplete tasks whose end date has passed, with days overdue."""
    overdue = []
    for task in tasks:
        if task.is_completed or task.end_date is None or task.end_date >= now:
            continue
        overdue.append(OverdueTask(task.task_id, task.title, days_between(now, task.end_date)))
    return overdue


def calculate_delay_breakdown(task_based: int, schedule_based: int, progress_based: int, overdue_based: int) -> DelayBreakdown:
    """Combine the four factors; the reported delay is their maximum.

    Overdue days arrive already summed over tasks, so many slightly late
    tasks can outweigh a single very late one.
    """
    factors = {
        DelayFactor.TASKS: task_based,
        DelayFactor.SCHEDULE: schedule_based,
        DelayFactor.PROGRESS: progress_based,
        DelayFactor.OVERDUE: overdue_based,
    }
    delay_days = max(factors.values())
    dominant = next(factor for factor in DOMINANT_FACTOR_ORDER if factors[factor] == delay_days)

    return DelayBreakdown(
        task_based=task_based,
        schedule_based=schedule_based,
        progress_based=progress_based,
        overdue_based=overdue_based,
        dominant_factor=dominant,
        delay_days=delay_days,
    )


def classify_status(
    completion: float,
    delay_days: int,
    actual_end: Optional[datetime],
    planned_end: Optional[datetime],
) -> ProjectStatus:
    if completion >= 100:
        return ProjectStatus.COMPLETED
    if delay_days > 0:
        return ProjectStatus.DELAYED
    if actual_end is not None and planned_end is not None and actual_end < planned_end:
        return ProjectStatus.EARLY
    return ProjectStatus.ON_TIME


def delay_severity(delay_days: int, thresholds: Optional[Dict[str, int]] = None) -> str:
    """Bucket a delay into none/low/medium/high/critical."""
    thresholds = thresholds or {'low': 7, 'medium': 21, 'high': 45}
    if delay_days <= 0:
        return 'none'
    for level in ('low', 'medium', 'high'):
        if delay_days <= thresholds[level]:
            return level
    return 'critical'


def attention_tasks(tasks: List[Task], priorities: List[str], limit: int) -> List[str]:
    """Incomplete high-priority task ids for reporting, in input order."""
    wanted = {TaskPriority.parse(priority) for priority in priorities}
    selected = [task.task_id for task in tasks if not task.is_completed and task.priority in wanted]
    return selected[:limit]
