"""Per-resource workload aggregation."""

import logging
import math
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Tuple, Union

from ..models.results import (
    ResourceSummary,
    WorkloadLevel,
    WorkloadReport,
    WorkloadSample,
    WorkloadView,
)
from ..models.task import Resource, Task, TaskStatus
from ..utils.config import get_default_config
from ..utils.datetime_utils import (
    DateLike,
    as_date,
    date_range,
    get_working_days,
    inclusive_day_span,
    month_bounds,
    to_datetime,
    week_bounds,
)
from .duration import DEFAULT_DAILY_HOURS, daily_hours

logger = logging.getLogger(__name__)

ACTIVE_STATUSES = (TaskStatus.TODO, TaskStatus.IN_PROGRESS)


class WorkloadAggregator:
    """Computes allocated versus available hours per resource and bucket."""

    def __init__(self, config: Optional[dict] = None):
        """Initialize aggregator with configuration."""
        self.config = config or get_default_config()
        self.workload_config = self.config.get('workload', {})
        self.default_daily_hours = self.config.get('duration', {}).get('default_daily_hours', DEFAULT_DAILY_HOURS)
        self.levels = self.workload_config.get('levels', {'light': 50, 'normal': 80, 'heavy': 100})

    def aggregate(
        self,
        resources: List[Resource],
        tasks: List[Task],
        reference_date: DateLike,
        view: Union[str, WorkloadView] = WorkloadView.WEEKLY,
    ) -> WorkloadReport:
        """One sample per resource for the bucket containing ``reference_date``."""
        view = WorkloadView.parse(view)
        start, end = period_bounds(reference_date, view)
        scheduled, skipped = self._split_scheduled(tasks)

        samples = [self.sample(resource, scheduled, start, end) for resource in resources]

        logger.debug(f"Aggregated {view.value} workload {start} - {end} for {len(resources)} resources")

        return WorkloadReport(
            view=view,
            period_start=start,
            period_end=end,
            samples=samples,
            skipped_task_ids=skipped,
        )

    def aggregate_range(
        self,
        resources: List[Resource],
        tasks: List[Task],
        start: DateLike,
        end: DateLike,
    ) -> WorkloadReport:
        """Daily samples for every resource and every day in ``[start, end]``."""
        days = date_range(start, end)
        scheduled, skipped = self._split_scheduled(tasks)

        samples = [
            self.sample(resource, scheduled, day, day)
            for resource in resources
            for day in days
        ]

        return WorkloadReport(
            view=WorkloadView.DAILY,
            period_start=days[0] if days else as_date(start),
            period_end=days[-1] if days else as_date(end),
            samples=samples,
            skipped_task_ids=skipped,
        )

    def sample(self, resource: Resource, tasks: List[Task], start: date, end: date) -> WorkloadSample:
        """Workload of one resource summed over the days of ``[start, end]``."""
        days = date_range(start, end)
        assigned = [task for task in tasks if task.is_assigned_to(resource.resource_id) and task.is_scheduled]

        allocated = 0.0
        task_ids = []
        for day in days:
            for task in assigned:
                if not task.is_active_on(day):
                    continue
                span = inclusive_day_span(task.start_date, task.end_date)
                allocated += daily_hours(task, span, self.default_daily_hours)
                if task.task_id not in task_ids:
                    task_ids.append(task.task_id)

        max_hours = resource.max_hours_per_day
        # Calendar days, not working days
        available = max_hours * len(days)
        working_available = max_hours * len(get_working_days(start, end, resource.working_days))
        percent = workload_percent(allocated, available)

        return WorkloadSample(
            resource_id=resource.resource_id,
            period_start=as_date(start),
            period_end=as_date(end),
            hours_allocated=allocated,
            hours_available=available,
            working_hours_available=working_available,
            workload_percent=percent,
            is_overloaded=percent > 100,
            level=classify_workload_level(percent, self.levels),
            task_ids=task_ids,
        )

    def _split_scheduled(self, tasks: List[Task]) -> Tuple[List[Task], List[str]]:
        """Separate tasks with a full date interval from those without one."""
        scheduled = [task for task in tasks if task.is_scheduled]
        skipped = [task.task_id for task in tasks if not task.is_scheduled]
        if skipped:
            logger.debug(f"{len(skipped)} tasks without a start/end date excluded from workload")
        return scheduled, skipped


def aggregate_workload(
    resources: List[Resource],
    tasks: List[Task],
    reference_date: DateLike,
    view: Union[str, WorkloadView] = WorkloadView.WEEKLY,
    config: Optional[Dict[str, Any]] = None,
) -> WorkloadReport:
    """Convenience wrapper around ``WorkloadAggregator.aggregate``."""
    return WorkloadAggregator(config).aggregate(resources, tasks, reference_date, view)


def aggregate_workload_range(
    resources: List[Resource],
    tasks: List[Task],
    start: DateLike,
    end: DateLike,
    config: Optional[Dict[str, Any]] = None,
) -> WorkloadReport:
    return WorkloadAggregator(config).aggregate_range(resources, tasks, start, end)


def workload_percent(hours_allocated: float, hours_available: float) -> int:
    """Rounded (half up) percentage of allocated hours; 0 with no capacity."""
    if not hours_available or hours_available <= 0:
        return 0
    return int(math.floor(100 * hours_allocated / hours_available + 0.5))


def classify_workload_level(percent: int, levels: Optional[Dict[str, int]] = None) -> WorkloadLevel:
    levels = levels or {'light': 50, 'normal': 80, 'heavy': 100}
    if percent <= levels['light']:
        return WorkloadLevel.LIGHT
    if percent <= levels['normal']:
        return WorkloadLevel.NORMAL
    if percent <= levels['heavy']:
        return WorkloadLevel.HEAVY
    return WorkloadLevel.OVERLOADED


def period_bounds(reference_date: DateLike, view: Union[str, WorkloadView]) -> Tuple[date, date]:
    """First and last day of the bucket of ``view`` containing ``reference_date``."""
    view = WorkloadView.parse(view)
    if view is WorkloadView.WEEKLY:
        return week_bounds(reference_date)
    if view is WorkloadView.MONTHLY:
        return month_bounds(reference_date)
    day = as_date(reference_date)
    return day, day


def summarize_resource(resource: Resource, tasks: List[Task], now: datetime) -> ResourceSummary:
    """Task counts and completion rate of one resource."""
    now = to_datetime(now)
    assigned = [task for task in tasks if task.is_assigned_to(resource.resource_id)]
    completed = [task for task in assigned if task.is_completed]
    overdue = [
        task for task in assigned
        if not task.is_completed and task.end_date is not None and task.end_date < now
    ]

    total = len(assigned)
    completion_rate = int(math.floor(100 * len(completed) / total + 0.5)) if total else 100

    return ResourceSummary(
        resource_id=resource.resource_id,
        name=resource.name,
        total_tasks=total,
        active_tasks=sum(1 for task in assigned if task.status in ACTIVE_STATUSES),
        completed_tasks=len(completed),
        overdue_tasks=len(overdue),
        completion_rate=completion_rate,
    )
