"""Full project analysis: CPM, delays, workload, bottlenecks, advice."""

import logging
from dataclasses import replace
from datetime import datetime
from typing import List, Optional, Union

from ..errors import InvalidGraphError
from ..models.results import AnalysisReport, CriticalPathResult, WorkloadView
from ..models.task import Project, ProjectSnapshot, Resource, Task
from ..utils.config import get_default_config
from ..utils.datetime_utils import DateLike, to_datetime
from .advisor import OptimizationAdvisor
from .bottleneck import find_bottleneck_days, summarize_period
from .critical_path import calculate_critical_path
from .delay import reconcile_dates
from .duration import HOURS_PER_DAY
from .workload import WorkloadAggregator, summarize_resource

logger = logging.getLogger(__name__)


class ProjectAnalyzer:
    """Runs every analysis component over one project snapshot.

    Each call works only on its arguments, so projects can be analyzed
    independently. A dependency cycle only removes the CPM-based parts of
    that project's report.
    """

    def __init__(self, config: Optional[dict] = None):
        """Initialize analyzer with configuration."""
        self.config = config or get_default_config()
        self.hours_per_day = self.config.get('duration', {}).get('hours_per_day', HOURS_PER_DAY)
        self.aggregator = WorkloadAggregator(self.config)
        self.advisor = OptimizationAdvisor(self.config)

    def analyze(
        self,
        project: Project,
        tasks: List[Task],
        resources: List[Resource],
        now: datetime,
        reference_date: Optional[DateLike] = None,
        view: Union[str, WorkloadView] = WorkloadView.WEEKLY,
    ) -> AnalysisReport:
        """Analyze one project at the injected ``now``."""
        now = to_datetime(now)
        view = WorkloadView.parse(view)
        reference = reference_date or now
        tasks = self._project_tasks(project, tasks)
        errors = []

        critical_path = self._critical_path(project, tasks, errors)
        delay = reconcile_dates(project, tasks, now, self.config)

        workload = self.aggregator.aggregate(resources, tasks, reference, view)
        bottlenecks = find_bottleneck_days(resources, tasks, workload.period_start, workload.period_end, self.config)
        workload = replace(workload, bottleneck_days=[day.day for day in bottlenecks if day.is_bottleneck])
        period_stats = summarize_period(bottlenecks, tasks, workload.period_start, workload.period_end, self.config)

        recommendations = []
        if critical_path is not None:
            recommendations = self.advisor.recommend(critical_path, tasks, workload)

        return AnalysisReport(
            project_id=project.project_id,
            project_name=project.name,
            analyzed_at=now,
            config={
                'hours_per_day': self.hours_per_day,
                'view': view.value,
                'reference_date': to_datetime(reference),
            },
            critical_path=critical_path,
            delay=delay,
            workload=workload,
            bottlenecks=bottlenecks,
            period_stats=period_stats,
            resource_summaries=[summarize_resource(resource, tasks, now) for resource in resources],
            recommendations=recommendations,
            errors=errors,
        )

    def analyze_snapshot(
        self,
        snapshot: ProjectSnapshot,
        now: datetime,
        reference_date: Optional[DateLike] = None,
        view: Union[str, WorkloadView] = WorkloadView.WEEKLY,
    ) -> AnalysisReport:
        return self.analyze(snapshot.project, snapshot.tasks, snapshot.resources, now, reference_date, view)

    def analyze_portfolio(
        self,
        snapshots: List[ProjectSnapshot],
        now: datetime,
        reference_date: Optional[DateLike] = None,
        view: Union[str, WorkloadView] = WorkloadView.WEEKLY,
    ) -> List[AnalysisReport]:
        """Analyze several projects; a broken graph only affects its own report."""
        reports = [self.analyze_snapshot(snapshot, now, reference_date, view) for snapshot in snapshots]
        failed = sum(1 for report in reports if not report.ok)
        logger.info(f"Analyzed {len(reports)} projects ({failed} with errors)")
        return reports

    def _critical_path(self, project: Project, tasks: List[Task], errors: list) -> Optional[CriticalPathResult]:
        try:
            return calculate_critical_path(tasks, self.hours_per_day)
        except InvalidGraphError as e:
            logger.error(f"Project {project.project_id}: invalid dependency graph: {e}")
            errors.append({
                'type': 'InvalidGraph',
                'message': str(e),
                'task_ids': e.task_ids,
            })
            return None

    def _project_tasks(self, project: Project, tasks: List[Task]) -> List[Task]:
        """Tasks that belong to ``project`` (tasks without a project id are kept)."""
        own = [task for task in tasks if task.project_id in (None, project.project_id)]
        if len(own) < len(tasks):
            logger.warning(f"Project {project.project_id}: ignoring {len(tasks) - len(own)} tasks of other projects")
        return own
