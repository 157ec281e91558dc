"""Derived analysis results.

Every class here is a value type built fresh by an engine function on each
call. Nothing is written back onto tasks, projects or resources.
"""

from dataclasses import dataclass, field, asdict
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, List, Optional


class DelayFactor(Enum):
    """Source of a project delay figure."""

    TASKS = 'tasks'
    SCHEDULE = 'schedule'
    PROGRESS = 'progress'
    OVERDUE = 'overdue'


class ProjectStatus(Enum):
    EARLY = 'early'
    ON_TIME = 'on-time'
    DELAYED = 'delayed'
    COMPLETED = 'completed'


class WorkloadView(Enum):
    """Granularity of a workload bucket."""

    DAILY = 'daily'
    WEEKLY = 'weekly'
    MONTHLY = 'monthly'

    @classmethod
    def parse(cls, value: Any) -> 'WorkloadView':
        if isinstance(value, cls):
            return value
        return cls(str(value).strip().lower())


class WorkloadLevel(Enum):
    LIGHT = 'light'
    NORMAL = 'normal'
    HEAVY = 'heavy'
    OVERLOADED = 'overloaded'


class RecommendationType(Enum):
    REDUCE_DURATION = 'REDUCE_DURATION'
    PARALLEL_EXECUTION = 'PARALLEL_EXECUTION'
    RESOURCE_ALLOCATION = 'RESOURCE_ALLOCATION'


class EffortLevel(Enum):
    LOW = 'LOW'
    MEDIUM = 'MEDIUM'
    HIGH = 'HIGH'


def to_plain(value: Any) -> Any:
    """Convert enums and dates inside ``value`` into JSON-friendly values."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if isinstance(value, dict):
        return {key: to_plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_plain(item) for item in value]
    return value


@dataclass
class CriticalPathNode:
    """CPM timing for one task, in day offsets from project start."""

    task_id: str
    title: str
    duration: int
    early_start: int
    early_finish: int
    late_start: int
    late_finish: int
    slack: int = field(init=False)
    is_critical: bool = field(init=False)

    def __post_init__(self):
        self.slack = self.late_start - self.early_start
        self.is_critical = self.slack == 0


@dataclass
class CriticalPathResult:
    """Output of the critical path calculator for one project."""

    nodes: List[CriticalPathNode]
    critical_path_task_ids: List[str]
    critical_task_ids: List[str]
    project_duration_days: int

    def node(self, task_id: str) -> Optional[CriticalPathNode]:
        """Look up the node computed for ``task_id``."""
        for node in self.nodes:
            if node.task_id == task_id:
                return node
        return None

    def to_dict(self) -> Dict[str, Any]:
        return to_plain(asdict(self))


@dataclass
class DelayBreakdown:
    """The four delay factors and the figure reported for the project."""

    task_based: int
    schedule_based: int
    progress_based: int
    overdue_based: int
    dominant_factor: DelayFactor
    delay_days: int

    def factors(self) -> Dict[DelayFactor, int]:
        return {
            DelayFactor.TASKS: self.task_based,
            DelayFactor.SCHEDULE: self.schedule_based,
            DelayFactor.PROGRESS: self.progress_based,
            DelayFactor.OVERDUE: self.overdue_based,
        }

    def summary(self) -> str:
        """One-line description of the reported delay."""
        if self.delay_days == 0:
            return "No delay detected"
        return f"Largest delay: {self.delay_days} days ({self.dominant_factor.value}-based)"


@dataclass
class OverdueTask:
    task_id: str
    title: str
    days_overdue: int


@dataclass
class DelayAnalysis:
    """Planned versus task-derived dates of one project."""

    project_id: str
    planned_start: Optional[datetime]
    planned_end: Optional[datetime]
    actual_start: Optional[datetime]
    actual_end: Optional[datetime]
    completion_percent: float
    breakdown: DelayBreakdown
    status: ProjectStatus
    is_delayed: bool
    estimated_end_date: Optional[datetime]
    days_remaining: Optional[int]
    severity: str
    overdue_tasks: List[OverdueTask] = field(default_factory=list)
    attention_task_ids: List[str] = field(default_factory=list)
    undated_task_ids: List[str] = field(default_factory=list)

    @property
    def delay_days(self) -> int:
        return self.breakdown.delay_days

    def to_dict(self) -> Dict[str, Any]:
        return to_plain(asdict(self))


@dataclass
class WorkloadSample:
    """Allocated versus available hours of one resource in one bucket.

    ``hours_available`` counts every calendar day of the bucket;
    ``working_hours_available`` only the resource's working days and is
    informational.
    """

    resource_id: str
    period_start: date
    period_end: date
    hours_allocated: float
    hours_available: float
    working_hours_available: float
    workload_percent: int
    is_overloaded: bool
    level: WorkloadLevel
    task_ids: List[str] = field(default_factory=list)


@dataclass
class WorkloadReport:
    view: WorkloadView
    period_start: date
    period_end: date
    samples: List[WorkloadSample]
    bottleneck_days: List[date] = field(default_factory=list)
    skipped_task_ids: List[str] = field(default_factory=list)

    def samples_for(self, resource_id: str) -> List[WorkloadSample]:
        return [sample for sample in self.samples if sample.resource_id == resource_id]

    def overloaded_resource_ids(self) -> List[str]:
        """Resources overloaded in at least one sample, in sample order."""
        ids = [sample.resource_id for sample in self.samples if sample.is_overloaded]
        return list(dict.fromkeys(ids))

    def to_dict(self) -> Dict[str, Any]:
        return to_plain(asdict(self))


@dataclass
class BottleneckDay:
    """Contention check for one day of a project."""

    day: date
    average_workload_percent: float
    max_workload_percent: int
    active_task_count: int
    is_bottleneck: bool
    triggers: List[str] = field(default_factory=list)
    overloaded_resource_ids: List[str] = field(default_factory=list)


@dataclass
class PeriodStats:
    """Rollup of daily bottleneck checks over a period.

    ``high_risk_days`` counts days where one resource is far above capacity
    or several are overloaded at once; they are counted independently of
    ``bottleneck_days``.
    """

    period_start: date
    period_end: date
    bottleneck_days: int
    high_risk_days: int
    urgent_task_days: int
    average_workload_percent: float
    total_tasks: int
    average_daily_tasks: float
    max_daily_tasks: int


@dataclass
class ResourceSummary:
    resource_id: str
    name: str
    total_tasks: int
    active_tasks: int
    completed_tasks: int
    overdue_tasks: int
    completion_rate: int


@dataclass
class Recommendation:
    """Advisory schedule optimization for a critical task."""

    type: RecommendationType
    task_id: str
    task_title: str
    current_duration: int
    suggested_duration: int
    time_saved: int
    effort: EffortLevel
    description: str
    action: str


@dataclass
class AnalysisReport:
    """Complete result of one project analysis run."""

    project_id: str
    project_name: str
    analyzed_at: datetime
    config: Dict[str, Any]
    critical_path: Optional[CriticalPathResult]
    delay: DelayAnalysis
    workload: WorkloadReport
    bottlenecks: List[BottleneckDay]
    period_stats: PeriodStats
    resource_summaries: List[ResourceSummary]
    recommendations: List[Recommendation]
    errors: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def to_dict(self) -> Dict[str, Any]:
        """Convert report to dictionary for JSON export."""
        return to_plain(asdict(self))

    def to_human_readable(self) -> str:
        """Generate human-readable log format."""
        lines = [
            f"=== Schedule Analysis: {self.project_name} ({self.project_id}) ===",
            f"Analyzed at: {self.analyzed_at}",
            "",
        ]

        if self.errors:
            lines.append("Errors:")
            for error in self.errors:
                lines.append(f"  {error['type']}: {error['message']}")
            lines.append("")

        if self.critical_path is not None:
            lines.append("Critical Path:")
            lines.append(f"  Project duration: {self.critical_path.project_duration_days} days")
            lines.append(f"  Path: {' -> '.join(self.critical_path.critical_path_task_ids) or '-'}")
            for node in self.critical_path.nodes:
                marker = '*' if node.is_critical else ' '
                lines.append(
                    f"  {marker} {node.task_id}: ES={node.early_start} EF={node.early_finish} "
                    f"LS={node.late_start} LF={node.late_finish} slack={node.slack}"
                )
            lines.append("")

        breakdown = self.delay.breakdown
        lines.extend([
            "Delay Analysis:",
            f"  Status: {self.delay.status.value}",
            f"  Completion: {self.delay.completion_percent:.1f}%",
            f"  Delay: {breakdown.delay_days} days ({breakdown.dominant_factor.value}, {self.delay.severity})",
            f"  Factors: tasks={breakdown.task_based} schedule={breakdown.schedule_based} "
            f"progress={breakdown.progress_based} overdue={breakdown.overdue_based}",
        ])
        for overdue in self.delay.overdue_tasks:
            lines.append(f"  Overdue: {overdue.title} ({overdue.task_id}) by {overdue.days_overdue} days")
        lines.append("")

        lines.append(f"Workload ({self.workload.view.value}, {self.workload.period_start} - {self.workload.period_end}):")
        for sample in self.workload.samples:
            lines.append(
                f"  {sample.resource_id}: {sample.hours_allocated:.1f}h / {sample.hours_available:.1f}h "
                f"= {sample.workload_percent}% ({sample.level.value})"
            )
        lines.append(f"  Bottleneck days: {self.period_stats.bottleneck_days}")
        lines.append(f"  High-risk days: {self.period_stats.high_risk_days}")
        lines.append(f"  Days with urgent tasks: {self.period_stats.urgent_task_days}")
        lines.append(f"  Average workload: {self.period_stats.average_workload_percent:.1f}%")
        lines.append("")

        lines.append("Recommendations:")
        for rec in self.recommendations:
            lines.append(f"  [{rec.type.value}] {rec.task_title}: saves {rec.time_saved} days ({rec.effort.value})")
            lines.append(f"    {rec.description}")

        lines.append("=" * 50)

        return "\n".join(lines)
