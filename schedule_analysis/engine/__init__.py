"""Analysis engine components."""

from .advisor import OptimizationAdvisor, recommend
from .analyzer import ProjectAnalyzer
from .bottleneck import (
    detect_project_bottleneck,
    detect_resource_bottlenecks,
    find_bottleneck_days,
    is_high_risk_day,
    summarize_period,
)
from .critical_path import calculate_critical_path
from .delay import reconcile_dates
from .duration import task_duration_days
from .workload import (
    WorkloadAggregator,
    aggregate_workload,
    aggregate_workload_range,
    summarize_resource,
    workload_percent,
)

__all__ = [
    'OptimizationAdvisor', 'recommend',
    'ProjectAnalyzer',
    'detect_project_bottleneck', 'detect_resource_bottlenecks', 'find_bottleneck_days', 'is_high_risk_day', 'summarize_period',
    'calculate_critical_path',
    'reconcile_dates',
    'task_duration_days',
    'WorkloadAggregator', 'aggregate_workload', 'aggregate_workload_range', 'summarize_resource', 'workload_percent',
]
