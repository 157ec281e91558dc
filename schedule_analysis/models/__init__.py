"""Data models for tasks, projects, resources and analysis results."""

from .task import Project, ProjectSnapshot, Resource, Task, TaskPriority, TaskStatus
from .results import (
    AnalysisReport,
    BottleneckDay,
    CriticalPathNode,
    CriticalPathResult,
    DelayAnalysis,
    DelayBreakdown,
    DelayFactor,
    EffortLevel,
    OverdueTask,
    PeriodStats,
    ProjectStatus,
    Recommendation,
    RecommendationType,
    ResourceSummary,
    WorkloadLevel,
    WorkloadReport,
    WorkloadSample,
    WorkloadView,
)

__all__ = [
    'Project', 'ProjectSnapshot', 'Resource', 'Task', 'TaskPriority', 'TaskStatus',
    'AnalysisReport', 'BottleneckDay', 'CriticalPathNode', 'CriticalPathResult',
    'DelayAnalysis', 'DelayBreakdown', 'DelayFactor', 'EffortLevel', 'OverdueTask',
    'PeriodStats', 'ProjectStatus', 'Recommendation', 'RecommendationType',
    'ResourceSummary', 'WorkloadLevel', 'WorkloadReport', 'WorkloadSample', 'WorkloadView',
]
