"""Project schedule analysis: critical path, delays, workload and advice."""

from .engine import ProjectAnalyzer
from .errors import InvalidGraphError, ScheduleAnalysisError, SnapshotError
from .models import Project, ProjectSnapshot, Resource, Task

__version__ = '0.1.0'

__all__ = [
    'ProjectAnalyzer',
    'InvalidGraphError', 'ScheduleAnalysisError', 'SnapshotError',
    'Project', 'ProjectSnapshot', 'Resource', 'Task',
]
