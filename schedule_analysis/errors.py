"""Error types raised by the analysis engine."""

from typing import Iterable, List


class ScheduleAnalysisError(Exception):
    """Base class for analysis errors."""


class InvalidGraphError(ScheduleAnalysisError, ValueError):
    """Dependency graph of a project contains a cycle or a self-dependency."""

    def __init__(self, message: str, task_ids: Iterable[str] = ()):
        super().__init__(message)
        self.task_ids: List[str] = list(task_ids)


class SnapshotError(ScheduleAnalysisError):
    """Snapshot file could not be read or does not describe a project."""
