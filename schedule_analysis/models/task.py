"""Task, project and resource data models."""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from ..utils.datetime_utils import DateLike, is_working_day, parse_datetime, to_datetime

logger = logging.getLogger(__name__)


def _normalize_enum_name(value: Any) -> str:
    return str(value).strip().upper().replace('-', '_').replace(' ', '_')


class TaskStatus(Enum):
    """Workflow status of a task."""

    TODO = 'TODO'
    IN_PROGRESS = 'IN_PROGRESS'
    REVIEW = 'REVIEW'
    COMPLETED = 'COMPLETED'
    BLOCKED = 'BLOCKED'

    @classmethod
    def parse(cls, value: Any) -> 'TaskStatus':
        """Parse a status value; unknown values fall back to TODO."""
        if isinstance(value, cls):
            return value
        name = _normalize_enum_name(value)
        if name == 'IN_REVIEW':
            name = 'REVIEW'
        try:
            return cls[name]
        except KeyError:
            logger.warning(f"Unknown task status {value!r}, treating as TODO")
            return cls.TODO


class TaskPriority(Enum):
    """Task priority. CRITICAL is a legacy value kept for stored records."""

    LOW = 'LOW'
    MEDIUM = 'MEDIUM'
    HIGH = 'HIGH'
    URGENT = 'URGENT'
    CRITICAL = 'CRITICAL'

    @classmethod
    def parse(cls, value: Any) -> 'TaskPriority':
        """Parse a priority value; unknown values fall back to LOW."""
        if isinstance(value, cls):
            return value
        try:
            return cls[_normalize_enum_name(value)]
        except KeyError:
            logger.warning(f"Unknown task priority {value!r}, treating as LOW")
            return cls.LOW


@dataclass
class Task:
    """A unit of project work with effort, dates and dependencies."""

    task_id: str
    title: str
    status: TaskStatus = TaskStatus.TODO
    priority: TaskPriority = TaskPriority.MEDIUM
    estimated_hours: Optional[float] = None
    actual_hours: Optional[float] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    dependencies: List[str] = field(default_factory=list)
    assigned_resource_ids: List[str] = field(default_factory=list)
    project_id: Optional[str] = None

    def __post_init__(self):
        """Coerce enum values and dates into their canonical types."""
        self.status = TaskStatus.parse(self.status)
        self.priority = TaskPriority.parse(self.priority)
        self.start_date = to_datetime(self.start_date)
        self.end_date = to_datetime(self.end_date)
        self.completed_at = to_datetime(self.completed_at)
        self.dependencies = list(dict.fromkeys(self.dependencies))
        self.assigned_resource_ids = list(dict.fromkeys(self.assigned_resource_ids))

    @property
    def is_completed(self) -> bool:
        return self.status is TaskStatus.COMPLETED

    @property
    def has_dates(self) -> bool:
        """True when at least one of start/end date is known."""
        return self.start_date is not None or self.end_date is not None

    @property
    def is_scheduled(self) -> bool:
        """True when the task has both a start and an end date."""
        return self.start_date is not None and self.end_date is not None

    def is_active_on(self, day: DateLike) -> bool:
        """Check whether ``day`` falls inside the task's date interval."""
        if not self.is_scheduled:
            return False
        current = day.date() if isinstance(day, datetime) else day
        return self.start_date.date() <= current <= self.end_date.date()

    def is_assigned_to(self, resource_id: str) -> bool:
        return resource_id in self.assigned_resource_ids

    @classmethod
    def from_dict(cls, data: Dict[str, Any], project_id: Optional[str] = None) -> 'Task':
        """Build a task from a host record (snake_case or camelCase keys).

        The legacy single assignee (``assigned_id``/``assignedId``) and the
        multi-assignment list (``assigned_users``/``assignedUsers``) are
        merged into ``assigned_resource_ids``.
        """
        assigned = []
        legacy_assignee = _first(data, 'assigned_id', 'assignedId')
        if legacy_assignee:
            assigned.append(str(legacy_assignee))
        for entry in _first(data, 'assigned_resource_ids', 'assigned_users', 'assignedUsers') or []:
            resource_id = _assignment_id(entry)
            if resource_id:
                assigned.append(resource_id)

        return cls(
            task_id=str(_first(data, 'task_id', 'id')),
            title=_first(data, 'title', 'name') or '',
            status=_first(data, 'status') or TaskStatus.TODO,
            priority=_first(data, 'priority') or TaskPriority.MEDIUM,
            estimated_hours=_optional_float(_first(data, 'estimated_hours', 'estimatedHours')),
            actual_hours=_optional_float(_first(data, 'actual_hours', 'actualHours')),
            start_date=parse_datetime(_first(data, 'start_date', 'startDate')),
            end_date=parse_datetime(_first(data, 'end_date', 'endDate')),
            completed_at=parse_datetime(_first(data, 'completed_at', 'completedAt')),
            dependencies=[str(dep) for dep in _first(data, 'dependencies', 'depends_on') or []],
            assigned_resource_ids=assigned,
            project_id=_first(data, 'project_id', 'projectId') or project_id,
        )


@dataclass
class Project:
    """A project with planned dates; its tasks are passed separately."""

    project_id: str
    name: str
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None

    def __post_init__(self):
        self.start_date = to_datetime(self.start_date)
        self.end_date = to_datetime(self.end_date)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Project':
        return cls(
            project_id=str(_first(data, 'project_id', 'id')),
            name=_first(data, 'name', 'title') or '',
            start_date=parse_datetime(_first(data, 'start_date', 'startDate')),
            end_date=parse_datetime(_first(data, 'end_date', 'endDate')),
        )


@dataclass
class Resource:
    """A person or team slot that tasks are assigned to."""

    resource_id: str
    name: Optional[str] = None
    max_hours_per_day: float = 8.0
    working_days: List[int] = field(default_factory=lambda: [0, 1, 2, 3, 4])
    department: Optional[str] = None

    def __post_init__(self):
        if self.name is None:
            self.name = self.resource_id
        if self.max_hours_per_day is None:
            self.max_hours_per_day = 8.0

    def is_working_day(self, day: date) -> bool:
        """Check the resource calendar for ``day`` (Monday = 0)."""
        return is_working_day(day, self.working_days)

    @classmethod
    def from_dict(
        cls,
        data: Dict[str, Any],
        default_max_hours: float = 8.0,
        default_working_days: Optional[List[int]] = None,
    ) -> 'Resource':
        max_hours = _optional_float(_first(data, 'max_hours_per_day', 'maxHoursPerDay'))
        working_days = _first(data, 'working_days', 'workingDays')
        if working_days is None:
            working_days = default_working_days if default_working_days is not None else [0, 1, 2, 3, 4]
        return cls(
            resource_id=str(_first(data, 'resource_id', 'id', 'user_id', 'userId')),
            name=_first(data, 'name'),
            max_hours_per_day=max_hours if max_hours is not None else default_max_hours,
            working_days=list(working_days),
            department=_first(data, 'department'),
        )


@dataclass
class ProjectSnapshot:
    """Everything one analysis run needs about a project."""

    project: Project
    tasks: List[Task] = field(default_factory=list)
    resources: List[Resource] = field(default_factory=list)


def _first(data: Dict[str, Any], *keys: str) -> Any:
    """Return the first present, non-None value among ``keys``."""
    for key in keys:
        if data.get(key) is not None:
            return data[key]
    return None


def _optional_float(value: Any) -> Optional[float]:
    if value is None or value == '':
        return None
    return float(value)


def _assignment_id(entry: Any) -> Optional[str]:
    """Resource id from an assignment entry: a bare id or a join record."""
    if isinstance(entry, dict):
        user = entry.get('user')
        nested = user.get('id') if isinstance(user, dict) else None
        value = _first(entry, 'resource_id', 'user_id', 'userId', 'id') or nested
        return str(value) if value is not None else None
    return str(entry) if entry is not None else None
