"""Pytest configuration and fixtures."""
from datetime import datetime, timedelta
from typing import List

import pytest

from schedule_analysis.models import Project, Resource, Task, TaskStatus
from schedule_analysis.utils.config import get_default_config

# Friday; its Sunday-to-Saturday week is 2024-03-10 .. 2024-03-16
NOW = datetime(2024, 3, 15, 9, 0)


@pytest.fixture
def now() -> datetime:
    """Fixed analysis time."""
    return NOW


@pytest.fixture
def config():
    """Default configuration."""
    return get_default_config()


@pytest.fixture
def scenario_one_tasks() -> List[Task]:
    """A -> (B, C) -> D with B twice as long as C."""
    start = NOW - timedelta(days=2)
    return [
        Task('A', 'Design', estimated_hours=8, start_date=start, end_date=start,
             status=TaskStatus.COMPLETED, completed_at=start, assigned_resource_ids=['r1']),
        Task('B', 'Build', estimated_hours=16, dependencies=['A'], status=TaskStatus.IN_PROGRESS,
             start_date=start + timedelta(days=1), end_date=start + timedelta(days=2),
             assigned_resource_ids=['r1', 'r2']),
        Task('C', 'Docs', estimated_hours=8, dependencies=['A'],
             start_date=start + timedelta(days=1), end_date=start + timedelta(days=1),
             status=TaskStatus.COMPLETED, completed_at=start + timedelta(days=1), assigned_resource_ids=['r2']),
        Task('D', 'Release', estimated_hours=8, dependencies=['B', 'C'],
             start_date=start + timedelta(days=3), end_date=start + timedelta(days=3),
             assigned_resource_ids=['r1']),
    ]


@pytest.fixture
def scenario_one_project() -> Project:
    return Project('p1', 'Website', start_date=NOW - timedelta(days=2), end_date=NOW + timedelta(days=10))


@pytest.fixture
def resources() -> List[Resource]:
    """Two full-time resources."""
    return [
        Resource('r1', 'Ada', max_hours_per_day=8),
        Resource('r2', 'Grace', max_hours_per_day=8),
    ]


@pytest.fixture
def cyclic_tasks() -> List[Task]:
    """A and B depend on each other; C hangs off the cycle."""
    return [
        Task('A', 'First', estimated_hours=8, dependencies=['B']),
        Task('B', 'Second', estimated_hours=8, dependencies=['A']),
        Task('C', 'Third', estimated_hours=8, dependencies=['A'], status=TaskStatus.IN_PROGRESS),
    ]
