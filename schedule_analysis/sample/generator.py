"""Sample project snapshot generator."""

import math
import random
from datetime import datetime, timedelta
from typing import List

from ..models.task import Project, ProjectSnapshot, Resource, Task, TaskPriority, TaskStatus


class SnapshotGenerator:
    """Generates deterministic project snapshots for demos and tests."""

    def __init__(self, seed: int = 42, config: dict = None):
        """Initialize generator with seed for reproducibility."""
        self.seed = seed
        self.random = random.Random(seed)
        self.config = config or {}
        self.sample_config = self.config.get('sample', {})

    def generate_resources(self, count: int) -> List[Resource]:
        """Generate resources with a mix of full and part-time capacity."""
        departments = ['engineering', 'design', 'operations', 'qa']
        resources = []

        for i in range(count):
            max_hours = 8.0 if self.random.random() < 0.75 else 6.0
            resources.append(Resource(
                resource_id=f"res_{i:02d}",
                name=f"Resource {i}",
                max_hours_per_day=max_hours,
                department=self.random.choice(departments),
            ))

        return resources

    def generate_tasks(
        self,
        count: int,
        start_date: datetime,
        now: datetime,
        resources: List[Resource],
        project_id: str,
    ) -> List[Task]:
        """Generate a chain-heavy task set laid out after ``start_date``."""
        tasks = []
        finish_by_id = {}

        for i in range(count):
            task_id = f"task_{i:03d}"

            # Vary task sizes (some small, some large)
            if self.random.random() < 0.3:
                estimated_hours = self.random.randint(2, 8)  # Small
            elif self.random.random() < 0.7:
                estimated_hours = self.random.randint(8, 40)  # Medium
            else:
                estimated_hours = self.random.randint(40, 80)  # Large

            dependencies = []
            if i > 0 and self.random.random() < 0.6:
                # Depend on one or two earlier tasks
                picks = self.random.sample(range(i), k=min(i, self.random.randint(1, 2)))
                dependencies = [f"task_{idx:03d}" for idx in sorted(picks)]

            task_start = max(
                [finish_by_id[dep] + timedelta(days=1) for dep in dependencies],
                default=start_date + timedelta(days=self.random.randint(0, 5)),
            )
            span_days = math.ceil(estimated_hours / 8) + self.random.randint(0, 3)
            task_end = task_start + timedelta(days=span_days - 1)
            finish_by_id[task_id] = task_end

            status, completed_at = self._status_for(task_end, now)
            assignees = []
            if resources:
                assignees = self.random.sample(resources, k=1 if self.random.random() < 0.8 else min(2, len(resources)))

            tasks.append(Task(
                task_id=task_id,
                title=f"Task {i}",
                status=status,
                priority=self.random.choice(list(TaskPriority)[:4]),
                estimated_hours=estimated_hours if self.random.random() < 0.9 else None,
                start_date=task_start,
                end_date=task_end,
                completed_at=completed_at,
                dependencies=dependencies,
                assigned_resource_ids=[resource.resource_id for resource in assignees],
                project_id=project_id,
            ))

        return tasks

    def generate_snapshot(self, start_date: datetime, now: datetime, task_count: int = None, resource_count: int = None) -> ProjectSnapshot:
        """Generate a complete project snapshot."""
        task_count = task_count or self.sample_config.get('task_count', 12)
        resource_count = resource_count or self.sample_config.get('resource_count', 4)

        project = Project(
            project_id=f"sample_{self.seed}",
            name=f"Sample project {self.seed}",
            start_date=start_date,
            end_date=start_date + timedelta(days=self.random.randint(20, 40)),
        )
        resources = self.generate_resources(resource_count)
        tasks = self.generate_tasks(task_count, start_date, now, resources, project.project_id)

        return ProjectSnapshot(project=project, tasks=tasks, resources=resources)

    def _status_for(self, task_end: datetime, now: datetime):
        """Past tasks are mostly done, future ones mostly not started."""
        roll = self.random.random()
        if task_end < now:
            if roll < 0.7:
                return TaskStatus.COMPLETED, task_end + timedelta(days=self.random.randint(0, 3))
            return (TaskStatus.IN_PROGRESS if roll < 0.9 else TaskStatus.BLOCKED), None
        if roll < 0.3:
            return TaskStatus.IN_PROGRESS, None
        return TaskStatus.TODO, None
