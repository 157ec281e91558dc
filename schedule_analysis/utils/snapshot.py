"""Loading project snapshots from JSON or YAML files.

A snapshot file holds one project or a list of them::

    project: {id: p1, name: Website, startDate: 2024-01-01, endDate: 2024-03-01}
    tasks:
      - {id: t1, title: Design, estimatedHours: 16, dependencies: []}
    resources:
      - {id: u1, name: Ada, maxHoursPerDay: 8}

or ``projects: [{project: ..., tasks: [...], resources: [...]}, ...]``.
Resources listed at the top level are shared by every project.
"""

import json
import yaml
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..errors import SnapshotError
from ..models.task import Project, ProjectSnapshot, Resource, Task
from .config import get_default_config


def load_snapshots(snapshot_path: str, config: Optional[Dict[str, Any]] = None) -> List[ProjectSnapshot]:
    """Read every project snapshot stored in a file."""
    path = Path(snapshot_path)

    if not path.exists():
        raise SnapshotError(f"Snapshot file not found: {snapshot_path}")

    try:
        with open(path, 'r') as f:
            if path.suffix.lower() in ['.yaml', '.yml']:
                data = yaml.safe_load(f)
            elif path.suffix.lower() == '.json':
                data = json.load(f)
            else:
                raise SnapshotError(f"Unsupported snapshot file format: {path.suffix}")
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise SnapshotError(f"Could not parse snapshot {snapshot_path}: {e}") from e

    return parse_snapshots(data, config)


def parse_snapshots(data: Any, config: Optional[Dict[str, Any]] = None) -> List[ProjectSnapshot]:
    """Build snapshots from already decoded data."""
    if not isinstance(data, dict):
        raise SnapshotError("Snapshot must be a mapping")

    try:
        shared_resources = _parse_resources(_records(data.get('resources') or [], 'resources'), config)
    except (TypeError, ValueError) as e:
        raise SnapshotError(f"Invalid resource record: {e}") from e

    if 'projects' in data:
        entries = _records(data['projects'], 'projects')
        return [
            parse_snapshot(entry, config, shared_resources if not entry.get('resources') else None)
            for entry in entries
        ]
    return [parse_snapshot(data, config)]


def parse_snapshot(
    data: Dict[str, Any],
    config: Optional[Dict[str, Any]] = None,
    resources: Optional[List[Resource]] = None,
) -> ProjectSnapshot:
    """Build a single snapshot from a mapping with project, tasks and resources."""
    if not isinstance(data, dict):
        raise SnapshotError("Project entry must be a mapping")
    project_data = data.get('project')
    if not isinstance(project_data, dict):
        raise SnapshotError("Snapshot has no 'project' mapping")

    try:
        project = Project.from_dict(project_data)
        tasks = [Task.from_dict(item, project.project_id) for item in _records(data.get('tasks') or [], 'tasks')]
        if resources is None:
            resources = _parse_resources(_records(data.get('resources') or [], 'resources'), config)
    except (TypeError, ValueError) as e:
        raise SnapshotError(f"Invalid snapshot record: {e}") from e

    return ProjectSnapshot(project=project, tasks=tasks, resources=resources)


def snapshot_to_dict(snapshot: ProjectSnapshot) -> Dict[str, Any]:
    """Serialize a snapshot back into the file layout read by ``parse_snapshot``."""
    project = snapshot.project
    return {
        'project': {
            'id': project.project_id,
            'name': project.name,
            'startDate': _iso(project.start_date),
            'endDate': _iso(project.end_date),
        },
        'tasks': [
            {
                'id': task.task_id,
                'title': task.title,
                'status': task.status.value,
                'priority': task.priority.value,
                'estimatedHours': task.estimated_hours,
                'startDate': _iso(task.start_date),
                'endDate': _iso(task.end_date),
                'completedAt': _iso(task.completed_at),
                'dependencies': list(task.dependencies),
                'assignedUsers': list(task.assigned_resource_ids),
            }
            for task in snapshot.tasks
        ],
        'resources': [
            {
                'id': resource.resource_id,
                'name': resource.name,
                'maxHoursPerDay': resource.max_hours_per_day,
                'workingDays': list(resource.working_days),
                'department': resource.department,
            }
            for resource in snapshot.resources
        ],
    }


def _parse_resources(items: List[Dict[str, Any]], config: Optional[Dict[str, Any]]) -> List[Resource]:
    workload_config = (config or get_default_config()).get('workload', {})
    return [
        Resource.from_dict(
            item,
            default_max_hours=workload_config.get('default_max_hours_per_day', 8),
            default_working_days=workload_config.get('working_days'),
        )
        for item in items
    ]


def _records(items: Any, section: str) -> List[Dict[str, Any]]:
    """Check that a snapshot section is a list of mappings."""
    if not isinstance(items, list):
        raise SnapshotError(f"'{section}' must be a list")
    for index, item in enumerate(items):
        if not isinstance(item, dict):
            raise SnapshotError(f"'{section}' entry {index} must be a mapping, got {type(item).__name__}")
    return items


def _iso(value) -> Optional[str]:
    return value.isoformat() if value is not None else None
