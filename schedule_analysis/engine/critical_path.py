"""Critical path calculation (CPM) over a project's task graph."""

import logging
from collections import deque
from typing import Dict, List

from ..errors import InvalidGraphError
from ..models.results import CriticalPathNode, CriticalPathResult
from ..models.task import Task
from .duration import HOURS_PER_DAY, task_duration_days

logger = logging.getLogger(__name__)


def calculate_critical_path(tasks: List[Task], hours_per_day: float = HOURS_PER_DAY) -> CriticalPathResult:
    """
    Compute early/late times, slack and the critical path of a task set.

    Args:
        tasks: All tasks of one project
        hours_per_day: Effort hours that make up one scheduling day

    Returns:
        CriticalPathResult with one node per task in topological order

    Raises:
        InvalidGraphError: if the dependencies contain a cycle
    """
    if not tasks:
        logger.warning("No tasks to build a critical path from")
        return CriticalPathResult(nodes=[], critical_path_task_ids=[], critical_task_ids=[], project_duration_days=0)

    tasks_by_id = _index_tasks(tasks)
    predecessors = _build_predecessors(tasks_by_id)
    successors = _build_successors(tasks_by_id, predecessors)
    order = topological_order(tasks_by_id, predecessors, successors)

    durations = {task_id: task_duration_days(task, hours_per_day) for task_id, task in tasks_by_id.items()}

    # Forward pass
    early_start: Dict[str, int] = {}
    early_finish: Dict[str, int] = {}
    for task_id in order:
        early_start[task_id] = max((early_finish[dep] for dep in predecessors[task_id]), default=0)
        early_finish[task_id] = early_start[task_id] + durations[task_id]

    project_duration = max(early_finish.values())

    # Backward pass
    late_start: Dict[str, int] = {}
    late_finish: Dict[str, int] = {}
    for task_id in reversed(order):
        late_finish[task_id] = min((late_start[succ] for succ in successors[task_id]), default=project_duration)
        late_start[task_id] = late_finish[task_id] - durations[task_id]

    nodes = [
        CriticalPathNode(
            task_id=task_id,
            title=tasks_by_id[task_id].title,
            duration=durations[task_id],
            early_start=early_start[task_id],
            early_finish=early_finish[task_id],
            late_start=late_start[task_id],
            late_finish=late_finish[task_id],
        )
        for task_id in order
    ]

    critical_task_ids = [node.task_id for node in nodes if node.is_critical]
    critical_path = _trace_critical_chain(order, predecessors, early_start, early_finish, set(critical_task_ids), project_duration)

    logger.info(f"Critical path computed: {len(nodes)} tasks, project duration {project_duration} days")
    logger.debug(f"Critical path: {critical_path}")

    return CriticalPathResult(
        nodes=nodes,
        critical_path_task_ids=critical_path,
        critical_task_ids=critical_task_ids,
        project_duration_days=project_duration,
    )


def topological_order(
    tasks_by_id: Dict[str, Task],
    predecessors: Dict[str, List[str]],
    successors: Dict[str, List[str]],
) -> List[str]:
    """Order task ids so every task follows its dependencies (Kahn's algorithm).

    Ties keep input order. Raises InvalidGraphError when a cycle remains.
    """
    for task_id, deps in predecessors.items():
        if task_id in deps:
            raise InvalidGraphError(f"Task {task_id} depends on itself", [task_id])

    in_degree = {task_id: len(deps) for task_id, deps in predecessors.items()}
    queue = deque(task_id for task_id in tasks_by_id if in_degree[task_id] == 0)
    order = []

    while queue:
        task_id = queue.popleft()
        order.append(task_id)
        for succ in successors[task_id]:
            in_degree[succ] -= 1
            if in_degree[succ] == 0:
                queue.append(succ)

    if len(order) < len(tasks_by_id):
        placed = set(order)
        unresolved = [task_id for task_id in tasks_by_id if task_id not in placed]
        raise InvalidGraphError(f"Dependency cycle among tasks: {', '.join(unresolved)}", unresolved)

    return order


def _index_tasks(tasks: List[Task]) -> Dict[str, Task]:
    tasks_by_id: Dict[str, Task] = {}
    for task in tasks:
        if task.task_id in tasks_by_id:
            logger.warning(f"Duplicate task id {task.task_id}, keeping the first occurrence")
            continue
        tasks_by_id[task.task_id] = task
    return tasks_by_id


def _build_predecessors(tasks_by_id: Dict[str, Task]) -> Dict[str, List[str]]:
    """Dependencies of each task, restricted to the given task set."""
    predecessors = {}
    for task_id, task in tasks_by_id.items():
        deps = []
        for dep_id in task.dependencies:
            if dep_id in tasks_by_id:
                deps.append(dep_id)
            else:
                logger.debug(f"Ignoring dependency {dep_id} of task {task_id}: not in this project")
        predecessors[task_id] = deps
    return predecessors


def _build_successors(tasks_by_id: Dict[str, Task], predecessors: Dict[str, List[str]]) -> Dict[str, List[str]]:
    """Dependents of each task, in input order."""
    successors: Dict[str, List[str]] = {task_id: [] for task_id in tasks_by_id}
    for task_id, deps in predecessors.items():
        for dep_id in deps:
            if dep_id != task_id:
                successors[dep_id].append(task_id)
    return successors


def _trace_critical_chain(
    order: List[str],
    predecessors: Dict[str, List[str]],
    early_start: Dict[str, int],
    early_finish: Dict[str, int],
    critical: set,
    project_duration: int,
) -> List[str]:
    """Walk back from the last critical task along zero-slack dependencies.

    Starts from the latest task in topological order that finishes at the
    project duration, so zero-duration tail tasks stay on the chain.

    Returns one chain in execution order whose durations add up to the
    project duration.
    """
    position = {task_id: index for index, task_id in enumerate(order)}
    current = next(
        (task_id for task_id in reversed(order) if task_id in critical and early_finish[task_id] == project_duration),
        None,
    )
    chain = []

    while current is not None:
        chain.append(current)
        candidates = [
            dep for dep in predecessors[current]
            if dep in critical and early_finish[dep] == early_start[current]
        ]
        current = max(candidates, key=position.get) if candidates else None

    chain.reverse()
    return chain
