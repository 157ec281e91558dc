"""Optimization recommendations for critical tasks."""

import logging
from typing import Any, Dict, List, Optional

from ..models.results import CriticalPathResult, Recommendation, WorkloadReport
from ..models.task import Task
from ..rules import (
    AdvisorContext,
    OptimizationRule,
    ParallelExecutionRule,
    ReduceDurationRule,
    ResourceAllocationRule,
)
from ..utils.config import get_default_config

logger = logging.getLogger(__name__)


class OptimizationAdvisor:
    """Applies the recommendation rules to every critical task.

    Recommendations are advisory: they are not checked against each other
    and nothing is changed on the inputs.
    """

    def __init__(self, config: Optional[dict] = None, rules: Optional[List[OptimizationRule]] = None):
        """Initialize advisor with configuration and rule set."""
        self.config = config or get_default_config()
        self.rules = rules if rules is not None else [
            ReduceDurationRule(self.config),
            ParallelExecutionRule(self.config),
            ResourceAllocationRule(self.config),
        ]

    def recommend(
        self,
        cpm_result: CriticalPathResult,
        tasks: List[Task],
        workload: Optional[WorkloadReport] = None,
    ) -> List[Recommendation]:
        """Recommendations for the critical tasks, largest time saving first."""
        context = self._build_context(cpm_result, tasks, workload)
        recommendations = []

        for task_id in cpm_result.critical_task_ids:
            node = context.nodes_by_id[task_id]
            for rule in self.rules:
                recommendation = rule.evaluate(node, context)
                if recommendation is not None:
                    recommendations.append(recommendation)

        logger.debug(f"{len(recommendations)} recommendations for {len(cpm_result.critical_task_ids)} critical tasks")

        # sorted() is stable, ties keep critical-path order
        return sorted(recommendations, key=lambda rec: rec.time_saved, reverse=True)

    def _build_context(
        self,
        cpm_result: CriticalPathResult,
        tasks: List[Task],
        workload: Optional[WorkloadReport],
    ) -> AdvisorContext:
        tasks_by_id: Dict[str, Task] = {}
        for task in tasks:
            tasks_by_id.setdefault(task.task_id, task)

        dependents: Dict[str, List[str]] = {task_id: [] for task_id in tasks_by_id}
        for task in tasks_by_id.values():
            for dep_id in task.dependencies:
                if dep_id in dependents and dep_id != task.task_id:
                    dependents[dep_id].append(task.task_id)

        return AdvisorContext(
            tasks_by_id=tasks_by_id,
            nodes_by_id={node.task_id: node for node in cpm_result.nodes},
            dependents=dependents,
            workload=workload,
        )


def recommend(
    cpm_result: CriticalPathResult,
    tasks: List[Task],
    workload: Optional[WorkloadReport] = None,
    config: Optional[Dict[str, Any]] = None,
) -> List[Recommendation]:
    """Convenience wrapper around ``OptimizationAdvisor.recommend``."""
    return OptimizationAdvisor(config).recommend(cpm_result, tasks, workload)
