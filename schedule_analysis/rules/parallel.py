"""Parallel execution rule."""

from typing import Optional

from ..models.results import CriticalPathNode, EffortLevel, Recommendation, RecommendationType
from .base import AdvisorContext, OptimizationRule


class ParallelExecutionRule(OptimizationRule):
    """Suggest running the dependents of a critical task side by side."""

    def evaluate(self, node: CriticalPathNode, context: AdvisorContext) -> Optional[Recommendation]:
        dependents = context.dependent_nodes(node.task_id)
        if len(dependents) < self.advisor_config.get('parallel_min_dependents', 2):
            return None

        # The shortest follower bounds what overlapping can win
        saved = min(dependent.duration for dependent in dependents)

        return Recommendation(
            type=RecommendationType.PARALLEL_EXECUTION,
            task_id=node.task_id,
            task_title=node.title,
            current_duration=node.duration,
            suggested_duration=node.duration,
            time_saved=saved,
            effort=EffortLevel.MEDIUM,
            description=f"The {len(dependents)} tasks that follow this one can run in parallel",
            action="Plan resources so the dependent tasks start at the same time",
        )

    def get_rule_name(self) -> str:
        return "PARALLEL_EXECUTION"
