"""Duration reduction rule."""

import math
from typing import Optional

from ..models.results import CriticalPathNode, EffortLevel, Recommendation, RecommendationType
from .base import AdvisorContext, OptimizationRule


class ReduceDurationRule(OptimizationRule):
    """Suggest cutting a multi-day critical task by a fixed share."""

    def evaluate(self, node: CriticalPathNode, context: AdvisorContext) -> Optional[Recommendation]:
        duration = node.duration
        if duration <= 1:
            return None

        ratio = self.advisor_config.get('reduction_ratio', 0.2)
        high_effort_duration = self.advisor_config.get('high_effort_duration', 5)
        saved = max(1, math.floor(duration * ratio))

        return Recommendation(
            type=RecommendationType.REDUCE_DURATION,
            task_id=node.task_id,
            task_title=node.title,
            current_duration=duration,
            suggested_duration=duration - saved,
            time_saved=saved,
            effort=EffortLevel.HIGH if duration > high_effort_duration else EffortLevel.MEDIUM,
            description=f"Making this task more efficient could save {saved} days",
            action="Narrow the task scope or assign a more experienced resource",
        )

    def get_rule_name(self) -> str:
        return "REDUCE_DURATION"
