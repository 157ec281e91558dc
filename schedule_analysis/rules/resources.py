"""Resource allocation rule."""

import math
from typing import Optional

from ..models.results import CriticalPathNode, EffortLevel, Recommendation, RecommendationType
from .base import AdvisorContext, OptimizationRule


class ResourceAllocationRule(OptimizationRule):
    """Suggest extra people for long critical tasks held by a single resource."""

    def evaluate(self, node: CriticalPathNode, context: AdvisorContext) -> Optional[Recommendation]:
        task = context.tasks_by_id.get(node.task_id)
        if task is None or len(task.assigned_resource_ids) != 1:
            return None

        min_duration = self.advisor_config.get('resource_min_duration', 3)
        if node.duration <= min_duration:
            return None

        gain = self.advisor_config.get('resource_gain', 0.3)
        max_additional = self.advisor_config.get('max_additional_resources', 2)
        additional = min(max_additional, math.floor(node.duration / min_duration))
        saved = math.floor(node.duration * gain * additional)

        description = f"Adding {additional} resources could save {saved} days"
        owner = task.assigned_resource_ids[0]
        if context.workload is not None and owner in context.workload.overloaded_resource_ids():
            description += f"; {owner} is already overloaded"

        return Recommendation(
            type=RecommendationType.RESOURCE_ALLOCATION,
            task_id=node.task_id,
            task_title=node.title,
            current_duration=node.duration,
            suggested_duration=node.duration - saved,
            time_saved=saved,
            effort=EffortLevel.HIGH if additional > 1 else EffortLevel.MEDIUM,
            description=description,
            action=f"Assign {additional} more team members and split the work",
        )

    def get_rule_name(self) -> str:
        return "RESOURCE_ALLOCATION"
