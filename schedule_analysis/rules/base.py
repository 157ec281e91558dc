"""Base optimization rule interface."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..models.results import CriticalPathNode, Recommendation, WorkloadReport
from ..models.task import Task


@dataclass
class AdvisorContext:
    """What the rules may look at besides the node under evaluation."""

    tasks_by_id: Dict[str, Task]
    nodes_by_id: Dict[str, CriticalPathNode]
    dependents: Dict[str, List[str]] = field(default_factory=dict)
    workload: Optional[WorkloadReport] = None

    def dependent_nodes(self, task_id: str) -> List[CriticalPathNode]:
        return [self.nodes_by_id[dep] for dep in self.dependents.get(task_id, []) if dep in self.nodes_by_id]


class OptimizationRule(ABC):
    """Abstract base class for recommendation rules."""

    def __init__(self, config: dict):
        """Initialize rule with configuration."""
        self.config = config
        self.advisor_config = config.get('advisor', {})

    @abstractmethod
    def evaluate(self, node: CriticalPathNode, context: AdvisorContext) -> Optional[Recommendation]:
        """Return a recommendation for a critical task, or None."""
        pass

    @abstractmethod
    def get_rule_name(self) -> str:
        """Return the name of this rule."""
        pass
