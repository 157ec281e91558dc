"""Optimization rule implementations."""

from .base import AdvisorContext, OptimizationRule
from .duration import ReduceDurationRule
from .parallel import ParallelExecutionRule
from .resources import ResourceAllocationRule

__all__ = [
    'AdvisorContext', 'OptimizationRule',
    'ReduceDurationRule', 'ParallelExecutionRule', 'ResourceAllocationRule',
]
