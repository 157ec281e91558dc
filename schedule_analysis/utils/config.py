"""Configuration management."""

import copy
import json
import yaml
from pathlib import Path
from typing import Dict, Any, Optional


def load_config(config_path: str) -> Dict[str, Any]:
    """Load configuration from YAML or JSON file, layered over the defaults."""
    path = Path(config_path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path, 'r') as f:
        if path.suffix.lower() in ['.yaml', '.yml']:
            loaded = yaml.safe_load(f)
        elif path.suffix.lower() == '.json':
            loaded = json.load(f)
        else:
            raise ValueError(f"Unsupported config file format: {path.suffix}")

    return merge_config(get_default_config(), loaded or {})


def merge_config(base: Dict[str, Any], overrides: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Return a copy of ``base`` with ``overrides`` merged in section by section."""
    merged = copy.deepcopy(base)

    for key, value in (overrides or {}).items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_config(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)

    return merged


def get_default_config() -> Dict[str, Any]:
    """Get default configuration."""
    return {
        'duration': {
            'hours_per_day': 8,
            'default_daily_hours': 4,  # placeholder for tasks without an estimate
        },
        'workload': {
            'default_max_hours_per_day': 8,
            'working_days': [0, 1, 2, 3, 4],  # Monday to Friday
            'levels': {
                'light': 50,
                'normal': 80,
                'heavy': 100,
            },
        },
        'bottleneck': {
            'average_workload_percent': 80,
            'max_active_tasks': 5,
            'high_risk_workload_percent': 120,
            'high_risk_overloaded_resources': 1,
        },
        'delay': {
            'attention_limit': 5,
            'attention_priorities': ['HIGH', 'URGENT', 'CRITICAL'],
            'severity': {
                'low': 7,
                'medium': 21,
                'high': 45,
            },
        },
        'advisor': {
            'reduction_ratio': 0.2,
            'parallel_min_dependents': 2,
            'resource_min_duration': 3,
            'resource_gain': 0.3,
            'max_additional_resources': 2,
            'high_effort_duration': 5,
        },
        'sample': {
            'seed': 42,
            'task_count': 12,
            'resource_count': 4,
        },
    }
