"""Utility functions."""

from .config import get_default_config, load_config, merge_config
from .datetime_utils import days_between, get_working_days, is_working_day, parse_datetime
from .logger import configure_logging

__all__ = [
    'get_default_config', 'load_config', 'merge_config',
    'days_between', 'get_working_days', 'is_working_day', 'parse_datetime',
    'configure_logging',
]
