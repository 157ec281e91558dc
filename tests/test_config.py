"""Tests for configuration loading and date helpers."""

import json
from datetime import date, datetime, timezone

import pytest

from schedule_analysis.utils.config import get_default_config, load_config, merge_config
from schedule_analysis.utils.datetime_utils import (
    date_range,
    days_between,
    get_working_days,
    inclusive_day_span,
    parse_datetime,
    to_datetime,
    week_bounds,
)


class TestConfig:
    """Loading and merging configuration files."""

    def test_partial_yaml_merges_over_defaults(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("bottleneck:\n  max_active_tasks: 10\n")

        config = load_config(str(path))

        assert config['bottleneck']['max_active_tasks'] == 10
        assert config['bottleneck']['average_workload_percent'] == 80
        assert config['duration']['hours_per_day'] == 8

    def test_json_config(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({'duration': {'hours_per_day': 6}}))

        assert load_config(str(path))['duration']['hours_per_day'] == 6

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "config.yml"
        path.write_text("")

        assert load_config(str(path)) == get_default_config()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "nope.yaml"))

    def test_unsupported_format(self, tmp_path):
        path = tmp_path / "config.ini"
        path.write_text("[duration]\n")

        with pytest.raises(ValueError):
            load_config(str(path))

    def test_merge_does_not_modify_base(self):
        base = get_default_config()

        merged = merge_config(base, {'workload': {'levels': {'light': 40}}})

        assert merged['workload']['levels'] == {'light': 40, 'normal': 80, 'heavy': 100}
        assert base['workload']['levels']['light'] == 50


class TestDatetimeUtils:
    """Date arithmetic used across the engine."""

    def test_days_between_rounds_up(self):
        assert days_between(datetime(2024, 3, 3, 12), datetime(2024, 3, 1)) == 3
        assert days_between(datetime(2024, 3, 3), datetime(2024, 3, 1)) == 2
        assert days_between(datetime(2024, 3, 1), datetime(2024, 3, 3)) == -2

    def test_parse_datetime(self):
        assert parse_datetime('2024-03-15') == datetime(2024, 3, 15)
        assert parse_datetime('2024-03-15T09:00:00Z') == datetime(2024, 3, 15, 9)
        assert parse_datetime('2024-03-15T11:00:00+02:00') == datetime(2024, 3, 15, 9)
        assert parse_datetime(date(2024, 3, 15)) == datetime(2024, 3, 15)
        assert parse_datetime('') is None
        assert parse_datetime(None) is None

    def test_aware_datetimes_become_naive_utc(self):
        aware = datetime(2024, 3, 15, 11, tzinfo=timezone.utc)

        assert to_datetime(aware) == datetime(2024, 3, 15, 11)
        assert to_datetime(aware).tzinfo is None
        assert days_between(aware, datetime(2024, 3, 14, 11)) == 1

    def test_week_bounds(self):
        assert week_bounds(date(2024, 3, 10)) == (date(2024, 3, 10), date(2024, 3, 16))
        assert week_bounds(date(2024, 3, 16)) == (date(2024, 3, 10), date(2024, 3, 16))

    def test_ranges(self):
        assert len(date_range(date(2024, 2, 27), date(2024, 3, 1))) == 4
        assert date_range(date(2024, 3, 2), date(2024, 3, 1)) == []
        assert inclusive_day_span(datetime(2024, 3, 1, 17), datetime(2024, 3, 1, 9)) == 1
        assert inclusive_day_span(date(2024, 3, 1), date(2024, 3, 3)) == 3

    def test_working_days(self):
        days = get_working_days(date(2024, 3, 10), date(2024, 3, 16), [0, 1, 2, 3, 4])

        assert days[0] == date(2024, 3, 11)
        assert len(days) == 5
