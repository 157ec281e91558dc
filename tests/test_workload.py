"""Tests for the workload aggregator."""

from datetime import date, timedelta

import pytest

from schedule_analysis.engine.workload import (
    WorkloadAggregator,
    aggregate_workload,
    aggregate_workload_range,
    classify_workload_level,
    period_bounds,
    summarize_resource,
    workload_percent,
)
from schedule_analysis.models import Resource, Task, TaskStatus, WorkloadLevel, WorkloadView


@pytest.fixture
def aggregator(config):
    return WorkloadAggregator(config)


class TestWorkloadPercent:
    """Percentage and level helpers."""

    def test_rounds_half_up(self):
        assert workload_percent(1, 8) == 13
        assert workload_percent(12, 56) == 21

    def test_zero_capacity(self):
        """No available hours give 0 instead of a division error."""
        assert workload_percent(10, 0) == 0

    @pytest.mark.parametrize("percent,expected", [
        (0, WorkloadLevel.LIGHT),
        (50, WorkloadLevel.LIGHT),
        (51, WorkloadLevel.NORMAL),
        (80, WorkloadLevel.NORMAL),
        (100, WorkloadLevel.HEAVY),
        (101, WorkloadLevel.OVERLOADED),
    ])
    def test_levels(self, percent, expected):
        assert classify_workload_level(percent) is expected


class TestPeriodBounds:
    """Bucket boundaries."""

    def test_week_starts_on_sunday(self, now):
        assert period_bounds(now, WorkloadView.WEEKLY) == (date(2024, 3, 10), date(2024, 3, 16))

    def test_month(self, now):
        assert period_bounds(now, 'monthly') == (date(2024, 3, 1), date(2024, 3, 31))

    def test_day(self, now):
        assert period_bounds(now, 'daily') == (date(2024, 3, 15), date(2024, 3, 15))


class TestAggregation:
    """Allocated versus available hours."""

    def test_overlapping_tasks_overload(self, aggregator, now):
        """Two 6h tasks on one day exceed an 8h day."""
        resource = Resource('r1', max_hours_per_day=8)
        tasks = [
            Task('t1', 'One', estimated_hours=6, start_date=now, end_date=now, assigned_resource_ids=['r1']),
            Task('t2', 'Two', estimated_hours=6, start_date=now, end_date=now, assigned_resource_ids=['r1']),
        ]

        report = aggregator.aggregate([resource], tasks, now, WorkloadView.DAILY)
        sample = report.samples[0]

        assert sample.hours_allocated == 12
        assert sample.hours_available == 8
        assert sample.workload_percent == 150
        assert sample.is_overloaded
        assert sample.level is WorkloadLevel.OVERLOADED
        assert sample.task_ids == ['t1', 't2']

    def test_weekly_capacity_uses_calendar_days(self, aggregator, now):
        """Weekly availability counts all seven days."""
        resource = Resource('r1', max_hours_per_day=8)
        tasks = [
            Task('t1', 'One', estimated_hours=6, start_date=now, end_date=now, assigned_resource_ids=['r1']),
            Task('t2', 'Two', estimated_hours=6, start_date=now, end_date=now, assigned_resource_ids=['r1']),
        ]

        sample = aggregator.aggregate([resource], tasks, now, WorkloadView.WEEKLY).samples[0]

        assert sample.hours_available == 56
        assert sample.working_hours_available == 40
        assert sample.workload_percent == 21
        assert not sample.is_overloaded

    def test_working_hours_follow_resource_calendar(self, aggregator, now):
        """Working-day capacity only counts the resource's own working days."""
        resource = Resource('r1', max_hours_per_day=8, working_days=[5, 6])

        sample = aggregator.aggregate([resource], [], now, WorkloadView.WEEKLY).samples[0]

        assert sample.working_hours_available == 16
        assert sample.hours_available == 56

    def test_monthly_capacity(self, aggregator, now):
        resource = Resource('r1', max_hours_per_day=8)

        sample = aggregator.aggregate([resource], [], now, WorkloadView.MONTHLY).samples[0]

        assert sample.hours_available == 8 * 31
        assert sample.hours_allocated == 0
        assert sample.level is WorkloadLevel.LIGHT

    def test_estimate_spread_over_span(self, aggregator, now):
        """A 16h task over four days claims 4h on each of them."""
        resource = Resource('r1')
        task = Task('t1', 'Spread', estimated_hours=16, start_date=now, end_date=now + timedelta(days=3),
                    assigned_resource_ids=['r1'])

        daily = aggregator.aggregate([resource], [task], now, WorkloadView.DAILY).samples[0]
        outside = aggregator.aggregate([resource], [task], now - timedelta(days=1), WorkloadView.DAILY).samples[0]

        assert daily.hours_allocated == 4
        assert daily.workload_percent == 50
        assert outside.hours_allocated == 0

    def test_placeholder_for_missing_estimate(self, aggregator, now):
        """Tasks without an estimate count as 4h per day."""
        resource = Resource('r1')
        task = Task('t1', 'Unknown', start_date=now, end_date=now, assigned_resource_ids=['r1'])

        sample = aggregator.aggregate([resource], [task], now, 'daily').samples[0]

        assert sample.hours_allocated == 4
        assert sample.workload_percent == 50

    def test_only_assigned_tasks_count(self, aggregator, now):
        resource = Resource('r1')
        task = Task('t1', 'Other', estimated_hours=8, start_date=now, end_date=now, assigned_resource_ids=['r2'])

        sample = aggregator.aggregate([resource], [task], now, 'daily').samples[0]

        assert sample.hours_allocated == 0
        assert sample.task_ids == []

    def test_tasks_without_interval_skipped(self, aggregator, now):
        """Tasks missing a start or end date are reported, not counted."""
        resource = Resource('r1')
        tasks = [
            Task('t1', 'Open', estimated_hours=8, start_date=now, assigned_resource_ids=['r1']),
            Task('t2', 'Undated', estimated_hours=8, assigned_resource_ids=['r1']),
        ]

        report = aggregator.aggregate([resource], tasks, now, 'daily')

        assert report.skipped_task_ids == ['t1', 't2']
        assert report.samples[0].hours_allocated == 0

    def test_zero_capacity_resource(self, aggregator, now):
        resource = Resource('r1', max_hours_per_day=0)
        task = Task('t1', 'Work', estimated_hours=8, start_date=now, end_date=now, assigned_resource_ids=['r1'])

        sample = aggregator.aggregate([resource], [task], now, 'daily').samples[0]

        assert sample.hours_allocated == 8
        assert sample.workload_percent == 0

    def test_adding_tasks_never_lowers_workload(self, aggregator, now):
        """Workload grows monotonically with assigned tasks."""
        resource = Resource('r1')
        tasks = []
        previous = 0
        for i in range(4):
            tasks.append(Task(f't{i}', 'Work', estimated_hours=3, start_date=now, end_date=now,
                              assigned_resource_ids=['r1']))
            percent = aggregator.aggregate([resource], tasks, now, 'weekly').samples[0].workload_percent
            assert percent >= previous
            previous = percent

    def test_multi_assigned_task_counts_for_each_resource(self, now):
        """A task with two assignees loads both of them."""
        resources = [Resource('r1'), Resource('r2')]
        task = Task('t1', 'Pair', estimated_hours=8, start_date=now, end_date=now, assigned_resource_ids=['r1', 'r2'])

        report = aggregate_workload(resources, [task], now, 'daily')

        assert [sample.hours_allocated for sample in report.samples] == [8, 8]
        assert report.overloaded_resource_ids() == []

    def test_aggregate_range_gives_daily_samples(self, aggregator, now, resources):
        report = aggregator.aggregate_range(resources, [], now, now + timedelta(days=2))

        assert len(report.samples) == 6
        assert report.view is WorkloadView.DAILY
        assert len(report.samples_for('r1')) == 3

    def test_range_wrapper_reports_skipped(self, now):
        task = Task('t1', 'Open', start_date=now, assigned_resource_ids=['r1'])

        report = aggregate_workload_range([Resource('r1')], [task], now, now)

        assert report.skipped_task_ids == ['t1']
        assert report.samples[0].workload_percent == 0


class TestResourceSummary:
    """Per-resource task counts."""

    def test_counts(self, now):
        resource = Resource('r1', 'Ada')
        tasks = [
            Task('t1', 'Done', status=TaskStatus.COMPLETED, assigned_resource_ids=['r1']),
            Task('t2', 'Late', status=TaskStatus.IN_PROGRESS, end_date=now - timedelta(days=1),
                 assigned_resource_ids=['r1']),
            Task('t3', 'Waiting', status=TaskStatus.BLOCKED, assigned_resource_ids=['r1']),
            Task('t4', 'Someone else', assigned_resource_ids=['r2']),
        ]

        summary = summarize_resource(resource, tasks, now)

        assert summary.total_tasks == 3
        assert summary.active_tasks == 1
        assert summary.completed_tasks == 1
        assert summary.overdue_tasks == 1
        assert summary.completion_rate == 33

    def test_no_tasks(self, now):
        assert summarize_resource(Resource('r1'), [], now).completion_rate == 100
