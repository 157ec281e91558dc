"""Tests for the project analyzer facade."""

import json
from datetime import date, datetime, timezone

from schedule_analysis.engine.analyzer import ProjectAnalyzer
from schedule_analysis.models import DelayFactor, Project, ProjectSnapshot, ProjectStatus, Resource, Task


class TestProjectAnalyzer:
    """End-to-end analysis of one project."""

    def test_full_report(self, scenario_one_project, scenario_one_tasks, resources, now, config):
        report = ProjectAnalyzer(config).analyze(scenario_one_project, scenario_one_tasks, resources, now)

        assert report.ok
        assert report.critical_path.project_duration_days == 4
        assert report.critical_path.critical_path_task_ids == ['A', 'B', 'D']
        assert report.delay.status is ProjectStatus.DELAYED
        assert report.delay.breakdown.progress_based == 2
        assert report.delay.completion_percent == 50.0
        assert report.workload.period_start == date(2024, 3, 10)
        assert report.workload.period_end == date(2024, 3, 16)
        assert len(report.bottlenecks) == 7
        assert [summary.resource_id for summary in report.resource_summaries] == ['r1', 'r2']
        assert len(report.recommendations) == 2

    def test_report_is_deterministic(self, scenario_one_project, scenario_one_tasks, resources, now, config):
        """Identical inputs give identical serialized reports."""
        analyzer = ProjectAnalyzer(config)

        first = analyzer.analyze(scenario_one_project, scenario_one_tasks, resources, now).to_dict()
        second = analyzer.analyze(scenario_one_project, scenario_one_tasks, resources, now).to_dict()

        assert first == second
        assert json.loads(json.dumps(first)) == first
        assert first['delay']['status'] == 'delayed'
        assert first['workload']['view'] == 'weekly'

    def test_invalid_graph_is_isolated(self, cyclic_tasks, resources, now, config):
        """A cycle removes the CPM parts but keeps the rest of the report."""
        project = Project('p2', 'Broken')

        report = ProjectAnalyzer(config).analyze(project, cyclic_tasks, resources, now)

        assert not report.ok
        assert report.critical_path is None
        assert report.recommendations == []
        assert report.errors[0]['type'] == 'InvalidGraph'
        assert report.errors[0]['task_ids'] == ['A', 'B', 'C']
        assert report.delay is not None
        assert report.workload is not None

    def test_portfolio(self, scenario_one_project, scenario_one_tasks, cyclic_tasks, resources, now, config):
        """One broken project does not affect the others."""
        snapshots = [
            ProjectSnapshot(Project('p2', 'Broken'), cyclic_tasks, resources),
            ProjectSnapshot(scenario_one_project, scenario_one_tasks, resources),
        ]

        reports = ProjectAnalyzer(config).analyze_portfolio(snapshots, now)

        assert [report.ok for report in reports] == [False, True]
        assert reports[1].critical_path.project_duration_days == 4

    def test_other_project_tasks_ignored(self, scenario_one_project, scenario_one_tasks, resources, now, config):
        stray = Task('Z', 'Elsewhere', estimated_hours=400, project_id='other')

        report = ProjectAnalyzer(config).analyze(scenario_one_project, scenario_one_tasks + [stray], resources, now)

        assert report.critical_path.node('Z') is None
        assert report.critical_path.project_duration_days == 4

    def test_bottleneck_days_in_workload(self, now, config):
        project = Project('p3', 'Crowded')
        tasks = [Task(f't{i}', 'Work', start_date=now, end_date=now) for i in range(6)]

        report = ProjectAnalyzer(config).analyze(project, tasks, [], now, view='daily')

        assert report.workload.bottleneck_days == [date(2024, 3, 15)]
        assert report.period_stats.bottleneck_days == 1

    def test_human_readable(self, scenario_one_project, scenario_one_tasks, resources, now, config):
        text = ProjectAnalyzer(config).analyze(scenario_one_project, scenario_one_tasks, resources, now).to_human_readable()

        assert "Critical Path:" in text
        assert "Path: A -> B -> D" in text
        assert "Recommendations:" in text
        assert "High-risk days:" in text
        assert "Days with urgent tasks:" in text

    def test_timezone_aware_dates(self, config):
        """Aware task dates mix with a naive analysis time."""
        utc = timezone.utc
        project = Project('p4', 'Remote', start_date=datetime(2024, 3, 1, tzinfo=utc),
                          end_date=datetime(2024, 3, 10, tzinfo=utc))
        tasks = [Task('t1', 'Late', estimated_hours=8, start_date=datetime(2024, 3, 1, tzinfo=utc),
                      end_date=datetime(2024, 3, 5, tzinfo=utc), assigned_resource_ids=['r'])]

        report = ProjectAnalyzer(config).analyze(project, tasks, [Resource('r')], datetime(2024, 3, 15, 9))

        assert tasks[0].end_date.tzinfo is None
        assert report.delay.breakdown.overdue_based == 11
        assert report.delay.breakdown.schedule_based == 6
        assert report.delay.breakdown.dominant_factor is DelayFactor.OVERDUE

    def test_timezone_aware_now(self, scenario_one_project, scenario_one_tasks, resources, config):
        now = datetime(2024, 3, 15, 9, tzinfo=timezone.utc)

        report = ProjectAnalyzer(config).analyze(scenario_one_project, scenario_one_tasks, resources, now)

        assert report.analyzed_at == datetime(2024, 3, 15, 9)
        assert report.delay.breakdown.progress_based == 2
