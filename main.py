"""Main entry point for the Schedule Analysis Engine."""

import argparse
import json
import logging
import sys
from dataclasses import asdict
from datetime import datetime, timedelta
from pathlib import Path

from schedule_analysis.engine import (
    OptimizationAdvisor,
    ProjectAnalyzer,
    WorkloadAggregator,
    calculate_critical_path,
    find_bottleneck_days,
    reconcile_dates,
)
from schedule_analysis.errors import InvalidGraphError, SnapshotError
from schedule_analysis.models import WorkloadView
from schedule_analysis.models.results import to_plain
from schedule_analysis.sample import SnapshotGenerator
from schedule_analysis.utils.config import get_default_config, load_config
from schedule_analysis.utils.datetime_utils import parse_datetime
from schedule_analysis.utils.logger import configure_logging
from schedule_analysis.utils.snapshot import load_snapshots, snapshot_to_dict

logger = logging.getLogger('schedule_analysis.main')


def resolve_config(config_path: str):
    """Load the config file when present, otherwise use the defaults."""
    if config_path and Path(config_path).exists():
        return load_config(config_path)
    return get_default_config()


def resolve_now(now_arg: str = None) -> datetime:
    if now_arg:
        return parse_datetime(now_arg)
    return datetime.now().replace(hour=9, minute=0, second=0, microsecond=0)


def resolve_snapshots(snapshot_path: str, config: dict, now: datetime):
    """Snapshots from a file, or a generated sample project."""
    if snapshot_path:
        return load_snapshots(snapshot_path, config)

    sample_config = config.get('sample', {})
    generator = SnapshotGenerator(seed=sample_config.get('seed', 42), config=config)
    logger.info("No snapshot given, analyzing a generated sample project")
    return [generator.generate_snapshot(now - timedelta(days=14), now)]


def write_json(data, path: Path):
    with open(path, 'w') as f:
        json.dump(data, f, indent=2, default=str)
    print(f"Saved to: {path}")


def run_analysis(snapshots, config: dict, now: datetime, view: str, reference_date, output_dir: Path):
    """Run the full analysis for every project and save report files."""
    analyzer = ProjectAnalyzer(config)
    reports = analyzer.analyze_portfolio(snapshots, now, reference_date, view)

    for report in reports:
        print(f"\nAnalyzed {report.project_name} ({report.project_id})")
        print(f"  Status: {report.delay.status.value}, delay {report.delay.delay_days} days")
        if report.critical_path is not None:
            print(f"  Project duration: {report.critical_path.project_duration_days} days")
        print(f"  Recommendations: {len(report.recommendations)}")

        write_json(report.to_dict(), output_dir / f"analysis_{report.project_id}.json")

        # Save human-readable log
        log_path = output_dir / f"analysis_{report.project_id}.log"
        with open(log_path, 'w') as f:
            f.write(report.to_human_readable())
        print(f"Human-readable log saved to: {log_path}")

    return 0 if all(report.ok for report in reports) else 2


def run_critical_path(snapshots, config: dict, output_dir: Path):
    hours_per_day = config.get('duration', {}).get('hours_per_day', 8)
    status = 0

    for snapshot in snapshots:
        project_id = snapshot.project.project_id
        try:
            result = calculate_critical_path(snapshot.tasks, hours_per_day)
        except InvalidGraphError as e:
            print(f"{project_id}: invalid dependency graph: {e}", file=sys.stderr)
            status = 2
            continue

        print(f"\n{project_id}: {result.project_duration_days} days")
        print(f"  Path: {' -> '.join(result.critical_path_task_ids) or '-'}")
        write_json(result.to_dict(), output_dir / f"critical_path_{project_id}.json")

    return status


def run_delays(snapshots, config: dict, now: datetime, output_dir: Path):
    for snapshot in snapshots:
        analysis = reconcile_dates(snapshot.project, snapshot.tasks, now, config)
        print(f"\n{analysis.project_id}: {analysis.breakdown.summary()} ({analysis.status.value})")
        write_json(analysis.to_dict(), output_dir / f"delays_{analysis.project_id}.json")
    return 0


def run_workload(snapshots, config: dict, view: str, reference_date, output_dir: Path):
    aggregator = WorkloadAggregator(config)

    for snapshot in snapshots:
        project_id = snapshot.project.project_id
        report = aggregator.aggregate(snapshot.resources, snapshot.tasks, reference_date, view)
        days = find_bottleneck_days(snapshot.resources, snapshot.tasks, report.period_start, report.period_end, config)
        report.bottleneck_days = [day.day for day in days if day.is_bottleneck]

        print(f"\n{project_id}: {report.view.value} workload {report.period_start} - {report.period_end}")
        for sample in report.samples:
            print(f"  {sample.resource_id}: {sample.workload_percent}% ({sample.level.value})")
        write_json(report.to_dict(), output_dir / f"workload_{project_id}.json")

    return 0


def run_recommendations(snapshots, config: dict, output_dir: Path):
    hours_per_day = config.get('duration', {}).get('hours_per_day', 8)
    advisor = OptimizationAdvisor(config)
    status = 0

    for snapshot in snapshots:
        project_id = snapshot.project.project_id
        try:
            result = calculate_critical_path(snapshot.tasks, hours_per_day)
        except InvalidGraphError as e:
            print(f"{project_id}: invalid dependency graph: {e}", file=sys.stderr)
            status = 2
            continue

        recommendations = advisor.recommend(result, snapshot.tasks)
        print(f"\n{project_id}: {len(recommendations)} recommendations")
        for rec in recommendations:
            print(f"  [{rec.type.value}] {rec.task_title}: saves {rec.time_saved} days")
        write_json(to_plain([asdict(rec) for rec in recommendations]), output_dir / f"recommendations_{project_id}.json")

    return status


def run_generate_sample(config: dict, now: datetime, output_dir: Path):
    sample_config = config.get('sample', {})
    generator = SnapshotGenerator(seed=sample_config.get('seed', 42), config=config)
    snapshot = generator.generate_snapshot(now - timedelta(days=14), now)

    print(f"Generated {len(snapshot.tasks)} tasks")
    print(f"Generated {len(snapshot.resources)} resources")

    write_json(snapshot_to_dict(snapshot), output_dir / "sample_snapshot.json")
    return 0


def main(argv=None):
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Schedule Analysis Engine"
    )
    parser.add_argument(
        'command',
        choices=['analyze', 'critical-path', 'delays', 'workload', 'recommend', 'generate-sample'],
        help='Command to run'
    )
    parser.add_argument(
        '--config',
        type=str,
        default='config.yaml',
        help='Path to configuration file (default: config.yaml)'
    )
    parser.add_argument(
        '--snapshot',
        type=str,
        help='Project snapshot file (JSON or YAML); a sample project is generated when omitted'
    )
    parser.add_argument(
        '--now',
        type=str,
        help='Analysis time as ISO-8601 (default: today 09:00)'
    )
    parser.add_argument(
        '--view',
        type=str,
        choices=[view.value for view in WorkloadView],
        default='weekly',
        help='Workload bucket (default: weekly)'
    )
    parser.add_argument(
        '--date',
        type=str,
        help='Reference date of the workload bucket (default: --now)'
    )
    parser.add_argument(
        '--output-dir',
        type=str,
        default='results',
        help='Directory for result files (default: results)'
    )
    parser.add_argument(
        '--log-level',
        type=str,
        default='INFO',
        help='Logging level (default: INFO)'
    )

    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    try:
        config = resolve_config(args.config)
        now = resolve_now(args.now)
        reference_date = parse_datetime(args.date) if args.date else now
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    # Create results directory
    output_dir = Path(args.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    if args.command == 'generate-sample':
        return run_generate_sample(config, now, output_dir)

    try:
        snapshots = resolve_snapshots(args.snapshot, config, now)
    except SnapshotError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.command == 'analyze':
        return run_analysis(snapshots, config, now, args.view, reference_date, output_dir)
    elif args.command == 'critical-path':
        return run_critical_path(snapshots, config, output_dir)
    elif args.command == 'delays':
        return run_delays(snapshots, config, now, output_dir)
    elif args.command == 'workload':
        return run_workload(snapshots, config, args.view, reference_date, output_dir)
    elif args.command == 'recommend':
        return run_recommendations(snapshots, config, output_dir)

    return 0


if __name__ == "__main__":
    sys.exit(main())
