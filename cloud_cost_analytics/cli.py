"""
Command Line Interface for Cloud Cost Analytics
"""

import argparse
import logging
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

from .main import CostAnalytics
from .models import ComparisonAxis, ComparisonMetric, ForecastMethod


def calculate_date_range(args):
    """Calculate start and end dates based on arguments"""
    today = datetime.now(tz=timezone.utc).date()

    end_date = (
        datetime.strptime(args.end_date, "%Y-%m-%d").date() if args.end_date else None
    )
    if args.start_date:
        start_date = datetime.strptime(args.start_date, "%Y-%m-%d").date()
    elif args.days:
        start_date = (end_date or today) - timedelta(days=args.days - 1)
    else:
        start_date = None

    return start_date, end_date


def positive_int(value):
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1, got {number}")
    return number


def build_parser():
    parser = argparse.ArgumentParser(
        description=(
            "Cloud Cost Analytics - forecasts, trends, anomalies and "
            "team/service/region comparisons from usage records"
        )
    )
    parser.add_argument("--csv", type=str, help="Path to usage records CSV file")
    parser.add_argument(
        "--team",
        type=str,
        default="all",
        help="Grouping key to analyse (default: all)",
    )
    parser.add_argument(
        "--dimension",
        type=str,
        choices=["team", "service", "region"],
        default="team",
        help="Column the grouping key refers to (default: team)",
    )
    parser.add_argument("--start-date", type=str, help="Start date (YYYY-MM-DD)")
    parser.add_argument("--end-date", type=str, help="End date (YYYY-MM-DD)")
    parser.add_argument(
        "--days", type=positive_int, help="Number of days back from end date"
    )
    parser.add_argument(
        "--method",
        type=str,
        choices=[m.value for m in ForecastMethod],
        help="Forecast method (default: FORECAST_METHOD or linear)",
    )
    parser.add_argument(
        "--horizon",
        type=positive_int,
        help="Days to forecast (default: FORECAST_HORIZON or 14)",
    )
    parser.add_argument(
        "--threshold",
        type=float,
        help="Anomaly z-score threshold (default: ANOMALY_THRESHOLD or 2.0)",
    )
    parser.add_argument(
        "--compare",
        type=str,
        choices=[a.value for a in ComparisonAxis],
        help="Also rank entities along this axis",
    )
    parser.add_argument(
        "--metric",
        type=str,
        choices=[m.value for m in ComparisonMetric],
        default=ComparisonMetric.TOTAL_COST.value,
        help="Ranking metric for --compare (default: total_cost)",
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Enable debug logging"
    )
    return parser


def find_latest_csv(data_dir):
    """Most recently modified CSV in data_dir, or None"""
    data_dir = Path(data_dir)
    if not data_dir.exists():
        return None
    csv_files = list(data_dir.glob("*.csv"))
    if not csv_files:
        return None
    return max(csv_files, key=lambda x: x.stat().st_mtime)


def main(argv=None):
    """Main entry point"""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    try:
        start_date, end_date = calculate_date_range(args)
    except ValueError as e:
        print(f"❌ Invalid date: {e}")
        return 1

    analytics = CostAnalytics()

    csv_path = args.csv or find_latest_csv(analytics.config.data_dir)
    if csv_path is None:
        print("❌ No data source specified. Use --csv")
        print(f"Or put CSV files in {analytics.config.data_dir}/ directory")
        return 1
    if not args.csv:
        print(f"Using most recent CSV: {csv_path}")

    if not analytics.load_from_csv(csv_path):
        print("❌ Failed to load CSV file")
        return 1

    success = analytics.run_full_analysis(
        key=args.team,
        start_date=start_date,
        end_date=end_date,
        dimension=args.dimension,
        method=args.method,
        horizon=args.horizon,
        threshold=args.threshold,
        compare=args.compare,
        metric=args.metric,
    )

    if success:
        print("🎉 Analysis completed successfully!")
        return 0
    print("❌ Analysis failed")
    return 1


if __name__ == "__main__":
    sys.exit(main())
