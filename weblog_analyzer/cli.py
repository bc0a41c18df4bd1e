import argparse
import json
import logging
import sys
import datetime

from .analyzer import LogAnalyzer
from .errors import EmptyDatasetError
from .reader import LogfileReader, filter_time

logger = logging.getLogger(__name__)


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(levelname)-8s - [%(name)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def iso_to_dt(s: str):
    # entries carry no zone, so bounds are compared on wall-clock time too
    return datetime.datetime.fromisoformat(s).replace(tzinfo=None)


def print_report(analyzer: LogAnalyzer) -> None:
    analyzer.print_hourly_counts()
    analyzer.print_daily_counts()
    analyzer.print_monthly_counts()
    analyzer.print_yearly_counts()
    print(f"Total accesses: {analyzer.total_accesses()}")
    print(f"Busiest hour: {analyzer.busiest_hour()}")
    print(f"Quietest hour: {analyzer.quietest_hour()}")
    print(f"Busiest two-hour period starts at: {analyzer.busiest_two_hour_period()}")
    print(f"Busiest day: {analyzer.busiest_day() or 'no data'}")
    print(f"Quietest day: {analyzer.quietest_day() or 'no data'}")
    print(f"Busiest month: {analyzer.busiest_month() or 'no data'}")
    print(f"Quietest month: {analyzer.quietest_month() or 'no data'}")
    print(f"Busiest year: {analyzer.busiest_year() or 'no data'}")
    print(f"Quietest year: {analyzer.quietest_year() or 'no data'}")
    try:
        print(f"Average accesses per month: {analyzer.average_accesses_per_month():.2f}")
    except EmptyDatasetError as e:
        logger.warning("%s", e)
        print("Average accesses per month: no data")


def main(argv=None) -> int:
    p = argparse.ArgumentParser(description="Tabulate web accesses by hour, day, month and year")
    p.add_argument("--file", "-f", required=True, help="Path to log file")
    p.add_argument("--start", help="Start time (ISO) e.g. 2015-06-01T00:00:00")
    p.add_argument("--end", help="End time (ISO)")
    p.add_argument("--json", action="store_true", help="Output JSON summary")
    p.add_argument("--data", action="store_true", help="Also print the parsed entries")
    p.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = p.parse_args(argv)

    configure_logging(args.verbose)

    try:
        start = iso_to_dt(args.start) if args.start else None
        end = iso_to_dt(args.end) if args.end else None
    except ValueError as e:
        logger.error("Invalid time bound: %s", e)
        return 1

    reader = LogfileReader(args.file)
    try:
        entries = filter_time(reader, start=start, end=end)
    except OSError as e:
        logger.error("Cannot read log file %s: %s", args.file, e)
        return 1

    analyzer = LogAnalyzer(entries)
    analyzer.aggregate()
    if args.json:
        print(json.dumps(analyzer.summary(), indent=2))
    else:
        if args.data:
            analyzer.print_data()
        print_report(analyzer)
    return 0


if __name__ == "__main__":
    sys.exit(main())
