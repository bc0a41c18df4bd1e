import sys  # sys.maxsize seeds the quietest-period scans
import logging  # report aggregation progress
from collections import Counter  # per-period access counts
from typing import Dict, Iterable, List, Optional, TextIO, Any  # type hints used in signatures

from .errors import NotAggregatedError, AlreadyAggregatedError, EmptyDatasetError
from .reader import LogfileReader

logger = logging.getLogger(__name__)

HOURS_PER_DAY = 24


def _busiest_label(counts: Dict[str, int]) -> Optional[str]:
    # labels are scanned in sorted order so ties resolve to the smallest label
    busiest = None
    max_count = 0
    for label in sorted(counts):
        if counts[label] > max_count:
            busiest = label
            max_count = counts[label]
    return busiest


def _quietest_label(counts: Dict[str, int]) -> Optional[str]:
    quietest = None
    min_count = sys.maxsize
    for label in sorted(counts):
        if counts[label] < min_count:
            quietest = label
            min_count = counts[label]
    return quietest


def _print_counts(header: str, counts: Dict[str, int], out: Optional[TextIO]) -> None:
    print(f"{header}: Count", file=out)
    for label in sorted(counts):
        print(f"{label}: {counts[label]}", file=out)


class LogAnalyzer:
    """
    Tabulate web accesses by hour of day, day, month and year.

    The source is read once by aggregate(); every query afterwards is a pure
    read of the counters. Queries issued before aggregate() raise
    NotAggregatedError.
    """

    def __init__(self, source: Iterable[Any]):
        self._source = source
        self.hour_counts: List[int] = [0] * HOURS_PER_DAY
        self.daily_counts: Counter = Counter()
        self.monthly_counts: Counter = Counter()
        self.yearly_counts: Counter = Counter()
        self._aggregated = False

    @classmethod
    def from_file(cls, path: str) -> "LogAnalyzer":
        """Build an analyzer reading entries from the log file at ``path``."""
        return cls(LogfileReader(path))

    @property
    def aggregated(self) -> bool:
        return self._aggregated

    def aggregate(self) -> None:
        """Count every entry of the source into the four counters.

        Counts are gathered locally and only published once the whole source
        has been read; a failing entry leaves the analyzer untouched.
        """
        if self._aggregated:
            raise AlreadyAggregatedError("log entries have already been aggregated")
        hour_counts = [0] * HOURS_PER_DAY
        daily = Counter()
        monthly = Counter()
        yearly = Counter()
        for entry in self._source:
            hour = entry.hour
            if not 0 <= hour < HOURS_PER_DAY:
                raise ValueError(f"hour out of range 0-23: {hour!r}")
            hour_counts[hour] += 1
            daily[entry.day] += 1
            monthly[entry.month] += 1
            yearly[entry.year] += 1
        self.hour_counts = hour_counts
        self.daily_counts = daily
        self.monthly_counts = monthly
        self.yearly_counts = yearly
        self._aggregated = True
        logger.info("Aggregated %d log entries", sum(hour_counts))

    def _require_aggregated(self) -> None:
        if not self._aggregated:
            raise NotAggregatedError("aggregate() must be called before querying the analyzer")

    # --- hour-of-day statistics ---

    def total_accesses(self) -> int:
        self._require_aggregated()
        return sum(self.hour_counts)

    def busiest_hour(self) -> int:
        self._require_aggregated()
        busiest = 0
        max_count = self.hour_counts[0]
        for hour in range(1, HOURS_PER_DAY):
            if self.hour_counts[hour] > max_count:
                busiest = hour
                max_count = self.hour_counts[hour]
        return busiest

    def quietest_hour(self) -> int:
        self._require_aggregated()
        quietest = 0
        min_count = sys.maxsize
        for hour in range(HOURS_PER_DAY):
            if self.hour_counts[hour] < min_count:
                quietest = hour
                min_count = self.hour_counts[hour]
        return quietest

    def busiest_two_hour_period(self) -> int:
        """Return the first hour (0-22) of the busiest pair of consecutive hours."""
        self._require_aggregated()
        start = 0
        max_count = 0
        for hour in range(HOURS_PER_DAY - 1):
            pair = self.hour_counts[hour] + self.hour_counts[hour + 1]
            if pair > max_count:
                start = hour
                max_count = pair
        return start

    # --- label-keyed statistics (None when nothing was recorded) ---

    def busiest_day(self) -> Optional[str]:
        self._require_aggregated()
        return _busiest_label(self.daily_counts)

    def quietest_day(self) -> Optional[str]:
        self._require_aggregated()
        return _quietest_label(self.daily_counts)

    def busiest_month(self) -> Optional[str]:
        self._require_aggregated()
        return _busiest_label(self.monthly_counts)

    def quietest_month(self) -> Optional[str]:
        self._require_aggregated()
        return _quietest_label(self.monthly_counts)

    def busiest_year(self) -> Optional[str]:
        self._require_aggregated()
        return _busiest_label(self.yearly_counts)

    def quietest_year(self) -> Optional[str]:
        self._require_aggregated()
        return _quietest_label(self.yearly_counts)

    def average_accesses_per_month(self) -> float:
        self._require_aggregated()
        if not self.monthly_counts:
            raise EmptyDatasetError("no months recorded; average accesses per month is undefined")
        return sum(self.monthly_counts.values()) / len(self.monthly_counts)

    # --- reports ---

    def print_hourly_counts(self, out: Optional[TextIO] = None) -> None:
        self._require_aggregated()
        print("Hr: Count", file=out)
        for hour, count in enumerate(self.hour_counts):
            print(f"{hour}: {count}", file=out)

    def print_daily_counts(self, out: Optional[TextIO] = None) -> None:
        self._require_aggregated()
        _print_counts("Day", self.daily_counts, out)

    def print_monthly_counts(self, out: Optional[TextIO] = None) -> None:
        self._require_aggregated()
        _print_counts("Month", self.monthly_counts, out)

    def print_yearly_counts(self, out: Optional[TextIO] = None) -> None:
        self._require_aggregated()
        _print_counts("Year", self.yearly_counts, out)

    def print_data(self, out: Optional[TextIO] = None) -> None:
        """Print the entries of the source, one per line.

        The source is iterated again, so a one-shot iterator prints nothing
        once aggregate() has consumed it.
        """
        print_data = getattr(self._source, "print_data", None)
        if print_data is not None:
            print_data(out)
            return
        for entry in self._source:
            print(entry, file=out)

    def summary(self) -> Dict[str, Any]:
        """Collect every statistic into a plain dict (JSON friendly)."""
        self._require_aggregated()
        try:
            average = self.average_accesses_per_month()
        except EmptyDatasetError:
            average = None
        return {
            "total_accesses": self.total_accesses(),
            "busiest_hour": self.busiest_hour(),
            "quietest_hour": self.quietest_hour(),
            "busiest_two_hour_period": self.busiest_two_hour_period(),
            "busiest_day": self.busiest_day(),
            "quietest_day": self.quietest_day(),
            "busiest_month": self.busiest_month(),
            "quietest_month": self.quietest_month(),
            "busiest_year": self.busiest_year(),
            "quietest_year": self.quietest_year(),
            "average_accesses_per_month": average,
            "hour_counts": list(self.hour_counts),
            "daily_counts": dict(self.daily_counts),
            "monthly_counts": dict(self.monthly_counts),
            "yearly_counts": dict(self.yearly_counts),
        }


__all__ = [
    "LogAnalyzer",
    "HOURS_PER_DAY",
]
