"""Hour, day, month and year access counts for web server logs."""

from .analyzer import LogAnalyzer
from .errors import AnalysisError, NotAggregatedError, AlreadyAggregatedError, EmptyDatasetError
from .reader import LogEntry, LogfileReader, parse_line, parse_file, filter_time

__all__ = [
    "LogAnalyzer",
    "LogEntry",
    "LogfileReader",
    "parse_line",
    "parse_file",
    "filter_time",
    "AnalysisError",
    "NotAggregatedError",
    "AlreadyAggregatedError",
    "EmptyDatasetError",
]
