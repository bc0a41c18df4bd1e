import re  # regular expressions for the line layouts
import json  # JSON-formatted log lines
import logging  # report skipped lines
import datetime  # timestamps of each access
from dataclasses import dataclass  # immutable entry record
from typing import Iterator, Iterable, Optional, List, TextIO  # type hints used in signatures

logger = logging.getLogger(__name__)  # module logger

WEBLOG_PATTERN = re.compile(  # "year month day hour minute" followed by any extra fields
    r'^(?P<year>\d{4})\s+(?P<month>\d{1,2})\s+(?P<day>\d{1,2})\s+(?P<hour>\d{1,2})\s+(?P<minute>\d{1,2})(?:\s+.*)?$'
)  # end of regex compilation

COMMON_LOG_PATTERN = re.compile(  # Common Log Format lines
    r'(?P<ip>\S+) (?P<ident>\S+) (?P<user>\S+) \[(?P<time>[^\]]+)\] "(?P<request>[^"]*)" (?P<status>\d{3}) (?P<size>\S+)'
)  # end of regex compilation


@dataclass(frozen=True)
class LogEntry:
    """One access read from a log line."""

    time: datetime.datetime
    line: str = ""

    @property
    def hour(self) -> int:
        return self.time.hour

    @property
    def day(self) -> str:
        return self.time.strftime("%Y-%m-%d")

    @property
    def month(self) -> str:
        return self.time.strftime("%Y-%m")

    @property
    def year(self) -> str:
        return f"{self.time.year:04d}"

    def __str__(self) -> str:
        return self.time.strftime("%Y %m %d %H %M")


def parse_weblog_line(line: str) -> Optional[LogEntry]:  # parse "2015 06 01 00 10 200" style lines
    m = WEBLOG_PATTERN.match(line)  # attempt to match the line against the weblog layout
    if not m:  # not a weblog line
        return None  # let the caller try another layout
    gd = m.groupdict()  # named groups as a dict
    try:  # the digits may still describe an impossible date (month 13, hour 25)
        dt = datetime.datetime(
            int(gd["year"]), int(gd["month"]), int(gd["day"]), int(gd["hour"]), int(gd["minute"])
        )  # build the timestamp
    except ValueError:  # out-of-range field
        return None  # treat as unparseable
    return LogEntry(time=dt, line=line)  # normalized entry


def parse_common_log_line(line: str) -> Optional[LogEntry]:  # parse a Common Log Format line
    m = COMMON_LOG_PATTERN.match(line)  # attempt to match the line against the compiled pattern
    if not m:  # if there's no match
        return None  # return None to indicate parsing failed
    time_part = m.group("time").split()[0]  # drop the zone, e.g. "10/Oct/2000:13:55:36 -0700"
    try:  # try to parse the timestamp portion into a datetime
        dt = datetime.datetime.strptime(time_part, "%d/%b/%Y:%H:%M:%S")  # parse time into a datetime object
    except ValueError:  # malformed timestamp
        return None  # an entry without a time cannot be counted
    return LogEntry(time=dt, line=line)  # normalized entry


def parse_json_line(line: str) -> Optional[LogEntry]:  # parse a JSON-formatted log line
    try:  # try to decode the JSON
        obj = json.loads(line)  # load the JSON object from the line
    except ValueError:  # on JSON decoding error
        return None  # return None to indicate parsing failed
    if not isinstance(obj, dict):  # only objects carry fields
        return None  # arrays, numbers and strings are not entries
    raw = obj.get("time") or obj.get("timestamp")  # ISO-8601 timestamp field
    if not isinstance(raw, str):  # missing or not a string
        return None  # nothing to count
    try:  # parse the ISO string
        dt = datetime.datetime.fromisoformat(raw)  # e.g. "2015-06-01T00:10:00"
    except ValueError:  # not ISO
        return None  # unparseable timestamp
    return LogEntry(time=dt.replace(tzinfo=None), line=line)  # zone ignored


def parse_line(line: str) -> Optional[LogEntry]:  # decide which parser to use for a line
    line = line.strip()  # strip whitespace/newlines from the ends of the line
    if not line:  # if the line is empty after stripping
        return None  # skip empty lines
    if line.startswith("{"):  # heuristic: JSON lines start with "{"
        return parse_json_line(line)  # parse as JSON
    entry = parse_weblog_line(line)  # the plain weblog layout is the most common input
    if entry is None:  # otherwise
        entry = parse_common_log_line(line)  # attempt common log format
    return entry  # the parsed entry or None


def parse_file(path: str) -> Iterator[LogEntry]:  # iterate over parsed entries from a file path
    with open(path, "r", encoding="utf-8", errors="replace") as f:  # undecodable bytes become U+FFFD and the line fails to parse
        for lineno, raw in enumerate(f, 1):  # iterate over each raw line in the file
            entry = parse_line(raw)  # parse the line into an entry or None
            if entry is not None:  # if parsing succeeded
                yield entry  # yield the entry to the caller
            elif raw.strip():  # non-blank line that no layout recognised
                logger.debug("Skipping unparseable line %s:%d: %r", path, lineno, raw.rstrip("\n"))


class LogfileReader:
    """Re-iterable entry source backed by a log file.

    Every iteration re-opens the file, so the same reader can feed an
    aggregation pass and later :meth:`print_data`.
    """

    def __init__(self, path: str):
        self.path = path

    def __iter__(self) -> Iterator[LogEntry]:
        return parse_file(self.path)

    def print_data(self, out: Optional[TextIO] = None) -> None:
        for entry in self:
            print(entry, file=out)


def filter_time(entries: Iterable[LogEntry], start: Optional[datetime.datetime] = None, end: Optional[datetime.datetime] = None) -> List[LogEntry]:  # filter entries by optional start/end datetimes
    out = []  # prepare output list
    for e in entries:  # iterate over incoming entries
        if start and e.time < start:  # if a start bound is provided and entry is before it
            continue  # skip this entry
        if end and e.time > end:  # if an end bound is provided and entry is after it
            continue  # skip this entry
        out.append(e)  # entry passes the time filters; add to output
    return out  # return the filtered list of entries


__all__ = [  # public API symbols for "from reader import *"
    "LogEntry",
    "LogfileReader",
    "parse_line",
    "parse_file",
    "filter_time",
]  # end of __all__
