import datetime

import pytest

from weblog_analyzer.analyzer import LogAnalyzer
from weblog_analyzer.reader import LogEntry, LogfileReader, parse_line, parse_file, filter_time


def test_parse_weblog_line():
    e = parse_line("2015 06 01 09 47 500\n")
    assert e.time == datetime.datetime(2015, 6, 1, 9, 47)
    assert e.hour == 9
    assert e.day == "2015-06-01"
    assert e.month == "2015-06"
    assert e.year == "2015"
    assert str(e) == "2015 06 01 09 47"


def test_parse_common_line():
    line = '127.0.0.1 - frank [10/Oct/2000:13:55:36 -0700] "GET /index.html HTTP/1.0" 200 2326'
    e = parse_line(line)
    assert e.hour == 13
    assert e.day == "2000-10-10"
    assert e.line == line


def test_parse_json_line():
    e = parse_line('{"time": "2021-03-04T22:01:00", "path": "/"}')
    assert e.hour == 22
    assert e.month == "2021-03"
    assert parse_line('{"path": "/"}') is None
    assert parse_line("[1, 2]") is None


@pytest.mark.parametrize("line", ["", "   ", "garbage", "2015 13 01 00 10", "2015 06 01 24 00", "{not json"])
def test_unparseable_lines(line):
    assert parse_line(line) is None


def test_entries_are_immutable():
    e = LogEntry(time=datetime.datetime(2015, 6, 1))
    with pytest.raises(AttributeError):
        e.time = datetime.datetime(2016, 1, 1)


def test_parse_file_skips_bad_lines(tmp_path):
    log = tmp_path / "weblog.txt"
    log.write_text("2015 06 01 00 10 200\nnot a log line\n\n2015 06 01 01 20 404\n", encoding="utf-8")
    entries = list(parse_file(str(log)))
    assert [e.hour for e in entries] == [0, 1]


def test_reader_is_reiterable(tmp_path, capsys):
    log = tmp_path / "weblog.txt"
    log.write_text("2015 06 01 00 10 200\n2015 06 02 23 59 200\n", encoding="utf-8")
    analyzer = LogAnalyzer.from_file(str(log))
    analyzer.aggregate()
    assert analyzer.total_accesses() == 2
    analyzer.print_data()
    assert capsys.readouterr().out == "2015 06 01 00 10\n2015 06 02 23 59\n"


def test_missing_file(tmp_path):
    reader = LogfileReader(str(tmp_path / "missing.log"))
    with pytest.raises(FileNotFoundError):
        list(reader)


def test_filter_time():
    entries = [LogEntry(time=datetime.datetime(2015, 6, d)) for d in range(1, 6)]
    kept = filter_time(entries, start=datetime.datetime(2015, 6, 2), end=datetime.datetime(2015, 6, 4))
    assert [e.time.day for e in kept] == [2, 3, 4]
    assert filter_time(entries) == entries


def test_parse_file_skips_undecodable_bytes(tmp_path):
    log = tmp_path / "weblog.txt"
    log.write_bytes(b"2015 06 01 00 10 200\n\xff\xfe garbage\n2015 06 01 01 10 200\n")
    entries = list(parse_file(str(log)))
    assert [e.hour for e in entries] == [0, 1]
