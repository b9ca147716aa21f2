from __future__ import annotations

import json
import re
from pathlib import Path

from td_importer.logging.error_log import IssueLogBuffer
from td_importer.models.error_record import IssueRecord


def test_flush_writes_json_lines(tmp_path: Path):
    buf = IssueLogBuffer(tmp_path / "logs")
    buf.append(IssueRecord.create("a.csv", 2, "type", "WARNING", 'Invalid type "x"'))
    buf.append(IssueRecord.create("b.csv", -1, "", "ERROR", "CSV content is empty"))
    assert len(buf) == 2

    path = buf.flush()

    assert path is not None
    assert re.match(r"^import-\d{8}-\d{6}\.log$", path.name)
    lines = path.read_text(encoding="utf-8").splitlines()
    assert [json.loads(line)["file"] for line in lines] == ["a.csv", "b.csv"]
    assert len(buf) == 0


def test_flush_empty_buffer_creates_nothing(tmp_path: Path):
    buf = IssueLogBuffer(tmp_path / "logs")
    assert buf.flush() is None
    assert not (tmp_path / "logs").exists()


def test_second_flush_appends_to_same_file(tmp_path: Path):
    buf = IssueLogBuffer(tmp_path / "logs")
    buf.append(IssueRecord.create("a.csv", 2, "type", "WARNING", "first"))
    first = buf.flush()
    buf.append(IssueRecord.create("a.csv", 3, "type", "WARNING", "second"))
    second = buf.flush()

    assert first == second
    assert len(second.read_text(encoding="utf-8").splitlines()) == 2


def test_records_returns_copy(tmp_path: Path):
    buf = IssueLogBuffer(tmp_path)
    buf.append(IssueRecord.create("a.csv", 2, "", "ERROR", "x"))
    buf.records.clear()
    assert len(buf) == 1


def test_add_helpers_and_counts(tmp_path: Path):
    from td_importer.models.warning import CsvWarning

    buf = IssueLogBuffer(tmp_path)
    buf.add_warning("a.csv", CsvWarning(row=3, column="type", message='Invalid type "x"'))
    buf.add_error("b.csv", "CSV content is empty")
    buf.flush()
    buf.add_error("c.csv", "Row 2: malformed quoting", row=2)

    assert buf.count("WARNING") == 1
    assert buf.count("ERROR") == 2
    record = buf.records[0]
    assert (record.file, record.row, record.column, record.severity) == ("c.csv", 2, "", "ERROR")
    lines = buf.file_path.read_text(encoding="utf-8").splitlines()
    assert [json.loads(line)["row"] for line in lines] == [3, -1]
