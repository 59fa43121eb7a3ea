from __future__ import annotations

import json
import re
from pathlib import Path

from tabreport.logging.error_log import ErrorLogBuffer, ErrorRecord

EXPECTED_KEYS = {"timestamp", "source", "section", "error_type", "message"}


def test_record_json_line_has_fixed_keys():
    record = ErrorRecord.create("data.csv", "Orders", "VALIDATION_ERROR", "column 'x' not found")
    payload = json.loads(record.to_json_line())
    assert set(payload) == EXPECTED_KEYS
    assert payload["timestamp"].endswith("Z")


def test_flush_writes_json_lines(tmp_path: Path):
    buf = ErrorLogBuffer(logs_dir=tmp_path / "logs")
    buf.append(ErrorRecord.create("q", "", "VALIDATION_ERROR", "a"))
    buf.append(ErrorRecord.create("q", "", "VALIDATION_ERROR", "ć"))
    path = buf.flush()
    assert path is not None
    assert re.fullmatch(r"errors-\d{8}-\d{6}\.log", path.name)
    lines = path.read_text(encoding="utf-8").splitlines()
    assert [json.loads(line)["message"] for line in lines] == ["a", "ć"]
    assert len(buf) == 0


def test_flush_without_records_creates_nothing(tmp_path: Path):
    buf = ErrorLogBuffer(logs_dir=tmp_path / "logs")
    assert buf.flush() is None
    assert not (tmp_path / "logs").exists()
