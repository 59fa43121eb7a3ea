from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime
from pathlib import Path

"""Report error log (JSON Lines).

Failed report runs are recorded in ``logs/errors-YYYYMMDD-HHMMSS.log`` (UTC),
one JSON object per line with a fixed key set.
"""

__all__ = [
    "ErrorRecord",
    "ErrorLogBuffer",
]

LOGS_DIR = Path("./logs")
TIMESTAMP_FMT = "%Y%m%d-%H%M%S"


@dataclass(frozen=True)
class ErrorRecord:
    """One failed report run.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        source: Data source (file path or "query")
        section: Section title ("" when not section specific)
        error_type: UPPER_SNAKE classification, e.g. VALIDATION_ERROR
        message: Human readable description
    """
    timestamp: str
    source: str
    section: str
    error_type: str
    message: str

    @staticmethod
    def create(source: str, section: str, error_type: str, message: str) -> ErrorRecord:
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return ErrorRecord(
            timestamp=ts,
            source=source,
            section=section,
            error_type=error_type,
            message=message,
        )

    def to_json_line(self) -> str:
        return json.dumps(asdict(self), ensure_ascii=False)


class ErrorLogBuffer:
    """In-memory buffer of error records; flush() appends them as JSON Lines.

    The file path is chosen on first access, so a run without errors never
    creates a log file.
    """

    def __init__(self, logs_dir: Path = LOGS_DIR) -> None:
        self._records: list[ErrorRecord] = []
        self._logs_dir = logs_dir
        self._file_path: Path | None = None

    @property
    def file_path(self) -> Path:
        if self._file_path is None:
            self._logs_dir.mkdir(parents=True, exist_ok=True)
            stamp = datetime.now(UTC).strftime(TIMESTAMP_FMT)
            self._file_path = self._logs_dir / f"errors-{stamp}.log"
        return self._file_path

    def append(self, record: ErrorRecord) -> None:
        self._records.append(record)

    def __len__(self) -> int:
        return len(self._records)

    def flush(self) -> Path | None:
        """Write buffered records; returns the file path, or None if nothing was written."""
        if not self._records:
            return None
        fp = self.file_path
        with fp.open("a", encoding="utf-8") as f:
            for r in self._records:
                f.write(r.to_json_line() + "\n")
        self._records.clear()
        return fp
