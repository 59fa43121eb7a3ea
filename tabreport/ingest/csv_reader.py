from __future__ import annotations

from pathlib import Path

from ..models.tabular import TabularData

"""CSV ingestion.

Line-oriented parsing (no quoting rules):
- trailing whitespace is trimmed per line, blank lines are dropped
- the first line is the header, or synthetic names col0, col1, ... when
  has_header is False (count taken from the first line)
- fields are trimmed; missing trailing fields become "", extra fields are ignored
"""

__all__ = [
    "CsvSourceError",
    "parse_csv",
    "read_csv_file",
]


class CsvSourceError(Exception):
    """Raised when a CSV source cannot be read."""


def parse_csv(content: str, has_header: bool = True, delimiter: str = ",") -> TabularData:
    if len(delimiter) != 1:
        raise ValueError(f"delimiter must be a single character, got {delimiter!r}")

    lines = [line.rstrip() for line in content.splitlines()]
    lines = [line for line in lines if line.strip()]
    if not lines:
        return TabularData()

    if has_header:
        header = [field.strip() for field in lines[0].split(delimiter)]
        data_lines = lines[1:]
    else:
        header = [f"col{i}" for i in range(len(lines[0].split(delimiter)))]
        data_lines = lines

    columns: dict[str, list[str]] = {name: [] for name in header}
    for line in data_lines:
        parts = [field.strip() for field in line.split(delimiter)]
        for index, name in enumerate(header):
            columns[name].append(parts[index] if index < len(parts) else "")

    return TabularData(columns)


def read_csv_file(
    path: Path, has_header: bool = True, delimiter: str = ",", encoding: str = "utf-8"
) -> TabularData:
    """Read and parse a CSV file.

    Raises:
        CsvSourceError: If the file is missing or cannot be decoded.
    """
    if not path.exists():
        raise CsvSourceError(f"csv file not found: {path}")
    try:
        # utf-8-sig drops a leading BOM written by spreadsheet exports
        content = path.read_text(encoding="utf-8-sig" if encoding.lower() == "utf-8" else encoding)
    except (OSError, UnicodeDecodeError) as e:
        raise CsvSourceError(f"failed reading {path}: {e}") from e
    return parse_csv(content, has_header=has_header, delimiter=delimiter)
