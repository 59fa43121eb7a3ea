from __future__ import annotations

from pathlib import Path

import pandas as pd

from ..models.tabular import TabularData

"""Excel sheet ingestion via pandas.

The first row of the sheet is the header; every cell is read as a string so
the report shows values exactly as typed (no float coercion of "007" etc.).
Fully empty rows are dropped.
"""

__all__ = [
    "ExcelSourceError",
    "read_excel_sheet",
    "normalize_sheet",
]


class ExcelSourceError(Exception):
    """Raised when an Excel source cannot be read or has no header row."""


def normalize_sheet(df: pd.DataFrame, sheet_name: str) -> TabularData:
    """Turn a raw (header=None) DataFrame into TabularData.

    Steps:
    1. Validate the sheet has a header row
    2. Use row 0 as column names (stripped)
    3. Drop rows where every cell is empty
    """
    if df.shape[0] < 1:
        raise ExcelSourceError(f"sheet '{sheet_name}' has no header row")
    header = ["" if pd.isna(c) else str(c).strip() for c in df.iloc[0].tolist()]
    body = df.iloc[1:].fillna("").astype(str)
    if not body.empty:
        blank = (body.apply(lambda col: col.str.strip()) == "").all(axis=1)
        body = body[~blank]
    body.columns = header
    return TabularData.from_dataframe(body)


def read_excel_sheet(path: Path, sheet_name: str | None = None) -> TabularData:
    """Read one sheet (the first one when ``sheet_name`` is None).

    Raises:
        ExcelSourceError: If the file/sheet is missing or unreadable.
    """
    if not path.exists():
        raise ExcelSourceError(f"excel file not found: {path}")
    try:
        xls = pd.ExcelFile(path)
        names = [str(n) for n in xls.sheet_names]
        target = sheet_name if sheet_name is not None else (names[0] if names else None)
        if target is None or target not in names:
            raise ExcelSourceError(f"sheet '{sheet_name}' not found in {path.name}")
        df = xls.parse(target, header=None, dtype=str, keep_default_na=False)
    except ExcelSourceError:
        raise
    except Exception as e:
        raise ExcelSourceError(f"failed reading {path}: {e}") from e
    return normalize_sheet(df, target)
