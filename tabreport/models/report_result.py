from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

"""Result model for one report generation run.

Collected by the CLI and rendered as the final SUMMARY line.
"""

__all__ = [
    "ReportResult",
]


@dataclass(frozen=True)
class ReportResult:
    """Aggregated outcome of a report run."""
    format: str  # Renderer name (txt/html/pdf/markdown)
    sections: int  # Number of rendered sections
    total_rows: int  # Data rows across all sections (after calculated columns)
    size_bytes: int  # Length of the encoded report
    output_path: Path | None  # None when bytes were not written to disk
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
