from __future__ import annotations

from ..models.report_models import SummaryCalcType, SummaryItem
from ..models.report_result import ReportResult
from ..models.tabular import TabularData
from .calculated_columns import format_number
from .calculation import CalculationProvider

"""Summary rendering helpers.

- summary_value: evaluates one section SummaryItem to display text
- render_summary_line: formats the SUMMARY line printed at the end of a CLI run

SUMMARY line format:
SUMMARY format={name} sections={n} rows={rows} bytes={size} elapsed_sec={elapsed} output={path}
"""

__all__ = [
    "summary_value",
    "render_summary_line",
]


def summary_value(item: SummaryItem, data: TabularData, provider: CalculationProvider) -> str:
    """Evaluate ``item`` against ``data``.

    Args:
        item: Summary item to evaluate
        data: Section data after calculated-column expansion
        provider: Aggregate implementation

    Returns:
        Display text. Empty when a required column/condition is missing
        (the validator rejects such items before rendering).
    """
    calc = item.calc_type
    if calc is SummaryCalcType.MANUAL:
        return item.manual_value or ""

    if item.column_name is None:
        return ""
    values = data.get(item.column_name, ())

    if calc is SummaryCalcType.SUM:
        return format_number(provider.sum(values))
    if calc is SummaryCalcType.AVG:
        return format_number(provider.average(values))
    if calc is SummaryCalcType.MIN:
        return format_number(provider.min(values))
    if calc is SummaryCalcType.MAX:
        return format_number(provider.max(values))
    if calc is SummaryCalcType.COUNT:
        return str(provider.count(values))
    if calc is SummaryCalcType.COUNT_IF:
        if item.condition_value is None:
            return ""
        return str(provider.count_if(values, item.condition_value))
    raise ValueError(f"unsupported summary type: {calc}")


def _format_elapsed(seconds: float) -> str:
    if seconds == 0:
        return "0"
    if seconds == int(seconds):
        return str(int(seconds))
    if seconds < 0.01:
        # Avoid scientific notation for very short runs
        return f"{seconds:.6f}".rstrip("0").rstrip(".")
    return f"{seconds:.3f}".rstrip("0").rstrip(".")


def render_summary_line(result: ReportResult) -> str:
    """Render the SUMMARY line for a finished run.

    Examples:
        >>> from datetime import datetime, timezone
        >>> t = datetime(2024, 1, 1, tzinfo=timezone.utc)
        >>> r = ReportResult(
        ...     format="txt", sections=1, total_rows=3, size_bytes=120,
        ...     output_path=None, start_time=t, end_time=t, elapsed_seconds=0.0,
        ... )
        >>> render_summary_line(r)
        'SUMMARY format=txt sections=1 rows=3 bytes=120 elapsed_sec=0 output=-'
    """
    output = str(result.output_path) if result.output_path is not None else "-"
    return (
        f"SUMMARY format={result.format} "
        f"sections={result.sections} "
        f"rows={result.total_rows} "
        f"bytes={result.size_bytes} "
        f"elapsed_sec={_format_elapsed(result.elapsed_seconds)} "
        f"output={output}"
    )
