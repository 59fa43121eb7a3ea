from __future__ import annotations

import logging
from collections.abc import Sequence

from ..models.report_models import CalculatedColumn, ColumnCalcType, SummaryCalcType, SummaryItem
from ..models.tabular import TabularData

"""Structural and referential checks run before a section is rendered.

Checks stop at the first problem found:
1. data has at least one column
2. all columns have the same row count
3. summary items reference existing columns / carry their required values
4. calculated columns have a valid arity and existing source columns
"""

logger = logging.getLogger(__name__)

__all__ = [
    "find_problem",
    "validate",
]

_MULTI_SOURCE = {ColumnCalcType.SUM, ColumnCalcType.MULTIPLY}
_TWO_SOURCE = {ColumnCalcType.DIFF, ColumnCalcType.DIVIDE}


def _summary_problem(item: SummaryItem, data: TabularData) -> str | None:
    if item.calc_type is SummaryCalcType.MANUAL:
        if item.manual_value is None:
            return f"summary item '{item.label}': MANUAL requires a manual value"
        return None
    if item.column_name is None:
        return f"summary item '{item.label}': {item.calc_type.name} requires a column"
    if item.calc_type is SummaryCalcType.COUNT_IF and item.condition_value is None:
        return f"summary item '{item.label}': COUNT_IF requires a condition value"
    if item.column_name not in data:
        return f"summary item '{item.label}': column '{item.column_name}' not found"
    return None


def _calculated_problem(calc: CalculatedColumn, data: TabularData) -> str | None:
    sources = calc.source_columns
    if not sources:
        return f"calculated column '{calc.name}': no source columns"
    if calc.operation in _MULTI_SOURCE and len(sources) < 2:
        return f"calculated column '{calc.name}': {calc.operation.name} requires at least 2 source columns"
    if calc.operation in _TWO_SOURCE and len(sources) != 2:
        return f"calculated column '{calc.name}': {calc.operation.name} requires exactly 2 source columns"
    for src in sources:
        if src not in data:
            return f"calculated column '{calc.name}': source column '{src}' not found"
    return None


def find_problem(
    data: TabularData,
    summary_items: Sequence[SummaryItem] = (),
    calculated_columns: Sequence[CalculatedColumn] = (),
) -> str | None:
    """Return a description of the first problem, or None when valid."""
    if len(data) == 0:
        return "data has no columns"

    expected = data.row_count
    for name, values in data.items():
        if len(values) != expected:
            return f"column '{name}' has {len(values)} rows, expected {expected}"

    for item in summary_items:
        problem = _summary_problem(item, data)
        if problem:
            return problem

    for calc in calculated_columns:
        problem = _calculated_problem(calc, data)
        if problem:
            return problem

    return None


def validate(
    data: TabularData,
    summary_items: Sequence[SummaryItem] = (),
    calculated_columns: Sequence[CalculatedColumn] = (),
) -> bool:
    """Return True when the section inputs are consistent.

    The first problem found is logged as a warning.
    """
    problem = find_problem(data, summary_items, calculated_columns)
    if problem is not None:
        logger.warning(f"validation: {problem}")
        return False
    return True
