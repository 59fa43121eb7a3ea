from __future__ import annotations

import math
from collections.abc import Sequence

from ..models.report_models import CalculatedColumn, ColumnCalcType
from ..models.tabular import TabularData
from .calculation import parse_number

"""Calculated-column engine.

Derives new columns from existing ones with SUM / DIFF / MULTIPLY / DIVIDE.
Columns are computed in the order given and appended to a working copy, so a
calculated column may reference one computed before it. Cells that do not
parse as numbers never raise:

- SUM, DIFF: treated as 0.0
- MULTIPLY: left out of the product (0.0 when no operand parses)
- DIVIDE: a zero or unparseable divisor gives 0.0
"""

__all__ = [
    "apply_calculated_columns",
    "parse_cell_number",
    "format_number",
]


def parse_cell_number(value: str | None) -> float | None:
    """Parse a cell as float, accepting a comma decimal separator.

    Returns None for missing or unparseable cells.
    """
    if value is None:
        return None
    return parse_number(value.replace(",", "."))


# Larger floats are not exact integers; int() would print invented digits
_EXACT_INT_LIMIT = 2**53


def format_number(value: float) -> str:
    """Render a number for storage in a string cell.

    Integral values drop the fractional part: 200.0 -> "200", 2.5 -> "2.5".
    Very large values keep the float form: 1e23 -> "1e+23".
    """
    if not math.isfinite(value):
        return str(value)
    if abs(value) < _EXACT_INT_LIMIT and value == int(value):
        return str(int(value))
    return repr(value)


def _cell(columns: dict[str, tuple[str, ...]], name: str, row: int) -> str | None:
    values = columns.get(name)
    if values is None or row >= len(values):
        return None
    return values[row]


def _compute(
    columns: dict[str, tuple[str, ...]], calc: CalculatedColumn, row_count: int
) -> list[str] | None:
    sources: Sequence[str] = calc.source_columns
    op = calc.operation
    result: list[str] = []

    if op is ColumnCalcType.SUM:
        for row in range(row_count):
            total = 0.0
            for src in sources:
                total += parse_cell_number(_cell(columns, src, row)) or 0.0
            result.append(format_number(total))
        return result

    if op is ColumnCalcType.MULTIPLY:
        for row in range(row_count):
            product: float | None = None
            for src in sources:
                number = parse_cell_number(_cell(columns, src, row))
                if number is None:
                    continue
                product = number if product is None else product * number
            result.append(format_number(product if product is not None else 0.0))
        return result

    # DIFF / DIVIDE need two operands; anything shorter is skipped
    if len(sources) < 2:
        return None
    left, right = sources[0], sources[1]
    for row in range(row_count):
        a = parse_cell_number(_cell(columns, left, row)) or 0.0
        b = parse_cell_number(_cell(columns, right, row))
        if op is ColumnCalcType.DIFF:
            value = a - (b or 0.0)
        else:
            value = a / b if b else 0.0
        result.append(format_number(value))
    return result


def apply_calculated_columns(
    data: TabularData, calculated_columns: Sequence[CalculatedColumn]
) -> TabularData:
    """Return ``data`` extended with every calculated column.

    ``data`` itself is never modified. Returns ``data`` unchanged when there is
    nothing to compute or no columns to compute from.
    """
    if not calculated_columns or len(data) == 0:
        return data

    columns: dict[str, tuple[str, ...]] = dict(data.items())
    row_count = data.row_count

    for calc in calculated_columns:
        if not calc.source_columns:
            continue
        values = _compute(columns, calc, row_count)
        if values is None:
            continue
        columns[calc.name] = tuple(values)

    return TabularData(columns)
