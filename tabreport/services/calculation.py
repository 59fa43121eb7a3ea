from __future__ import annotations

import re
from collections.abc import Sequence

"""Aggregate functions over the string values of one column.

Values that do not parse as numbers are skipped by the numeric aggregates;
``count`` counts every cell regardless. Nothing here raises on bad input.
"""

__all__ = [
    "CalculationProvider",
    "parse_number",
]

# Plain decimal notation only: no digit separators, hex, or "inf"/"nan" spellings
_NUMBER_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|[+-]?(?:NaN|Infinity)")


def parse_number(text: str | None) -> float | None:
    """Parse a trimmed decimal number; None when ``text`` is not one."""
    if text is None:
        return None
    text = text.strip()
    if not _NUMBER_RE.fullmatch(text):
        return None
    return float(text)


class CalculationProvider:
    """Stateless SUM/AVG/MIN/MAX/COUNT/COUNT_IF implementation.

    One instance is shared by a renderer; subclass to change number parsing.
    """

    def to_numbers(self, values: Sequence[str]) -> list[float]:
        numbers: list[float] = []
        for value in values:
            number = parse_number(value)
            if number is not None:
                numbers.append(number)
        return numbers

    def sum(self, values: Sequence[str]) -> float:
        return float(sum(self.to_numbers(values)))

    def average(self, values: Sequence[str]) -> float:
        numbers = self.to_numbers(values)
        if not numbers:
            return 0.0
        return sum(numbers) / len(numbers)

    def min(self, values: Sequence[str]) -> float:
        numbers = self.to_numbers(values)
        return min(numbers) if numbers else 0.0

    def max(self, values: Sequence[str]) -> float:
        numbers = self.to_numbers(values)
        return max(numbers) if numbers else 0.0

    def count(self, values: Sequence[str]) -> int:
        # Blank and non-numeric cells are counted too
        return len(values)

    def count_if(self, values: Sequence[str], condition_value: str) -> int:
        return sum(1 for v in values if v == condition_value)
