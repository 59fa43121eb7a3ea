from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum

from .tabular import TabularData

"""Report section value objects.

A report is an ordered list of Section objects. Each Section owns its raw
TabularData, the calculated columns to derive before rendering, the summary
items shown under the table and presentation flags.
"""

__all__ = [
    "ColumnCalcType",
    "CalculatedColumn",
    "SummaryCalcType",
    "SummaryItem",
    "SectionStyle",
    "Section",
]


class ColumnCalcType(Enum):
    """Arithmetic operation of a calculated column.

    - SUM: sum of two or more columns
    - DIFF: exactly two columns, first minus second
    - MULTIPLY: product of two or more columns
    - DIVIDE: exactly two columns, first divided by second
    """
    SUM = "sum"
    DIFF = "diff"
    MULTIPLY = "multiply"
    DIVIDE = "divide"


@dataclass(frozen=True)
class CalculatedColumn:
    """Column derived from existing columns at render time."""
    name: str  # Name of the new column (appended after the source columns)
    operation: ColumnCalcType
    source_columns: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "source_columns", tuple(self.source_columns))


class SummaryCalcType(Enum):
    SUM = "sum"
    AVG = "avg"
    MIN = "min"
    MAX = "max"
    COUNT = "count"
    COUNT_IF = "count_if"
    MANUAL = "manual"  # Fixed text, no calculation


@dataclass(frozen=True)
class SummaryItem:
    """One labeled line of a section summary.

    Attributes:
        label: Text shown before the value
        calc_type: Aggregate to compute, or MANUAL for fixed text
        column_name: Column the aggregate runs over (all types except MANUAL)
        condition_value: Exact value counted by COUNT_IF
        manual_value: Text shown for MANUAL items
    """
    label: str
    calc_type: SummaryCalcType
    column_name: str | None = None
    condition_value: str | None = None
    manual_value: str | None = None


@dataclass(frozen=True)
class SectionStyle:
    """Presentation options. Ignored by renderers without formatting support."""
    title_bold: bool = False
    title_italic: bool = False
    underline: bool = False
    header_bold: bool = False
    border_width: int = 1  # 0 = no borders

    @property
    def effective_border_width(self) -> int:
        return max(self.border_width, 0)


@dataclass(frozen=True)
class Section:
    """One titled block of a report: table + summary + display options."""
    data: TabularData
    title: str | None = None
    summary_items: tuple[SummaryItem, ...] = ()
    show_row_numbers: bool = False
    style: SectionStyle = field(default_factory=SectionStyle)
    show_header: bool = True
    calculated_columns: tuple[CalculatedColumn, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.data, TabularData):
            if not isinstance(self.data, Mapping):
                raise TypeError(f"section data must be a mapping, got {type(self.data).__name__}")
            object.__setattr__(self, "data", TabularData(self.data))
        object.__setattr__(self, "summary_items", tuple(self.summary_items))
        object.__setattr__(self, "calculated_columns", tuple(self.calculated_columns))
