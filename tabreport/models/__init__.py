"""Domain models for the tabular report renderer.

Value objects shared by the calculation services, the validator and every
renderer.
"""

from .report_models import (
    CalculatedColumn,
    ColumnCalcType,
    Section,
    SectionStyle,
    SummaryCalcType,
    SummaryItem,
)
from .report_result import ReportResult
from .tabular import TabularData

__all__ = [
    # Data
    "TabularData",
    # Section definition
    "CalculatedColumn",
    "ColumnCalcType",
    "Section",
    "SectionStyle",
    "SummaryCalcType",
    "SummaryItem",
    # Run result
    "ReportResult",
]
