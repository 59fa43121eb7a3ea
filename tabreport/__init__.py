"""Render tabular data (CSV, Excel, query results) as txt, html, pdf or markdown reports."""

from .models import (
    CalculatedColumn,
    ColumnCalcType,
    Section,
    SectionStyle,
    SummaryCalcType,
    SummaryItem,
    TabularData,
)
from .renderers import available_formats, get_renderer
from .services import ReportValidationError

__version__ = "0.1.0"

__all__ = [
    "CalculatedColumn",
    "ColumnCalcType",
    "ReportValidationError",
    "Section",
    "SectionStyle",
    "SummaryCalcType",
    "SummaryItem",
    "TabularData",
    "available_formats",
    "get_renderer",
]
