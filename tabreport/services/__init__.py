"""Format-independent report services."""

from .calculated_columns import apply_calculated_columns, format_number, parse_cell_number
from .calculation import CalculationProvider, parse_number
from .orchestrator import ReportValidationError, prepare_section, render_sections
from .validator import find_problem, validate

__all__ = [
    "CalculationProvider",
    "ReportValidationError",
    "apply_calculated_columns",
    "find_problem",
    "format_number",
    "parse_cell_number",
    "parse_number",
    "prepare_section",
    "render_sections",
    "validate",
]
