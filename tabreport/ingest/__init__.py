"""Data source adapters producing TabularData."""

from .csv_reader import CsvSourceError, parse_csv, read_csv_file
from .excel_reader import ExcelSourceError, read_excel_sheet

__all__ = [
    "CsvSourceError",
    "ExcelSourceError",
    "parse_csv",
    "read_csv_file",
    "read_excel_sheet",
]
