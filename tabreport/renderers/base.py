from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping, Sequence
from io import StringIO
from typing import Any

from ..models.report_models import CalculatedColumn, Section, SectionStyle, SummaryItem
from ..models.tabular import TabularData
from ..services.calculation import CalculationProvider
from ..services.orchestrator import render_sections
from ..services.summary import summary_value

"""Renderer contract shared by every output format.

Subclasses define identity attributes and the three emission primitives
(render_title / render_table / render_summary). Orchestration (calculated
columns, validation, separators) lives in services.orchestrator and is the
same for every format.
"""

__all__ = [
    "Renderer",
    "ROW_NUMBER_HEADER",
]

ROW_NUMBER_HEADER = "#"


class Renderer(ABC):
    """Base class for txt/html/pdf/markdown renderers."""

    name: str = ""
    default_file_extension: str = ""
    content_type: str = "application/octet-stream"
    supports_formatting: bool = False
    section_separator: str = ""

    def __init__(self, calculation_provider: CalculationProvider | None = None) -> None:
        self.calculation_provider = calculation_provider or CalculationProvider()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"

    # ===== orchestration =====

    def render_text(
        self,
        sections: Sequence[Section],
        on_section: Callable[[Section, TabularData], None] | None = None,
    ) -> str:
        """Render all sections to the format's text (before final encoding)."""
        return render_sections(
            sections,
            render_title=self.render_title,
            render_table=self.render_table,
            render_summary=self.render_summary,
            separator=self.section_separator,
            on_section=on_section,
        )

    def generate_report(
        self,
        sections: Sequence[Section],
        on_section: Callable[[Section, TabularData], None] | None = None,
    ) -> bytes:
        """Render ``sections`` and return the encoded report.

        Raises:
            ReportValidationError: If any section is invalid.
        """
        return self.encode(self.render_text(sections, on_section))

    def generate_section_report(
        self,
        data: TabularData | Mapping[str, Sequence[str]],
        title: str | None = None,
        summary_items: Sequence[SummaryItem] = (),
        show_row_numbers: bool = False,
        style: SectionStyle | None = None,
        show_header: bool = True,
        calculated_columns: Sequence[CalculatedColumn] = (),
    ) -> bytes:
        """Shortcut: build a single Section and call generate_report()."""
        section = Section(
            data=data if isinstance(data, TabularData) else TabularData(data),
            title=title,
            summary_items=tuple(summary_items),
            show_row_numbers=show_row_numbers,
            style=style or SectionStyle(),
            show_header=show_header,
            calculated_columns=tuple(calculated_columns),
        )
        return self.generate_report([section])

    def encode(self, text: str) -> bytes:
        return text.encode("utf-8")

    # ===== format primitives =====

    @abstractmethod
    def render_title(self, buf: StringIO, title: str | None, style: SectionStyle) -> None:
        """Write the section title. Nothing is written for an empty title."""

    @abstractmethod
    def render_table(
        self,
        buf: StringIO,
        data: TabularData,
        show_row_numbers: bool,
        style: SectionStyle,
        show_header: bool,
    ) -> None:
        """Write the table, or a "no data" placeholder for empty data."""

    @abstractmethod
    def render_summary(
        self, buf: StringIO, summary_items: Sequence[SummaryItem], data: TabularData
    ) -> None:
        """Write one ``label: value`` entry per summary item."""

    # ===== helpers =====

    def summary_pairs(
        self, summary_items: Sequence[SummaryItem], data: TabularData
    ) -> list[tuple[str, str]]:
        return [
            (item.label, summary_value(item, data, self.calculation_provider))
            for item in summary_items
        ]

    @staticmethod
    def table_rows(data: TabularData, show_row_numbers: bool) -> tuple[list[str], list[list[str]]]:
        """Return (header cells, body rows) in column/row order.

        The row-number column is synthesized as the first column, 1-based.
        """
        header: list[str] = []
        if show_row_numbers:
            header.append(ROW_NUMBER_HEADER)
        header.extend(data.columns)

        rows: list[list[str]] = []
        for row_index in range(data.row_count):
            cells: list[str] = []
            if show_row_numbers:
                cells.append(str(row_index + 1))
            cells.extend(values[row_index] for values in data.values())
            rows.append(cells)
        return header, rows

    def describe(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "extension": self.default_file_extension,
            "content_type": self.content_type,
            "supports_formatting": self.supports_formatting,
        }
