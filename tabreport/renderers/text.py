from __future__ import annotations

from collections.abc import Sequence
from io import StringIO

from ..models.report_models import SectionStyle, SummaryItem
from ..models.tabular import TabularData
from .base import Renderer

"""Plain text renderer.

Fixed-width table: every column is as wide as its widest header/value, two
spaces between columns, dashes under each header name. Style options have no
effect in plain text.
"""

__all__ = [
    "TextRenderer",
]

NO_DATA = "[No data]"
COLUMN_SEPARATOR = "  "


class TextRenderer(Renderer):
    name = "txt"
    default_file_extension = ".txt"
    content_type = "text/plain"
    supports_formatting = False
    section_separator = "\n\n"

    def render_title(self, buf: StringIO, title: str | None, style: SectionStyle) -> None:
        if not title or not title.strip():
            return
        buf.write(title)
        buf.write("\n\n")

    def render_table(
        self,
        buf: StringIO,
        data: TabularData,
        show_row_numbers: bool,
        style: SectionStyle,
        show_header: bool,
    ) -> None:
        if len(data) == 0:
            buf.write(NO_DATA + "\n")
            return

        header, rows = self.table_rows(data, show_row_numbers)
        widths = [len(h) for h in header]
        for cells in rows:
            for i, cell in enumerate(cells):
                widths[i] = max(widths[i], len(cell))

        if show_header:
            self._write_line(buf, header, widths)
            # Dash count = header length; the rest of the column stays blank
            self._write_line(buf, ["-" * len(h) for h in header], widths)

        for cells in rows:
            self._write_line(buf, cells, widths)

    @staticmethod
    def _write_line(buf: StringIO, cells: list[str], widths: list[int]) -> None:
        buf.write(COLUMN_SEPARATOR.join(cell.ljust(width) for cell, width in zip(cells, widths)))
        buf.write("\n")

    def render_summary(
        self, buf: StringIO, summary_items: Sequence[SummaryItem], data: TabularData
    ) -> None:
        if not summary_items:
            return
        buf.write("\n")
        for label, value in self.summary_pairs(summary_items, data):
            buf.write(f"{label}: {value}\n")
