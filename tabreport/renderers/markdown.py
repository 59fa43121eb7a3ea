from __future__ import annotations

from collections.abc import Sequence
from io import StringIO

from ..models.report_models import SectionStyle, SummaryItem
from ..models.tabular import TabularData
from .base import Renderer

"""Markdown renderer.

- Title: level-2 heading, bold/italic via emphasis, underline via <u>
- Table: pipe table; without a header an empty header row is emitted since
  pipe tables cannot omit it
- Summary: bullet list with bold labels
"""

__all__ = [
    "MarkdownRenderer",
    "escape_markdown_cell",
]

NO_DATA = "_No data_"


def escape_markdown_cell(text: str) -> str:
    return text.replace("|", "\\|").replace("\r\n", " ").replace("\n", " ").replace("\r", " ")


def _pipe_row(cells: Sequence[str]) -> str:
    return "| " + " | ".join(cells) + " |\n"


class MarkdownRenderer(Renderer):
    name = "markdown"
    default_file_extension = ".md"
    content_type = "text/markdown"
    supports_formatting = True
    section_separator = "\n---\n\n"

    def render_title(self, buf: StringIO, title: str | None, style: SectionStyle) -> None:
        if not title or not title.strip():
            return
        text = escape_markdown_cell(title)
        if style.title_bold and style.title_italic:
            text = f"***{text}***"
        elif style.title_bold:
            text = f"**{text}**"
        elif style.title_italic:
            text = f"_{text}_"
        if style.underline:
            text = f"<u>{text}</u>"
        buf.write(f"## {text}\n\n")

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
        if show_header:
            header_cells = [escape_markdown_cell(h) for h in header]
            if style.header_bold:
                header_cells = [f"**{h}**" for h in header_cells]
        else:
            header_cells = ["" for _ in header]
        buf.write(_pipe_row(header_cells))
        buf.write(_pipe_row(["---" for _ in header]))

        for cells in rows:
            buf.write(_pipe_row([escape_markdown_cell(c) for c in cells]))

    def render_summary(
        self, buf: StringIO, summary_items: Sequence[SummaryItem], data: TabularData
    ) -> None:
        if not summary_items:
            return
        buf.write("\n")
        for label, value in self.summary_pairs(summary_items, data):
            buf.write(f"- **{escape_markdown_cell(label)}:** {escape_markdown_cell(value)}\n")
