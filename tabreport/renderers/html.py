from __future__ import annotations

import logging
from collections.abc import Sequence
from io import StringIO

from ..models.report_models import SectionStyle, SummaryItem
from ..models.tabular import TabularData
from .base import Renderer

"""HTML and PDF renderers.

Both build the same standalone HTML document; PdfRenderer converts it to PDF
bytes with WeasyPrint as the final encoding step. Border width comes from
SectionStyle.border_width as inline CSS on the table and every cell.
"""

logger = logging.getLogger(__name__)

__all__ = [
    "HtmlRenderer",
    "PdfRenderer",
    "RendererUnavailableError",
    "escape_html",
    "html_to_pdf",
]

NO_DATA = "<p><em>No data</em></p>"

DOCUMENT_HEAD = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8"/>
  <title>Report</title>
  <style>
    body { font-family: sans-serif; font-size: 14px; }
    h1, h2 { margin: 0 0 0.5em 0; }
    table { border-collapse: collapse; margin-bottom: 1.5em; }
    th, td { padding: 4px 8px; }
    ul.summary { list-style-type: disc; margin: 0 0 1.5em 1.5em; padding: 0; }
  </style>
</head>
<body>
"""

DOCUMENT_TAIL = """</body>
</html>
"""


class RendererUnavailableError(RuntimeError):
    """Raised when the host library a renderer needs is not installed."""


def escape_html(text: str) -> str:
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&#39;")
    )


def html_to_pdf(html: str) -> bytes:
    """Convert an HTML document to PDF bytes with WeasyPrint."""
    try:
        from weasyprint import HTML
    except (ImportError, OSError) as e:  # OSError: missing pango/cairo system libraries
        raise RendererUnavailableError(f"PDF rendering requires WeasyPrint: {e}") from e
    return HTML(string=html).write_pdf()


class HtmlRenderer(Renderer):
    name = "html"
    default_file_extension = ".html"
    content_type = "text/html"
    supports_formatting = True
    section_separator = "<hr/>\n"

    def render_text(self, sections, on_section=None) -> str:
        return DOCUMENT_HEAD + super().render_text(sections, on_section) + DOCUMENT_TAIL

    def render_title(self, buf: StringIO, title: str | None, style: SectionStyle) -> None:
        if not title or not title.strip():
            return
        tags = []
        if style.title_bold:
            tags.append("b")
        if style.title_italic:
            tags.append("i")
        if style.underline:
            tags.append("u")
        opening = "".join(f"<{t}>" for t in tags)
        closing = "".join(f"</{t}>" for t in reversed(tags))
        buf.write(f"<h2>{opening}{escape_html(title)}{closing}</h2>\n")

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

        border = style.effective_border_width
        cell_css = f"border:{border}px solid #333;" if border > 0 else ""
        table_css = "border-collapse:collapse;" + cell_css

        header, rows = self.table_rows(data, show_row_numbers)
        buf.write(f'<table style="{table_css}">\n')

        if show_header:
            buf.write("  <tr>")
            for index, name in enumerate(header):
                th_css = cell_css
                # The synthesized row-number header is never styled
                if not (show_row_numbers and index == 0):
                    if style.header_bold:
                        th_css += "font-weight:bold;"
                    if style.underline:
                        th_css += "text-decoration:underline;"
                buf.write(f'<th style="{th_css}">{escape_html(name)}</th>')
            buf.write("</tr>\n")

        for cells in rows:
            buf.write("  <tr>")
            for cell in cells:
                buf.write(f'<td style="{cell_css}">{escape_html(cell)}</td>')
            buf.write("</tr>\n")

        buf.write("</table>\n")

    def render_summary(
        self, buf: StringIO, summary_items: Sequence[SummaryItem], data: TabularData
    ) -> None:
        if not summary_items:
            return
        buf.write('<ul class="summary">\n')
        for label, value in self.summary_pairs(summary_items, data):
            buf.write(f"  <li><b>{escape_html(label)}:</b> {escape_html(value)}</li>\n")
        buf.write("</ul>\n")


class PdfRenderer(HtmlRenderer):
    name = "pdf"
    default_file_extension = ".pdf"
    content_type = "application/pdf"

    def encode(self, text: str) -> bytes:
        logger.debug(f"converting {len(text)} characters of HTML to PDF")
        return html_to_pdf(text)
