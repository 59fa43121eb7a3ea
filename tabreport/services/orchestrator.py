from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from io import StringIO

from ..models.report_models import Section, SectionStyle, SummaryItem
from ..models.tabular import TabularData
from .calculated_columns import apply_calculated_columns
from .validator import find_problem

"""Shared report orchestration.

Every renderer goes through render_sections(); formats only supply the three
emission callbacks and a separator. Per section:

1. expand calculated columns (on a derived copy)
2. validate the expanded data, summary items and calculated-column specs
3. render title, table, summary
4. write the separator before every section except the first

A validation failure aborts the whole call; no partial text is returned.
"""

logger = logging.getLogger(__name__)

__all__ = [
    "ReportValidationError",
    "TitleRenderer",
    "TableRenderer",
    "SummaryRenderer",
    "render_sections",
    "prepare_section",
]

TitleRenderer = Callable[[StringIO, str | None, SectionStyle], None]
TableRenderer = Callable[[StringIO, TabularData, bool, SectionStyle, bool], None]
SummaryRenderer = Callable[[StringIO, Sequence[SummaryItem], TabularData], None]


class ReportValidationError(ValueError):
    """Raised when a section fails validation; the report is not generated."""

    def __init__(self, section_title: str | None, problem: str) -> None:
        self.section_title = section_title
        self.problem = problem
        super().__init__(f"invalid section '{section_title or 'untitled'}': {problem}")


def prepare_section(section: Section) -> TabularData:
    """Expand calculated columns and validate.

    Returns:
        The expanded data the section is rendered from.

    Raises:
        ReportValidationError: If the section is inconsistent.
    """
    expanded = apply_calculated_columns(section.data, section.calculated_columns)
    problem = find_problem(expanded, section.summary_items, section.calculated_columns)
    if problem is not None:
        raise ReportValidationError(section.title, problem)
    return expanded


def render_sections(
    sections: Sequence[Section],
    *,
    render_title: TitleRenderer,
    render_table: TableRenderer,
    render_summary: SummaryRenderer,
    separator: str = "",
    on_section: Callable[[Section, TabularData], None] | None = None,
) -> str:
    """Render ``sections`` in order into one string.

    Args:
        sections: Sections to render
        render_title: Writes the section title (may write nothing for no title)
        render_table: Writes the table
        render_summary: Writes the summary block
        separator: Text written between consecutive sections
        on_section: Called after each section with the section and its
            expanded data (progress display, row statistics)

    Raises:
        ReportValidationError: If any section is invalid.
    """
    buf = StringIO()
    for index, section in enumerate(sections):
        data = prepare_section(section)
        logger.debug(
            f"section {index + 1}/{len(sections)} title={section.title!r} "
            f"columns={len(data)} rows={data.row_count}"
        )
        if index > 0:
            buf.write(separator)
        render_title(buf, section.title, section.style)
        render_table(buf, data, section.show_row_numbers, section.style, section.show_header)
        render_summary(buf, section.summary_items, data)
        if on_section is not None:
            on_section(section, data)
    return buf.getvalue()
