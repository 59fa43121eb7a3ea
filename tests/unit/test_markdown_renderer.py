from __future__ import annotations

from io import StringIO

import pytest

from tabreport.models.report_models import Section, SectionStyle, SummaryCalcType, SummaryItem
from tabreport.models.tabular import TabularData
from tabreport.renderers.markdown import MarkdownRenderer, escape_markdown_cell
from tabreport.services.orchestrator import ReportValidationError


@pytest.fixture()
def renderer() -> MarkdownRenderer:
    return MarkdownRenderer()


def _title(renderer: MarkdownRenderer, **style) -> str:
    buf = StringIO()
    renderer.render_title(buf, "Orders", SectionStyle(**style))
    return buf.getvalue()


def test_identity(renderer):
    assert renderer.name == "markdown"
    assert renderer.default_file_extension == ".md"
    assert renderer.supports_formatting is True


@pytest.mark.parametrize(
    ("style", "expected"),
    [
        ({}, "## Orders\n\n"),
        ({"title_bold": True}, "## **Orders**\n\n"),
        ({"title_italic": True}, "## _Orders_\n\n"),
        ({"title_bold": True, "title_italic": True}, "## ***Orders***\n\n"),
        ({"title_bold": True, "underline": True}, "## <u>**Orders**</u>\n\n"),
    ],
)
def test_title_styles(renderer, style, expected):
    assert _title(renderer, **style) == expected


def test_table_with_bold_header_and_escaping(renderer):
    buf = StringIO()
    data = TabularData({"A": ["x|y"], "B": ["1\n2"]})
    renderer.render_table(buf, data, True, SectionStyle(header_bold=True), True)
    assert buf.getvalue() == (
        "| **#** | **A** | **B** |\n"
        "| --- | --- | --- |\n"
        "| 1 | x\\|y | 1 2 |\n"
    )


def test_table_without_header_keeps_pipe_table_valid(renderer, scores):
    buf = StringIO()
    renderer.render_table(buf, scores, False, SectionStyle(), False)
    assert buf.getvalue().splitlines() == [
        "|  |  |",
        "| --- | --- |",
        "| Ann | 10 |",
        "| Bob | 20 |",
    ]


def test_empty_data_emits_placeholder_not_table(renderer):
    buf = StringIO()
    renderer.render_table(buf, TabularData(), True, SectionStyle(), True)
    assert buf.getvalue() == "_No data_\n"
    assert "|" not in buf.getvalue()


def test_summary_bullets(renderer, scores):
    buf = StringIO()
    renderer.render_summary(
        buf,
        [SummaryItem("Max", SummaryCalcType.MAX, "Score"), SummaryItem("Who", SummaryCalcType.MANUAL, manual_value="a|b")],
        scores,
    )
    assert buf.getvalue() == "\n- **Max:** 20\n- **Who:** a\\|b\n"


def test_sections_separated_by_rule(renderer):
    report = renderer.generate_report(
        [Section(data=TabularData({"a": ["1"]})), Section(data=TabularData({"b": ["2"]}))]
    ).decode("utf-8")
    assert "\n---\n\n| b |" in report


def test_escape_markdown_cell():
    assert escape_markdown_cell("a|b\r\nc") == "a\\|b c"


def test_generate_report_rejects_empty_data(renderer):
    # Placeholder output is only reachable through render_table; whole reports validate first
    with pytest.raises(ReportValidationError, match="no columns"):
        renderer.generate_report([Section(data=TabularData(), title="Empty")])
