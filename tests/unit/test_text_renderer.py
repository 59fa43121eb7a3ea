from __future__ import annotations

from io import StringIO

import pytest

from tabreport.models.report_models import (
    CalculatedColumn,
    ColumnCalcType,
    Section,
    SectionStyle,
    SummaryCalcType,
    SummaryItem,
)
from tabreport.models.tabular import TabularData
from tabreport.renderers.text import TextRenderer
from tabreport.services.orchestrator import ReportValidationError


@pytest.fixture()
def renderer() -> TextRenderer:
    return TextRenderer()


def test_identity(renderer):
    assert renderer.name == "txt"
    assert renderer.default_file_extension == ".txt"
    assert renderer.supports_formatting is False


def test_table_with_header_and_row_numbers(renderer, scores):
    report = renderer.generate_section_report(scores, title="Scores", show_row_numbers=True).decode("utf-8")
    assert report == (
        "Scores\n"
        "\n"
        "#  Name  Score\n"
        "-  ----  -----\n"
        "1  Ann   10   \n"
        "2  Bob   20   \n"
    )
    lines = report.splitlines()
    assert lines[2].split() == ["#", "Name", "Score"]
    assert lines[4].split() == ["1", "Ann", "10"]
    assert lines[5].split() == ["2", "Bob", "20"]


def test_widths_follow_widest_value(renderer):
    buf = StringIO()
    data = TabularData({"A": ["long value", "x"]})
    renderer.render_table(buf, data, False, SectionStyle(), True)
    assert buf.getvalue().splitlines() == ["A         ", "-         ", "long value", "x         "]


def test_without_header(renderer, scores):
    buf = StringIO()
    renderer.render_table(buf, scores, False, SectionStyle(), False)
    assert buf.getvalue() == "Ann   10   \nBob   20   \n"


def test_empty_data_placeholder(renderer):
    buf = StringIO()
    renderer.render_table(buf, TabularData(), True, SectionStyle(), True)
    assert buf.getvalue() == "[No data]\n"


def test_blank_title_is_skipped(renderer):
    buf = StringIO()
    renderer.render_title(buf, "   ", SectionStyle(title_bold=True))
    renderer.render_title(buf, None, SectionStyle())
    assert buf.getvalue() == ""


def test_summary_lines(renderer, orders):
    report = renderer.generate_section_report(
        orders,
        summary_items=[
            SummaryItem("Total", SummaryCalcType.SUM, "Ukupno"),
            SummaryItem("Average", SummaryCalcType.AVG, "Cena"),
            SummaryItem("Rows", SummaryCalcType.COUNT, "Cena"),
            SummaryItem("Hundreds", SummaryCalcType.COUNT_IF, "Cena", condition_value="100"),
            SummaryItem("Note", SummaryCalcType.MANUAL, manual_value="checked"),
        ],
        calculated_columns=[CalculatedColumn("Ukupno", ColumnCalcType.MULTIPLY, ("Cena", "Kolicina"))],
    ).decode("utf-8")
    tail = report.split("\n\n")[-1].splitlines()
    assert tail == [
        "Total: 450",
        "Average: 83.33333333333333",
        "Rows: 3",
        "Hundreds: 2",
        "Note: checked",
    ]


def test_sections_separated_by_blank_lines(renderer):
    sections = [
        Section(data=TabularData({"a": ["1"]}), title="First"),
        Section(data=TabularData({"b": ["2"]}), title="Second"),
    ]
    report = renderer.generate_report(sections).decode("utf-8")
    assert report == "First\n\na\n-\n1\n\n\nSecond\n\nb\n-\n2\n"


def test_invalid_section_aborts_whole_report(renderer):
    sections = [
        Section(data=TabularData({"a": ["1"]}), title="Good"),
        Section(
            data=TabularData({"a": ["1"]}),
            title="Bad",
            summary_items=(SummaryItem("Sum", SummaryCalcType.SUM, "missing"),),
        ),
    ]
    with pytest.raises(ReportValidationError, match="'Bad'") as exc:
        renderer.generate_report(sections)
    assert "missing" in exc.value.problem


def test_untitled_section_error_message(renderer):
    with pytest.raises(ReportValidationError, match="untitled"):
        renderer.generate_report([Section(data=TabularData())])
