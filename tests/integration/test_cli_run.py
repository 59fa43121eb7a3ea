from __future__ import annotations

import json
from pathlib import Path

import pandas as pd  # type: ignore
import pytest

from tabreport.cli import main as cli_main
from tabreport.renderers import html as html_module

"""End-to-end CLI runs against real files in a temporary working directory."""

pytestmark = pytest.mark.integration


def test_txt_report_with_default_columns_and_summary(sample_csv: Path, capsys):
    code = cli_main(["txt", str(sample_csv)])
    out = capsys.readouterr().out

    assert code == 0
    report = (sample_csv.parent / "report.txt").read_text(encoding="utf-8")
    lines = report.splitlines()
    assert lines[0] == "Report"
    assert lines[2].split() == ["#", "Artikal", "Cena", "Kolicina", "Ukupno"]
    assert lines[4].split() == ["1", "Hleb", "100", "2", "200"]
    assert lines[6].split() == ["3", "Jaja", "50", "3", "150"]
    assert "Total price: 250" in lines
    assert "Average price: 83.33333333333333" in lines
    assert "Total (SUM Ukupno): 450" in lines
    assert "Item count: 3" in lines
    assert "Items priced 100: 2" in lines
    assert "INFO renderer: txt (.txt)" in out
    assert "SUMMARY format=txt sections=1 rows=3 bytes=" in out
    assert out.rstrip().endswith("output=report.txt")


def test_flags_override_defaults(sample_csv: Path, capsys):
    code = cli_main(
        [
            "txt",
            str(sample_csv),
            "--no-calc",
            "--no-rownums",
            "--title=Orders",
            "--sum=Cena",
            "--countif=Artikal:Hleb",
            "--output=out.txt",
        ]
    )
    assert code == 0
    report = (sample_csv.parent / "out.txt").read_text(encoding="utf-8")
    assert report.startswith("Orders\n\nArtikal  Cena  Kolicina\n")
    assert "Ukupno" not in report
    assert "SUM Cena: 250" in report
    assert "COUNT_IF Artikal == Hleb: 1" in report


def test_summary_flags_for_unknown_columns_are_skipped(sample_csv: Path, capsys):
    code = cli_main(["txt", str(sample_csv), "--sum=Missing", "--sum=Ukupno"])
    out = capsys.readouterr().out
    assert code == 0
    assert "WARN some summary columns do not exist" in out
    report = (sample_csv.parent / "report.txt").read_text(encoding="utf-8")
    assert "SUM Ukupno: 450" in report
    assert "Missing" not in report


def test_unknown_option_is_ignored(sample_csv: Path, capsys):
    code = cli_main(["txt", str(sample_csv), "--shiny"])
    assert code == 0
    assert "WARN unknown option ignored: '--shiny'" in capsys.readouterr().out


def test_config_driven_markdown(write_config: Path, sample_csv: Path, capsys):
    code = cli_main([])
    assert code == 0
    report = (sample_csv.parent / "report.md").read_text(encoding="utf-8")
    assert report.startswith("## ")
    assert "Orders" in report.splitlines()[0]
    assert "| **Artikal** | **Cena** | **Kolicina** | **Ukupno** |" in report
    assert "| Hleb | 100 | 2 | 200 |" in report
    assert "- **Total:** 450" in report
    assert "- **Note:** checked" in report
    assert "SUMMARY format=markdown" in capsys.readouterr().out


def test_html_report(sample_csv: Path):
    assert cli_main(["html", str(sample_csv), "--border=3", "--header-bold"]) == 0
    report = (sample_csv.parent / "report.html").read_text(encoding="utf-8")
    assert report.startswith("<!DOCTYPE html>")
    assert "border:3px solid #333" in report
    assert "<li><b>Total (SUM Ukupno):</b> 450</li>" in report


def test_pdf_report(sample_csv: Path, monkeypatch):
    monkeypatch.setattr(html_module, "html_to_pdf", lambda markup: b"%PDF-fake")
    assert cli_main(["pdf", str(sample_csv)]) == 0
    assert (sample_csv.parent / "report.pdf").read_bytes() == b"%PDF-fake"


def test_pdf_without_weasyprint_fails(sample_csv: Path, monkeypatch, capsys):
    def unavailable(markup: str) -> bytes:
        raise html_module.RendererUnavailableError("weasyprint is not installed")

    monkeypatch.setattr(html_module, "html_to_pdf", unavailable)
    assert cli_main(["pdf", str(sample_csv)]) == 1
    assert "ERROR renderer: weasyprint is not installed" in capsys.readouterr().out
    assert not (sample_csv.parent / "report.pdf").exists()


def test_validation_failure_writes_error_log(sample_csv: Path, capsys):
    (sample_csv.parent / "config" / "report.yml").write_text(
        "summary:\n  - label: Bad\n    type: sum\n    column: Missing\n", encoding="utf-8"
    )
    code = cli_main(["txt", str(sample_csv)])
    assert code == 1
    assert not (sample_csv.parent / "report.txt").exists()

    logs = list((sample_csv.parent / "logs").glob("errors-*.log"))
    assert len(logs) == 1
    record = json.loads(logs[0].read_text(encoding="utf-8").splitlines()[0])
    assert record["error_type"] == "VALIDATION_ERROR"
    assert "Missing" in record["message"]
    assert record["section"] == "Report"


def test_excel_source(temp_workdir: Path):
    path = temp_workdir / "orders.xlsx"
    frame = pd.DataFrame([["Artikal", "Cena", "Kolicina"], ["Hleb", 100, 2], ["Jaja", 50, 3]])
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        frame.to_excel(writer, sheet_name="Orders", header=False, index=False)

    assert cli_main(["txt", str(path), "--sheet=Orders"]) == 0
    report = (temp_workdir / "report.txt").read_text(encoding="utf-8")
    assert "Total (SUM Ukupno): 350" in report


@pytest.mark.parametrize("flag", ["--list-formats"])
def test_list_formats(temp_workdir: Path, capsys, flag):
    assert cli_main([flag]) == 0
    assert capsys.readouterr().out.split() == ["html", "markdown", "pdf", "txt"]
