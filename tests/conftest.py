# Shared pytest fixtures
from __future__ import annotations

from pathlib import Path

import pytest

from tabreport.logging.init import reset_logging
from tabreport.models.tabular import TabularData

SAMPLE_CSV = """Artikal;Cena;Kolicina
Hleb;100;2
Mleko;100;1
Jaja;50;3
"""


@pytest.fixture(autouse=True)
def _clean_logging():
    # Each test gets a fresh logger bound to the current (captured) stdout
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def temp_workdir(tmp_path: Path, monkeypatch) -> Path:
    (tmp_path / "config").mkdir()
    (tmp_path / "logs").mkdir()
    monkeypatch.chdir(tmp_path)
    for var in ("DATABASE_URL", "PGDSN", "PGHOST", "PGPORT", "PGUSER", "PGPASSWORD", "PGDATABASE"):
        monkeypatch.delenv(var, raising=False)
    return tmp_path


@pytest.fixture()
def sample_csv(temp_workdir: Path) -> Path:
    path = temp_workdir / "data.csv"
    path.write_text(SAMPLE_CSV, encoding="utf-8")
    return path


@pytest.fixture()
def sample_config_yaml() -> str:
    return """format: markdown
source: data.csv
delimiter: ";"
title: Orders
show_row_numbers: false
style:
  title_bold: true
  header_bold: true
  border_width: 2
summary:
  - label: Total
    type: sum
    column: Ukupno
  - label: Note
    type: manual
    value: checked
calculated_columns:
  - name: Ukupno
    operation: multiply
    sources: [Cena, Kolicina]
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "report.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def scores() -> TabularData:
    return TabularData({"Name": ["Ann", "Bob"], "Score": ["10", "20"]})


@pytest.fixture()
def orders() -> TabularData:
    return TabularData({"Cena": ["100", "100", "50"], "Kolicina": ["2", "1", "3"]})
