from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.report_models import (
    CalculatedColumn,
    ColumnCalcType,
    SectionStyle,
    SummaryCalcType,
    SummaryItem,
)

"""Report configuration loader.

Responsibilities:
- Load YAML (config/report.yml by default)
- Validate against the bundled JSON schema (report_schema.json)
- Apply defaults and build typed ReportConfig / DatabaseConfig
"""

SCHEMA_PATH = Path(__file__).with_name("report_schema.json")
DEFAULT_CONFIG_PATH = Path("config/report.yml")


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class DatabaseConfig:
    dsn: str | None = None
    host: str | None = None
    port: int | None = None
    user: str | None = None
    password: str | None = None
    database: str | None = None
    query: str | None = None


@dataclass(frozen=True)
class ReportConfig:
    format: str = "txt"
    source: str | None = "data.csv"
    sheet: str | None = None  # Excel sources only
    delimiter: str = ";"
    has_header: bool = True
    encoding: str = "utf-8"
    title: str | None = "Report"
    output: str | None = None  # None -> "report" + renderer extension
    show_header: bool = True
    show_row_numbers: bool = True
    include_summary: bool = True
    include_calculated: bool = True
    style: SectionStyle = field(
        default_factory=lambda: SectionStyle(title_bold=True, title_italic=True, border_width=0)
    )
    summary_items: tuple[SummaryItem, ...] = ()
    calculated_columns: tuple[CalculatedColumn, ...] = ()
    database: DatabaseConfig = field(default_factory=DatabaseConfig)


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: If the schema file is missing/invalid or the data
            violates it (unknown keys, wrong types, bad enum values).
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")
    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def _summary_item(raw: dict[str, Any]) -> SummaryItem:
    return SummaryItem(
        label=raw["label"],
        calc_type=SummaryCalcType(raw["type"]),
        column_name=raw.get("column"),
        condition_value=raw.get("condition"),
        manual_value=raw.get("value"),
    )


def _calculated_column(raw: dict[str, Any]) -> CalculatedColumn:
    return CalculatedColumn(
        name=raw["name"],
        operation=ColumnCalcType(raw["operation"]),
        source_columns=tuple(raw["sources"]),
    )


def parse_config(data: dict[str, Any]) -> ReportConfig:
    """Build ReportConfig from already-loaded mapping data."""
    _validate_config_schema(data)
    defaults = ReportConfig()

    style_raw = data.get("style")
    style = defaults.style
    if style_raw is not None:
        style = SectionStyle(
            title_bold=style_raw.get("title_bold", False),
            title_italic=style_raw.get("title_italic", False),
            underline=style_raw.get("underline", False),
            header_bold=style_raw.get("header_bold", False),
            border_width=style_raw.get("border_width", 1),
        )

    db_raw = data.get("database", {})
    db = DatabaseConfig(
        dsn=db_raw.get("dsn"),
        host=db_raw.get("host"),
        port=db_raw.get("port"),
        user=db_raw.get("user"),
        password=db_raw.get("password"),
        database=db_raw.get("database"),
        query=db_raw.get("query"),
    )

    return ReportConfig(
        format=data.get("format", defaults.format),
        source=data.get("source", defaults.source),
        sheet=data.get("sheet"),
        delimiter=data.get("delimiter", defaults.delimiter),
        has_header=data.get("has_header", defaults.has_header),
        encoding=data.get("encoding", defaults.encoding),
        title=data.get("title", defaults.title),
        output=data.get("output"),
        show_header=data.get("show_header", defaults.show_header),
        show_row_numbers=data.get("show_row_numbers", defaults.show_row_numbers),
        include_summary=data.get("include_summary", defaults.include_summary),
        include_calculated=data.get("include_calculated", defaults.include_calculated),
        style=style,
        summary_items=tuple(_summary_item(s) for s in data.get("summary", [])),
        calculated_columns=tuple(_calculated_column(c) for c in data.get("calculated_columns", [])),
        database=db,
    )


def load_config(path: Path) -> ReportConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping, got {type(data).__name__}")
    return parse_config(data)
