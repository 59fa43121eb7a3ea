from __future__ import annotations

import argparse
import sys
import time
from datetime import UTC, datetime
from pathlib import Path

from dotenv import load_dotenv

from tabreport.config.loader import DEFAULT_CONFIG_PATH, ConfigError, ReportConfig, load_config
from tabreport.db.query_source import QuerySourceError, db_connection, fetch_query_result, resolve_dsn
from tabreport.ingest.csv_reader import CsvSourceError, read_csv_file
from tabreport.ingest.excel_reader import ExcelSourceError, read_excel_sheet
from tabreport.logging.error_log import ErrorLogBuffer, ErrorRecord
from tabreport.logging.init import log_summary, setup_logging
from tabreport.models.report_models import (
    CalculatedColumn,
    ColumnCalcType,
    Section,
    SectionStyle,
    SummaryCalcType,
    SummaryItem,
)
from tabreport.models.report_result import ReportResult
from tabreport.models.tabular import TabularData
from tabreport.renderers import RendererUnavailableError, available_formats, get_renderer
from tabreport.services.orchestrator import ReportValidationError
from tabreport.services.progress import SectionProgress
from tabreport.services.summary import render_summary_line

"""CLI entrypoint.

Flow:
- Load .env (DB credentials) and the optional YAML config
- Resolve renderer and data source (CSV / Excel file or SQL query)
- Build one Section from flags + config, render it, write the bytes
- Log the SUMMARY line; exit 0 on success, 1 on any fatal error
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1

EXCEL_SUFFIXES = {".xlsx", ".xlsm"}


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env with python-dotenv; its values win over the process environment."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _int_or_zero(value: str) -> int:
    try:
        return int(value)
    except ValueError:
        return 0


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="tabreport",
        description="Render CSV / Excel / query data as txt, html, pdf or markdown",
        allow_abbrev=False,
    )
    p.add_argument("format", nargs="?", help="Output format (txt, html, pdf, markdown)")
    p.add_argument("source", nargs="?", help="CSV or Excel file")
    p.add_argument("--config", type=Path, help=f"YAML config (default: {DEFAULT_CONFIG_PATH})")
    p.add_argument("--output", help="Output file (default: report + format extension)")
    p.add_argument("--title", help="Section title")
    p.add_argument("--delimiter", help="CSV delimiter")
    p.add_argument("--sheet", help="Excel sheet name")
    p.add_argument("--query", help="SQL query used as data source instead of a file")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--list-formats", action="store_true", help="Print available formats and exit")

    toggles = [
        ("show_header", ["--with-header"], ["--no-header"]),
        ("show_row_numbers", ["--with-rownums"], ["--no-rownums"]),
        ("include_summary", ["--with-summary"], ["--no-summary"]),
        ("include_calculated", ["--calc", "--with-calculated"], ["--no-calc"]),
        ("title_bold", ["--bold"], ["--no-bold"]),
        ("title_italic", ["--italic"], ["--no-italic"]),
        ("underline", ["--underline"], ["--no-underline"]),
    ]
    for dest, on_flags, off_flags in toggles:
        p.add_argument(*on_flags, dest=dest, action="store_const", const=True, default=None)
        p.add_argument(*off_flags, dest=dest, action="store_const", const=False)
    p.add_argument("--header-bold", dest="header_bold", action="store_const", const=True, default=None)
    p.add_argument("--border", dest="border_width", type=_int_or_zero, help="Table border width")

    for name in ("sum", "avg", "min", "max", "count"):
        p.add_argument(f"--{name}", action="append", metavar="COLUMN", help=f"{name.upper()} summary over COLUMN")
    p.add_argument("--countif", action="append", metavar="COLUMN:VALUE", help="COUNT_IF summary")
    return p


def _parse_args(argv: list[str], logger) -> argparse.Namespace:
    args, unknown = _build_parser().parse_known_args(argv)
    for arg in unknown:
        logger.warning(f"unknown option ignored: '{arg}'")
    return args


def _resolve_config(args: argparse.Namespace) -> ReportConfig:
    if args.config is not None:
        return load_config(args.config)
    if DEFAULT_CONFIG_PATH.exists():
        return load_config(DEFAULT_CONFIG_PATH)
    return ReportConfig()


def _pick(value, fallback):
    return fallback if value is None else value


def _flag_summary_items(args: argparse.Namespace, logger) -> list[SummaryItem]:
    items: list[SummaryItem] = []
    simple = [
        ("sum", SummaryCalcType.SUM),
        ("avg", SummaryCalcType.AVG),
        ("min", SummaryCalcType.MIN),
        ("max", SummaryCalcType.MAX),
        ("count", SummaryCalcType.COUNT),
    ]
    for attr, calc_type in simple:
        for col in getattr(args, attr) or []:
            items.append(SummaryItem(label=f"{calc_type.name} {col}", calc_type=calc_type, column_name=col))
    for payload in args.countif or []:
        col, sep, cond = payload.partition(":")
        if not sep:
            logger.warning(f"invalid --countif '{payload}', expected --countif=Column:Value")
            continue
        items.append(
            SummaryItem(
                label=f"COUNT_IF {col} == {cond}",
                calc_type=SummaryCalcType.COUNT_IF,
                column_name=col,
                condition_value=cond,
            )
        )
    return items


def default_calculated_columns(data: TabularData) -> list[CalculatedColumn]:
    """Price x quantity total when the source has Cena and Kolicina columns."""
    if "Cena" in data and "Kolicina" in data:
        return [CalculatedColumn("Ukupno", ColumnCalcType.MULTIPLY, ("Cena", "Kolicina"))]
    return []


def default_summary_items(columns: set[str]) -> list[SummaryItem]:
    items: list[SummaryItem] = []
    if "Cena" in columns:
        items.append(SummaryItem("Total price", SummaryCalcType.SUM, "Cena"))
        items.append(SummaryItem("Average price", SummaryCalcType.AVG, "Cena"))
    if "Ukupno" in columns:
        items.append(SummaryItem("Total (SUM Ukupno)", SummaryCalcType.SUM, "Ukupno"))
    if "Artikal" in columns:
        items.append(SummaryItem("Item count", SummaryCalcType.COUNT, "Artikal"))
    if "Cena" in columns:
        items.append(SummaryItem("Items priced 100", SummaryCalcType.COUNT_IF, "Cena", condition_value="100"))
    return items


def _load_data(source: str | None, query: str | None, cfg: ReportConfig, args: argparse.Namespace) -> TabularData:
    if query:
        db = cfg.database
        dsn = resolve_dsn(db.dsn, db.host, db.port, db.user, db.password, db.database)
        with db_connection(dsn) as cur:
            return fetch_query_result(cur, query)
    if not source:
        raise CsvSourceError("no data source given")
    path = Path(source)
    if path.suffix.lower() in EXCEL_SUFFIXES:
        return read_excel_sheet(path, _pick(args.sheet, cfg.sheet))
    return read_csv_file(
        path,
        has_header=cfg.has_header,
        delimiter=_pick(args.delimiter, cfg.delimiter),
        encoding=cfg.encoding,
    )


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None -> real argv; an explicit [] must not pick up pytest's arguments
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv, logger)
    if args.debug:
        setup_logging(debug=True)
        logger.debug("debug mode enabled")

    if args.list_formats:
        for name in available_formats():
            print(name)
        return EXIT_SUCCESS

    _load_env_file(Path(".env"), override=True)
    try:
        cfg = _resolve_config(args)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    fmt = _pick(args.format, cfg.format)
    renderer = get_renderer(fmt)
    if renderer is None:
        logger.error(f"no renderer for format '{fmt}' (available: {', '.join(available_formats())})")
        return EXIT_FATAL
    logger.info(f"renderer: {renderer.name} ({renderer.default_file_extension})")

    query = _pick(args.query, cfg.database.query)
    source = _pick(args.source, cfg.source)
    source_label = "query" if query else str(source)
    if not query and source and not Path(source).exists():
        logger.error(f"data source not found: {source}")
        return EXIT_FATAL

    start_time = datetime.now(UTC)
    started = time.perf_counter()
    try:
        data = _load_data(source, query, cfg, args)
    except (CsvSourceError, ExcelSourceError, QuerySourceError) as e:
        logger.error(f"source: {e}")
        return EXIT_FATAL
    if len(data) == 0:
        logger.error(f"data source is empty: {source_label}")
        return EXIT_FATAL
    logger.info(f"loaded {source_label}: columns={len(data)} rows={data.row_count}")

    calculated: list[CalculatedColumn] = []
    if _pick(args.include_calculated, cfg.include_calculated):
        calculated = list(cfg.calculated_columns) or default_calculated_columns(data)
        if not calculated:
            logger.info("no calculated columns configured")

    available_columns = set(data) | {c.name for c in calculated}
    summary_items: list[SummaryItem] = []
    if _pick(args.include_summary, cfg.include_summary):
        flag_items = _flag_summary_items(args, logger)
        if flag_items:
            summary_items = [i for i in flag_items if i.column_name in available_columns]
            if len(summary_items) < len(flag_items):
                logger.warning("some summary columns do not exist in the data source and were skipped")
        else:
            summary_items = list(cfg.summary_items) or default_summary_items(available_columns)

    base_style = cfg.style
    style = SectionStyle(
        title_bold=_pick(args.title_bold, base_style.title_bold),
        title_italic=_pick(args.title_italic, base_style.title_italic),
        underline=_pick(args.underline, base_style.underline),
        header_bold=_pick(args.header_bold, base_style.header_bold),
        border_width=_pick(args.border_width, base_style.border_width),
    )
    section = Section(
        data=data,
        title=_pick(args.title, cfg.title),
        summary_items=tuple(summary_items),
        show_row_numbers=_pick(args.show_row_numbers, cfg.show_row_numbers),
        style=style,
        show_header=_pick(args.show_header, cfg.show_header),
        calculated_columns=tuple(calculated),
    )

    error_log = ErrorLogBuffer()
    try:
        with SectionProgress(1) as progress:
            report = renderer.generate_report([section], on_section=progress.advance)
    except ReportValidationError as e:
        error_log.append(ErrorRecord.create(source_label, section.title or "", "VALIDATION_ERROR", e.problem))
        log_path = error_log.flush()
        logger.error(f"{e} (logged to {log_path})")
        return EXIT_FATAL
    except RendererUnavailableError as e:
        logger.error(f"renderer: {e}")
        return EXIT_FATAL

    output_path = Path(_pick(args.output, cfg.output) or f"report{renderer.default_file_extension}")
    output_path.write_bytes(report)

    result = ReportResult(
        format=renderer.name,
        sections=progress.rendered_sections,
        total_rows=progress.rendered_rows,
        size_bytes=len(report),
        output_path=output_path,
        start_time=start_time,
        end_time=datetime.now(UTC),
        elapsed_seconds=time.perf_counter() - started,
    )
    # log_summary adds the "SUMMARY " prefix itself
    log_summary(render_summary_line(result)[len("SUMMARY "):])
    return EXIT_SUCCESS


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
