from __future__ import annotations

import argparse
from pathlib import Path
import sys
import time

from loguru import logger

from app.viewmodels.main_vm import MODE_LOG, MODE_STOCK, MODES, MainVM
from app.views.constants import DEFAULT_SEPARATOR, MARKDOWN_SEPARATOR
from app.views.report_table import ReportConfig
from core.errors import RollLogError
from infrastructure.logging import init_logging
from infrastructure.roll_log_repository import DEFAULT_LOG_FILE
from infrastructure.settings import JsonSettings
from infrastructure.utils import terminal_width

FORMAT_PLAIN = "plain"
FORMAT_PRETTY = "pretty"
FORMATS = (FORMAT_PLAIN, FORMAT_PRETTY)


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="film-rolls",
        description="Report on a hand-written film roll log",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Example usage:
  %(prog)s -m stock rolls.log
  %(prog)s --md --id 3f2a1 rolls.log

Settings are read from --config or ./film-rolls.json when present;
command-line flags take precedence.
        """,
    )
    parser.add_argument("file", nargs="?", help=f"Roll log file (default: {DEFAULT_LOG_FILE})")
    parser.add_argument("-v", "--verbose", action="store_true", help="Be verbose.")
    parser.add_argument("-m", "--mode", help=f"Mode: {', '.join(MODES)}")
    parser.add_argument("-f", "--format", help=f"Format: {' or '.join(FORMATS)}")
    parser.add_argument("-s", "--separator", help="Table column separator")
    parser.add_argument(
        "--md",
        "-md",
        action="store_true",
        help=f"Output markdown compatible table (implies -f {FORMAT_PLAIN}, ignores -s)",
    )
    parser.add_argument("--html", action="store_true", help="Output an HTML table")
    parser.add_argument("--nh", "-nh", action="store_true", help="Don't output header")
    parser.add_argument("--id", "-id", default="", help="Only show film roll with the given id")
    parser.add_argument("--config", help="JSON settings file")
    return parser


def _report_config(
    args: argparse.Namespace, settings: JsonSettings, fmt: str, mode: str
) -> ReportConfig:
    """Combine flags and settings into the table output options."""
    conf = ReportConfig(
        id_filter=args.id,
        header=not args.nh,
        separator=args.separator or settings.get("output.separator", DEFAULT_SEPARATOR),
    )
    if args.md:
        conf.header_sep = True
        conf.separator = MARKDOWN_SEPARATOR
        conf.start_end_with_separator = True
        fmt = FORMAT_PLAIN
    if args.html:
        conf.html = True
        fmt = FORMAT_PLAIN

    conf.color = fmt == FORMAT_PRETTY
    conf.pretty = conf.color

    if mode in (MODE_LOG, MODE_STOCK) and not (args.md or args.html):
        conf.width = terminal_width()
    return conf


def main(argv: list[str] | None = None) -> int:
    args = _build_arg_parser().parse_args(argv)

    try:
        settings = JsonSettings.discover(args.config)
    except (OSError, ValueError) as ex:
        print(f"Error reading settings: {ex}", file=sys.stderr)
        return 1

    try:
        init_logging(args.verbose, settings.get("logging.dir"))
    except OSError as ex:
        print(f"Error setting up logging: {ex}", file=sys.stderr)
        return 1

    mode = args.mode or settings.get("output.mode", MODE_LOG)
    if mode not in MODES:
        print(f"invalid mode '{mode}'", file=sys.stderr)
        return 2
    fmt = args.format or settings.get("output.format", FORMAT_PRETTY)
    if fmt not in FORMATS:
        print(f"invalid format '{fmt}'", file=sys.stderr)
        return 2

    conf = _report_config(args, settings, fmt, mode)
    log_file = str(Path(args.file or settings.get("log_file", DEFAULT_LOG_FILE)).expanduser())

    logger.debug("Opening {}", log_file)
    bench = time.perf_counter()
    vm = MainVM()
    try:
        vm.load(log_file)
    except RollLogError as ex:
        if ex.partial is not None:
            logger.debug("Partial dataset at failure: {}", ex.partial.counts)
        print(ex, file=sys.stderr)
        return 1

    vm.render(mode, sys.stdout, conf)
    logger.debug("Done in {:.3f}s", time.perf_counter() - bench)
    return 0


def run() -> None:
    """Console script entry point."""
    raise SystemExit(main())


if __name__ == "__main__":
    raise SystemExit(main())
