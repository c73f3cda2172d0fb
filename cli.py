"""
Openhole volume calculator CLI.

Usage
-----
openhole                          # interactive menu (same as `openhole menu`)
openhole file intervals.csv --out result.csv
openhole manual --out result.csv
openhole --version

When --out is omitted the report path comes from infra.report_paths.ReportPaths
(``<output_dir>/<input stem>_volumes.csv`` or ``<output_dir>/manual_entry_volumes.csv``).
"""

from __future__ import annotations

import argparse
import logging
import math
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from contracts.hole_interval import HoleInterval, InvalidRecordError, RecordError
from infra.config import Settings, ValidationError, get_settings
from infra.logging_config import clear_run_context, set_run_context, setup_logging
from infra.report_paths import ReportPaths
from pipeline.interval_reader import read_intervals_csv
from pipeline.report_writer import write_report
from services.volume_calculator import (
    format_fixed,
    format_interval_summary,
    total_volume_barrels,
    total_volume_liters,
)
from version import ENGINE_NAME, ENGINE_VERSION

logger = logging.getLogger(__name__)

Ask = Callable[[str], str]
Say = Callable[[str], None]

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_USAGE = 2


def _ask_stdin(prompt: str) -> str:
    return input(prompt)


def _make_run_id() -> str:
    ts = datetime.now(timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z")
    return f"run-{ts}"


# -------------------------
# Shared run steps
# -------------------------


def _write_and_summarize(
    intervals: Sequence[HoleInterval],
    out_path: Path,
    *,
    encoding: str,
    say: Say,
) -> Path:
    written = write_report(out_path, intervals, encoding=encoding)
    for interval in intervals:
        say(format_interval_summary(interval))
    say(
        f"Total: {len(intervals)} interval(s), "
        f"{format_fixed(total_volume_barrels(intervals), 4)} bbl | {format_fixed(total_volume_liters(intervals), 2)} L"
    )
    say(f"Output saved to: {written.resolve()}")
    return written


def run_file(input_path: Path, out_path: Path, *, encoding: str, say: Say = print) -> int:
    """Parse *input_path*, write the report to *out_path*; return an exit code."""
    set_run_context(run_id=_make_run_id(), mode="file", source=str(input_path))
    try:
        intervals = read_intervals_csv(input_path, encoding=encoding)
        _write_and_summarize(intervals, out_path, encoding=encoding, say=say)
    except RecordError as exc:
        logger.error("CSV data rejected (%s): %s", exc.kind.value, exc)
        say(f"Error in CSV data: {exc}")
        return EXIT_ERROR
    except UnicodeDecodeError as exc:
        logger.error("Cannot decode %s as %s: %s", input_path, encoding, exc)
        say(f"I/O Error: cannot decode {input_path} as {encoding}")
        return EXIT_ERROR
    except OSError as exc:
        logger.exception("I/O failure during file run")
        say(f"I/O Error: {exc}")
        return EXIT_ERROR
    finally:
        clear_run_context()
    say("Volume calculation completed successfully from file.")
    return EXIT_OK


# -------------------------
# Manual entry
# -------------------------


def _ask_positive(ask: Ask, say: Say, prompt: str, what: str) -> float:
    while True:
        raw = ask(prompt).strip()
        try:
            value = float(raw)
        except ValueError:
            value = math.nan
        if value > 0 and math.isfinite(value):
            return value
        say(f"Invalid input. {what} must be a positive number.")


def collect_manual_intervals(ask: Ask = _ask_stdin, say: Say = print) -> List[HoleInterval]:
    """Prompt for intervals until the user declines to add another."""
    intervals: List[HoleInterval] = []
    while True:
        label = ask("Enter label: ")
        diameter = _ask_positive(ask, say, "Enter diameter in inches: ", "Diameter")
        length = _ask_positive(ask, say, "Enter length in feet: ", "Length")
        try:
            intervals.append(HoleInterval(label=label, diameter_inches=diameter, length_feet=length))
        except InvalidRecordError as exc:
            say(f"Invalid interval ({exc}). Please enter it again.")
            continue

        answer = ask("Add another interval? (y/n): ").strip().lower()
        if answer != "y":
            return intervals


def run_manual(
    paths: ReportPaths,
    *,
    encoding: str,
    ask: Ask = _ask_stdin,
    say: Say = print,
    out_path: Optional[Path] = None,
) -> int:
    """Collect intervals interactively and write their report; return an exit code."""
    set_run_context(run_id=_make_run_id(), mode="manual")
    try:
        intervals = collect_manual_intervals(ask, say)
        if out_path is None:
            answer = ask("Enter the output filename for the report (e.g., result.csv): ").strip()
            out_path = Path(answer) if answer else paths.manual_report_path()
        _write_and_summarize(intervals, out_path, encoding=encoding, say=say)
    except OSError as exc:
        logger.exception("I/O failure during manual run")
        say(f"I/O Error: {exc}")
        return EXIT_ERROR
    finally:
        clear_run_context()
    say("Volume calculation completed successfully from manual entry.")
    return EXIT_OK


# -------------------------
# Interactive menu
# -------------------------

_MENU = "\n".join(
    [
        "===================================",
        "OpenHole Volume Calculator",
        "===================================",
        "Menu:",
        "1. Calculate Volume from File",
        "2. Enter Data Manually",
        "3. Exit",
    ]
)


def _ask_existing_file(ask: Ask, say: Say) -> Path:
    while True:
        candidate = Path(ask("Enter the input filename (e.g., input.csv): ").strip())
        if candidate.is_file():
            return candidate
        say("File not found. Please check the filename and try again.")


def _menu_file_option(paths: ReportPaths, *, encoding: str, ask: Ask, say: Say) -> None:
    input_path = _ask_existing_file(ask, say)
    answer = ask("Enter the output filename (e.g., result.csv): ").strip()
    out_path = Path(answer) if answer else paths.report_path_for(input_path)
    run_file(input_path, out_path, encoding=encoding, say=say)


def run_menu(paths: ReportPaths, *, encoding: str, ask: Ask = _ask_stdin, say: Say = print) -> int:
    """Loop over the three-option menu until the user exits or input ends."""
    try:
        while True:
            say(_MENU)
            choice = ask("Choose an option: ").strip()
            if choice == "1":
                _menu_file_option(paths, encoding=encoding, ask=ask, say=say)
            elif choice == "2":
                run_manual(paths, encoding=encoding, ask=ask, say=say)
            elif choice == "3":
                say("Exiting...")
                return EXIT_OK
            else:
                say("Invalid choice. Please enter 1, 2, or 3.")
            say("")
    except EOFError:
        logger.info("Input ended; leaving menu")
        say("")
        return EXIT_OK


# -------------------------
# Sub-commands
# -------------------------


def cmd_file(args: argparse.Namespace, settings: Settings) -> int:
    input_path = Path(args.input)
    if not input_path.is_file():
        print(f"Input file not found: {input_path}", file=sys.stderr)
        return EXIT_USAGE
    paths = ReportPaths.from_config(settings.report, output=args.out)
    return run_file(input_path, paths.report_path_for(input_path), encoding=settings.report.encoding)


def cmd_manual(args: argparse.Namespace, settings: Settings) -> int:
    paths = ReportPaths.from_config(settings.report, output=args.out)
    out_path = paths.manual_report_path() if args.out else None
    try:
        return run_manual(paths, encoding=settings.report.encoding, out_path=out_path)
    except EOFError:
        print("\nInput ended before entry was complete.", file=sys.stderr)
        return EXIT_ERROR


def cmd_menu(args: argparse.Namespace, settings: Settings) -> int:  # pylint: disable=unused-argument
    paths = ReportPaths.from_config(settings.report)
    return run_menu(paths, encoding=settings.report.encoding)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="openhole", description="Openhole volume calculator")
    p.add_argument("--version", action="store_true", help="Print engine name/version and exit.")
    p.add_argument("--log-level", default=None, help="DEBUG|INFO|WARNING|ERROR (or OPENHOLE_LOG_LEVEL env var).")
    p.add_argument(
        "--json-logs",
        action="store_true",
        default=None,
        help="Emit JSON log lines on stderr (or OPENHOLE_LOG_JSON env var).",
    )
    p.set_defaults(func=cmd_menu)
    sub = p.add_subparsers(dest="cmd")

    sp = sub.add_parser("file", help="Compute volumes for an interval CSV and write a report.")
    sp.add_argument("input", help="Input CSV: label,diameter_in,top_ft,bottom_ft")
    sp.add_argument("--out", default=None, help="Report path. Default: <output_dir>/<input stem>_volumes.csv")
    sp.set_defaults(func=cmd_file)

    sp = sub.add_parser("manual", help="Enter intervals interactively and write a report.")
    sp.add_argument("--out", default=None, help="Report path. Prompted for when omitted.")
    sp.set_defaults(func=cmd_manual)

    sp = sub.add_parser("menu", help="Interactive menu (default).")
    sp.set_defaults(func=cmd_menu)

    return p


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(f"{ENGINE_NAME} {ENGINE_VERSION}")
        return EXIT_OK

    try:
        setup_logging(level=args.log_level, json_logs=args.json_logs)
        settings = get_settings()
    except ValidationError as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return EXIT_USAGE

    logger.debug("%s %s starting (%s)", ENGINE_NAME, ENGINE_VERSION, args.cmd or "menu")
    return args.func(args, settings)


if __name__ == "__main__":
    raise SystemExit(main())
