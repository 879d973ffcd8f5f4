"""Answer "who works on day N?" from a monthly shift schedule PDF.

  1. parse_schedule_pdf  – rebuild the employee/day table from positioned text
  2. group_by_shift      – split each shift's staff into working / off / absent
  3. employee view       – one person's off days and a month calendar
"""

from __future__ import annotations

import argparse
import calendar
import logging
import sys
from pathlib import Path

from schedule_classify import (
    ABSENT,
    OFF,
    WORKING,
    classify,
    clamp_day,
    day_counts,
    format_off_days,
    group_by_shift,
    off_days,
)
from schedule_config import ScheduleConfig, load_config
from schedule_models import Employee, ScheduleResult
from schedule_pipeline import ScheduleParseError, days_in_month, dump_pdf_lines, parse_schedule_pdf

_STATUS_LABELS = {WORKING: "Working", OFF: "Off", ABSENT: "Medical/Absent"}


def _print_day_report(result: ScheduleResult, day: int, month: int, year: int, config: ScheduleConfig) -> None:
    counts = day_counts(result, day, config)
    print("=" * 64)
    print(f"{year}-{month:02d}-{day:02d}")
    print("=" * 64)
    print(f"  Working: {counts.working}   Off: {counts.off}   Medical/Absent: {counts.absent}")

    for shift, buckets in group_by_shift(result, day, config).items():
        print(f"\nShift: {shift}  ({buckets.total} staff)")
        for status in (WORKING, OFF, ABSENT):
            items = getattr(buckets, status)
            print(f"  {_STATUS_LABELS[status]} ({len(items)}):")
            if not items:
                print("      -")
            for emp, code in items:
                print(f"      {emp.name:<32} {code or '-'}")
    print()


def _print_calendar(month: int, year: int, marked: list[int], selected: int) -> None:
    cal = calendar.Calendar(firstweekday=calendar.SUNDAY)
    print("   ".join(["Su", "Mo", "Tu", "We", "Th", "Fr", "Sa"]))
    for week in cal.monthdayscalendar(year, month):
        cells = []
        for d in week:
            if d == 0:
                cells.append("    ")
                continue
            mark = "*" if d in marked else " "
            if d == selected:
                cells.append(f"[{d:2d}]")
            else:
                cells.append(f"{d:2d}{mark} ")
        print(" ".join(cells))


def _print_employee(
    emp: Employee,
    day: int,
    month: int,
    year: int,
    config: ScheduleConfig,
    one_per_line: bool,
) -> None:
    code = emp.codes.get(day, "")
    label = _STATUS_LABELS[classify(code, config)]
    print(emp.name)
    print(f"  Shift: {emp.shift}  Selected day: {label}{f' ({code})' if code else ''}")
    days = off_days(emp, days_in_month(month, year), config)
    print(f"\n{calendar.month_name[month]} {year}  (* = off)\n")
    _print_calendar(month, year, days, day)
    print(f"\nOff days: {format_off_days(days, one_per_line) if days else '-'}\n")


def run(args: argparse.Namespace) -> int:
    config = load_config(args.config)

    try:
        if args.dump_lines:
            print(dump_pdf_lines(args.pdf, config))
            return 0
        result = parse_schedule_pdf(args.pdf, config)
    except ScheduleParseError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Parsed {len(result.employees)} employees across {len(result.shifts)} shifts.")
    if not result.month_detected:
        print("(no month/year found in the document, using the current month)")

    month = args.month or result.month
    year = args.year or result.year
    day = clamp_day(args.day, days_in_month(month, year))

    if args.employee:
        needle = args.employee.strip().upper()
        matches = [e for e in result.employees if needle in e.name.upper()]
        if not matches:
            print(f"No employee matching {args.employee!r}", file=sys.stderr)
            return 1
        for emp in matches:
            _print_employee(emp, day, month, year, config, args.one_per_line)
        return 0

    _print_day_report(result, day, month, year, config)
    return 0


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Show who is working, off or absent on a day of a monthly schedule PDF.",
    )
    parser.add_argument("pdf", help="Path to the schedule PDF")
    parser.add_argument("-d", "--day", type=int, default=1, help="Day of month to report (default: 1)")
    parser.add_argument("--month", type=int, default=None, help="Override the detected month (1-12)")
    parser.add_argument("--year", type=int, default=None, help="Override the detected year")
    parser.add_argument("-e", "--employee", default=None, help="Show off days for employees whose name contains this text")
    parser.add_argument("--one-per-line", action="store_true", help="List off days one per line")
    parser.add_argument("-c", "--config", type=Path, default=None, help="YAML file overriding layout settings")
    parser.add_argument("--dump-lines", action="store_true", help="Print the grouped text lines of every page and exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )
    if args.month is not None and not 1 <= args.month <= 12:
        print("Error: --month must be between 1 and 12", file=sys.stderr)
        return 1
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
