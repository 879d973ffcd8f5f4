from __future__ import annotations

import calendar
import logging
import warnings
from datetime import date
from pathlib import Path
from typing import Iterable

import pdfplumber
from pdfminer.pdfparser import PDFSyntaxError
from pdfplumber.utils.exceptions import PdfminerException

from schedule_config import ScheduleConfig
from schedule_extract import format_lines, group_lines, ordered_lines, page_tokens
from schedule_layout import process_page
from schedule_models import Employee, ScheduleResult, Token

logging.getLogger("pdfminer").setLevel(logging.ERROR)
warnings.filterwarnings("ignore", module="pdfminer")

logger = logging.getLogger(__name__)


class ScheduleParseError(Exception):
    """The document could not be read at all; no partial schedule is produced."""


def days_in_month(month: int, year: int) -> int:
    return calendar.monthrange(year, month)[1]


def assemble_schedule(
    pages: Iterable[list[Token]],
    config: ScheduleConfig | None = None,
    today: date | None = None,
) -> ScheduleResult:
    """Run the per-page layout inference over *pages* in order and merge the results.

    The first page that names a month and year decides both; if none does,
    both come from *today*.
    """
    config = config or ScheduleConfig()
    employees: list[Employee] = []
    shifts: set[str] = set()
    month_year: tuple[int, int] | None = None
    carried_shift = config.initial_shift

    for page_number, tokens in enumerate(pages, 1):
        start_shift = carried_shift if config.carry_shift_across_pages else config.initial_shift
        page = process_page(tokens, config, start_shift)

        if month_year is None and page.month_year is not None:
            month_year = page.month_year
            logger.debug(f"Page {page_number}: detected month/year {month_year[0]}/{month_year[1]}")

        if not page.header_found:
            logger.debug(f"Page {page_number}: no day header, skipped")
            continue

        logger.debug(f"Page {page_number}: {len(page.employees)} employee rows")
        employees.extend(page.employees)
        shifts |= page.shifts
        carried_shift = page.last_shift

    detected = month_year is not None
    if not detected:
        today = today or date.today()
        month_year = (today.month, today.year)
        logger.info(f"No month/year found in document, using {today.month}/{today.year}")

    month, year = month_year
    return ScheduleResult(
        month=month,
        year=year,
        days_in_month=days_in_month(month, year),
        employees=tuple(employees),
        shifts=frozenset(shifts),
        month_detected=detected,
    )


def iter_pdf_pages(pdf) -> Iterable[list[Token]]:
    for page in pdf.pages:
        yield page_tokens(page)


def parse_schedule_pdf(
    pdf_path: str | Path,
    config: ScheduleConfig | None = None,
    today: date | None = None,
) -> ScheduleResult:
    path = Path(pdf_path)
    if not path.exists():
        raise ScheduleParseError(f"file not found: {path}")

    try:
        with pdfplumber.open(path) as pdf:
            result = assemble_schedule(iter_pdf_pages(pdf), config, today)
    except (PdfminerException, PDFSyntaxError, OSError) as e:
        raise ScheduleParseError(f"could not parse {path}: {e}") from e

    logger.info(f"Parsed {len(result.employees)} employees across {len(result.shifts)} shifts")
    return result


def dump_pdf_lines(pdf_path: str | Path, config: ScheduleConfig | None = None) -> str:
    """Every page's grouped lines in reading order, for checking a new template."""
    config = config or ScheduleConfig()
    path = Path(pdf_path)
    if not path.exists():
        raise ScheduleParseError(f"file not found: {path}")

    out: list[str] = []
    try:
        with pdfplumber.open(path) as pdf:
            for page_number, tokens in enumerate(iter_pdf_pages(pdf), 1):
                lines = ordered_lines(group_lines(tokens, config.line_bucket), config.y_axis_up)
                out.append(f"=== PAGE {page_number} ===")
                out.append(format_lines(lines))
    except (PdfminerException, PDFSyntaxError, OSError) as e:
        raise ScheduleParseError(f"could not parse {path}: {e}") from e
    return "\n".join(out)
