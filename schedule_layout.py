from __future__ import annotations

import logging
import re
from functools import lru_cache

from schedule_config import ScheduleConfig
from schedule_extract import group_lines, ordered_lines
from schedule_models import DayAnchor, Employee, Line, PageResult, Token

logger = logging.getLogger(__name__)

_DAY_NUMBER_RE = re.compile(r"^\d{1,2}$")
_WS_RE = re.compile(r"\s+")
_LETTER_RE = re.compile(r"[A-Za-zÀ-ÖØ-öø-ÿ]")
_TRAILING_JUNK_RE = re.compile(r"(?:\s+(?:\d{1,2}|fe))+\s*$", re.IGNORECASE)

_MIN_NAME_LEN = 3
_MAX_DAY = 31


@lru_cache(maxsize=None)
def _compiled(pattern: str, flags: int = 0) -> re.Pattern:
    return re.compile(pattern, flags)


def _collapse(text: str) -> str:
    return _WS_RE.sub(" ", text).strip()


def is_day_number(text: str) -> bool:
    return bool(_DAY_NUMBER_RE.match(text))


# ---------------------------------------------------------------------------
# Header locator
# ---------------------------------------------------------------------------

def find_day_header(lines: list[Line], min_days: int = 20) -> list[DayAnchor] | None:
    """Pick the line with the most bare day numbers and turn it into column anchors.

    Ties go to the first line seen. The header is rejected outright when it
    holds fewer than *min_days* numbers, in which case the page has no table.
    """
    best: Line | None = None
    best_count = 0
    for line in lines:
        count = sum(1 for t in line.tokens if is_day_number(t.text))
        if count > best_count:
            best, best_count = line, count

    if best is None or best_count < min_days:
        return None

    anchors = [DayAnchor(day=int(t.text), x=t.x) for t in best.tokens if is_day_number(t.text)]
    return sorted(anchors, key=lambda a: a.x)


def nearest_day(x: float, anchors: list[DayAnchor], tolerance: float = 12.0) -> int | None:
    best_day = None
    best_dist = float("inf")
    for a in anchors:
        d = abs(x - a.x)
        if d < best_dist:
            best_dist, best_day = d, a.day
    if best_day is None or best_dist >= tolerance:
        return None
    if not 1 <= best_day <= _MAX_DAY:
        return None
    return best_day


# ---------------------------------------------------------------------------
# Section tracking and row classification
# ---------------------------------------------------------------------------

def detect_shift_label(text: str, config: ScheduleConfig) -> str | None:
    t = _collapse(text)
    m = _compiled(config.shift_prefix_pattern, re.IGNORECASE).match(t)
    if m:
        return _collapse(m.group(1))
    upper = t.upper()
    for label in config.section_labels:
        if upper == label.upper():
            return label
    return None


def is_noise_line(text: str, config: ScheduleConfig) -> bool:
    t = text.strip().upper()
    if not t:
        return True
    if any(marker in t for marker in config.noise_markers):
        return True
    if any(t.startswith(prefix) for prefix in config.noise_prefixes):
        return True
    return bool(_compiled(config.digit_run_pattern).match(t))


def looks_like_employee_name(text: str, config: ScheduleConfig) -> bool:
    t = text.strip()
    if len(t) < _MIN_NAME_LEN:
        return False
    if _compiled(config.name_reject_pattern, re.IGNORECASE).match(t):
        return False
    return bool(_LETTER_RE.search(t))


def clean_employee_name(text: str) -> str:
    """Collapse whitespace and drop stray trailing day numbers or ``fe`` codes."""
    return _TRAILING_JUNK_RE.sub("", _collapse(text)).strip()


def split_columns(tokens: list[Token], min_day_x: float, name_gap: float) -> tuple[list[Token], list[Token]]:
    boundary = min_day_x - name_gap
    left = [t for t in tokens if t.x < boundary]
    right = [t for t in tokens if t.x >= boundary]
    return left, right


# ---------------------------------------------------------------------------
# Day codes
# ---------------------------------------------------------------------------

def normalize_code(text: str, config: ScheduleConfig) -> str | None:
    t = (text or "").strip()
    if not t:
        return None
    if is_day_number(t):
        return None
    if t.upper() in {m.upper() for m in config.month_names}:
        return None
    for pattern in config.code_patterns:
        if _compiled(pattern).match(t):
            return t.upper()
    return None


def map_codes(tokens: list[Token], anchors: list[DayAnchor], config: ScheduleConfig) -> dict[int, str]:
    codes: dict[int, str] = {}
    for t in tokens:
        code = normalize_code(t.text, config)
        if code is None:
            continue
        day = nearest_day(t.x, anchors, config.day_tolerance)
        if day is None:
            continue
        codes[day] = code
    return codes


# ---------------------------------------------------------------------------
# Month / year
# ---------------------------------------------------------------------------

def detect_month_year(page_text: str, config: ScheduleConfig) -> tuple[int, int] | None:
    names = "|".join(re.escape(m) for m in config.month_names)
    m = _compiled(rf"\b({names})\b\s+(\d{{4}})", re.IGNORECASE).search(page_text)
    if not m:
        return None
    lookup = {name.lower(): i for i, name in enumerate(config.month_names, 1)}
    return lookup[m.group(1).lower()], int(m.group(2))


# ---------------------------------------------------------------------------
# Per-page driver
# ---------------------------------------------------------------------------

def process_page(
    tokens: list[Token],
    config: ScheduleConfig,
    start_shift: str | None = None,
) -> PageResult:
    """Reconstruct the employee rows of one page.

    *start_shift* is the section in force before the first label on the page;
    it defaults to ``config.initial_shift``.
    """
    current_shift = config.initial_shift if start_shift is None else start_shift
    page_text = " ".join(t.text for t in tokens)
    month_year = detect_month_year(page_text, config)

    lines = ordered_lines(group_lines(tokens, config.line_bucket), config.y_axis_up)
    anchors = find_day_header(lines, config.header_min_days)
    if anchors is None:
        return PageResult(
            employees=[],
            shifts=set(),
            last_shift=current_shift,
            header_found=False,
            month_year=month_year,
        )

    min_day_x = min(a.x for a in anchors)
    employees: list[Employee] = []
    shifts: set[str] = set()

    for line in lines:
        label = detect_shift_label(line.full_text, config)
        if label:
            current_shift = label
            shifts.add(current_shift)
            continue

        if is_noise_line(line.full_text, config):
            continue

        left, right = split_columns(line.tokens, min_day_x, config.name_gap)
        left_text = " ".join(t.text for t in left).strip()
        if not looks_like_employee_name(left_text, config):
            continue

        employees.append(
            Employee(
                name=clean_employee_name(left_text),
                shift=current_shift,
                codes=map_codes(right, anchors, config),
            )
        )
        shifts.add(current_shift)

    return PageResult(
        employees=employees,
        shifts=shifts,
        last_shift=current_shift,
        header_found=True,
        month_year=month_year,
    )
