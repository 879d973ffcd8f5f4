from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Token:
    """One positioned run of text on a page (baseline y, y axis pointing up)."""

    text: str
    x: float
    y: float
    width: float = 0.0
    height: float = 0.0


@dataclass
class Line:
    """Tokens sharing a vertical bucket, ordered left to right."""

    y: float
    tokens: list[Token]
    full_text: str


@dataclass(frozen=True)
class DayAnchor:
    """Horizontal position of one day-of-month column header."""

    day: int
    x: float


@dataclass
class Employee:
    """One employee row. The same name may appear in several sections."""

    name: str
    shift: str
    codes: dict[int, str] = field(default_factory=dict)


@dataclass
class PageResult:
    """Everything one page contributes to the schedule."""

    employees: list[Employee]
    shifts: set[str]
    last_shift: str
    header_found: bool
    month_year: tuple[int, int] | None = None


@dataclass(frozen=True)
class ScheduleResult:
    """The reconstructed schedule for a whole document."""

    month: int
    year: int
    days_in_month: int
    employees: tuple[Employee, ...]
    shifts: frozenset[str]
    month_detected: bool = True
