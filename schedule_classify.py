from __future__ import annotations

from dataclasses import dataclass, field

from schedule_config import ScheduleConfig
from schedule_models import Employee, ScheduleResult

WORKING = "working"
OFF = "off"
ABSENT = "absent"
STATUSES = (WORKING, OFF, ABSENT)

_DEFAULT_CONFIG = ScheduleConfig()


def classify(code: str | None, config: ScheduleConfig | None = None) -> str:
    """Bucket a day code into working, off or absent. Blank cells count as working."""
    cfg = config or _DEFAULT_CONFIG
    c = (code or "").strip().upper()
    if not c:
        return WORKING
    if c in cfg.off_codes:
        return OFF
    if c in cfg.absent_codes:
        return ABSENT
    return WORKING


@dataclass
class DayBuckets:
    """Employees of one shift split by their status on a given day."""

    working: list[tuple[Employee, str]] = field(default_factory=list)
    off: list[tuple[Employee, str]] = field(default_factory=list)
    absent: list[tuple[Employee, str]] = field(default_factory=list)

    def add(self, status: str, employee: Employee, code: str) -> None:
        getattr(self, status).append((employee, code))

    @property
    def total(self) -> int:
        return len(self.working) + len(self.off) + len(self.absent)


@dataclass
class DayCounts:
    working: int
    off: int
    absent: int
    working_names: list[str]


def clamp_day(day: int, days_in_month: int | None) -> int:
    return max(1, min(day, days_in_month or 31))


def group_by_shift(
    result: ScheduleResult,
    day: int,
    config: ScheduleConfig | None = None,
) -> dict[str, DayBuckets]:
    """Group every employee by shift, then by status on *day*. Shifts come back sorted."""
    by_shift: dict[str, DayBuckets] = {}
    for emp in result.employees:
        code = emp.codes.get(day, "")
        by_shift.setdefault(emp.shift or "Unknown", DayBuckets()).add(classify(code, config), emp, code)
    return {s: by_shift[s] for s in sorted(by_shift)}


def day_counts(result: ScheduleResult, day: int, config: ScheduleConfig | None = None) -> DayCounts:
    counts = {s: 0 for s in STATUSES}
    working_names: list[str] = []
    for emp in result.employees:
        status = classify(emp.codes.get(day, ""), config)
        counts[status] += 1
        if status == WORKING:
            working_names.append(emp.name)
    return DayCounts(
        working=counts[WORKING],
        off=counts[OFF],
        absent=counts[ABSENT],
        working_names=working_names,
    )


def day_partition(
    employee: Employee,
    days_in_month: int,
    config: ScheduleConfig | None = None,
) -> dict[str, list[int]]:
    """Every day of the month, filed under exactly one status."""
    parts: dict[str, list[int]] = {s: [] for s in STATUSES}
    for d in range(1, days_in_month + 1):
        parts[classify(employee.codes.get(d, ""), config)].append(d)
    return parts


def off_days(employee: Employee, days_in_month: int, config: ScheduleConfig | None = None) -> list[int]:
    return day_partition(employee, days_in_month, config)[OFF]


def format_off_days(days: list[int], one_per_line: bool = False) -> str:
    sep = "\n" if one_per_line else ", "
    return sep.join(f"{d:02d}" for d in days)
