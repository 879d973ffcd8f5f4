from __future__ import annotations

from schedule_classify import (
    ABSENT,
    OFF,
    WORKING,
    clamp_day,
    classify,
    day_counts,
    day_partition,
    format_off_days,
    group_by_shift,
    off_days,
)
from schedule_config import ScheduleConfig
from schedule_models import Employee, ScheduleResult


def _result(*employees: Employee) -> ScheduleResult:
    return ScheduleResult(
        month=2,
        year=2024,
        days_in_month=29,
        employees=tuple(employees),
        shifts=frozenset(e.shift for e in employees),
    )


def test_classify_known_values():
    assert classify("") == WORKING
    assert classify(" ") == WORKING
    assert classify("fg") == OFF
    assert classify("FG") == OFF
    assert classify("dm") == ABSENT
    assert classify("xyz") == WORKING


def test_classify_handles_none_and_padding():
    assert classify(None) == WORKING
    assert classify("  cove ") == OFF
    assert classify("x") == ABSENT
    assert classify("FAN") == OFF
    assert classify("M1") == WORKING


def test_classify_uses_configured_sets():
    config = ScheduleConfig(off_codes=frozenset({"VAC"}), absent_codes=frozenset({"SICK"}))
    assert classify("vac", config) == OFF
    assert classify("sick", config) == ABSENT
    assert classify("FG", config) == WORKING


def test_day_partition_covers_every_day_once():
    emp = Employee("ANA", "B", {1: "FG", 2: "DM", 3: "M1", 17: "COVE", 29: "X"})
    parts = day_partition(emp, 29)
    all_days = parts[WORKING] + parts[OFF] + parts[ABSENT]
    assert sorted(all_days) == list(range(1, 30))
    assert len(all_days) == len(set(all_days))
    assert parts[OFF] == [1, 17]
    assert parts[ABSENT] == [2, 29]


def test_off_days_ignore_codes_past_month_end():
    emp = Employee("ANA", "B", {28: "FG", 30: "FG", 31: "FA"})
    assert off_days(emp, 29) == [28]


def test_format_off_days():
    assert format_off_days([1, 5, 17]) == "01, 05, 17"
    assert format_off_days([1, 5], one_per_line=True) == "01\n05"
    assert format_off_days([]) == ""


def test_group_by_shift_sorted_with_buckets():
    result = _result(
        Employee("ZOE", "TOOLING", {3: "FG"}),
        Employee("ANA", "B", {3: "DM"}),
        Employee("LUIS", "B", {}),
        Employee("JOHN", "B", {3: "T1"}),
    )
    groups = group_by_shift(result, 3)
    assert list(groups) == ["B", "TOOLING"]
    b = groups["B"]
    assert [(e.name, c) for e, c in b.working] == [("LUIS", ""), ("JOHN", "T1")]
    assert [(e.name, c) for e, c in b.absent] == [("ANA", "DM")]
    assert b.off == []
    assert b.total == 3
    assert [(e.name, c) for e, c in groups["TOOLING"].off] == [("ZOE", "FG")]


def test_day_counts():
    result = _result(
        Employee("ZOE", "TOOLING", {3: "FG"}),
        Employee("ANA", "B", {3: "DM"}),
        Employee("LUIS", "B", {}),
    )
    counts = day_counts(result, 3)
    assert (counts.working, counts.off, counts.absent) == (1, 1, 1)
    assert counts.working_names == ["LUIS"]


def test_clamp_day():
    assert clamp_day(0, 29) == 1
    assert clamp_day(31, 29) == 29
    assert clamp_day(15, 29) == 15
    assert clamp_day(40, 0) == 31
