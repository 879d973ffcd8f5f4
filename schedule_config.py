from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

MONTH_NAMES: tuple[str, ...] = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


@dataclass
class ScheduleConfig:
    """Template assumptions for one family of monthly schedule documents.

    Everything the layout heuristics depend on lives here so that a differently
    laid out template can be supported by swapping the configuration only.
    """

    # Geometry (PDF points)
    line_bucket: float = 2.0
    header_min_days: int = 20
    name_gap: float = 12.0
    day_tolerance: float = 12.0
    y_axis_up: bool = True

    # Section tracking
    initial_shift: str = "Unknown"
    carry_shift_across_pages: bool = False
    shift_prefix_pattern: str = r"^SHIFT\s+(.+)$"
    section_labels: tuple[str, ...] = (
        "GSE", "TOOLING", "ADMINIST.", "ADMINIST", "SUPERVISORS",
        "SHIFT B2", "SHIFT C", "SHIFT B",
    )

    # Noise rows
    noise_markers: tuple[str, ...] = ("MONTHLY SCHEDULE", "HEAD COUNT", "FERIADO", "LAST REV")
    noise_prefixes: tuple[str, ...] = ("TOTAL", "SUN ")
    digit_run_pattern: str = r"^\d(\s+\d){5,}"
    name_reject_pattern: str = r"^(TOTAL|HEAD)\b"

    # Day codes
    code_patterns: tuple[str, ...] = (r"^[A-Za-z]{1,6}\d{0,3}$", r"^[A-Za-z]{2,6}$")
    off_codes: frozenset[str] = field(
        default_factory=lambda: frozenset({"FG", "FA", "FC", "FE", "FF", "FAN", "COVE"})
    )
    absent_codes: frozenset[str] = field(
        default_factory=lambda: frozenset({"DM", "EMT", "AJ", "X"})
    )
    month_names: tuple[str, ...] = MONTH_NAMES


_TUPLE_FIELDS = {"section_labels", "code_patterns", "month_names"}
# Compared against upper-cased line text
_UPPER_TUPLE_FIELDS = {"noise_markers", "noise_prefixes"}
_SET_FIELDS = {"off_codes", "absent_codes"}
_LIST_FIELDS = _TUPLE_FIELDS | _UPPER_TUPLE_FIELDS | _SET_FIELDS


def _coerce(name: str, value):
    if name in _LIST_FIELDS and isinstance(value, str):
        value = [value]
    if name in _TUPLE_FIELDS:
        return tuple(str(v) for v in value)
    if name in _UPPER_TUPLE_FIELDS:
        return tuple(str(v).upper() for v in value)
    if name in _SET_FIELDS:
        return frozenset(str(v).strip().upper() for v in value)
    return value


def config_from_mapping(data: dict) -> ScheduleConfig:
    """Build a config from a plain mapping, ignoring keys it does not know."""
    known = {f.name for f in fields(ScheduleConfig)}
    kwargs = {}
    for key, value in (data or {}).items():
        if key not in known:
            logger.warning(f"Ignoring unknown config key {key!r}")
            continue
        kwargs[key] = _coerce(key, value)
    return ScheduleConfig(**kwargs)


def load_config(config_path: Path | str | None = None) -> ScheduleConfig:
    """Load a YAML config file, falling back to defaults if it is missing or unreadable."""
    if config_path is None:
        return ScheduleConfig()
    path = Path(config_path)
    if not path.exists():
        logger.info(f"Config file {path} not found, using defaults")
        return ScheduleConfig()
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"Could not load config from {path}: {e}")
        return ScheduleConfig()
    if not isinstance(data, dict):
        logger.warning(f"Config file {path} is not a mapping, using defaults")
        return ScheduleConfig()
    return config_from_mapping(data)
