# services.py
from __future__ import annotations
import logging
import math
import numbers
import re
from datetime import datetime, date, timedelta
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from domain import (
    WEEK_DAYS,
    DayCell,
    DayStatus,
    EmployeeWeekSummary,
    EmployeeWeeklyRecord,
    FormatError,
    WeekWindow,
)

logger = logging.getLogger(__name__)

_HHMM = re.compile(r"(-?\d+):(-?\d+)", re.ASCII)


# =========================
# Week window
# =========================
def compute_week_window(reference: date) -> WeekWindow:
    """
    Monday-start / Sunday-end window containing `reference`.
    A Sunday belongs to the week that ends on it. Time of day is ignored.
    Raises ValueError when the window would fall outside date.min..date.max.
    """
    if isinstance(reference, datetime):
        reference = reference.date()
    dow = reference.isoweekday() % 7  # Sunday=0 .. Saturday=6
    offset = -6 if dow == 0 else 1 - dow
    try:
        start = reference + timedelta(days=offset)
        end = start + timedelta(days=6)
    except OverflowError:
        raise ValueError(f"No complete week window around {reference.isoformat()}") from None
    dates = tuple(start + timedelta(days=i) for i in range(7))
    # same-month ordinal, not an ISO week (see WeekWindow.iso_year_week)
    week_number = math.ceil((start.day - start.isoweekday() % 7) / 7)
    return WeekWindow(start=start, end=end, dates=dates, week_number=week_number)


def previous_week(reference: date) -> date:
    return reference - timedelta(days=7)


def next_week(reference: date) -> date:
    return reference + timedelta(days=7)


def current_week(today: date | None = None) -> date:
    return today or date.today()


# =========================
# HH:MM <-> decimal hours
# =========================
def to_decimal(text: str) -> float:
    """'07:30' -> 7.5"""
    if not isinstance(text, str):
        raise FormatError(f"Expected 'HH:MM' text, got {text!r}")
    m = _HHMM.fullmatch(text.strip())
    if not m:
        raise FormatError(f"Invalid time {text!r}, expected 'HH:MM'")
    hours, minutes = int(m.group(1)), int(m.group(2))
    if hours < 0 or minutes < 0:
        raise FormatError(f"Negative time {text!r}")
    if minutes >= 60:
        raise FormatError(f"Minutes out of range in {text!r}")
    return hours + minutes / 60


def to_hhmm(value: float) -> str:
    """7.5 -> '07:30'. Rounds to the nearest minute, so 7.999 -> '08:00'."""
    if not _is_number(value):
        raise FormatError(f"Expected a number of hours, got {value!r}")
    value = float(value)
    if not math.isfinite(value) or value < 0:
        raise FormatError(f"Cannot format {value!r} as HH:MM")
    hours = math.floor(value)
    minutes = math.floor((value - hours) * 60 + 0.5)
    if minutes == 60:
        hours += 1
        minutes = 0
    return f"{hours:02d}:{minutes:02d}"


# =========================
# Classification
# =========================
def _is_number(value) -> bool:
    # numpy scalars and Fraction register as numbers.Real, Decimal does not
    return isinstance(value, (numbers.Real, Decimal)) and not isinstance(value, bool)


def is_absent(value: Optional[float]) -> bool:
    return value is None or (_is_number(value) and math.isnan(float(value)))


def classify(day_label: str, raw_value: Optional[float], threshold: float) -> DayStatus:
    """Missing / below / met. The threshold is already resolved for `day_label`."""
    if is_absent(raw_value):
        return DayStatus.MISSING
    if raw_value >= threshold:
        return DayStatus.MET_THRESHOLD
    return DayStatus.BELOW_THRESHOLD


class ThresholdPolicy:
    """Explicit day label -> threshold (decimal hours) mapping."""
    def __init__(self, full_day: str = "08:00", short_day: str = "04:00", short_days: Iterable[str] = ("Sun",)):
        short_days = tuple(short_days)
        unknown = [d for d in short_days if d not in WEEK_DAYS]
        if unknown:
            raise ValueError(f"Unknown day label(s) {unknown}, expected one of {list(WEEK_DAYS)}")
        self.full_day = to_decimal(full_day)
        self.short_day = to_decimal(short_day)
        self.short_days = short_days
        self._thresholds: Dict[str, float] = {
            d: (self.short_day if d in short_days else self.full_day) for d in WEEK_DAYS
        }

    def threshold_for(self, day_label: str) -> float:
        try:
            return self._thresholds[day_label]
        except KeyError:
            raise KeyError(f"No threshold for day label {day_label!r}") from None

    def as_dict(self) -> Dict[str, float]:
        return dict(self._thresholds)


# =========================
# Weekly summary
# =========================
class WeeklySummaryBuilder:
    """Resolves, formats and classifies every (employee, day) cell of a week."""
    def __init__(self, policy: ThresholdPolicy | None = None):
        self.policy = policy or ThresholdPolicy()

    def build_cell(self, record: EmployeeWeeklyRecord, day_label: str, window: WeekWindow) -> DayCell:
        value = record.hours_for(day_label)
        day = window.date_for(day_label)
        if is_absent(value):
            return DayCell(day_label, day, None, "-", DayStatus.MISSING)
        try:
            text = to_hhmm(value)
        except FormatError as e:
            logger.warning(f"Invalid hours for employee {record.employee_id} on {day_label}: {e}")
            return DayCell(day_label, day, value, "-", DayStatus.MISSING)
        status = classify(day_label, value, self.policy.threshold_for(day_label))
        return DayCell(day_label, day, value, text, status)

    def build_summary(self, record: EmployeeWeeklyRecord, window: WeekWindow) -> EmployeeWeekSummary:
        cells = [self.build_cell(record, d, window) for d in WEEK_DAYS]
        return EmployeeWeekSummary(record.employee_id, record.employee_name, cells)

    def build(self, records: Iterable[EmployeeWeeklyRecord], window: WeekWindow) -> List[EmployeeWeekSummary]:
        summaries = [self.build_summary(r, window) for r in records]
        logger.debug(f"Built {len(summaries)} weekly summaries for {window.start.isoformat()}")
        return summaries
