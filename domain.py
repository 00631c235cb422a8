# domain.py
from __future__ import annotations
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Dict, Optional, Tuple

WEEK_DAYS: Tuple[str, ...] = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


class FormatError(ValueError):
    """Malformed or out-of-range time text/value."""


class DayStatus(Enum):
    MISSING = "missing"
    BELOW_THRESHOLD = "below_threshold"
    MET_THRESHOLD = "met_threshold"


@dataclass(frozen=True)
class WeekWindow:
    """Monday to Sunday span containing a reference date."""
    start: date
    end: date
    dates: Tuple[date, ...]
    week_number: int

    @property
    def iso_year_week(self) -> tuple[int, int]:
        """Returns (ISO year, ISO week number). `week_number` is only a same-month ordinal."""
        iso = self.start.isocalendar()
        return (iso[0], iso[1])

    def date_for(self, day_label: str) -> date:
        return self.dates[WEEK_DAYS.index(day_label)]

    def __contains__(self, d: date) -> bool:
        return self.start <= d <= self.end


@dataclass
class EmployeeWeeklyRecord:
    """Raw hours per day label; None means nothing was recorded."""
    employee_id: int
    employee_name: str
    hours_by_day: Dict[str, Optional[float]] = field(default_factory=dict)

    def hours_for(self, day_label: str) -> Optional[float]:
        return self.hours_by_day.get(day_label)


@dataclass(frozen=True)
class DayCell:
    label: str
    day: date
    value: Optional[float]
    text: str
    status: DayStatus


@dataclass
class EmployeeWeekSummary:
    employee_id: int
    employee_name: str
    cells: list[DayCell] = field(default_factory=list)

    @property
    def total_hours(self) -> float:
        return round(sum(float(c.value) for c in self.cells if c.status is not DayStatus.MISSING), 2)

    def status_counts(self) -> Dict[DayStatus, int]:
        counts = {s: 0 for s in DayStatus}
        for c in self.cells:
            counts[c.status] += 1
        return counts
