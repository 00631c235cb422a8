# utils.py
import logging

import pandas as pd
from pathlib import Path
from typing import Iterable, List

from domain import WEEK_DAYS, DayStatus, EmployeeWeekSummary, EmployeeWeeklyRecord, FormatError, WeekWindow
from services import to_decimal

logger = logging.getLogger(__name__)

STATUS_COLORS = {
    DayStatus.MISSING: "color: #9CA3AF",
    DayStatus.BELOW_THRESHOLD: "color: #CA8A04",
    DayStatus.MET_THRESHOLD: "color: #16A34A",
}


def format_period(window: WeekWindow) -> str:
    return f"{window.start.strftime('%m/%d/%Y')} ~ {window.end.strftime('%m/%d/%Y')}"


def day_headers(window: WeekWindow) -> List[str]:
    return [f"{label} {d.strftime('%d')}" for label, d in zip(WEEK_DAYS, window.dates)]


def parse_hours(value, employee_id, day_label: str) -> float | None:
    """Decimal hours or HH:MM text; blank is absent, anything else is logged and absent."""
    if pd.isna(value) or (isinstance(value, str) and not value.strip()):
        return None
    if isinstance(value, str) and ":" in value:
        try:
            return to_decimal(value)
        except FormatError as e:
            logger.warning(f"Ignoring hours for employee {employee_id} on {day_label}: {e}")
            return None
    v = pd.to_numeric(value, errors="coerce")
    if pd.isna(v):
        logger.warning(f"Ignoring hours for employee {employee_id} on {day_label}: {value!r} is not a number")
        return None
    return float(v)


def records_from_dataframe(df: pd.DataFrame) -> List[EmployeeWeeklyRecord]:
    """
    Wide frame: employee_id, employee_name and any of Mon..Sun.
    Blank / NaN cells are absent, never zero.
    """
    missing = [c for c in ("employee_id", "employee_name") if c not in df.columns]
    if missing:
        raise ValueError(f"Missing column(s): {', '.join(missing)}")
    days = [d for d in WEEK_DAYS if d in df.columns]
    records = []
    for _, row in df.iterrows():
        employee_id = int(row["employee_id"])
        hours = {d: parse_hours(row[d], employee_id, d) for d in days}
        records.append(EmployeeWeeklyRecord(
            employee_id=employee_id,
            employee_name=str(row["employee_name"]),
            hours_by_day=hours,
        ))
    return records


def load_records_csv(path: str | Path) -> List[EmployeeWeeklyRecord]:
    return records_from_dataframe(pd.read_csv(path))


def summaries_to_dataframe(summaries: Iterable[EmployeeWeekSummary], window: WeekWindow) -> pd.DataFrame:
    headers = day_headers(window)
    rows = []
    for s in summaries:
        row = {"Name": s.employee_name}
        for h, c in zip(headers, s.cells):
            row[h] = c.text
        row["Total"] = s.total_hours
        rows.append(row)
    return pd.DataFrame(rows, columns=["Name", *headers, "Total"])


def status_styles(summaries: Iterable[EmployeeWeekSummary], window: WeekWindow) -> pd.DataFrame:
    """CSS per cell, same shape as summaries_to_dataframe()."""
    headers = day_headers(window)
    rows = []
    for s in summaries:
        row = {"Name": "", "Total": ""}
        for h, c in zip(headers, s.cells):
            row[h] = STATUS_COLORS[c.status]
        rows.append(row)
    return pd.DataFrame(rows, columns=["Name", *headers, "Total"])
