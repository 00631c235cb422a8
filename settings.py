# settings.py
import logging
import os

from services import ThresholdPolicy

FULL_DAY_THRESHOLD = os.getenv("FULL_DAY_THRESHOLD", "08:00")
SHORT_DAY_THRESHOLD = os.getenv("SHORT_DAY_THRESHOLD", "04:00")
# Reduced-threshold days; confirm with the team owning the schedule before changing.
SHORT_DAYS = tuple(d.strip() for d in os.getenv("SHORT_DAYS", "Sun").split(",") if d.strip())
WEEKLY_HOURS_CSV = os.getenv("WEEKLY_HOURS_CSV", "")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def build_policy() -> ThresholdPolicy:
    return ThresholdPolicy(FULL_DAY_THRESHOLD, SHORT_DAY_THRESHOLD, SHORT_DAYS)


def log_level() -> int:
    level = logging.getLevelName(LOG_LEVEL)
    if not isinstance(level, int):
        raise ValueError(f"Unknown LOG_LEVEL {LOG_LEVEL!r}")
    return level
