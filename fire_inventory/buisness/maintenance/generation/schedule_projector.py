"""
Schedule Projector
Pure date arithmetic for maintenance generation: baseline resolution,
run horizon and the candidate due dates for one equipment/template pair.
"""

from datetime import date, datetime, time, timedelta
from enum import Enum
from typing import List, Optional, Union
from dateutil.relativedelta import relativedelta

DateLike = Union[date, datetime]

NEXT_ONLY_HORIZON_MONTHS = 3
ALL_MISSING_HORIZON_DAYS = 180


class GenerationMode(Enum):
    """How far ahead a generation run looks and how many dates it emits"""
    NEXT_ONLY = 'next-only'
    ALL_MISSING = 'all-missing'

    @classmethod
    def parse(cls, value: Optional[str]) -> 'GenerationMode':
        """
        Parse a mode name as sent by callers.

        Accepts the canonical values plus the names the trigger buttons and the
        batch job use ("next", "manual", "all", "bulk", "yearly").

        Raises:
            ValueError: If the name is not a known mode
        """
        if isinstance(value, cls):
            return value
        if value is None:
            return cls.NEXT_ONLY
        normalized = str(value).strip().lower().replace('_', '-')
        if normalized in ('next-only', 'next', 'manual'):
            return cls.NEXT_ONLY
        if normalized in ('all-missing', 'all', 'bulk', 'yearly'):
            return cls.ALL_MISSING
        raise ValueError(f"Unknown generation mode: {value}")


def as_datetime(value: DateLike) -> datetime:
    """Dates become midnight datetimes; datetimes pass through"""
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time.min)


def add_months(value: DateLike, months: int) -> DateLike:
    """Calendar-month addition; day-of-month is clamped to the end of shorter months"""
    return value + relativedelta(months=months)


def resolve_baseline(
    last_check_date: Optional[DateLike],
    purchase_date: Optional[DateLike],
    now: datetime
) -> datetime:
    """
    Determine the date projection starts from.

    Args:
        last_check_date: Date of the last completed check, if known
        purchase_date: Purchase date, if known
        now: Current run time

    Returns:
        Last check date, else purchase date, else now
    """
    if last_check_date is not None:
        return as_datetime(last_check_date)
    if purchase_date is not None:
        return as_datetime(purchase_date)
    return now


def compute_horizon(mode: GenerationMode, now: datetime) -> datetime:
    """Cutoff for a run: three calendar months for next-only, 180 days for all-missing"""
    if mode == GenerationMode.NEXT_ONLY:
        return add_months(now, NEXT_ONLY_HORIZON_MONTHS)
    return now + timedelta(days=ALL_MISSING_HORIZON_DAYS)


def _within_horizon(candidate: DateLike, horizon: DateLike) -> bool:
    # exclusive: baseline 2024-01-01, monthly, horizon 2024-06-01 must yield exactly four dates
    return as_datetime(candidate) < as_datetime(horizon)


def project_due_dates(
    baseline: DateLike,
    interval_months: int,
    horizon: DateLike,
    mode: GenerationMode = GenerationMode.ALL_MISSING
) -> List[DateLike]:
    """
    Compute the candidate due dates for one equipment/template pair.

    Every candidate is the baseline advanced by a whole multiple of the
    interval, so nothing is ever emitted at or before the baseline. Values
    keep the baseline's type.

    Args:
        baseline: Date the interval is counted from
        interval_months: Template interval, must be a positive integer
        horizon: Exclusive upper bound for emitted dates
        mode: NEXT_ONLY emits at most one date, ALL_MISSING every date up to the horizon

    Returns:
        Ascending list of candidate due dates, possibly empty

    Raises:
        ValueError: If interval_months is missing or not positive
    """
    if not isinstance(interval_months, int) or isinstance(interval_months, bool) or interval_months <= 0:
        raise ValueError(f"interval_months must be a positive integer, got {interval_months!r}")

    mode = GenerationMode.parse(mode)

    if mode == GenerationMode.NEXT_ONLY:
        candidate = add_months(baseline, interval_months)
        return [candidate] if _within_horizon(candidate, horizon) else []

    candidates = []
    step = 1
    while True:
        # candidate k is always baseline + k * interval
        candidate = add_months(baseline, interval_months * step)
        if not _within_horizon(candidate, horizon):
            break
        candidates.append(candidate)
        step += 1
    return candidates
