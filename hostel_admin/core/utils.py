"""
Small shared helpers for time handling and guarded arithmetic.
"""

import math
import statistics
from datetime import date, datetime, timezone
from typing import List, Optional, Sequence, Union

from dateutil.relativedelta import relativedelta

Number = Union[int, float]


def utcnow() -> datetime:
    """Timezone-aware current UTC time."""
    return datetime.now(timezone.utc)


def today() -> date:
    return utcnow().date()


def to_naive_utc(value: datetime) -> datetime:
    """
    Normalize a datetime to naive UTC.

    PostgreSQL returns aware timestamps while SQLite returns naive ones;
    comparing the two directly raises TypeError.
    """
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def hours_between(start: Optional[datetime], end: Optional[datetime]) -> Optional[float]:
    if start is None or end is None:
        return None
    delta = to_naive_utc(end) - to_naive_utc(start)
    return delta.total_seconds() / 3600


def safe_divide(numerator: Number, denominator: Number, ndigits: int = 2) -> float:
    """Divide, returning 0 for a zero (or missing) denominator."""
    if not denominator:
        return 0.0
    result = numerator / denominator
    if math.isnan(result) or math.isinf(result):
        return 0.0
    return round(result, ndigits)


def safe_percentage(part: Number, whole: Number, ndigits: int = 2) -> float:
    if not whole:
        return 0.0
    return safe_divide(part * 100, whole, ndigits)


def rounded_mean(values: Sequence[float], ndigits: int = 2) -> Optional[float]:
    if not values:
        return None
    return round(statistics.fmean(values), ndigits)


def percentile(values: Sequence[float], pct: int, ndigits: int = 2) -> Optional[float]:
    """
    Inclusive percentile (1..99) of ``values``; None when empty.
    """
    if not values:
        return None
    if len(values) == 1:
        return round(values[0], ndigits)
    cuts: List[float] = statistics.quantiles(values, n=100, method="inclusive")
    return round(cuts[pct - 1], ndigits)


def month_start(value: datetime) -> date:
    return date(value.year, value.month, 1)


def shift_months(value: date, months: int) -> date:
    """First day of the month ``months`` before/after ``value``'s month."""
    return value.replace(day=1) + relativedelta(months=months)
