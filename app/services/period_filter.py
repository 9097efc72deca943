"""
app/services/period_filter.py

Dashboard period filter resolution.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta


class Period:
    TODAY = "today"
    LAST_7_DAYS = "7d"
    LAST_30_DAYS = "30d"
    LAST_90_DAYS = "90d"
    CUSTOM = "custom"
    ALL = "all"


DEFAULT_PERIOD = Period.LAST_90_DAYS

_LOOKBACK_DAYS: dict[str, int] = {
    Period.TODAY: 0,
    Period.LAST_7_DAYS: 7,
    Period.LAST_30_DAYS: 30,
    Period.LAST_90_DAYS: 90,
}

ALLOWED_PERIODS: frozenset[str] = frozenset({*_LOOKBACK_DAYS, Period.CUSTOM, Period.ALL})

# Custom ranges with a missing start fall back to this lookback.
_CUSTOM_FALLBACK_DAYS = 30


@dataclass(frozen=True)
class DateRange:
    """
    Inclusive start-date window; ``None`` bounds are open.
    """

    start: date | None
    end: date | None


def resolve_period(
    period: str,
    *,
    start: date | None = None,
    end: date | None = None,
    today: date | None = None,
) -> DateRange:
    """
    Turn a period choice into an inclusive date window.

    ``start`` and ``end`` are only read for ``custom``.

    Raises
    ------
    ValueError
        For an unknown period, or a custom range whose start is after its end.
    """

    period = (period or "").strip().lower()
    if period not in ALLOWED_PERIODS:
        raise ValueError(f"Unknown period {period!r}. Allowed: {sorted(ALLOWED_PERIODS)}.")

    today = today or date.today()

    if period == Period.ALL:
        return DateRange(start=None, end=None)

    if period == Period.CUSTOM:
        resolved_start = start or today - timedelta(days=_CUSTOM_FALLBACK_DAYS)
        resolved_end = end or today
        if resolved_start > resolved_end:
            raise ValueError("start must be on or before end.")
        return DateRange(start=resolved_start, end=resolved_end)

    return DateRange(start=today - timedelta(days=_LOOKBACK_DAYS[period]), end=today)
