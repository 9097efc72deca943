from __future__ import annotations

from datetime import date

import pytest

from app.services.period_filter import DateRange, Period, resolve_period

TODAY = date(2026, 10, 18)


@pytest.mark.parametrize(
    ("period", "expected_start"),
    [
        (Period.TODAY, date(2026, 10, 18)),
        (Period.LAST_7_DAYS, date(2026, 10, 11)),
        (Period.LAST_30_DAYS, date(2026, 9, 18)),
        (Period.LAST_90_DAYS, date(2026, 7, 20)),
    ],
)
def test_lookback_periods_end_today(period: str, expected_start: date) -> None:
    assert resolve_period(period, today=TODAY) == DateRange(start=expected_start, end=TODAY)


def test_all_is_unbounded() -> None:
    assert resolve_period("all", today=TODAY) == DateRange(start=None, end=None)


def test_custom_uses_given_bounds() -> None:
    resolved = resolve_period("custom", start=date(2026, 1, 1), end=date(2026, 3, 31), today=TODAY)
    assert resolved == DateRange(start=date(2026, 1, 1), end=date(2026, 3, 31))


def test_custom_fills_missing_bounds() -> None:
    assert resolve_period("custom", today=TODAY) == DateRange(start=date(2026, 9, 18), end=TODAY)


def test_custom_rejects_inverted_range() -> None:
    with pytest.raises(ValueError):
        resolve_period("custom", start=date(2026, 5, 1), end=date(2026, 4, 1), today=TODAY)


def test_unknown_period_rejected() -> None:
    with pytest.raises(ValueError):
        resolve_period("yesterday", today=TODAY)


def test_period_is_case_insensitive() -> None:
    assert resolve_period(" 7D ", today=TODAY).start == date(2026, 10, 11)
