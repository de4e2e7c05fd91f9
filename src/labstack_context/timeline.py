"""Timeline activity matching.

Decides which supplement periods were active on a calendar date. Every list
of periods handed back to callers goes through ``sort_supplement_periods`` so
list equality is meaningful regardless of how the timeline was stored.
"""

from __future__ import annotations

from collections.abc import Iterable

from .models import SupplementPeriod
from .utils import OPEN_END_SORT_DATE, parse_calendar_day


def _period_sort_key(period: SupplementPeriod) -> tuple[str, str, str, str, str]:
    return (
        period.start_date,
        period.end_date or OPEN_END_SORT_DATE,
        period.name.casefold(),
        period.name,
        period.id,
    )


def sort_supplement_periods(periods: Iterable[SupplementPeriod]) -> list[SupplementPeriod]:
    """Canonical order: start date, end date (open last), then name."""
    return sorted(periods, key=_period_sort_key)


def is_period_active_at(period: SupplementPeriod, day: str) -> bool:
    """True when ``start <= day <= end``; an open end counts as +infinity.

    Any unparsable date (the query day, the start, or a present end) makes
    the period unmatchable.
    """
    point = parse_calendar_day(day)
    start = parse_calendar_day(period.start_date)
    if point is None or start is None:
        return False
    if period.end_date is None:
        return start <= point
    end = parse_calendar_day(period.end_date)
    if end is None:
        return False
    return start <= point <= end


def active_periods(timeline: Iterable[SupplementPeriod], day: str) -> list[SupplementPeriod]:
    return sort_supplement_periods(period for period in timeline if is_period_active_at(period, day))


def current_open_stack(timeline: Iterable[SupplementPeriod]) -> list[SupplementPeriod]:
    """Periods without an end date, i.e. the stack being taken right now."""
    return sort_supplement_periods(period for period in timeline if period.end_date is None)
