"""Display and comparison helpers for resolved supplement lists."""

from __future__ import annotations

from collections.abc import Iterable

from .models import UNKNOWN_FREQUENCY, SupplementPeriod


def _display_frequency(period: SupplementPeriod) -> str:
    frequency = period.frequency.strip()
    if frequency == UNKNOWN_FREQUENCY:
        return ""
    return frequency


def period_to_text(period: SupplementPeriod) -> str:
    parts = [period.name, period.dose.strip(), _display_frequency(period)]
    return " ".join(part for part in parts if part)


def to_display_text(periods: Iterable[SupplementPeriod]) -> str:
    """Render a stack as ``"Vitamin D3 4000 IU daily, Zinc 25 mg"``."""
    return ", ".join(period_to_text(period) for period in periods)


def _stack_entry_key(period: SupplementPeriod) -> str:
    return "|".join(
        part.strip().lower() for part in (period.name, period.dose, period.frequency)
    )


def dedup_key(periods: Iterable[SupplementPeriod]) -> list[str]:
    """Order- and duplicate-insensitive identity of a supplement set."""
    return sorted({_stack_entry_key(period) for period in periods})


def same_stack(left: Iterable[SupplementPeriod], right: Iterable[SupplementPeriod]) -> bool:
    return dedup_key(left) == dedup_key(right)
