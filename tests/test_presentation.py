from __future__ import annotations

from labstack_context.models import SupplementPeriod
from labstack_context.presentation import dedup_key, same_stack, to_display_text


def _period(name: str, dose: str = "", frequency: str = "", period_id: str = "p") -> SupplementPeriod:
    return SupplementPeriod(
        id=period_id, name=name, dose=dose, frequency=frequency, start_date="2025-01-01"
    )


def test_display_text_joins_name_dose_and_frequency() -> None:
    periods = [_period("Vitamin D3", "4000 IU", "daily"), _period("Zinc", "25 mg", "daily")]
    assert to_display_text(periods) == "Vitamin D3 4000 IU daily, Zinc 25 mg daily"


def test_display_text_omits_missing_parts_and_unknown_frequency() -> None:
    assert to_display_text([_period("NAC", "600 mg", "unknown")]) == "NAC 600 mg"
    assert to_display_text([_period("NAC", "", "2x/week")]) == "NAC 2x/week"
    assert to_display_text([_period("NAC")]) == "NAC"
    assert to_display_text([]) == ""


def test_dedup_key_ignores_case_whitespace_order_and_duplicates() -> None:
    left = [
        _period("Zinc", "25 mg", "daily", "a"),
        _period("Vitamin D3", "4000 IU", "Daily", "b"),
        _period("zinc ", "25 MG", "daily", "c"),
    ]
    assert dedup_key(left) == ["vitamin d3|4000 iu|daily", "zinc|25 mg|daily"]


def test_same_stack_compares_sets_by_key() -> None:
    left = [_period("Zinc", "25 mg", "daily"), _period("NAC", "600 mg", "daily")]
    right = [_period("nac", "600 mg", "DAILY"), _period("ZINC", "25 mg", "daily")]
    assert same_stack(left, right)
    assert not same_stack(left, [_period("Zinc", "50 mg", "daily")])
