"""Forward sweep that resolves the supplement context of every report.

Reports are visited in ``ordering.order_reports`` order while one carried
state is threaded through:

- before any report the carried state is the timeline's open stack
  (``anchor`` when non-empty, ``none`` otherwise) with no anchor report;
- ``anchor`` replaces it with the report's overrides (``none`` when those
  are empty), ``none`` and ``unknown`` clear it, and each of the three makes
  the report the new anchor reference;
- ``inherit`` leaves it untouched.

Each report receives a snapshot of the carried state after its own
transition. The result is a pure function of ``(reports, timeline)``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from functools import reduce

from .anchor_state import normalize_anchor_state
from .models import AnchorState, LabReport, ResolvedSupplementContext, SupplementPeriod
from .ordering import order_reports
from .timeline import current_open_stack, sort_supplement_periods

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _CarriedState:
    effective_state: AnchorState
    supplements: tuple[SupplementPeriod, ...]
    anchor_report_id: str | None = None
    anchor_test_date: str | None = None


def initial_state(timeline: Iterable[SupplementPeriod]) -> _CarriedState:
    open_stack = current_open_stack(timeline)
    if open_stack:
        return _CarriedState(AnchorState.ANCHOR, tuple(open_stack))
    return _CarriedState(AnchorState.NONE, ())


def _transition(state: _CarriedState, report: LabReport, anchor_state: AnchorState) -> _CarriedState:
    if anchor_state is AnchorState.INHERIT:
        return state

    if anchor_state is AnchorState.ANCHOR:
        overrides = report.annotations.supplement_overrides or []
        if overrides:
            return _CarriedState(
                AnchorState.ANCHOR,
                tuple(sort_supplement_periods(overrides)),
                report.id,
                report.test_date,
            )
        # Explicit anchor with nothing listed resets like "none".
        return _CarriedState(AnchorState.NONE, (), report.id, report.test_date)

    return _CarriedState(anchor_state, (), report.id, report.test_date)


def _snapshot(state: _CarriedState, anchor_state: AnchorState) -> ResolvedSupplementContext:
    return ResolvedSupplementContext(
        anchor_state=anchor_state,
        effective_state=state.effective_state,
        supplements=tuple(state.supplements),
        anchor_report_id=state.anchor_report_id,
        anchor_test_date=state.anchor_test_date,
    )


def resolve_supplement_contexts(
    reports: Iterable[LabReport],
    timeline: Iterable[SupplementPeriod],
) -> dict[str, ResolvedSupplementContext]:
    """Resolve every report; keys follow the resolution order."""
    ordered = order_reports(reports)
    resolved: dict[str, ResolvedSupplementContext] = {}

    def step(state: _CarriedState, report: LabReport) -> _CarriedState:
        anchor_state = normalize_anchor_state(report.annotations)
        next_state = _transition(state, report, anchor_state)
        resolved[report.id] = _snapshot(next_state, anchor_state)
        return next_state

    final_state = reduce(step, ordered, initial_state(timeline))

    logger.debug(
        "Resolved supplement context for %d reports (final state: %s)",
        len(resolved),
        final_state.effective_state.value,
        extra={"labstack_report_count": len(resolved)},
    )
    return resolved
