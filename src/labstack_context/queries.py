"""Convenience entry points on top of the context resolver."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from .anchor_state import normalize_anchor_state
from .models import (
    AnchorState,
    InheritedContext,
    LabReport,
    ResolvedSupplementContext,
    SupplementPeriod,
)
from .ordering import order_reports
from .resolver import initial_state, resolve_supplement_contexts


def resolve_all(
    reports: Iterable[LabReport],
    timeline: Iterable[SupplementPeriod],
) -> dict[str, ResolvedSupplementContext]:
    return resolve_supplement_contexts(reports, list(timeline))


def _fallback_context(report: LabReport) -> ResolvedSupplementContext:
    return ResolvedSupplementContext(
        anchor_state=normalize_anchor_state(report.annotations),
        effective_state=AnchorState.NONE,
        supplements=(),
        anchor_report_id=None,
        anchor_test_date=None,
    )


def resolve_one(
    report: LabReport,
    reports: Sequence[LabReport],
    timeline: Iterable[SupplementPeriod],
) -> ResolvedSupplementContext:
    """Resolve a single report at its position among ``reports``.

    A report that is not (yet) part of ``reports`` is resolved as if it had
    been saved; the caller's sequence is left as is.
    """
    candidates = list(reports)
    if not any(existing.id == report.id for existing in candidates):
        candidates.append(report)
    resolved = resolve_all(candidates, timeline)
    context = resolved.get(report.id)
    if context is None:
        return _fallback_context(report)
    return context


def current_inherited(
    reports: Iterable[LabReport],
    timeline: Iterable[SupplementPeriod],
) -> InheritedContext:
    """Context a new report added after every existing one would inherit."""
    periods = list(timeline)
    ordered = order_reports(reports)
    if not ordered:
        state = initial_state(periods)
        return InheritedContext(
            effective_state=state.effective_state,
            supplements=state.supplements,
        )

    latest = ordered[-1]
    context = resolve_all(ordered, periods).get(latest.id)
    if context is None:
        return InheritedContext(effective_state=AnchorState.NONE, supplements=())
    return InheritedContext(
        effective_state=context.effective_state,
        supplements=context.supplements,
        anchor_report_id=context.anchor_report_id,
        anchor_test_date=context.anchor_test_date,
    )


def effective_supplements(
    report: LabReport,
    timeline: Iterable[SupplementPeriod],
    reports: Sequence[LabReport] | None = None,
) -> list[SupplementPeriod]:
    context = resolve_one(report, reports if reports is not None else [report], timeline)
    return list(context.supplements)
