"""Supplement context resolution for lab reports."""

from .anchor_state import normalize_anchor_state
from .models import (
    AnchorState,
    InheritedContext,
    LabReport,
    ReportAnnotations,
    ResolvedSupplementContext,
    SupplementPeriod,
)
from .ordering import order_reports
from .presentation import dedup_key, same_stack, to_display_text
from .queries import current_inherited, effective_supplements, resolve_all, resolve_one
from .timeline import active_periods, current_open_stack, sort_supplement_periods

__all__ = [
    "AnchorState",
    "InheritedContext",
    "LabReport",
    "ReportAnnotations",
    "ResolvedSupplementContext",
    "SupplementPeriod",
    "active_periods",
    "current_inherited",
    "current_open_stack",
    "dedup_key",
    "effective_supplements",
    "normalize_anchor_state",
    "order_reports",
    "resolve_all",
    "resolve_one",
    "same_stack",
    "sort_supplement_periods",
    "to_display_text",
]
