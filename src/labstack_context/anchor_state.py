"""Canonical supplement anchor state for a report.

Older stored reports only ever set ``supplementOverrides``; newer ones carry
an explicit ``supplementAnchorState``. Both are read here and nowhere else:

- an explicit canonical value wins (``inherit``, ``anchor``, ``none``,
  ``unknown``);
- otherwise overrides decide: not set -> inherit, ``[]`` -> none,
  non-empty -> anchor.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .models import AnchorState, ReportAnnotations

_CANONICAL_STATES: dict[str, AnchorState] = {state.value: state for state in AnchorState}


def _explicit_state(raw: Any) -> AnchorState | None:
    if isinstance(raw, AnchorState):
        return raw
    if not isinstance(raw, str):
        return None
    return _CANONICAL_STATES.get(raw.strip().lower())


def _raw_fields(annotations: ReportAnnotations | Mapping[str, Any] | None) -> tuple[Any, Any]:
    if annotations is None:
        return None, None
    if isinstance(annotations, ReportAnnotations):
        return annotations.supplement_anchor_state, annotations.supplement_overrides
    state = annotations.get("supplementAnchorState", annotations.get("supplement_anchor_state"))
    overrides = annotations.get("supplementOverrides", annotations.get("supplement_overrides"))
    return state, overrides


def infer_legacy_anchor_state(overrides: Any) -> AnchorState:
    if overrides is None or not isinstance(overrides, (list, tuple)):
        return AnchorState.INHERIT
    if not overrides:
        return AnchorState.NONE
    return AnchorState.ANCHOR


def normalize_anchor_state(annotations: ReportAnnotations | Mapping[str, Any] | None) -> AnchorState:
    raw_state, overrides = _raw_fields(annotations)
    explicit = _explicit_state(raw_state)
    if explicit is not None:
        return explicit
    return infer_legacy_anchor_state(overrides)
