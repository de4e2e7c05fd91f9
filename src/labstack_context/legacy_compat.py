"""Coercion of stored app payloads into resolution records.

Stored data predates some of the annotation fields, so reading it is lenient:
unusable supplement entries are dropped (and logged) rather than failing the
whole report, and a missing ``supplementAnchorState`` is filled from the
legacy overrides field.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from .anchor_state import normalize_anchor_state
from .models import UNKNOWN_FREQUENCY, LabReport, SupplementPeriod
from .utils import is_iso_day

logger = logging.getLogger(__name__)


def _text(raw: Any) -> str:
    if raw is None:
        return ""
    return str(raw).strip()


def _drop(reason: str, raw: Any) -> None:
    logger.debug(
        "Dropping supplement entry: %s",
        reason,
        extra={"labstack_reason": reason, "labstack_entry": raw},
    )


def coerce_supplement_period(raw: Any) -> SupplementPeriod | None:
    if not isinstance(raw, Mapping):
        _drop("not_a_mapping", raw)
        return None

    name = _text(raw.get("name"))
    if not name:
        _drop("missing_name", raw)
        return None

    start_date = _text(raw.get("startDate", raw.get("start_date")))
    if not is_iso_day(start_date):
        _drop("invalid_start_date", raw)
        return None

    raw_end = raw.get("endDate", raw.get("end_date"))
    end_date = _text(raw_end) if raw_end is not None else None
    if end_date is not None and not is_iso_day(end_date):
        end_date = None
    if end_date is not None and end_date < start_date:
        _drop("end_before_start", raw)
        return None

    try:
        return SupplementPeriod(
            id=_text(raw.get("id")) or uuid.uuid4().hex,
            name=name,
            dose=_text(raw.get("dose")),
            frequency=_text(raw.get("frequency")) or UNKNOWN_FREQUENCY,
            start_date=start_date,
            end_date=end_date,
        )
    except ValidationError as exc:
        _drop(f"invalid_shape: {exc.error_count()} errors", raw)
        return None


def coerce_supplement_overrides(raw: Any) -> list[SupplementPeriod] | None:
    if raw is None or not isinstance(raw, list):
        return None
    coerced = [coerce_supplement_period(entry) for entry in raw]
    return [period for period in coerced if period is not None]


def coerce_timeline(raw: Any) -> list[SupplementPeriod]:
    return coerce_supplement_overrides(raw) or []


def coerce_report(raw: Mapping[str, Any]) -> LabReport:
    """Build a ``LabReport`` from a stored report dict.

    The anchor state is made explicit: a stored canonical value is kept,
    anything else is inferred from the overrides left after invalid entries
    are dropped.
    """
    annotations = raw.get("annotations")
    if not isinstance(annotations, Mapping):
        annotations = {}

    raw_overrides = annotations.get("supplementOverrides", annotations.get("supplement_overrides"))
    overrides = coerce_supplement_overrides(raw_overrides)
    stored_state = annotations.get(
        "supplementAnchorState", annotations.get("supplement_anchor_state")
    )
    anchor_state = normalize_anchor_state(
        {"supplementAnchorState": stored_state, "supplementOverrides": overrides}
    )
    if anchor_state.value != _text(stored_state).lower():
        logger.debug(
            "Inferred supplement anchor state from legacy overrides",
            extra={"labstack_report_id": raw.get("id"), "labstack_anchor_state": anchor_state.value},
        )

    return LabReport(
        id=_text(raw.get("id")),
        test_date=_text(raw.get("testDate", raw.get("test_date"))),
        created_at=_text(raw.get("createdAt", raw.get("created_at"))),
        annotations={
            "supplement_anchor_state": anchor_state.value,
            "supplement_overrides": overrides,
        },
    )


def coerce_reports(raw: Any) -> list[LabReport]:
    """Coerce a stored report list, skipping reports without a usable shape."""
    if not isinstance(raw, list):
        return []
    reports: list[LabReport] = []
    for entry in raw:
        if not isinstance(entry, Mapping):
            continue
        try:
            reports.append(coerce_report(entry))
        except ValidationError as exc:
            logger.warning(
                "Skipping stored report %s: %d validation errors",
                entry.get("id"),
                exc.error_count(),
                exc_info=exc,
                extra={"labstack_report_id": entry.get("id"), "labstack_error_count": exc.error_count()},
            )
    return reports
