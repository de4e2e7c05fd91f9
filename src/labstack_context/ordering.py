"""Deterministic traversal order for reports.

Resolution output depends on the order reports are visited, so same-day
reports need a total order: test date, then creation instant, then id.
Creation times are compared as UTC instants, not as text; values that do not
parse sort before every parsed one, ordered by their raw text.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import UTC, datetime

from .models import LabReport
from .utils import parse_timestamp

_UNPARSED_CREATED_AT = datetime.min.replace(tzinfo=UTC)


def report_sort_key(report: LabReport) -> tuple[str, datetime, str, str]:
    created = parse_timestamp(report.created_at) or _UNPARSED_CREATED_AT
    return (report.test_date, created, report.created_at, report.id)


def order_reports(reports: Iterable[LabReport]) -> list[LabReport]:
    return sorted(reports, key=report_sort_key)
