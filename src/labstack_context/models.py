"""Records read and produced by supplement context resolution.

Input records (supplement periods, lab reports and their annotations) are
pydantic models so that shape problems surface at the boundary. Dates stay
raw ISO strings: an unparsable date must make a period unmatchable, not
make the record unconstructable.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

UNKNOWN_FREQUENCY = "unknown"


class AnchorState(str, Enum):
    INHERIT = "inherit"
    ANCHOR = "anchor"
    NONE = "none"
    UNKNOWN = "unknown"


def _normalized_non_empty(value: str, *, field_name: str) -> str:
    normalized = value.strip()
    if not normalized:
        raise ValueError(f"{field_name} must not be empty")
    return normalized


def _calendar_text(value: Any) -> Any:
    # datetime subclasses date; keep only the calendar part.
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return value


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class SupplementPeriod(_Record):
    """One continuous interval of a supplement at a fixed dose and frequency."""

    id: str
    name: str
    dose: str = ""
    frequency: str = UNKNOWN_FREQUENCY
    start_date: str = Field(alias="startDate")
    end_date: str | None = Field(default=None, alias="endDate")

    @field_validator("id", "name")
    @classmethod
    def validate_non_empty(cls, value: str, info: Any) -> str:
        return _normalized_non_empty(value, field_name=info.field_name)

    @field_validator("dose")
    @classmethod
    def trim_dose(cls, value: str) -> str:
        return value.strip()

    @field_validator("frequency")
    @classmethod
    def normalize_frequency(cls, value: str) -> str:
        return value.strip() or UNKNOWN_FREQUENCY

    @field_validator("start_date", mode="before")
    @classmethod
    def coerce_start_date(cls, value: Any) -> Any:
        value = _calendar_text(value)
        return value.strip() if isinstance(value, str) else value

    @field_validator("end_date", mode="before")
    @classmethod
    def coerce_end_date(cls, value: Any) -> Any:
        value = _calendar_text(value)
        if isinstance(value, str):
            return value.strip() or None
        return value


class ReportAnnotations(_Record):
    """Report-owned annotations; only the supplement fields matter here.

    ``supplement_overrides`` keeps the three-way distinction the rest of the
    app relies on: None is "not set", [] is "explicitly none", a non-empty
    list is an explicit stack.
    """

    supplement_anchor_state: str | None = Field(default=None, alias="supplementAnchorState")
    supplement_overrides: list[SupplementPeriod] | None = Field(
        default=None, alias="supplementOverrides"
    )


class LabReport(_Record):
    id: str
    test_date: str = Field(alias="testDate")
    created_at: str = Field(default="", alias="createdAt")
    annotations: ReportAnnotations = Field(default_factory=ReportAnnotations)

    @field_validator("id")
    @classmethod
    def validate_id(cls, value: str) -> str:
        return _normalized_non_empty(value, field_name="id")

    @field_validator("test_date", mode="before")
    @classmethod
    def coerce_test_date(cls, value: Any) -> Any:
        value = _calendar_text(value)
        return value.strip() if isinstance(value, str) else value

    @field_validator("created_at", mode="before")
    @classmethod
    def coerce_created_at(cls, value: Any) -> Any:
        if isinstance(value, datetime):
            return value.isoformat()
        return value.strip() if isinstance(value, str) else value


@dataclass(frozen=True)
class ResolvedSupplementContext:
    """Supplement context in force for one report after inheritance."""

    anchor_state: AnchorState
    effective_state: AnchorState
    supplements: tuple[SupplementPeriod, ...]
    anchor_report_id: str | None
    anchor_test_date: str | None

    def to_dict(self) -> dict[str, Any]:
        return {
            "anchor_state": self.anchor_state.value,
            "effective_state": self.effective_state.value,
            "supplements": [period.model_dump(mode="json") for period in self.supplements],
            "anchor_report_id": self.anchor_report_id,
            "anchor_test_date": self.anchor_test_date,
        }


@dataclass(frozen=True)
class InheritedContext:
    """What a brand-new report appended after every existing one would inherit."""

    effective_state: AnchorState
    supplements: tuple[SupplementPeriod, ...]
    anchor_report_id: str | None = None
    anchor_test_date: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "effective_state": self.effective_state.value,
            "supplements": [period.model_dump(mode="json") for period in self.supplements],
            "anchor_report_id": self.anchor_report_id,
            "anchor_test_date": self.anchor_test_date,
        }
