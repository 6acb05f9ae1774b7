"""Partially specified calendar dates.

Clinical records are often imprecise: a birth may be known only to the year or
to the month. ``PedigreeDate`` keeps whatever precision is available and
compares permissively, so missing components never prove an ordering wrong.
"""
from __future__ import annotations

import re
from collections.abc import Mapping
from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, Field, ValidationError, model_validator

# Month name mappings
MONTH_NAMES = {
    "january": 1, "jan": 1,
    "february": 2, "feb": 2,
    "march": 3, "mar": 3,
    "april": 4, "apr": 4,
    "may": 5,
    "june": 6, "jun": 6,
    "july": 7, "jul": 7,
    "august": 8, "aug": 8,
    "september": 9, "sep": 9, "sept": 9,
    "october": 10, "oct": 10,
    "november": 11, "nov": 11,
    "december": 12, "dec": 12,
}

_ISO_RE = re.compile(r"^(\d{4})(?:-(\d{1,2})(?:-(\d{1,2}))?)?(?:[T ].*)?$")
_GEDCOM_RE = re.compile(r"^(\d{1,2})\s+([A-Z]{3,9})\s+(\d{4})$")
_GEDCOM_MONTH_YEAR_RE = re.compile(r"^([A-Z]{3,9})\s+(\d{4})$")


class PedigreeDate(BaseModel):
    """A date whose year is required and whose month and day are optional."""

    year: int | None = None
    month: int | None = Field(default=None, ge=1, le=12)
    day: int | None = Field(default=None, ge=1, le=31)

    @model_validator(mode="after")
    def validate_day_has_month(self) -> "PedigreeDate":
        if self.day is not None and self.month is None:
            raise ValueError("A day requires a month")
        return self

    @classmethod
    def parse(cls, value: Any) -> PedigreeDate | None:
        """Build a date from a structure, a ``date`` or a date string.

        Returns None ("unset") for empty input, input without a year, or
        anything that cannot be read.
        """
        if value is None or value == "":
            return None
        if isinstance(value, PedigreeDate):
            result = value.model_copy()
        elif isinstance(value, datetime):
            result = cls(year=value.year, month=value.month, day=value.day)
        elif isinstance(value, date):
            result = cls(year=value.year, month=value.month, day=value.day)
        elif isinstance(value, Mapping):
            try:
                result = cls(
                    year=_as_int(value.get("year")),
                    month=_as_int(value.get("month")),
                    day=_as_int(value.get("day")),
                )
            except (ValidationError, ValueError, TypeError):
                return None
        elif isinstance(value, str):
            result = _parse_string(value)
        else:
            return None

        if result is None or not result.is_set():
            return None
        return result

    def is_set(self) -> bool:
        return self.year is not None

    def can_be_after_date(self, other: PedigreeDate | None) -> bool:
        """Check whether this date may fall on or after ``other``.

        Components missing on either side never disprove the ordering.
        """
        if other is None or not other.is_set() or not self.is_set():
            return True
        if self.year != other.year:
            return self.year > other.year
        if self.month is None or other.month is None:
            return True
        if self.month != other.month:
            return self.month > other.month
        if self.day is None or other.day is None:
            return True
        return self.day >= other.day

    def get_simple_object(self) -> dict[str, int]:
        """Export as ``{year, month, day}`` without the absent components."""
        result: dict[str, int] = {}
        if self.year is not None:
            result["year"] = self.year
        if self.month is not None:
            result["month"] = self.month
        if self.day is not None:
            result["day"] = self.day
        return result

    def to_iso(self) -> str | None:
        if self.year is None:
            return None
        if self.month and self.day:
            return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"
        if self.month:
            return f"{self.year:04d}-{self.month:02d}"
        return f"{self.year:04d}"

    def __str__(self) -> str:
        return self.to_iso() or "Unknown"


def _as_int(value: Any) -> int | None:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise TypeError("Boolean is not a date component")
    return int(value)


def _parse_string(text: str) -> PedigreeDate | None:
    text = text.strip().upper()
    try:
        iso_match = _ISO_RE.match(text)
        if iso_match:
            return PedigreeDate(
                year=int(iso_match.group(1)),
                month=int(iso_match.group(2)) if iso_match.group(2) else None,
                day=int(iso_match.group(3)) if iso_match.group(3) else None,
            )

        # GEDCOM format: 9 JUN 1932
        gedcom_match = _GEDCOM_RE.match(text)
        if gedcom_match:
            month = MONTH_NAMES.get(gedcom_match.group(2).lower())
            if month is None:
                return None
            return PedigreeDate(
                year=int(gedcom_match.group(3)),
                month=month,
                day=int(gedcom_match.group(1)),
            )

        # GEDCOM month-year: JUN 1932
        month_year_match = _GEDCOM_MONTH_YEAR_RE.match(text)
        if month_year_match:
            month = MONTH_NAMES.get(month_year_match.group(1).lower())
            if month is None:
                return None
            return PedigreeDate(year=int(month_year_match.group(2)), month=month)
    except ValidationError:
        return None
    return None
