"""Hotel and stay models.

An entity under construction has no identity, so drafts (NewHotelDraft,
NewStayDraft) carry no ``id`` and expose no ``update``. Only persisted
entities can be updated.
"""

import datetime as dt
import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

_SLUG_INVALID_CHARS = re.compile(r"[^a-z0-9-]")


def normalize_slug(slug: str) -> str:
    """Lowercase a slug and replace characters outside [a-z0-9-] with '-'."""
    return _SLUG_INVALID_CHARS.sub("-", slug.lower())


class HotelFields(BaseModel):
    """Fields shared by hotel drafts and persisted hotels."""

    model_config = ConfigDict(strict=True)

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    address: str | None = None
    image_url: str | None = None

    @field_validator("image_url")
    @classmethod
    def validate_image_url(cls, v: str | None) -> str | None:
        """Validate URL format."""
        if v is not None and not v.startswith(("http://", "https://")):
            raise ValueError("URL must start with http:// or https://")
        return v


class NewHotelDraft(HotelFields):
    """A hotel that has not been saved yet."""


class PersistedHotel(HotelFields):
    """A saved hotel."""

    id: str
    created_at: dt.datetime
    updated_at: dt.datetime

    @classmethod
    def from_draft(
        cls, draft: NewHotelDraft, hotel_id: str, now: dt.datetime
    ) -> "PersistedHotel":
        """Give a draft its identity once it has been stored."""
        return cls(id=hotel_id, created_at=now, updated_at=now, **draft.model_dump())

    def update(self, now: dt.datetime, **changes: Any) -> "PersistedHotel":
        """Return a copy with the given fields changed and revalidated."""
        data = self.model_dump()
        data.update(changes)
        data["updated_at"] = now
        return PersistedHotel(**data)


class StayFields(BaseModel):
    """Fields and rules shared by stay drafts and persisted stays."""

    model_config = ConfigDict(strict=True)

    name: str = Field(..., min_length=1, max_length=255)
    slug: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    start_date: dt.date
    end_date: dt.date
    hotel_id: str
    allow_partial_booking: bool = False
    min_days: int | None = Field(default=None, gt=0)
    max_days: int | None = Field(default=None, gt=0)
    is_active: bool = True
    image_url: str | None = None

    @field_validator("slug")
    @classmethod
    def normalize(cls, v: str) -> str:
        """Store slugs in normalized form."""
        return normalize_slug(v)

    @model_validator(mode="after")
    def check_dates(self) -> "StayFields":
        """Dates must be ordered and night limits consistent."""
        if self.start_date >= self.end_date:
            raise ValueError("start_date must be before end_date")
        if self.min_days and self.max_days and self.min_days > self.max_days:
            raise ValueError("min_days cannot be greater than max_days")
        if self.min_days and self.min_days > self.duration:
            raise ValueError("min_days cannot exceed the stay duration")
        return self

    @property
    def duration(self) -> int:
        """Number of nights between start and end date."""
        return (self.end_date - self.start_date).days


class NewStayDraft(StayFields):
    """A stay that has not been saved yet."""


class PersistedStay(StayFields):
    """A saved stay."""

    model_config = ConfigDict(strict=True, frozen=True)

    id: str

    @classmethod
    def from_draft(cls, draft: NewStayDraft, stay_id: str) -> "PersistedStay":
        """Give a draft its identity once it has been stored."""
        return cls(id=stay_id, **draft.model_dump())

    def update(self, **changes: Any) -> "PersistedStay":
        """Return a copy with the given fields changed and revalidated."""
        data = self.model_dump()
        data.update(changes)
        return PersistedStay(**data)

    def contains_dates(self, check_in: dt.date, check_out: dt.date) -> bool:
        """Whether [check_in, check_out] lies within the stay period."""
        return self.start_date <= check_in and check_out <= self.end_date
