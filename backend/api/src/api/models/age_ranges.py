"""API models for age range administration."""

from pydantic import BaseModel, Field, model_validator

from api.models.stays import AgeRangeResponse
from quotation.models import AgeRangeCreate


class AgeRangeCreateRequest(BaseModel):
    """New age range."""

    name: str = Field(..., min_length=1, max_length=255, examples=["Child"])
    min_age: int | None = Field(default=None, ge=0, examples=[3])
    max_age: int | None = Field(default=None, ge=0, examples=[11])
    order: int = Field(default=0, ge=0, description="Display order")

    @model_validator(mode="after")
    def check_bounds(self) -> "AgeRangeCreateRequest":
        if self.min_age is not None and self.max_age is not None and self.min_age > self.max_age:
            raise ValueError("min_age cannot be greater than max_age")
        return self

    def to_domain(self) -> AgeRangeCreate:
        return AgeRangeCreate(**self.model_dump())


class AgeRangeListResponse(BaseModel):
    """Age ranges in display order."""

    age_ranges: list[AgeRangeResponse] = Field(default_factory=list)
