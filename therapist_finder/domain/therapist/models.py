"""Therapist domain models.

Records are read-only from the directory's point of view: they are
written by the ingestion job and only ever queried here.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Gender(str, Enum):
    """Known gender labels. The column stays free text so new labels pass through."""

    MALE = "Male"
    FEMALE = "Female"


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class Therapist(CamelModel):
    """A mental-health professional listed in the directory."""

    id: str = Field(description="Opaque therapist identifier")
    name: str = Field(description="Display name")
    gender: str = Field(description="Gender label, e.g. Male or Female")
    city: str = Field(description="City, normalized at ingestion")
    experience_years: float = Field(default=0, ge=0, description="Years of experience")
    fees: float | None = Field(
        default=None, ge=0, description="Session fee; None means not disclosed"
    )
    fees_raw: str | None = Field(default=None, description="Fee text as published")
    fees_currency: str | None = Field(default=None, description="Fee currency code")
    phone: str | None = None
    email: str | None = None
    modes: list[str] = Field(default_factory=list, description="Consultation modes")
    education: list[str] = Field(default_factory=list)
    experience: list[str] = Field(default_factory=list, description="Prior positions")
    expertise: list[str] = Field(default_factory=list)
    about: str | None = Field(default=None, description="Biography")
    profile_url: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __repr__(self) -> str:
        """Return a short representation."""
        return f"<Therapist id={self.id} name={self.name}>"


class GroupStat(BaseModel):
    """Row count for one value of a grouped column."""

    value: str
    count: int


class ExperienceStats(BaseModel):
    """Experience aggregate over the whole directory."""

    average: float | None = None
    min: float | None = None
    max: float | None = None


class FeeStats(BaseModel):
    """Fee aggregate over therapists with a disclosed fee."""

    average: float | None = None
    min: float | None = None
    max: float | None = None


class TherapistStats(BaseModel):
    """Directory-wide statistics."""

    total_therapists: int
    city_stats: list[GroupStat]
    gender_stats: list[GroupStat]
    experience_stats: ExperienceStats
    fee_stats: FeeStats
