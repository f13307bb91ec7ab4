"""API response models (DTOs).

Every endpoint answers with the `{success, data}` envelope, or
`{success: false, error: {message}}` on failure.
"""

from typing import Generic, TypeVar

from pydantic import BaseModel, Field

from therapist_finder.domain.query.facets import BucketCount, FacetSummary, ValueCount
from therapist_finder.domain.query.pagination import PageInfo
from therapist_finder.domain.therapist.models import CamelModel, Therapist, TherapistStats

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Success envelope."""

    success: bool = True
    data: T


class ErrorDetail(BaseModel):
    """Error body. `stack` is only populated in development."""

    message: str = Field(description="Human readable error message")
    stack: str | None = Field(default=None, description="Traceback (development only)")


class ErrorResponse(BaseModel):
    """Failure envelope."""

    success: bool = False
    error: ErrorDetail


class PaginationDTO(CamelModel):
    """Pagination metadata."""

    current_page: int
    total_pages: int
    total_count: int
    has_next_page: bool
    has_prev_page: bool
    limit: int

    @classmethod
    def from_domain(cls, page: PageInfo) -> "PaginationDTO":
        return cls(
            current_page=page.current_page,
            total_pages=page.total_pages,
            total_count=page.total_count,
            has_next_page=page.has_next_page,
            has_prev_page=page.has_prev_page,
            limit=page.limit,
        )


class TherapistListDTO(BaseModel):
    """A page of therapists."""

    therapists: list[Therapist]
    pagination: PaginationDTO


class SearchResultDTO(TherapistListDTO):
    """A page of search results with the query that produced it."""

    query: str | None = Field(default=None, description="Trimmed search text")


class ValueCountDTO(BaseModel):
    value: str
    count: int

    @classmethod
    def from_domain(cls, item: ValueCount) -> "ValueCountDTO":
        return cls(value=item.value, count=item.count)


class RangeCountDTO(BaseModel):
    range: str = Field(description="Bucket display label")
    count: int

    @classmethod
    def from_domain(cls, item: BucketCount) -> "RangeCountDTO":
        return cls(range=item.label, count=item.count)


class FilterOptionsDTO(CamelModel):
    """Facet values and counts for the filter panel."""

    cities: list[ValueCountDTO]
    genders: list[ValueCountDTO]
    experience_ranges: list[RangeCountDTO]
    fee_ranges: list[RangeCountDTO]
    consultation_modes: list[ValueCountDTO]

    @classmethod
    def from_domain(cls, summary: FacetSummary) -> "FilterOptionsDTO":
        return cls(
            cities=[ValueCountDTO.from_domain(item) for item in summary.cities],
            genders=[ValueCountDTO.from_domain(item) for item in summary.genders],
            experience_ranges=[
                RangeCountDTO.from_domain(item) for item in summary.experience_ranges
            ],
            fee_ranges=[RangeCountDTO.from_domain(item) for item in summary.fee_ranges],
            consultation_modes=[
                ValueCountDTO.from_domain(item) for item in summary.consultation_modes
            ],
        )


class CityStatDTO(BaseModel):
    city: str
    count: int


class GenderStatDTO(BaseModel):
    gender: str
    count: int


class RangeStatsDTO(BaseModel):
    average: float | None = None
    min: float | None = None
    max: float | None = None


class TherapistStatsDTO(CamelModel):
    """Directory statistics."""

    total_therapists: int
    city_stats: list[CityStatDTO]
    gender_stats: list[GenderStatDTO]
    experience_stats: RangeStatsDTO
    fee_stats: RangeStatsDTO

    @classmethod
    def from_domain(cls, stats: TherapistStats) -> "TherapistStatsDTO":
        return cls(
            total_therapists=stats.total_therapists,
            city_stats=[CityStatDTO(city=s.value, count=s.count) for s in stats.city_stats],
            gender_stats=[
                GenderStatDTO(gender=s.value, count=s.count) for s in stats.gender_stats
            ],
            experience_stats=RangeStatsDTO(**stats.experience_stats.model_dump()),
            fee_stats=RangeStatsDTO(**stats.fee_stats.model_dump()),
        )


class HealthCheckResponse(BaseModel):
    """Health check response."""

    status: str = Field(default="healthy", description="Service status")
    version: str = Field(description="Application version")
    service: str = Field(description="Service name")
