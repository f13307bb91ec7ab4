"""Therapist API router."""

from fastapi import APIRouter, Depends, Request

from therapist_finder.api.dependencies import get_directory_service
from therapist_finder.core.config.settings import settings
from therapist_finder.core.models.api import (
    ApiResponse,
    ErrorResponse,
    PaginationDTO,
    TherapistListDTO,
    TherapistStatsDTO,
)
from therapist_finder.domain.query.params import parse_directory_query
from therapist_finder.domain.therapist.models import Therapist
from therapist_finder.services.directory_service import DirectoryService

router = APIRouter(prefix="/therapists", tags=["therapists"])


@router.get(
    "",
    response_model=ApiResponse[TherapistListDTO],
    summary="List therapists",
    description="Filtered, sorted and paginated therapist listing.",
)
async def list_therapists(
    request: Request,
    service: DirectoryService = Depends(get_directory_service),
) -> ApiResponse[TherapistListDTO]:
    """Therapist listing endpoint.

    Accepts `page`, `limit`, `sortBy`, `sortOrder`, `cities`, `genders`,
    `experienceRange`, `feeRange` and `consultationModes`. Parameters are
    read raw so that malformed values fall back to defaults instead of
    being rejected.

    Args:
        request: Incoming request (query parameters)
        service: Directory service

    Returns:
        A page of therapists with pagination metadata
    """
    query = parse_directory_query(
        request.query_params,
        include_search=False,
        default_limit=settings.default_page_size,
        max_limit=settings.max_page_size,
    )
    page = await service.list_therapists(query)
    return ApiResponse[TherapistListDTO](
        data=TherapistListDTO(
            therapists=page.therapists,
            pagination=PaginationDTO.from_domain(page.pagination),
        )
    )


@router.get(
    "/stats",
    response_model=ApiResponse[TherapistStatsDTO],
    summary="Directory statistics",
)
async def get_therapist_stats(
    service: DirectoryService = Depends(get_directory_service),
) -> ApiResponse[TherapistStatsDTO]:
    """Return totals, per-city and per-gender counts, experience and fee aggregates."""
    stats = await service.get_stats()
    return ApiResponse[TherapistStatsDTO](data=TherapistStatsDTO.from_domain(stats))


@router.get(
    "/{therapist_id}",
    response_model=ApiResponse[Therapist],
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Get therapist",
)
async def get_therapist(
    therapist_id: str,
    service: DirectoryService = Depends(get_directory_service),
) -> ApiResponse[Therapist]:
    """Return a single therapist.

    Raises:
        InvalidIdentifierError: 400 - malformed id
        TherapistNotFoundError: 404 - unknown id
    """
    therapist = await service.get_therapist(therapist_id)
    return ApiResponse[Therapist](data=therapist)
