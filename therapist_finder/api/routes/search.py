"""Search API router."""

from fastapi import APIRouter, Depends, Request

from therapist_finder.api.dependencies import get_directory_service
from therapist_finder.core.config.settings import settings
from therapist_finder.core.models.api import ApiResponse, PaginationDTO, SearchResultDTO
from therapist_finder.domain.query.params import parse_directory_query
from therapist_finder.services.directory_service import DirectoryService

router = APIRouter(prefix="/search", tags=["search"])


@router.get(
    "",
    response_model=ApiResponse[SearchResultDTO],
    summary="Search therapists",
    description="Free-text search over name, biography, expertise and education, "
    "combined with the listing filters.",
)
async def search_therapists(
    request: Request,
    service: DirectoryService = Depends(get_directory_service),
) -> ApiResponse[SearchResultDTO]:
    """Search endpoint.

    `q` is trimmed; a blank query behaves like the plain listing.

    Args:
        request: Incoming request (query parameters)
        service: Directory service

    Returns:
        A page of matching therapists with pagination metadata
    """
    query = parse_directory_query(
        request.query_params,
        default_limit=settings.default_page_size,
        max_limit=settings.max_page_size,
    )
    page = await service.search_therapists(query)
    return ApiResponse[SearchResultDTO](
        data=SearchResultDTO(
            therapists=page.therapists,
            pagination=PaginationDTO.from_domain(page.pagination),
            query=page.query,
        )
    )
