"""Filter options API router."""

from fastapi import APIRouter, Depends

from therapist_finder.api.dependencies import get_directory_service
from therapist_finder.core.models.api import ApiResponse, FilterOptionsDTO
from therapist_finder.services.directory_service import DirectoryService

router = APIRouter(prefix="/filters", tags=["filters"])


@router.get(
    "",
    response_model=ApiResponse[FilterOptionsDTO],
    summary="Filter options",
    description="Facet values with counts over the whole directory.",
)
async def get_filter_options(
    service: DirectoryService = Depends(get_directory_service),
) -> ApiResponse[FilterOptionsDTO]:
    """Filter panel endpoint.

    Counts ignore any filter currently applied by the client.
    """
    summary = await service.get_filter_options()
    return ApiResponse[FilterOptionsDTO](data=FilterOptionsDTO.from_domain(summary))
