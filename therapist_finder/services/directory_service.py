"""Directory service - application layer."""

import asyncio
import re
from dataclasses import replace

import structlog

from therapist_finder.core.exceptions import InvalidIdentifierError, TherapistNotFoundError
from therapist_finder.domain.query.facets import FacetSummary, summarize
from therapist_finder.domain.query.fields import TherapistField
from therapist_finder.domain.query.pagination import PageInfo
from therapist_finder.domain.query.params import DirectoryQuery
from therapist_finder.domain.therapist.models import Therapist, TherapistStats
from therapist_finder.infrastructure.database.repository import TherapistRepository

logger = structlog.get_logger(__name__)

_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{1,64}$")


class TherapistPage:
    """One page of therapists with its pagination metadata."""

    def __init__(
        self,
        therapists: list[Therapist],
        pagination: PageInfo,
        query: str | None = None,
    ) -> None:
        """Initialize the page.

        Args:
            therapists: Therapists on this page, in sort order
            pagination: Page metadata
            query: Trimmed search text, for search results
        """
        self.therapists = therapists
        self.pagination = pagination
        self.query = query

    def __repr__(self) -> str:
        """Return a short representation."""
        return (
            f"<TherapistPage page={self.pagination.current_page} "
            f"count={len(self.therapists)} total={self.pagination.total_count}>"
        )


class DirectoryService:
    """Therapist directory service.

    Runs list and search queries, single lookups, facet aggregation and
    statistics against the injected repository.
    """

    def __init__(self, repository: TherapistRepository) -> None:
        """Initialize the service.

        Args:
            repository: Therapist storage collaborator
        """
        self.repository = repository

    async def list_therapists(self, query: DirectoryQuery) -> TherapistPage:
        """Return a filtered, sorted page of therapists.

        Any search text on the query is ignored.

        Args:
            query: Normalized directory query

        Returns:
            The requested page
        """
        return await self._fetch_page(replace(query, search_text=None))

    async def search_therapists(self, query: DirectoryQuery) -> TherapistPage:
        """Return a page of therapists matching the search text and filters.

        Args:
            query: Normalized directory query; blank search text matches all

        Returns:
            The requested page, echoing the search text
        """
        return await self._fetch_page(query)

    async def get_therapist(self, therapist_id: str) -> Therapist:
        """Look up a therapist by id.

        Raises:
            InvalidIdentifierError: Malformed id
            TherapistNotFoundError: No therapist with this id
        """
        therapist_id = (therapist_id or "").strip()
        if not _ID_PATTERN.match(therapist_id):
            raise InvalidIdentifierError()

        therapist = await self.repository.get_by_id(therapist_id)
        if therapist is None:
            logger.warning("therapist_not_found", therapist_id=therapist_id)
            raise TherapistNotFoundError(therapist_id)
        return therapist

    async def get_filter_options(self) -> FacetSummary:
        """Compute filter facets over the entire directory.

        Current filters never narrow the facets; the panel shows what is
        available, not what remains.
        """
        cities, genders, experience, fees, modes = await asyncio.gather(
            self.repository.grouped_counts(TherapistField.CITY),
            self.repository.grouped_counts(TherapistField.GENDER),
            self.repository.grouped_counts(TherapistField.EXPERIENCE_YEARS),
            self.repository.grouped_counts(TherapistField.FEES),
            self.repository.grouped_counts(TherapistField.MODES),
        )
        summary = summarize(
            cities=cities,
            genders=genders,
            experience=experience,
            fees=fees,
            modes=modes,
        )
        logger.info(
            "filter_options_computed",
            cities=len(summary.cities),
            genders=len(summary.genders),
            consultation_modes=len(summary.consultation_modes),
        )
        return summary

    async def get_stats(self) -> TherapistStats:
        """Return directory-wide statistics."""
        return await self.repository.get_stats()

    async def _fetch_page(self, query: DirectoryQuery) -> TherapistPage:
        therapists, total_count = await self.repository.find_page(
            predicate=query.predicate,
            ordering=query.ordering,
            window=query.page.window,
        )
        return TherapistPage(
            therapists=therapists,
            pagination=query.page.describe(total_count),
            query=query.search_text,
        )
