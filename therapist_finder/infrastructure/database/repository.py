"""Therapist repository - database access layer."""

import asyncio
from collections.abc import Callable
from typing import Any, TypeVar

import structlog
from sqlalchemy import Result, Select, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from therapist_finder.core.exceptions import StorageError
from therapist_finder.domain.query.fields import TherapistField
from therapist_finder.domain.query.pagination import PageWindow
from therapist_finder.domain.query.predicates import Predicate
from therapist_finder.domain.query.sorting import Ordering
from therapist_finder.domain.therapist.models import (
    ExperienceStats,
    FeeStats,
    GroupStat,
    Therapist,
    TherapistStats,
)
from therapist_finder.infrastructure.database.compiler import (
    column_for,
    compile_ordering,
    compile_predicate,
)
from therapist_finder.infrastructure.database.models import TherapistORM

logger = structlog.get_logger(__name__)

T = TypeVar("T")


class TherapistRepository:
    """Therapist repository (read-only).

    Queries the `therapists` table. Independent reads run concurrently,
    each on its own session from the injected factory.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        """Initialize the repository.

        Args:
            session_factory: Factory producing async database sessions
        """
        self._session_factory = session_factory

    async def find_page(
        self,
        predicate: Predicate,
        ordering: Ordering,
        window: PageWindow,
    ) -> tuple[list[Therapist], int]:
        """Fetch one page of matching therapists and the total match count.

        Args:
            predicate: Row filter
            ordering: Sort order
            window: Offset and row count

        Returns:
            (therapists on the page, total number of matching therapists)

        Raises:
            StorageError: When either read fails
        """
        where = compile_predicate(predicate)

        rows_stmt = select(TherapistORM).order_by(*compile_ordering(ordering))
        count_stmt = select(func.count()).select_from(TherapistORM)
        if where is not None:
            rows_stmt = rows_stmt.where(where)
            count_stmt = count_stmt.where(where)
        rows_stmt = rows_stmt.offset(window.offset).limit(window.count)

        rows, total = await asyncio.gather(
            self._scalars("find_page.rows", rows_stmt),
            self._scalar("find_page.count", count_stmt),
        )

        logger.info(
            "therapist_page_fetched",
            offset=window.offset,
            limit=window.count,
            returned=len(rows),
            total=total,
        )
        return [self._to_domain(row) for row in rows], int(total or 0)

    async def get_by_id(self, therapist_id: str) -> Therapist | None:
        """Fetch a therapist by id.

        Args:
            therapist_id: Therapist identifier

        Returns:
            The therapist, or None when no row matches
        """
        rows = await self._scalars(
            "get_by_id", select(TherapistORM).where(TherapistORM.id == therapist_id)
        )
        return self._to_domain(rows[0]) if rows else None

    async def grouped_counts(self, field: TherapistField) -> list[tuple[Any, int]]:
        """Count therapists per distinct value of an attribute.

        For the consultation-mode list every element is counted, so a
        therapist offering two modes contributes to two groups.

        Args:
            field: Attribute to group by

        Returns:
            (value, count) pairs
        """
        column = column_for(field)
        if field is TherapistField.MODES:
            elements = select(func.unnest(column).label("value")).subquery()
            value = elements.c.value
            stmt = select(value, func.count()).select_from(elements).group_by(value)
        else:
            stmt = select(column, func.count()).group_by(column)

        rows = await self._rows(f"grouped_counts.{field.value}", stmt)
        return [(row[0], int(row[1])) for row in rows]

    async def get_stats(self) -> TherapistStats:
        """Compute directory-wide statistics."""
        experience = column_for(TherapistField.EXPERIENCE_YEARS)
        fees = column_for(TherapistField.FEES)

        total, cities, genders, experience_row, fee_row = await asyncio.gather(
            self._scalar("stats.total", select(func.count()).select_from(TherapistORM)),
            self.grouped_counts(TherapistField.CITY),
            self.grouped_counts(TherapistField.GENDER),
            self._rows(
                "stats.experience",
                select(func.avg(experience), func.min(experience), func.max(experience)),
            ),
            self._rows(
                "stats.fees",
                select(func.avg(fees), func.min(fees), func.max(fees)).where(fees.is_not(None)),
            ),
        )

        return TherapistStats(
            total_therapists=int(total or 0),
            city_stats=[
                GroupStat(value=str(value), count=count)
                for value, count in sorted(cities, key=lambda item: (-item[1], str(item[0])))
            ],
            gender_stats=[GroupStat(value=str(value), count=count) for value, count in genders],
            experience_stats=ExperienceStats(**self._aggregate(experience_row)),
            fee_stats=FeeStats(**self._aggregate(fee_row)),
        )

    @staticmethod
    def _aggregate(rows: list[Any]) -> dict[str, float | None]:
        average, minimum, maximum = rows[0] if rows else (None, None, None)
        return {
            "average": float(average) if average is not None else None,
            "min": float(minimum) if minimum is not None else None,
            "max": float(maximum) if maximum is not None else None,
        }

    async def _read(
        self, operation: str, stmt: Select, extract: Callable[[Result[Any]], T]
    ) -> T:
        """Run one read statement on a fresh session.

        Raises:
            StorageError: Wrapping any SQLAlchemy failure; the cause is logged
        """
        try:
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                return extract(result)
        except SQLAlchemyError as e:
            logger.error("storage_read_failed", operation=operation, exc_info=True)
            raise StorageError(operation) from e

    async def _scalars(self, operation: str, stmt: Select) -> list[Any]:
        return await self._read(operation, stmt, lambda result: list(result.scalars().all()))

    async def _scalar(self, operation: str, stmt: Select) -> Any:
        return await self._read(operation, stmt, lambda result: result.scalar_one())

    async def _rows(self, operation: str, stmt: Select) -> list[Any]:
        return await self._read(operation, stmt, lambda result: list(result.all()))

    def _to_domain(self, orm_therapist: TherapistORM) -> Therapist:
        """Convert an ORM entity into the domain model.

        Args:
            orm_therapist: ORM therapist entity

        Returns:
            Therapist domain model
        """
        return Therapist(
            id=str(orm_therapist.id),
            name=orm_therapist.name,
            gender=orm_therapist.gender,
            city=orm_therapist.city,
            experience_years=float(orm_therapist.experience_years or 0),
            fees=float(orm_therapist.fees) if orm_therapist.fees is not None else None,
            fees_raw=orm_therapist.fees_raw,
            fees_currency=orm_therapist.fees_currency,
            phone=orm_therapist.phone,
            email=orm_therapist.email,
            modes=list(orm_therapist.modes or []),
            education=list(orm_therapist.education or []),
            experience=list(orm_therapist.experience or []),
            expertise=list(orm_therapist.expertise or []),
            about=orm_therapist.about,
            profile_url=orm_therapist.profile_url,
            created_at=orm_therapist.created_at,
            updated_at=orm_therapist.updated_at,
        )
