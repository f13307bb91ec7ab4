"""Sort resolution.

Every ordering ends with the therapist id so that equal sort values still
produce a total order and page windows never overlap.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any, TypeVar

from therapist_finder.domain.query.fields import TherapistField
from therapist_finder.domain.query.predicates import field_value

T = TypeVar("T")


class SortField(str, Enum):
    """Sortable attributes as named in the query string."""

    NAME = "name"
    EXPERIENCE_YEARS = "experienceYears"
    FEES = "fees"

    @property
    def field(self) -> TherapistField:
        return _SORT_FIELDS[self]


_SORT_FIELDS = {
    SortField.NAME: TherapistField.NAME,
    SortField.EXPERIENCE_YEARS: TherapistField.EXPERIENCE_YEARS,
    SortField.FEES: TherapistField.FEES,
}


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class SortKey:
    """One ordering term.

    Absent values sort as larger than any present value, so they come last
    ascending and first descending. `nulls_last` keeps them last in both
    directions.
    """

    field: TherapistField
    direction: SortDirection = SortDirection.ASC
    nulls_last: bool = False

    @property
    def descending(self) -> bool:
        return self.direction is SortDirection.DESC


@dataclass(frozen=True)
class Ordering:
    """Ordered sort keys, most significant first."""

    keys: tuple[SortKey, ...]

    @property
    def primary(self) -> SortKey:
        return self.keys[0]

    def sort(self, records: Iterable[T]) -> list[T]:
        """Sort records in memory with the same semantics as the storage adapter."""
        result = list(records)
        for key in reversed(self.keys):
            present = [r for r in result if field_value(r, key.field) is not None]
            absent = [r for r in result if field_value(r, key.field) is None]
            present.sort(key=lambda r, k=key: field_value(r, k.field), reverse=key.descending)
            if key.nulls_last or not key.descending:
                result = present + absent
            else:
                result = absent + present
        return result


def _parse(enum_cls: type[Enum], value: Any, default: Enum) -> Any:
    if isinstance(value, (list, tuple)):
        value = value[0] if value else None
    if isinstance(value, str):
        value = value.strip()
    try:
        return enum_cls(value)
    except (TypeError, ValueError):
        return default


def resolve_sort(sort_by: Any = None, sort_order: Any = None) -> Ordering:
    """Resolve requested sort parameters into an ordering.

    Unknown fields fall back to name and unknown directions to ascending.
    Fee ordering keeps therapists without a disclosed fee after all others.

    Args:
        sort_by: One of `name`, `experienceYears`, `fees`
        sort_order: `asc` or `desc`

    Returns:
        Ordering with the id appended as a tie-breaker
    """
    sort_field: SortField = _parse(SortField, sort_by, SortField.NAME)
    direction: SortDirection = _parse(SortDirection, sort_order, SortDirection.ASC)

    return Ordering(
        keys=(
            SortKey(
                field=sort_field.field,
                direction=direction,
                nulls_last=sort_field is SortField.FEES,
            ),
            SortKey(field=TherapistField.ID),
        )
    )
