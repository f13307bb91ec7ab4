"""Request boundary: raw query parameters to a single validated query.

Parameters arrive as strings, possibly repeated. Nothing here raises;
malformed values degrade to "no constraint" or to defaults.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from therapist_finder.domain.query.filters import FilterRequest, build_filter_predicate
from therapist_finder.domain.query.pagination import DEFAULT_LIMIT, PageRequest
from therapist_finder.domain.query.predicates import Predicate, all_of
from therapist_finder.domain.query.search import build_search_predicate, normalize_search_text
from therapist_finder.domain.query.sorting import Ordering, resolve_sort


def _values(params: Any, key: str) -> list[Any]:
    """Collect every value of a parameter, accepting `key` and `key[]` spellings."""
    collected: list[Any] = []
    for name in (key, f"{key}[]"):
        if hasattr(params, "getlist"):
            collected.extend(params.getlist(name))
            continue
        value = params.get(name) if isinstance(params, Mapping) else None
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            collected.extend(value)
        else:
            collected.append(value)
    return collected


def _first(params: Any, key: str) -> Any:
    values = _values(params, key)
    return values[0] if values else None


@dataclass(frozen=True)
class DirectoryQuery:
    """Everything needed to run one list or search request."""

    filters: FilterRequest = field(default_factory=FilterRequest)
    search_text: str | None = None
    ordering: Ordering = field(default_factory=resolve_sort)
    page: PageRequest = field(default_factory=PageRequest)

    @property
    def predicate(self) -> Predicate:
        """Search and filter predicates combined with AND."""
        return all_of(
            build_search_predicate(self.search_text),
            build_filter_predicate(self.filters),
        )


def parse_directory_query(
    params: Any,
    *,
    include_search: bool = True,
    default_limit: int = DEFAULT_LIMIT,
    max_limit: int | None = None,
) -> DirectoryQuery:
    """Parse raw query parameters.

    Args:
        params: Starlette `QueryParams` or a plain mapping of name to value(s)
        include_search: Whether `q` is honoured (search endpoint only)
        default_limit: Page size when `limit` is missing or malformed
        max_limit: Upper bound for `limit`

    Returns:
        Normalized directory query
    """
    filters = FilterRequest.from_raw(
        cities=_values(params, "cities"),
        genders=_values(params, "genders"),
        experience_range=_first(params, "experienceRange"),
        fee_range=_first(params, "feeRange"),
        consultation_modes=_values(params, "consultationModes"),
    )
    search_text = normalize_search_text(_first(params, "q")) if include_search else None
    return DirectoryQuery(
        filters=filters,
        search_text=search_text,
        ordering=resolve_sort(_first(params, "sortBy"), _first(params, "sortOrder")),
        page=PageRequest.from_raw(
            _first(params, "page"),
            _first(params, "limit"),
            default_limit=default_limit,
            max_limit=max_limit,
        ),
    )
