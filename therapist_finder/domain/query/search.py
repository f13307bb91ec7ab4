"""Free-text search predicate."""

from typing import Any

from therapist_finder.domain.query.fields import TherapistField
from therapist_finder.domain.query.filters import coerce_text
from therapist_finder.domain.query.predicates import (
    MATCH_ALL,
    AnyOf,
    Contains,
    ListContains,
    Predicate,
)


def normalize_search_text(text: Any) -> str | None:
    """Trim search input; blank input means no search."""
    term = coerce_text(text)
    return term or None


def build_search_predicate(text: Any) -> Predicate:
    """Build the search predicate for a query string.

    Name and biography match on a case-insensitive substring. Expertise
    and education only match when one list entry equals the whole
    trimmed query, so multi-word queries rarely hit those lists.

    Args:
        text: Raw query text

    Returns:
        OR across the four searchable attributes, or `MATCH_ALL` when the
        text is blank
    """
    term = normalize_search_text(text)
    if term is None:
        return MATCH_ALL

    return AnyOf(
        (
            Contains(TherapistField.NAME, term),
            ListContains(TherapistField.EXPERTISE, term),
            ListContains(TherapistField.EDUCATION, term),
            Contains(TherapistField.ABOUT, term),
        )
    )
