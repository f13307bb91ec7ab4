"""Filter request normalization and filter predicate construction."""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from therapist_finder.domain.query.buckets import (
    Dimension,
    ExperienceBucket,
    FeeBucket,
    bounds_for,
    parse_label,
)
from therapist_finder.domain.query.fields import TherapistField
from therapist_finder.domain.query.predicates import (
    InSet,
    ListOverlaps,
    Predicate,
    Range,
    all_of,
)


def coerce_list(value: Any) -> tuple[str, ...]:
    """Normalize a scalar-or-list parameter.

    Falsy entries and entries that are blank after trimming are dropped,
    duplicates are collapsed keeping first-seen order. Never raises.

    Args:
        value: None, a scalar, or an iterable of scalars

    Returns:
        Unique trimmed strings
    """
    if value is None:
        return ()
    if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
        items: Iterable[Any] = (value,)
    else:
        items = value

    unique: dict[str, None] = {}
    for item in items:
        if not item:
            continue
        if isinstance(item, bytes):
            item = item.decode("utf-8", errors="replace")
        text = str(item).strip()
        if text:
            unique.setdefault(text, None)
    return tuple(unique)


def coerce_text(value: Any) -> str:
    """Return the first non-blank trimmed string of a scalar-or-list parameter."""
    values = coerce_list(value)
    return values[0] if values else ""


@dataclass(frozen=True)
class FilterRequest:
    """Validated filter facets. Empty facets impose no constraint."""

    cities: tuple[str, ...] = ()
    genders: tuple[str, ...] = ()
    experience_range: ExperienceBucket | None = None
    fee_range: FeeBucket | None = None
    consultation_modes: tuple[str, ...] = ()

    @classmethod
    def from_raw(
        cls,
        cities: Any = None,
        genders: Any = None,
        experience_range: Any = None,
        fee_range: Any = None,
        consultation_modes: Any = None,
    ) -> "FilterRequest":
        """Build a filter request from untyped transport values.

        Unrecognized bucket labels are dropped.
        """
        experience = parse_label(coerce_text(experience_range), Dimension.EXPERIENCE)
        fee = parse_label(coerce_text(fee_range), Dimension.FEE)
        return cls(
            cities=coerce_list(cities),
            genders=coerce_list(genders),
            experience_range=experience,
            fee_range=fee,
            consultation_modes=coerce_list(consultation_modes),
        )

    @property
    def is_empty(self) -> bool:
        return not (
            self.cities
            or self.genders
            or self.experience_range
            or self.fee_range
            or self.consultation_modes
        )


def build_filter_predicate(filters: FilterRequest) -> Predicate:
    """Translate filter facets into one conjunctive predicate.

    Facets without a value contribute no clause at all; with every facet
    empty the result is `MATCH_ALL`. Multi-valued facets are set
    membership tests.

    Args:
        filters: Normalized filter request

    Returns:
        Predicate selecting therapists that satisfy every present facet
    """
    clauses: list[Predicate] = []

    if filters.cities:
        clauses.append(InSet(TherapistField.CITY, frozenset(filters.cities)))

    if filters.genders:
        clauses.append(InSet(TherapistField.GENDER, frozenset(filters.genders)))

    if filters.experience_range is not None:
        bounds = bounds_for(filters.experience_range)
        clauses.append(Range(TherapistField.EXPERIENCE_YEARS, bounds.lower, bounds.upper))

    if filters.fee_range is not None:
        bounds = bounds_for(filters.fee_range)
        clauses.append(Range(TherapistField.FEES, bounds.lower, bounds.upper))

    if filters.consultation_modes:
        clauses.append(
            ListOverlaps(TherapistField.MODES, frozenset(filters.consultation_modes))
        )

    return all_of(*clauses)
