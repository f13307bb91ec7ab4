"""Storage-agnostic predicate algebra over therapist records.

A predicate is an AND/OR tree of leaf constraints. Leaves name the
attribute they test; the storage adapter compiles the tree into SQL and
`matches` evaluates it in memory with the same semantics.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Union

from therapist_finder.domain.query.fields import TherapistField


def field_value(record: Any, field: TherapistField) -> Any:
    if isinstance(record, Mapping):
        return record.get(field.value)
    return getattr(record, field.value, None)


@dataclass(frozen=True)
class Equals:
    """Attribute equals a value."""

    field: TherapistField
    value: Any

    def matches(self, record: Any) -> bool:
        return field_value(record, self.field) == self.value


@dataclass(frozen=True)
class InSet:
    """Attribute is one of a set of values."""

    field: TherapistField
    values: frozenset[str]

    def matches(self, record: Any) -> bool:
        return field_value(record, self.field) in self.values


@dataclass(frozen=True)
class Range:
    """Numeric attribute within `[lower, upper)`. Absent values never match."""

    field: TherapistField
    lower: float | None = None
    upper: float | None = None

    def matches(self, record: Any) -> bool:
        value = field_value(record, self.field)
        if value is None:
            return False
        if self.lower is not None and value < self.lower:
            return False
        return self.upper is None or value < self.upper


@dataclass(frozen=True)
class Contains:
    """Case-insensitive substring match on a text attribute."""

    field: TherapistField
    text: str

    def matches(self, record: Any) -> bool:
        value = field_value(record, self.field)
        if not value:
            return False
        return self.text.lower() in value.lower()


@dataclass(frozen=True)
class ListContains:
    """List attribute has an element exactly equal to a value."""

    field: TherapistField
    value: str

    def matches(self, record: Any) -> bool:
        return self.value in (field_value(record, self.field) or ())


@dataclass(frozen=True)
class ListOverlaps:
    """List attribute shares at least one element with a set of values."""

    field: TherapistField
    values: frozenset[str]

    def matches(self, record: Any) -> bool:
        return not self.values.isdisjoint(field_value(record, self.field) or ())


@dataclass(frozen=True)
class AllOf:
    """Conjunction. With no clauses it matches every record."""

    clauses: tuple["Predicate", ...] = ()

    def matches(self, record: Any) -> bool:
        return all(clause.matches(record) for clause in self.clauses)

    @property
    def is_match_all(self) -> bool:
        return not self.clauses


@dataclass(frozen=True)
class AnyOf:
    """Disjunction. With no clauses it matches nothing."""

    clauses: tuple["Predicate", ...] = ()

    def matches(self, record: Any) -> bool:
        return any(clause.matches(record) for clause in self.clauses)


Predicate = Union[Equals, InSet, Range, Contains, ListContains, ListOverlaps, AllOf, AnyOf]

MATCH_ALL = AllOf()


def all_of(*predicates: Predicate) -> Predicate:
    """Combine predicates with AND.

    Nested conjunctions are flattened and match-all operands dropped, so
    combining nothing but match-all predicates yields `MATCH_ALL`.
    """
    clauses: list[Predicate] = []
    for predicate in predicates:
        if isinstance(predicate, AllOf):
            clauses.extend(predicate.clauses)
        else:
            clauses.append(predicate)
    if len(clauses) == 1:
        return clauses[0]
    return AllOf(tuple(clauses))


def is_match_all(predicate: Predicate) -> bool:
    """Whether a predicate imposes no constraint."""
    return isinstance(predicate, AllOf) and predicate.is_match_all
