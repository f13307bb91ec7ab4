"""Compile domain predicates and orderings into SQLAlchemy expressions."""

from sqlalchemy import and_, false, or_, true
from sqlalchemy.orm import InstrumentedAttribute
from sqlalchemy.sql.expression import ColumnElement, UnaryExpression

from therapist_finder.domain.query.fields import TherapistField
from therapist_finder.domain.query.predicates import (
    AllOf,
    AnyOf,
    Contains,
    Equals,
    InSet,
    ListContains,
    ListOverlaps,
    Predicate,
    Range,
    is_match_all,
)
from therapist_finder.domain.query.sorting import Ordering
from therapist_finder.infrastructure.database.models import TherapistORM


def column_for(field: TherapistField) -> InstrumentedAttribute:
    """Return the mapped column backing a therapist attribute."""
    return getattr(TherapistORM, field.value)


def compile_predicate(predicate: Predicate) -> ColumnElement[bool] | None:
    """Compile a predicate into a WHERE expression.

    Returns:
        The expression, or None when the predicate matches everything and
        no WHERE clause should be emitted
    """
    if is_match_all(predicate):
        return None
    return _compile(predicate)


def _compile(predicate: Predicate) -> ColumnElement[bool]:
    if isinstance(predicate, AllOf):
        if not predicate.clauses:
            return true()
        return and_(*(_compile(clause) for clause in predicate.clauses))

    if isinstance(predicate, AnyOf):
        if not predicate.clauses:
            return false()
        return or_(*(_compile(clause) for clause in predicate.clauses))

    column = column_for(predicate.field)

    if isinstance(predicate, Equals):
        return column == predicate.value

    if isinstance(predicate, InSet):
        return column.in_(sorted(predicate.values))

    if isinstance(predicate, Range):
        conditions = []
        if predicate.lower is not None:
            conditions.append(column >= predicate.lower)
        if predicate.upper is not None:
            conditions.append(column < predicate.upper)
        if not conditions:
            # NULL never satisfies a range, bounded or not
            return column.is_not(None)
        return and_(*conditions)

    if isinstance(predicate, Contains):
        return column.icontains(predicate.text, autoescape=True)

    if isinstance(predicate, ListContains):
        return column.contains([predicate.value])

    if isinstance(predicate, ListOverlaps):
        return column.overlap(sorted(predicate.values))

    raise TypeError(f"Unsupported predicate: {predicate!r}")


def compile_ordering(ordering: Ordering) -> list[UnaryExpression]:
    """Compile an ordering into ORDER BY terms."""
    terms: list[UnaryExpression] = []
    for key in ordering.keys:
        column = column_for(key.field)
        term = column.desc() if key.descending else column.asc()
        if key.nulls_last:
            term = term.nulls_last()
        terms.append(term)
    return terms
