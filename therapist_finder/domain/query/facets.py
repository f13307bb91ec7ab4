"""Facet aggregation for the filter panel.

Facets are always computed over the whole directory, independent of any
filter or search currently applied.

City and gender counts partition the records: each record lands in
exactly one group. Consultation-mode counts fan out: a record with two
modes increments two counters. Experience and fee counts are derived by
classifying grouped values with the range classifier, and records
without a fee fall in no fee bucket.
"""

from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from therapist_finder.domain.query.buckets import (
    Bucket,
    Dimension,
    bucket_table,
    classify,
    label_of,
)
from therapist_finder.domain.query.fields import TherapistField
from therapist_finder.domain.query.predicates import field_value

GroupedCounts = Iterable[tuple[Any, int]]


@dataclass(frozen=True)
class ValueCount:
    value: str
    count: int


@dataclass(frozen=True)
class BucketCount:
    bucket: Bucket
    count: int

    @property
    def label(self) -> str:
        return label_of(self.bucket)


@dataclass(frozen=True)
class FacetSummary:
    """Available filter values with their record counts."""

    cities: tuple[ValueCount, ...]
    genders: tuple[ValueCount, ...]
    experience_ranges: tuple[BucketCount, ...]
    fee_ranges: tuple[BucketCount, ...]
    consultation_modes: tuple[ValueCount, ...]


def _merge(grouped: GroupedCounts, *, keep_blank: bool) -> Counter[str]:
    counts: Counter[str] = Counter()
    for value, count in grouped:
        if value is None or value == "":
            if not keep_blank:
                continue
            value = ""
        counts[str(value)] += int(count)
    return counts


def count_values(grouped: GroupedCounts) -> tuple[ValueCount, ...]:
    """Value facet ordered by value.

    Missing values are counted under `""` so the groups still add up to the
    number of records.
    """
    counts = _merge(grouped, keep_blank=True)
    return tuple(ValueCount(value, counts[value]) for value in sorted(counts))


def count_values_by_frequency(grouped: GroupedCounts) -> tuple[ValueCount, ...]:
    """Value facet ordered by count descending, then value. Blank values are skipped."""
    counts = _merge(grouped, keep_blank=False)
    ranked = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
    return tuple(ValueCount(value, count) for value, count in ranked)


def count_buckets(grouped: GroupedCounts, dimension: Dimension) -> tuple[BucketCount, ...]:
    """Bucket facet listing every bucket of the table, zero counts included.

    Args:
        grouped: (numeric value, record count) pairs
        dimension: Bucket table to classify against

    Returns:
        One count per bucket, lowest bucket first
    """
    counts: dict[Bucket, int] = {spec.bucket: 0 for spec in bucket_table(dimension)}
    for value, count in grouped:
        bucket = classify(value, dimension)
        if bucket is not None:
            counts[bucket] += int(count)
    return tuple(BucketCount(bucket, count) for bucket, count in counts.items())


def summarize(
    *,
    cities: GroupedCounts,
    genders: GroupedCounts,
    experience: GroupedCounts,
    fees: GroupedCounts,
    modes: GroupedCounts,
) -> FacetSummary:
    """Assemble the facet summary from per-dimension grouped counts."""
    return FacetSummary(
        cities=count_values(cities),
        genders=count_values(genders),
        experience_ranges=count_buckets(experience, Dimension.EXPERIENCE),
        fee_ranges=count_buckets(fees, Dimension.FEE),
        consultation_modes=count_values_by_frequency(modes),
    )


def _group(records: list[Any], field: TherapistField) -> GroupedCounts:
    return Counter(field_value(record, field) for record in records).items()


def aggregate(records: Iterable[Any]) -> FacetSummary:
    """Compute facets over an in-memory collection of therapist records."""
    records = list(records)
    modes = Counter(
        mode for record in records for mode in field_value(record, TherapistField.MODES) or ()
    )
    return summarize(
        cities=_group(records, TherapistField.CITY),
        genders=_group(records, TherapistField.GENDER),
        experience=_group(records, TherapistField.EXPERIENCE_YEARS),
        fees=_group(records, TherapistField.FEES),
        modes=modes.items(),
    )
