"""Range classifier for experience and fee buckets.

Buckets are half-open intervals `[lower, upper)`; a boundary value always
belongs to the higher bucket. The same table drives facet counting
(`classify`) and filtering (`bounds_for`), so counts shown next to a
bucket always equal the number of rows the bucket filter returns.

Bucket identifiers are internal; display labels are only produced or
parsed at the API boundary through `label_of` and `parse_label`.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import NamedTuple

Number = int | float | Decimal


class Dimension(str, Enum):
    """Numeric therapist attribute that can be bucketed."""

    EXPERIENCE = "experience"
    FEE = "fee"


class ExperienceBucket(str, Enum):
    """Years-of-experience buckets."""

    UNDER_5 = "under_5"
    FROM_5_TO_10 = "from_5_to_10"
    FROM_10_TO_15 = "from_10_to_15"
    FROM_15 = "from_15"


class FeeBucket(str, Enum):
    """Session fee buckets (PKR)."""

    UNDER_2000 = "under_2000"
    FROM_2000_TO_4000 = "from_2000_to_4000"
    FROM_4000_TO_6000 = "from_4000_to_6000"
    FROM_6000 = "from_6000"


Bucket = ExperienceBucket | FeeBucket


@dataclass(frozen=True)
class Bounds:
    """Half-open numeric interval; `upper=None` means unbounded."""

    lower: float
    upper: float | None = None

    def contains(self, value: Number | None) -> bool:
        if value is None:
            return False
        if value < self.lower:
            return False
        return self.upper is None or value < self.upper


class BucketSpec(NamedTuple):
    bucket: Bucket
    label: str
    bounds: Bounds


_TABLES: dict[Dimension, tuple[BucketSpec, ...]] = {
    Dimension.EXPERIENCE: (
        BucketSpec(ExperienceBucket.UNDER_5, "0-5 years", Bounds(0, 5)),
        BucketSpec(ExperienceBucket.FROM_5_TO_10, "5-10 years", Bounds(5, 10)),
        BucketSpec(ExperienceBucket.FROM_10_TO_15, "10-15 years", Bounds(10, 15)),
        BucketSpec(ExperienceBucket.FROM_15, "15+ years", Bounds(15)),
    ),
    Dimension.FEE: (
        BucketSpec(FeeBucket.UNDER_2000, "Under Rs.2000", Bounds(0, 2000)),
        BucketSpec(FeeBucket.FROM_2000_TO_4000, "Rs.2000-4000", Bounds(2000, 4000)),
        BucketSpec(FeeBucket.FROM_4000_TO_6000, "Rs.4000-6000", Bounds(4000, 6000)),
        BucketSpec(FeeBucket.FROM_6000, "Above Rs.6000", Bounds(6000)),
    ),
}

_BY_BUCKET: dict[Bucket, BucketSpec] = {
    spec.bucket: spec for table in _TABLES.values() for spec in table
}


def bucket_table(dimension: Dimension) -> tuple[BucketSpec, ...]:
    """Return the fixed bucket table of a dimension, lowest bucket first."""
    return _TABLES[dimension]


def classify(value: Number | None, dimension: Dimension) -> Bucket | None:
    """Place a value into its bucket.

    Args:
        value: Experience in years or fee amount
        dimension: Which table to use

    Returns:
        The bucket containing the value, or None when the value is absent
        (undisclosed fee) or below every bucket.
    """
    if value is None:
        return None
    for spec in _TABLES[dimension]:
        if spec.bounds.contains(value):
            return spec.bucket
    return None


def bounds_for(bucket: Bucket) -> Bounds:
    """Return the interval a bucket selects."""
    return _BY_BUCKET[bucket].bounds


def label_of(bucket: Bucket) -> str:
    """Return the display label of a bucket."""
    return _BY_BUCKET[bucket].label


def parse_label(label: str | None, dimension: Dimension) -> Bucket | None:
    """Resolve a display label to a bucket; unknown labels resolve to None."""
    if not label:
        return None
    wanted = label.strip()
    for spec in _TABLES[dimension]:
        if spec.label == wanted:
            return spec.bucket
    return None


def predicate_for(label: str | None, dimension: Dimension) -> Bounds | None:
    """Return the interval selected by a display label.

    None means "no constraint": unrecognized labels are ignored rather
    than rejected.
    """
    bucket = parse_label(label, dimension)
    return bounds_for(bucket) if bucket is not None else None
