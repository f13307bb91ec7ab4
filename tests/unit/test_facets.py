"""Facet aggregator tests."""

from therapist_finder.domain.query.buckets import Dimension, ExperienceBucket, FeeBucket
from therapist_finder.domain.query.facets import (
    BucketCount,
    ValueCount,
    aggregate,
    count_buckets,
    count_values,
    count_values_by_frequency,
    summarize,
)
from therapist_finder.domain.query.filters import FilterRequest, build_filter_predicate
from therapist_finder.domain.therapist.models import Gender, Therapist


class TestAggregate:
    """aggregate() tests over the sample directory."""

    def test_city_counts_partition_the_records(
        self, sample_therapists: list[Therapist]
    ) -> None:
        summary = aggregate(sample_therapists)

        assert summary.cities == (
            ValueCount("Islamabad", 1),
            ValueCount("Karachi", 3),
            ValueCount("Lahore", 2),
            ValueCount("Other", 1),
        )
        assert sum(item.count for item in summary.cities) == len(sample_therapists)

    def test_gender_counts_partition_the_records(
        self, sample_therapists: list[Therapist]
    ) -> None:
        summary = aggregate(sample_therapists)

        assert summary.genders == (ValueCount("Female", 4), ValueCount("Male", 3))
        assert {item.value for item in summary.genders} == {g.value for g in Gender}

    def test_mode_counts_fan_out(self, sample_therapists: list[Therapist]) -> None:
        """A therapist with two modes is counted under both."""
        summary = aggregate(sample_therapists)

        assert summary.consultation_modes == (
            ValueCount("In-person", 4),
            ValueCount("Virtual telephonic", 4),
        )
        assert sum(item.count for item in summary.consultation_modes) >= len(sample_therapists)

    def test_experience_buckets(self, sample_therapists: list[Therapist]) -> None:
        summary = aggregate(sample_therapists)

        assert summary.experience_ranges == (
            BucketCount(ExperienceBucket.UNDER_5, 2),
            BucketCount(ExperienceBucket.FROM_5_TO_10, 2),
            BucketCount(ExperienceBucket.FROM_10_TO_15, 2),
            BucketCount(ExperienceBucket.FROM_15, 1),
        )

    def test_absent_fees_are_not_counted(self, sample_therapists: list[Therapist]) -> None:
        """Two therapists have no fee; the fee buckets add up to five."""
        summary = aggregate(sample_therapists)

        assert summary.fee_ranges == (
            BucketCount(FeeBucket.UNDER_2000, 1),
            BucketCount(FeeBucket.FROM_2000_TO_4000, 2),
            BucketCount(FeeBucket.FROM_4000_TO_6000, 1),
            BucketCount(FeeBucket.FROM_6000, 1),
        )
        assert sum(item.count for item in summary.fee_ranges) == 5

    def test_bucket_counts_agree_with_bucket_filters(
        self, sample_therapists: list[Therapist]
    ) -> None:
        """Each facet count equals the number of rows its filter returns."""
        summary = aggregate(sample_therapists)

        for item in summary.experience_ranges:
            predicate = build_filter_predicate(FilterRequest(experience_range=item.bucket))
            assert item.count == sum(predicate.matches(t) for t in sample_therapists)

        for item in summary.fee_ranges:
            predicate = build_filter_predicate(FilterRequest(fee_range=item.bucket))
            assert item.count == sum(predicate.matches(t) for t in sample_therapists)

    def test_empty_directory_lists_every_bucket_with_zero(self) -> None:
        summary = aggregate([])

        assert summary.cities == ()
        assert [item.count for item in summary.experience_ranges] == [0, 0, 0, 0]
        assert [item.label for item in summary.fee_ranges] == [
            "Under Rs.2000",
            "Rs.2000-4000",
            "Rs.4000-6000",
            "Above Rs.6000",
        ]


class TestGroupedCounts:
    """Assembly from storage grouped counts."""

    def test_bucket_counts_weight_grouped_values(self) -> None:
        """Grouped rows carry a count that is added to the bucket."""
        counts = count_buckets([(4.5, 3), (5, 2), (None, 9)], Dimension.EXPERIENCE)

        assert counts[0] == BucketCount(ExperienceBucket.UNDER_5, 3)
        assert counts[1] == BucketCount(ExperienceBucket.FROM_5_TO_10, 2)

    def test_blank_values_form_their_own_group(self) -> None:
        """Blank cities still count, so the groups cover every record."""
        counts = count_values([("", 2), (None, 1), ("Karachi", 4)])

        assert counts == (ValueCount("", 3), ValueCount("Karachi", 4))
        assert sum(item.count for item in counts) == 7

    def test_city_partition_holds_with_a_blank_city(
        self, sample_therapists: list[Therapist]
    ) -> None:
        blank = sample_therapists[0].model_copy(update={"id": "t8", "city": ""})
        records = [*sample_therapists, blank]

        summary = aggregate(records)

        assert summary.cities[0] == ValueCount("", 1)
        assert sum(item.count for item in summary.cities) == len(records)

    def test_blank_modes_are_skipped(self) -> None:
        assert count_values_by_frequency([("", 2), ("In-person", 1)]) == (
            ValueCount("In-person", 1),
        )

    def test_summarize_orders_modes_by_count(self) -> None:
        summary = summarize(
            cities=[],
            genders=[],
            experience=[],
            fees=[],
            modes=[("Virtual telephonic", 2), ("In-person", 5), ("Chat", 2)],
        )

        assert [item.value for item in summary.consultation_modes] == [
            "In-person",
            "Chat",
            "Virtual telephonic",
        ]
