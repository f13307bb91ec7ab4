"""Shared fixtures: sample therapists and an in-memory repository."""

from collections import Counter
from statistics import mean
from typing import Any

import pytest

from therapist_finder.domain.query.fields import TherapistField
from therapist_finder.domain.query.pagination import PageWindow
from therapist_finder.domain.query.predicates import Predicate, field_value
from therapist_finder.domain.query.sorting import Ordering
from therapist_finder.domain.therapist.models import (
    ExperienceStats,
    FeeStats,
    Gender,
    GroupStat,
    Therapist,
    TherapistStats,
)


class InMemoryTherapistRepository:
    """Repository double evaluating predicates and orderings in memory."""

    def __init__(self, therapists: list[Therapist]) -> None:
        self.therapists = therapists

    async def find_page(
        self, predicate: Predicate, ordering: Ordering, window: PageWindow
    ) -> tuple[list[Therapist], int]:
        matched = [t for t in self.therapists if predicate.matches(t)]
        ordered = ordering.sort(matched)
        return ordered[window.offset : window.offset + window.count], len(matched)

    async def get_by_id(self, therapist_id: str) -> Therapist | None:
        return next((t for t in self.therapists if t.id == therapist_id), None)

    async def grouped_counts(self, field: TherapistField) -> list[tuple[Any, int]]:
        if field is TherapistField.MODES:
            counts = Counter(mode for t in self.therapists for mode in t.modes)
        else:
            counts = Counter(field_value(t, field) for t in self.therapists)
        return list(counts.items())

    async def get_stats(self) -> TherapistStats:
        cities = Counter(t.city for t in self.therapists)
        genders = Counter(t.gender for t in self.therapists)
        experience = [t.experience_years for t in self.therapists]
        fees = [t.fees for t in self.therapists if t.fees is not None]
        return TherapistStats(
            total_therapists=len(self.therapists),
            city_stats=[GroupStat(value=v, count=c) for v, c in cities.most_common()],
            gender_stats=[GroupStat(value=v, count=c) for v, c in genders.items()],
            experience_stats=ExperienceStats(
                average=mean(experience) if experience else None,
                min=min(experience, default=None),
                max=max(experience, default=None),
            ),
            fee_stats=FeeStats(
                average=mean(fees) if fees else None,
                min=min(fees, default=None),
                max=max(fees, default=None),
            ),
        )


def make_therapist(**overrides: Any) -> Therapist:
    """Build a therapist with sensible defaults."""
    data: dict[str, Any] = {
        "id": "t0",
        "name": "Test Therapist",
        "gender": Gender.FEMALE.value,
        "city": "Karachi",
        "experience_years": 1,
        "fees": None,
        "modes": [],
        "education": [],
        "experience": [],
        "expertise": [],
        "about": None,
    }
    data.update(overrides)
    return Therapist(**data)


@pytest.fixture
def sample_therapists() -> list[Therapist]:
    """Seven therapists covering every bucket and both fee states."""
    return [
        make_therapist(
            id="t1",
            name="Ayesha Khan",
            gender=Gender.FEMALE.value,
            city="Karachi",
            experience_years=3,
            fees=1500,
            modes=["In-person", "Virtual telephonic"],
            education=["MSc Clinical Psychology"],
            expertise=["Anxiety", "Depression"],
            about="Works with anxiety and stress.",
        ),
        make_therapist(
            id="t2",
            name="Bilal Ahmed",
            gender=Gender.MALE.value,
            city="Lahore",
            experience_years=5,
            fees=2000,
            modes=["Virtual telephonic"],
            education=["MPhil Psychology"],
            expertise=["Trauma"],
            about="Trauma-informed therapist.",
        ),
        make_therapist(
            id="t3",
            name="Sara Malik",
            gender=Gender.FEMALE.value,
            city="Islamabad",
            experience_years=10,
            fees=None,
            modes=["In-person"],
            expertise=["Couples Therapy"],
            about=None,
        ),
        make_therapist(
            id="t4",
            name="Usman Tariq",
            gender=Gender.MALE.value,
            city="Karachi",
            experience_years=7.5,
            fees=4500,
            modes=["In-person", "Virtual telephonic"],
            expertise=["Depression"],
            about="Cognitive behavioural therapy for depression.",
        ),
        make_therapist(
            id="t5",
            name="Hina Raza",
            gender=Gender.FEMALE.value,
            city="Lahore",
            experience_years=15,
            fees=6000,
            modes=["Virtual telephonic"],
            expertise=["Child Psychology"],
            about="Child and adolescent work.",
        ),
        make_therapist(
            id="t6",
            name="Zain Ali",
            gender=Gender.MALE.value,
            city="Other",
            experience_years=0,
            fees=None,
            modes=[],
            about="Recently licensed.",
        ),
        make_therapist(
            id="t7",
            name="Maria Qureshi",
            gender=Gender.FEMALE.value,
            city="Karachi",
            experience_years=12,
            fees=3999.99,
            modes=["In-person"],
            education=["PhD Psychology"],
            expertise=["Anxiety"],
            about="Panic disorders and anxiety management.",
        ),
    ]


@pytest.fixture
def repository(sample_therapists: list[Therapist]) -> InMemoryTherapistRepository:
    """In-memory repository loaded with the sample therapists."""
    return InMemoryTherapistRepository(sample_therapists)
