"""Therapist domain models."""

from therapist_finder.domain.therapist.models import (
    ExperienceStats,
    FeeStats,
    Gender,
    GroupStat,
    Therapist,
    TherapistStats,
)

__all__ = [
    "ExperienceStats",
    "FeeStats",
    "Gender",
    "GroupStat",
    "Therapist",
    "TherapistStats",
]
