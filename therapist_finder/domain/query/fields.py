"""Queryable therapist attributes."""

from enum import Enum


class TherapistField(str, Enum):
    """Attribute names shared by the domain model and the storage adapter."""

    ID = "id"
    NAME = "name"
    GENDER = "gender"
    CITY = "city"
    EXPERIENCE_YEARS = "experience_years"
    FEES = "fees"
    MODES = "modes"
    EDUCATION = "education"
    EXPERTISE = "expertise"
    ABOUT = "about"
