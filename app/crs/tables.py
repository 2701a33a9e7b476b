"""
CRS point tables for Express Entry.

Values follow the IRCC criteria in force since March 25, 2025 (arranged
employment no longer scores). Two-column tables are (single, with_spouse).
"""

from __future__ import annotations

from enum import Enum


class EducationLevel(str, Enum):
    NONE = "none"
    SECONDARY = "secondary"
    ONE_YEAR = "one_year"
    TWO_YEAR = "two_year"
    BACHELORS = "bachelors"
    TWO_OR_MORE = "two_or_more"
    MASTERS = "masters"
    PHD = "phd"


class FrenchTier(str, Enum):
    NONE = "none"
    HIGH_FRENCH_LOW_ENGLISH = "high_french_low_english"
    HIGH_FRENCH_HIGH_ENGLISH = "high_french_high_english"


class CanadianEducation(str, Enum):
    NONE = "none"
    ONE_OR_TWO_YEARS = "one_or_two_years"
    THREE_OR_MORE_YEARS = "three_or_more_years"


MIN_AGE = 18
MAX_AGE = 44
MAX_CLB = 10
MAX_EXPERIENCE_TIER = 5

AGE_POINTS: dict[int, tuple[int, int]] = {
    18: (99, 90),
    19: (105, 95),
    **{age: (110, 100) for age in range(20, 30)},
    30: (105, 95),
    31: (99, 90),
    32: (94, 85),
    33: (88, 80),
    34: (83, 75),
    35: (77, 70),
    36: (72, 65),
    37: (66, 60),
    38: (61, 55),
    39: (55, 50),
    40: (50, 45),
    41: (39, 35),
    42: (28, 25),
    43: (17, 15),
    44: (6, 5),
}

EDUCATION_POINTS: dict[EducationLevel, tuple[int, int]] = {
    EducationLevel.NONE: (0, 0),
    EducationLevel.SECONDARY: (30, 28),
    EducationLevel.ONE_YEAR: (90, 84),
    EducationLevel.TWO_YEAR: (98, 91),
    EducationLevel.BACHELORS: (120, 112),
    EducationLevel.TWO_OR_MORE: (128, 119),
    EducationLevel.MASTERS: (135, 126),
    EducationLevel.PHD: (150, 140),
}

# Per skill (speaking, listening, reading, writing)
FIRST_LANGUAGE_POINTS: dict[int, tuple[int, int]] = {
    0: (0, 0), 1: (0, 0), 2: (0, 0), 3: (0, 0),
    4: (6, 6), 5: (6, 6), 6: (9, 8), 7: (17, 16),
    8: (23, 22), 9: (31, 29), 10: (34, 32),
}

SECOND_LANGUAGE_POINTS: dict[int, int] = {
    0: 0, 1: 0, 2: 0, 3: 0, 4: 0,
    5: 1, 6: 1, 7: 3, 8: 3, 9: 6, 10: 6,
}
SECOND_LANGUAGE_MAX = (24, 22)

CANADIAN_WORK_POINTS: dict[int, tuple[int, int]] = {
    0: (0, 0),
    1: (40, 35),
    2: (53, 46),
    3: (64, 56),
    4: (72, 63),
    5: (80, 70),
}

# --- Spouse or common-law partner factors ---
SPOUSE_EDUCATION_POINTS: dict[EducationLevel, int] = {
    EducationLevel.NONE: 0,
    EducationLevel.SECONDARY: 2,
    EducationLevel.ONE_YEAR: 6,
    EducationLevel.TWO_YEAR: 7,
    EducationLevel.BACHELORS: 8,
    EducationLevel.TWO_OR_MORE: 9,
    EducationLevel.MASTERS: 10,
    EducationLevel.PHD: 10,
}

SPOUSE_CANADIAN_WORK_POINTS: dict[int, int] = {0: 0, 1: 5, 2: 7, 3: 8, 4: 9, 5: 10}

# --- Skill transferability ---
HIGHER_EDUCATION = frozenset({
    EducationLevel.BACHELORS,
    EducationLevel.TWO_OR_MORE,
    EducationLevel.MASTERS,
    EducationLevel.PHD,
})
TRANSFERABILITY_PAIR_MAX = 50
TRANSFERABILITY_MAX = 100

# --- Additional points ---
SIBLING_POINTS = 15
FRENCH_POINTS: dict[FrenchTier, int] = {
    FrenchTier.NONE: 0,
    FrenchTier.HIGH_FRENCH_LOW_ENGLISH: 25,
    FrenchTier.HIGH_FRENCH_HIGH_ENGLISH: 50,
}
CANADIAN_EDUCATION_POINTS: dict[CanadianEducation, int] = {
    CanadianEducation.NONE: 0,
    CanadianEducation.ONE_OR_TWO_YEARS: 15,
    CanadianEducation.THREE_OR_MORE_YEARS: 30,
}
PROVINCIAL_NOMINATION_POINTS = 600
