"""
CRS (Comprehensive Ranking System) scoring engine for Express Entry.

Computes the eight CRS components from a normalized applicant record using the
point tables in ``app.crs.tables``. Evaluation is a pure function: no I/O, no
caching, no exceptions. Keys that fall outside a table score 0; clamping raw
integers into range is the job of ``app.crs.normalize``.

Legal disclaimer: This tool is for general guidance only. Official IRCC
system results govern. See Canada.ca CRS calculator disclaimer.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from app.crs import tables
from app.crs.tables import CanadianEducation, EducationLevel, FrenchTier


@dataclass
class LanguageAbility:
    """CLB level (0-10) per skill."""

    speaking: int = 0
    listening: int = 0
    reading: int = 0
    writing: int = 0

    def levels(self) -> tuple[int, int, int, int]:
        return (self.speaking, self.listening, self.reading, self.writing)

    def min_level(self) -> int:
        return min(self.levels())


@dataclass
class ApplicantInput:
    """Normalized input for CRS computation."""

    has_spouse: bool = False
    age: int = 0
    education: EducationLevel = EducationLevel.NONE
    first_language: LanguageAbility = field(default_factory=LanguageAbility)
    second_language: LanguageAbility = field(default_factory=LanguageAbility)
    canadian_work_years: int = 0
    foreign_work_years: int = 0
    certificate_of_qualification: bool = False
    # Spouse (only scored when has_spouse)
    spouse_education: EducationLevel = EducationLevel.NONE
    spouse_language: LanguageAbility = field(default_factory=LanguageAbility)
    spouse_canadian_work_years: int = 0
    # Additional points
    sibling_in_canada: bool = False
    french_tier: FrenchTier = FrenchTier.NONE
    canadian_education: CanadianEducation = CanadianEducation.NONE
    provincial_nomination: bool = False


COMPONENTS = (
    "age",
    "education",
    "first_language",
    "second_language",
    "canadian_work_experience",
    "spouse_factors",
    "skill_transferability",
    "additional_points",
)


@dataclass
class ScoreBreakdown:
    """CRS points per component. ``total`` is always the exact sum."""

    age: int = 0
    education: int = 0
    first_language: int = 0
    second_language: int = 0
    canadian_work_experience: int = 0
    spouse_factors: int = 0
    skill_transferability: int = 0
    additional_points: int = 0

    @property
    def total(self) -> int:
        return sum(getattr(self, name) for name in COMPONENTS)

    def as_dict(self) -> dict[str, int]:
        data = {name: getattr(self, name) for name in COMPONENTS}
        data["total"] = self.total
        return data


def _pick(pair: tuple[int, int], with_spouse: bool) -> int:
    single, spouse = pair
    return spouse if with_spouse else single


def _experience_tier(years: int) -> int:
    return min(years, tables.MAX_EXPERIENCE_TIER)


# --- Core human capital ---
def _age_points(age: int, with_spouse: bool) -> int:
    if age < tables.MIN_AGE or age > tables.MAX_AGE:
        return 0
    return _pick(tables.AGE_POINTS.get(age, (0, 0)), with_spouse)


def _education_points(level: EducationLevel, with_spouse: bool) -> int:
    return _pick(tables.EDUCATION_POINTS.get(level, (0, 0)), with_spouse)


def _first_language_points(ability: LanguageAbility, with_spouse: bool) -> int:
    return sum(
        _pick(tables.FIRST_LANGUAGE_POINTS.get(clb, (0, 0)), with_spouse)
        for clb in ability.levels()
    )


def _second_language_points(ability: LanguageAbility, with_spouse: bool) -> int:
    raw = sum(tables.SECOND_LANGUAGE_POINTS.get(clb, 0) for clb in ability.levels())
    return min(raw, _pick(tables.SECOND_LANGUAGE_MAX, with_spouse))


def _canadian_work_points(years: int, with_spouse: bool) -> int:
    pair = tables.CANADIAN_WORK_POINTS.get(_experience_tier(years), (0, 0))
    return _pick(pair, with_spouse)


# --- Spouse factors ---
def _spouse_language_points(clb: int) -> int:
    if clb <= 4:
        return 0
    if clb <= 6:
        return 1
    if clb <= 8:
        return 3
    return 5


def _spouse_points(inp: ApplicantInput) -> int:
    if not inp.has_spouse:
        return 0
    education = tables.SPOUSE_EDUCATION_POINTS.get(inp.spouse_education, 0)
    language = sum(_spouse_language_points(clb) for clb in inp.spouse_language.levels())
    work = tables.SPOUSE_CANADIAN_WORK_POINTS.get(
        _experience_tier(inp.spouse_canadian_work_years), 0
    )
    return education + language + work


# --- Skill transferability ---
def _language_tier(clb_min: int, high: int, mid: int) -> int:
    if clb_min >= 9:
        return high
    if clb_min >= 7:
        return mid
    return 0


def _transferability_education_language(edu: EducationLevel, clb_min: int) -> int:
    if edu not in tables.HIGHER_EDUCATION:
        return 0
    return _language_tier(clb_min, 50, 25)


def _transferability_education_canadian_work(edu: EducationLevel, canadian_years: int) -> int:
    if edu not in tables.HIGHER_EDUCATION:
        return 0
    if canadian_years >= 2:
        return 50
    if canadian_years >= 1:
        return 25
    return 0


def _transferability_foreign_language(foreign_years: int, clb_min: int) -> int:
    if foreign_years >= 3:
        return _language_tier(clb_min, 50, 25)
    if foreign_years >= 1:
        return _language_tier(clb_min, 25, 12)
    return 0


def _transferability_foreign_canadian_work(foreign_years: int, canadian_years: int) -> int:
    if foreign_years >= 3 and canadian_years >= 2:
        return 50
    if foreign_years >= 3 and canadian_years >= 1:
        return 25
    if foreign_years >= 1 and canadian_years >= 2:
        return 25
    if foreign_years >= 1 and canadian_years >= 1:
        return 12
    return 0


def _transferability_certificate(has_certificate: bool, clb_min: int) -> int:
    if not has_certificate:
        return 0
    return _language_tier(clb_min, 50, 25)


def _skill_transferability_points(inp: ApplicantInput) -> int:
    clb_min = inp.first_language.min_level()
    cap = tables.TRANSFERABILITY_PAIR_MAX

    education_pair = min(
        _transferability_education_language(inp.education, clb_min)
        + _transferability_education_canadian_work(inp.education, inp.canadian_work_years),
        cap,
    )
    foreign_pair = min(
        _transferability_foreign_language(inp.foreign_work_years, clb_min)
        + _transferability_foreign_canadian_work(inp.foreign_work_years, inp.canadian_work_years),
        cap,
    )
    certificate = _transferability_certificate(inp.certificate_of_qualification, clb_min)
    return min(education_pair + foreign_pair + certificate, tables.TRANSFERABILITY_MAX)


# --- Additional points ---
def _additional_points(inp: ApplicantInput) -> int:
    points = 0
    if inp.sibling_in_canada:
        points += tables.SIBLING_POINTS
    points += tables.FRENCH_POINTS.get(inp.french_tier, 0)
    points += tables.CANADIAN_EDUCATION_POINTS.get(inp.canadian_education, 0)
    if inp.provincial_nomination:
        points += tables.PROVINCIAL_NOMINATION_POINTS
    # Job offer: 0 (removed March 2025)
    return points


def evaluate(inp: ApplicantInput) -> ScoreBreakdown:
    """
    Compute the full CRS breakdown for one applicant.

    Every call recomputes all components from scratch, so the result always
    reflects the current input.
    """
    with_spouse = inp.has_spouse
    return ScoreBreakdown(
        age=_age_points(inp.age, with_spouse),
        education=_education_points(inp.education, with_spouse),
        first_language=_first_language_points(inp.first_language, with_spouse),
        second_language=_second_language_points(inp.second_language, with_spouse),
        canadian_work_experience=_canadian_work_points(inp.canadian_work_years, with_spouse),
        spouse_factors=_spouse_points(inp),
        skill_transferability=_skill_transferability_points(inp),
        additional_points=_additional_points(inp),
    )
