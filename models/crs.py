"""Schemas for CRS evaluation, profile and comparison APIs."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from app.crs.normalize import applicant_to_dict
from app.crs.profiles import MAX_PROFILES, Profile
from app.crs.report import score_band


class LanguageAbilityIn(BaseModel):
    """CLB level per skill. Values outside 0-10 are clamped before scoring."""

    speaking: int = 0
    listening: int = 0
    reading: int = 0
    writing: int = 0


class LanguageAbilityPatch(BaseModel):
    speaking: int | None = None
    listening: int | None = None
    reading: int | None = None
    writing: int | None = None


class ApplicantInputIn(BaseModel):
    """
    Applicant attributes for one CRS evaluation.

    Enum fields take their snake_case value (``two_or_more``) or the original
    calculator spelling (``twoormore``); unknown values score as ``none``.
    """

    has_spouse: bool = False
    age: int = Field(0, description="Age in years; outside 18-44 scores 0")
    education: str = Field("none", description="none, secondary, one_year, two_year, bachelors, two_or_more, masters, phd")
    first_language: LanguageAbilityIn = Field(default_factory=LanguageAbilityIn)
    second_language: LanguageAbilityIn = Field(default_factory=LanguageAbilityIn)
    canadian_work_years: int = 0
    foreign_work_years: int = 0
    certificate_of_qualification: bool = False
    spouse_education: str = "none"
    spouse_language: LanguageAbilityIn = Field(default_factory=LanguageAbilityIn)
    spouse_canadian_work_years: int = 0
    sibling_in_canada: bool = False
    french_tier: str = Field("none", description="none, high_french_low_english, high_french_high_english")
    canadian_education: str = Field("none", description="none, one_or_two_years, three_or_more_years")
    provincial_nomination: bool = False


class ProfileUpdate(BaseModel):
    """Partial profile edit. Only fields that are sent are changed."""

    name: str | None = Field(None, min_length=1, pattern=r"^[^/]+$")
    has_spouse: bool | None = None
    age: int | None = None
    education: str | None = None
    first_language: LanguageAbilityPatch | None = None
    second_language: LanguageAbilityPatch | None = None
    canadian_work_years: int | None = None
    foreign_work_years: int | None = None
    certificate_of_qualification: bool | None = None
    spouse_education: str | None = None
    spouse_language: LanguageAbilityPatch | None = None
    spouse_canadian_work_years: int | None = None
    sibling_in_canada: bool | None = None
    french_tier: str | None = None
    canadian_education: str | None = None
    provincial_nomination: bool | None = None

    def input_changes(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True, exclude={"name"})


class ProfileIn(BaseModel):
    name: str = Field(..., min_length=1, pattern=r"^[^/]+$")
    inputs: ApplicantInputIn = Field(default_factory=ApplicantInputIn)


class ProfileSetIn(BaseModel):
    profiles: list[ProfileIn] = Field(..., min_length=1, max_length=MAX_PROFILES)


class ScoreBreakdownOut(BaseModel):
    age: int
    education: int
    first_language: int
    second_language: int
    canadian_work_experience: int
    spouse_factors: int
    skill_transferability: int
    additional_points: int
    total: int = Field(..., description="Exact sum of the eight components")
    band: str = Field(..., description="Interpretation guide band for the total")
    disclaimer: str = Field(
        default="This tool is for general guidance only. Official IRCC system results govern. See Canada.ca Express Entry CRS calculator. Not legal advice.",
        description="Legal disclaimer",
    )


class ProfileOut(BaseModel):
    name: str
    inputs: dict[str, Any]
    scores: ScoreBreakdownOut


class ProfileSetOut(BaseModel):
    profiles: list[ProfileOut]


class ScoreBandOut(BaseModel):
    minimum: int
    label: str
    description: str


class ComparisonOut(BaseModel):
    columns: list[str]
    rows: list[list[Any]]
    guide: list[ScoreBandOut]
    note: str


def breakdown_out(scores) -> ScoreBreakdownOut:
    data = scores.as_dict()
    return ScoreBreakdownOut(**data, band=score_band(data["total"]).label)


def profile_out(profile: Profile) -> ProfileOut:
    return ProfileOut(
        name=profile.name,
        inputs=applicant_to_dict(profile.inputs),
        scores=breakdown_out(profile.scores),
    )
