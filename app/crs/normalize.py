"""
Input boundary for the CRS engine.

Maps loose dictionaries (API payloads, stored profile documents, exports from
the original browser calculator) to ``ApplicantInput``. Out-of-range integers
are clamped here so the engine only ever sees values inside its tables. Age is
left as given: the age rule scores anything outside 18-44 as 0, and clamping
would invent points.
"""

from __future__ import annotations

from dataclasses import asdict
from enum import Enum
from typing import Any, TypeVar

from app.crs.engine import ApplicantInput, LanguageAbility
from app.crs.tables import MAX_CLB, CanadianEducation, EducationLevel, FrenchTier

E = TypeVar("E", bound=Enum)

LANGUAGE_SKILLS = ("speaking", "listening", "reading", "writing")

# Spellings used by the original calculator's form values
_ENUM_ALIASES: dict[str, str] = {
    "oneyear": "one_year",
    "twoyear": "two_year",
    "twoormore": "two_or_more",
    "bachelor": "bachelors",
    "master": "masters",
    "three_years_or_more": "three_or_more_years",
    "three_plus_years": "three_or_more_years",
    "one_to_two_years": "one_or_two_years",
}

# snake_case field -> camelCase key from the original profile format
_CAMEL_KEYS: dict[str, str] = {
    "has_spouse": "hasSpouse",
    "education": "educationLevel",
    "first_language": "firstLanguage",
    "second_language": "secondLanguage",
    "canadian_work_years": "canadianWorkExperience",
    "foreign_work_years": "foreignWorkExperience",
    "certificate_of_qualification": "certificateOfQualification",
    "spouse_education": "spouseEducationLevel",
    "spouse_language": "spouseLanguage",
    "spouse_canadian_work_years": "spouseCanadianWorkExperience",
    "sibling_in_canada": "hasSiblingInCanada",
    "french_tier": "frenchLanguage",
    "canadian_education": "canadianEducation",
    "provincial_nomination": "provincialNomination",
}


def _int(v: Any, default: int = 0) -> int:
    if v is None or isinstance(v, bool):
        return default
    try:
        return int(float(v))
    except (TypeError, ValueError, OverflowError):
        return default


def _bool(v: Any) -> bool:
    if v is None:
        return False
    if isinstance(v, bool):
        return v
    return str(v).strip().lower() in ("1", "true", "yes", "y")


def clamp_clb(v: Any) -> int:
    return max(0, min(_int(v), MAX_CLB))


def clamp_years(v: Any) -> int:
    return max(0, _int(v))


def coerce_enum(enum_cls: type[E], v: Any, default: E) -> E:
    """Resolve an enum from its value in any case/separator; unknown values give ``default``."""
    if isinstance(v, enum_cls):
        return v
    key = str(v or "").strip().lower().replace("-", "_").replace(" ", "_")
    key = _ENUM_ALIASES.get(key, key)
    try:
        return enum_cls(key)
    except ValueError:
        return default


def _language(v: Any) -> LanguageAbility:
    if isinstance(v, LanguageAbility):
        v = asdict(v)
    if not isinstance(v, dict):
        return LanguageAbility()
    return LanguageAbility(**{skill: clamp_clb(v.get(skill)) for skill in LANGUAGE_SKILLS})


_SNAKE_KEYS: dict[str, str] = {camel: snake for snake, camel in _CAMEL_KEYS.items()}


def snake_key(key: str) -> str:
    """Field name for a snake_case or original camelCase key."""
    return _SNAKE_KEYS.get(key, key)


def _get(data: dict[str, Any], name: str) -> Any:
    if data.get(name) is not None:
        return data[name]
    camel = _CAMEL_KEYS.get(name)
    return data.get(camel) if camel else None


def to_applicant_input(data: Any) -> ApplicantInput:
    """
    Build an ``ApplicantInput`` from a profile dict.

    Expected keys (snake_case or the original camelCase):
    - has_spouse, age, education
    - first_language / second_language / spouse_language: {speaking, listening, reading, writing}
    - canadian_work_years, foreign_work_years, spouse_canadian_work_years
    - certificate_of_qualification, sibling_in_canada, provincial_nomination
    - spouse_education, french_tier, canadian_education
    """
    if not isinstance(data, dict):
        data = {}
    return ApplicantInput(
        has_spouse=_bool(_get(data, "has_spouse")),
        age=_int(_get(data, "age")),
        education=coerce_enum(EducationLevel, _get(data, "education"), EducationLevel.NONE),
        first_language=_language(_get(data, "first_language")),
        second_language=_language(_get(data, "second_language")),
        canadian_work_years=clamp_years(_get(data, "canadian_work_years")),
        foreign_work_years=clamp_years(_get(data, "foreign_work_years")),
        certificate_of_qualification=_bool(_get(data, "certificate_of_qualification")),
        spouse_education=coerce_enum(EducationLevel, _get(data, "spouse_education"), EducationLevel.NONE),
        spouse_language=_language(_get(data, "spouse_language")),
        spouse_canadian_work_years=clamp_years(_get(data, "spouse_canadian_work_years")),
        sibling_in_canada=_bool(_get(data, "sibling_in_canada")),
        french_tier=coerce_enum(FrenchTier, _get(data, "french_tier"), FrenchTier.NONE),
        canadian_education=coerce_enum(
            CanadianEducation, _get(data, "canadian_education"), CanadianEducation.NONE
        ),
        provincial_nomination=_bool(_get(data, "provincial_nomination")),
    )


def applicant_to_dict(inp: ApplicantInput) -> dict[str, Any]:
    """Plain snake_case dict with enum values as strings (Mongo/JSON safe)."""
    data = asdict(inp)
    for key, value in data.items():
        if isinstance(value, Enum):
            data[key] = value.value
    return data
