"""Named applicant profiles and the three-way comparison set."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from app.crs.engine import ApplicantInput, LanguageAbility, ScoreBreakdown, evaluate
from app.crs.normalize import applicant_to_dict, snake_key, to_applicant_input
from app.crs.tables import EducationLevel

logger = logging.getLogger(__name__)

MAX_PROFILES = 3
DEFAULT_PROFILE_NAMES = ("Profile 1", "Profile 2", "Profile 3")

_LANGUAGE_FIELDS = ("first_language", "second_language", "spouse_language")


@dataclass
class Profile:
    name: str
    inputs: ApplicantInput
    scores: ScoreBreakdown

    @classmethod
    def create(cls, name: str, inputs: ApplicantInput) -> "Profile":
        return cls(name=name, inputs=inputs, scores=evaluate(inputs))

    @property
    def total(self) -> int:
        return self.scores.total


def default_inputs() -> ApplicantInput:
    return ApplicantInput(
        has_spouse=False,
        age=30,
        education=EducationLevel.BACHELORS,
        first_language=LanguageAbility(speaking=10, listening=10, reading=10, writing=10),
    )


def default_profiles() -> list[Profile]:
    return [Profile.create(name, default_inputs()) for name in DEFAULT_PROFILE_NAMES]


def validate_profile_set(profiles: list[Profile]) -> None:
    """Raise ValueError unless the set holds 1-3 uniquely named profiles."""
    if not profiles:
        raise ValueError("At least one profile is required")
    if len(profiles) > MAX_PROFILES:
        raise ValueError(f"At most {MAX_PROFILES} profiles can be compared, got {len(profiles)}")
    names = [p.name for p in profiles]
    if len(set(names)) != len(names):
        raise ValueError(f"Profile names must be unique: {names}")


def apply_changes(profile: Profile, changes: dict[str, Any], name: str | None = None) -> Profile:
    """
    Return a new profile with ``changes`` merged into its inputs and every score recomputed.

    Language fields merge per skill, so ``{"first_language": {"speaking": 8}}``
    keeps the other three skills. The given profile is left untouched.
    """
    merged = applicant_to_dict(profile.inputs)
    for raw_key, value in changes.items():
        key = snake_key(raw_key)
        if key in _LANGUAGE_FIELDS and isinstance(value, dict):
            merged[key] = {**merged[key], **value}
        else:
            merged[key] = value

    updated = Profile.create(name or profile.name, to_applicant_input(merged))
    logger.debug(
        f"Profile '{profile.name}' updated ({', '.join(sorted(changes)) or 'rename'}): "
        f"total {profile.total} -> {updated.total}"
    )
    return updated
