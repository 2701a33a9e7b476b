"""
Profile Store - persists the comparison set in MongoDB.

One document per set key in the ``profile_sets`` collection:

    {"_id": "<set key>", "profiles": [{"name": ..., "inputs": {...}}], "updated_at": ...}

Only names and raw inputs are stored. Scores are derived, so they are
recomputed on every load and can never go stale.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from app.crs.normalize import applicant_to_dict, to_applicant_input
from app.crs.profiles import Profile, default_profiles, validate_profile_set

logger = logging.getLogger(__name__)

COLLECTION = "profile_sets"
DEFAULT_SET_KEY = "default"


def profile_document(profile: Profile) -> dict[str, Any]:
    return {"name": profile.name, "inputs": applicant_to_dict(profile.inputs)}


def profile_from_document(doc: dict[str, Any]) -> Profile:
    if not isinstance(doc, dict):
        doc = {}
    return Profile.create(str(doc.get("name") or "Profile"), to_applicant_input(doc.get("inputs") or {}))


class ProfileStore:
    """Async load/save/reset of a named profile set. Storage errors propagate to the caller."""

    def __init__(self, db, set_key: str = DEFAULT_SET_KEY):
        self.collection = db[COLLECTION]
        self.set_key = set_key

    async def load(self) -> list[Profile]:
        doc = await self.collection.find_one({"_id": self.set_key})
        if not doc or not doc.get("profiles"):
            logger.info(f"No saved profiles for '{self.set_key}', using defaults")
            return default_profiles()
        return [profile_from_document(p) for p in doc["profiles"]]

    async def save(self, profiles: list[Profile]) -> list[Profile]:
        validate_profile_set(profiles)
        await self.collection.replace_one(
            {"_id": self.set_key},
            {
                "_id": self.set_key,
                "profiles": [profile_document(p) for p in profiles],
                "updated_at": datetime.now(timezone.utc),
            },
            upsert=True,
        )
        logger.info(f"Saved {len(profiles)} profile(s) to '{self.set_key}'")
        return profiles

    async def reset(self) -> list[Profile]:
        await self.collection.delete_one({"_id": self.set_key})
        logger.info(f"Profile set '{self.set_key}' reset to defaults")
        return default_profiles()
