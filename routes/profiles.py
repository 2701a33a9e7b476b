import logging
import os

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from pymongo.errors import PyMongoError

from app.db import get_db
from app.store import DEFAULT_SET_KEY, ProfileStore
from app.crs.normalize import to_applicant_input
from app.crs.profiles import Profile, apply_changes, validate_profile_set
from app.crs.report import EXPORT_FILENAME, GUIDE_NOTE, INTERPRETATION_GUIDE, comparison_table, export_pdf
from models.crs import (
    ComparisonOut,
    ProfileOut,
    ProfileSetIn,
    ProfileSetOut,
    ProfileUpdate,
    ScoreBandOut,
    profile_out,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/profiles", tags=["profiles"])


def get_profile_store(request: Request) -> ProfileStore:
    try:
        db = get_db(request)
    except RuntimeError as e:
        logger.error(f"Profile store unavailable: {e}")
        raise HTTPException(status_code=503, detail="Profile storage unavailable")
    return ProfileStore(db, os.getenv("CRS_PROFILE_SET", DEFAULT_SET_KEY))


async def _load(store: ProfileStore) -> list[Profile]:
    try:
        return await store.load()
    except PyMongoError as e:
        logger.error(f"Loading profiles failed: {e}")
        raise HTTPException(status_code=503, detail="Profile storage unavailable")


async def _save(store: ProfileStore, profiles: list[Profile]) -> list[Profile]:
    try:
        return await store.save(profiles)
    except PyMongoError as e:
        logger.error(f"Saving profiles failed: {e}")
        raise HTTPException(status_code=503, detail="Profile storage unavailable")


@router.get("", response_model=ProfileSetOut)
async def list_profiles(store: ProfileStore = Depends(get_profile_store)):
    """Get the saved comparison set, or the three default profiles when nothing is saved"""
    profiles = await _load(store)
    return ProfileSetOut(profiles=[profile_out(p) for p in profiles])


@router.put("", response_model=ProfileSetOut)
async def replace_profiles(data: ProfileSetIn, store: ProfileStore = Depends(get_profile_store)):
    """Replace the whole comparison set (PUT - 1 to 3 profiles with unique names)"""
    profiles = [Profile.create(p.name, to_applicant_input(p.inputs.model_dump())) for p in data.profiles]
    try:
        validate_profile_set(profiles)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    await _save(store, profiles)
    return ProfileSetOut(profiles=[profile_out(p) for p in profiles])


@router.patch("/{name}", response_model=ProfileOut)
async def update_profile(name: str, update: ProfileUpdate, store: ProfileStore = Depends(get_profile_store)):
    """Partially update one profile (PATCH - updates only provided fields, then rescores)"""
    changes = update.input_changes()
    if not changes and update.name is None:
        raise HTTPException(status_code=400, detail="No fields to update")

    profiles = await _load(store)
    index = next((i for i, p in enumerate(profiles) if p.name == name), None)
    if index is None:
        raise HTTPException(status_code=404, detail="Profile not found")

    updated = apply_changes(profiles[index], changes, name=update.name)
    candidate = [*profiles[:index], updated, *profiles[index + 1:]]
    try:
        validate_profile_set(candidate)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    await _save(store, candidate)
    return profile_out(updated)


@router.post("/reset", response_model=ProfileSetOut)
async def reset_profiles(store: ProfileStore = Depends(get_profile_store)):
    """Clear saved profiles and return the defaults"""
    try:
        profiles = await store.reset()
    except PyMongoError as e:
        logger.error(f"Resetting profiles failed: {e}")
        raise HTTPException(status_code=503, detail="Profile storage unavailable")
    return ProfileSetOut(profiles=[profile_out(p) for p in profiles])


@router.get("/comparison", response_model=ComparisonOut)
async def compare_profiles(store: ProfileStore = Depends(get_profile_store)):
    """Score comparison table (one column per profile) with the interpretation guide"""
    profiles = await _load(store)
    header, *rows = comparison_table(profiles)
    return ComparisonOut(
        columns=header,
        rows=rows,
        guide=[ScoreBandOut(minimum=b.minimum, label=b.label, description=b.description) for b in INTERPRETATION_GUIDE],
        note=GUIDE_NOTE,
    )


@router.get("/export.pdf")
async def export_profiles(store: ProfileStore = Depends(get_profile_store)):
    """Download the comparison report as a PDF"""
    profiles = await _load(store)
    pdf = export_pdf(profiles)
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{EXPORT_FILENAME}"'},
    )
