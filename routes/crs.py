"""
CRS scoring API.

Stateless evaluation of a single applicant. Profile data is not read or
written here; see routes/profiles.py for the saved comparison set.
"""

from __future__ import annotations

from fastapi import APIRouter

from app.crs.engine import evaluate
from app.crs.normalize import to_applicant_input
from models.crs import ApplicantInputIn, ScoreBreakdownOut, breakdown_out

router = APIRouter(prefix="/crs", tags=["crs"])


@router.post("/evaluate", response_model=ScoreBreakdownOut)
async def crs_evaluate(applicant: ApplicantInputIn) -> ScoreBreakdownOut:
    """
    Compute the Express Entry CRS breakdown for one applicant.

    CRS criteria follow the official [Canada.ca calculator](https://www.canada.ca/en/immigration-refugees-citizenship/services/immigrate-canada/express-entry/check-score.html).
    Job offer points are not awarded (removed March 2025).
    """
    inp = to_applicant_input(applicant.model_dump())
    return breakdown_out(evaluate(inp))
