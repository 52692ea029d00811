"""
Eligibility Routes

POST /eligibility/check - Decide whether a student may apply to a company
"""

from fastapi import APIRouter

from app.services.eligibility_service import get_eligibility_service
from app.schemas.schemas import EligibilityRequest, EligibilityResult

router = APIRouter(prefix="/eligibility", tags=["Eligibility"])


@router.post("/check", response_model=EligibilityResult, response_model_exclude_none=True)
async def check_eligibility(request: EligibilityRequest):
    """
    Evaluate all active policies for one (student, company) pair.

    Returns the verdict plus the reasons behind it. When an overriding
    policy (Dream Offer / Dream Company) wins, the blocks it overrode are
    listed as "Would otherwise be blocked by: ...".

    404 if either ID is unknown - no verdict is produced in that case.
    """
    return get_eligibility_service().decide(request.student_id, request.company_id)
