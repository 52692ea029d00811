"""
Student Routes

GET /students - List students (id ascending)
GET /students/stats - Placed / total counts
GET /students/{student_id} - Get one student
POST /students - Create student (id assigned by the server)
PUT /students/{student_id} - Update provided fields

Responses carry the derived currentOfferCategory (L1/L2/L3) of placed
students, computed from the active Offer Category thresholds.
"""

from fastapi import APIRouter
from typing import List

from app.core.errors import NotFoundError
from app.services.eligibility_engine import with_offer_category
from app.services.fact_service import get_student_service
from app.services.policy_service import get_policy_config
from app.schemas.schemas import Student, StudentCreate, StudentUpdate, PlacementStats

router = APIRouter(prefix="/students", tags=["Students"])


@router.get("", response_model=List[Student])
async def list_students():
    """All students with their current offer category."""
    config = get_policy_config()
    return [with_offer_category(s, config) for s in get_student_service().list_all()]


@router.get("/stats", response_model=PlacementStats)
async def placement_stats():
    """Campus placement counts used by the Placement Percentage Policy."""
    return get_student_service().placement_stats()


@router.get("/{student_id}", response_model=Student)
async def get_student(student_id: int):
    """Get a student by ID."""
    student = get_student_service().get_by_id(student_id)
    if student is None:
        raise NotFoundError("Student", student_id)
    return with_offer_category(student, get_policy_config())


@router.post("", response_model=Student, status_code=201)
async def create_student(data: StudentCreate):
    """Create a student. currentOfferCategory is derived and cannot be set."""
    student = get_student_service().insert(data)
    return with_offer_category(student, get_policy_config())


@router.put("/{student_id}", response_model=Student)
async def update_student(student_id: int, data: StudentUpdate):
    """Update student. Only provided fields are updated."""
    student = get_student_service().update(student_id, data)
    return with_offer_category(student, get_policy_config())
