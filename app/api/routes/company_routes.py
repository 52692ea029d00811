"""
Company Routes

GET /companies - List companies
GET /companies/{company_id} - Get one company
POST /companies - Create company
GET /companies/{company_id}/eligible-students - Students eligible to apply
"""

from fastapi import APIRouter
from typing import List

from app.core.errors import NotFoundError
from app.services.eligibility_service import get_eligibility_service
from app.services.fact_service import get_company_service
from app.schemas.schemas import Company, Student

router = APIRouter(prefix="/companies", tags=["Companies"])


@router.get("", response_model=List[Company])
async def list_companies():
    """All companies, id ascending."""
    return get_company_service().list_all()


@router.get("/{company_id}", response_model=Company)
async def get_company(company_id: str):
    """Get a company by ID."""
    company = get_company_service().get_by_id(company_id)
    if company is None:
        raise NotFoundError("Company", company_id)
    return company


@router.post("", response_model=Company, status_code=201)
async def create_company(company: Company):
    """Create a company. The ID is chosen by the caller and must be unused."""
    return get_company_service().insert(company)


@router.get("/{company_id}/eligible-students", response_model=List[Student])
async def eligible_students(company_id: str):
    """
    Every student currently allowed to apply to this company.

    One placement snapshot is taken for the whole list, so all students
    are judged against the same campus placement percentage.
    Order: student ID ascending.
    """
    return get_eligibility_service().eligible_students(company_id)
