"""
API Routes - Combines all route modules into single router.
"""

from fastapi import APIRouter

from app.api.routes.student_routes import router as student_router
from app.api.routes.company_routes import router as company_router
from app.api.routes.policy_routes import router as policy_router
from app.api.routes.eligibility_routes import router as eligibility_router

# Main API router
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(student_router)
api_router.include_router(company_router)
api_router.include_router(policy_router)
api_router.include_router(eligibility_router)
