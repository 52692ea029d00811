"""
Placement Policy Engine - Main Application

FastAPI backend with:
- Eligibility engine: six togglable placement policies, override-aware
- Policy configuration stored as one validated JSON document
- Thin student/company record API
- SQL store (SQLite by default, PostgreSQL via DATABASE_URL)

Run: uvicorn app.main:app --reload
"""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.routes import api_router
from app.core.config import get_settings
from app.core.errors import PlacementError
from app.db.database import check_database_connection
from app.services.seed_service import seed_database

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
)
logger = logging.getLogger("app")

# Create FastAPI app
app = FastAPI(
    title="Placement Policy Engine",
    description="""
    Decides whether a student may apply to a company under the college's
    placement policies, and explains why.

    ## Policies
    - **Maximum Companies**: cap on applications after placement
    - **Dream Offer**: offer at/above the student's dream amount overrides blocks
    - **Dream Company**: the student's declared dream company overrides blocks
    - **CGPA Threshold**: minimum CGPA for high-salary offers
    - **Placement Percentage**: placed students wait until campus placement hits a target
    - **Offer Category**: L1 students stop, L2 students need a salary hike

    ## Endpoints
    - `POST /api/eligibility/check`: single verdict with reasons
    - `GET /api/companies/{id}/eligible-students`: batch projection
    - `GET|POST /api/policies`: policy configuration
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(api_router, prefix="/api")


@app.exception_handler(PlacementError)
async def placement_error_handler(request: Request, exc: PlacementError):
    """Map domain errors to their HTTP status codes."""
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


# Startup event
@app.on_event("startup")
async def startup_event():
    """Create schema and seed first-run data."""
    if not settings.seed_on_startup:
        return
    seeded = seed_database(settings)
    logger.info("Startup seeding complete: %s", seeded)


@app.get("/", tags=["Health"])
async def root():
    return {"status": "healthy", "app": "Placement Policy Engine", "docs": "/docs"}


@app.get("/health", tags=["Health"])
async def health_check():
    """Detailed health check."""
    return {
        "status": "healthy",
        "database": "connected" if check_database_connection() else "disconnected"
    }
