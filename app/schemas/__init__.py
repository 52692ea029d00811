"""
Schemas module - Request/Response schemas for API endpoints
and the value objects the eligibility engine works on.
"""

from app.schemas.schemas import (
    OfferTier, PolicyKind,
    Student, StudentCreate, StudentUpdate, PlacementStats, Company,
    PolicyConfig, MaximumCompaniesPolicy, DreamOfferPolicy, DreamCompanyPolicy,
    CGPAThresholdPolicy, PlacementPercentagePolicy, OfferCategoryPolicy,
    EligibilityRequest, EligibilityResult
)

__all__ = [
    "OfferTier", "PolicyKind",
    "Student", "StudentCreate", "StudentUpdate", "PlacementStats", "Company",
    "PolicyConfig", "MaximumCompaniesPolicy", "DreamOfferPolicy", "DreamCompanyPolicy",
    "CGPAThresholdPolicy", "PlacementPercentagePolicy", "OfferCategoryPolicy",
    "EligibilityRequest", "EligibilityResult"
]
