"""
Pydantic Schemas - Request/Response Validation

All API request and response schemas in one file for simplicity.
Wire names are camelCase (studentId, isPlaced, maxN, ...); Python code
uses snake_case attributes. Both are accepted on input.
"""

from pydantic import (
    BaseModel, ConfigDict, Field, computed_field, field_validator, model_validator
)
from pydantic.alias_generators import to_camel
from typing import Optional, List
from enum import Enum


class CamelModel(BaseModel):
    """
    Base model serialising to camelCase keys.

    Strings are stripped before length checks; infinite and NaN numbers
    are rejected (they cannot round-trip through JSON).
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        allow_inf_nan=False
    )


# ============================================================
# ENUMS
# ============================================================

class OfferTier(str, Enum):
    l1 = "L1"
    l2 = "L2"
    l3 = "L3"


class PolicyKind(str, Enum):
    """
    The policy catalog. Declaration order is the catalog evaluation order
    and therefore the order of reasons in every verdict.
    """
    maximum_companies = "maximumCompanies"
    dream_offer = "dreamOffer"
    dream_company = "dreamCompany"
    cgpa_threshold = "cgpaThreshold"
    placement_percentage = "placementPercentage"
    offer_category = "offerCategory"


# ============================================================
# STUDENT SCHEMAS
# ============================================================

class StudentCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    cgpa: float = Field(0.0, ge=0, le=10)
    is_placed: bool = False
    current_salary: float = Field(0.0, ge=0)
    companies_applied: int = Field(0, ge=0)
    dream_offer: float = Field(0.0, ge=0)
    dream_company: str = Field("", max_length=200)

    @field_validator("cgpa")
    @classmethod
    def round_cgpa(cls, value: float) -> float:
        # CGPA is a two-decimal figure
        return round(value, 2)

    @field_validator("dream_company", mode="before")
    @classmethod
    def normalize_dream_company(cls, value):
        return (value or "").strip()


class StudentUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    cgpa: Optional[float] = Field(None, ge=0, le=10)
    is_placed: Optional[bool] = None
    current_salary: Optional[float] = Field(None, ge=0)
    companies_applied: Optional[int] = Field(None, ge=0)
    dream_offer: Optional[float] = Field(None, ge=0)
    dream_company: Optional[str] = Field(None, max_length=200)

    @field_validator("cgpa")
    @classmethod
    def round_cgpa(cls, value: Optional[float]) -> Optional[float]:
        return round(value, 2) if value is not None else None


class Student(StudentCreate):
    id: int
    # Derived from currentSalary and the OfferCategory thresholds; never stored
    current_offer_category: Optional[OfferTier] = None


class PlacementStats(CamelModel):
    """Placed / total counts across the whole student population."""

    model_config = ConfigDict(frozen=True)

    placed_count: int = Field(0, ge=0)
    total_count: int = Field(0, ge=0)

    @computed_field(alias="placementPercentage")
    @property
    def placement_percentage(self) -> float:
        if self.total_count == 0:
            return 0.0
        return round(self.placed_count * 100 / self.total_count, 2)

    @property
    def ratio(self) -> float:
        if self.total_count == 0:
            return 0.0
        return self.placed_count / self.total_count


# ============================================================
# COMPANY SCHEMAS
# ============================================================

class Company(CamelModel):
    id: str = Field(..., min_length=1, max_length=64)
    name: str = Field(..., min_length=1, max_length=200)
    offered_salary: float = Field(0.0, ge=0)


# ============================================================
# POLICY SCHEMAS
# One typed block per policy kind; a block that is absent (or null)
# reads as disabled with zero parameters.
# ============================================================

class PolicyBlock(CamelModel):
    model_config = ConfigDict(frozen=True)

    enabled: bool = False


class MaximumCompaniesPolicy(PolicyBlock):
    # 0 = no additional applications once placed
    max_n: int = Field(0, ge=0, alias="maxN")


class DreamOfferPolicy(PolicyBlock):
    pass


class DreamCompanyPolicy(PolicyBlock):
    pass


class CGPAThresholdPolicy(PolicyBlock):
    minimum_cgpa: float = Field(0.0, ge=0, le=10, alias="minimumCGPA")
    high_salary_threshold: float = Field(0.0, ge=0, alias="highSalaryThreshold")


class PlacementPercentagePolicy(PolicyBlock):
    target_percentage: float = Field(0.0, ge=0, le=100, alias="targetPercentage")


class OfferCategoryPolicy(PolicyBlock):
    l1_threshold_amount: float = Field(0.0, ge=0, alias="l1ThresholdAmount")
    l2_threshold_amount: float = Field(0.0, ge=0, alias="l2ThresholdAmount")
    required_hike_percentage: float = Field(0.0, ge=0, alias="requiredHikePercentage")

    @model_validator(mode="after")
    def check_tier_order(self):
        if self.l1_threshold_amount < self.l2_threshold_amount:
            raise ValueError("l1ThresholdAmount must be greater than or equal to l2ThresholdAmount")
        return self


class PolicyConfig(CamelModel):
    model_config = ConfigDict(frozen=True)

    maximum_companies: MaximumCompaniesPolicy = Field(default_factory=MaximumCompaniesPolicy)
    dream_offer: DreamOfferPolicy = Field(default_factory=DreamOfferPolicy)
    dream_company: DreamCompanyPolicy = Field(default_factory=DreamCompanyPolicy)
    cgpa_threshold: CGPAThresholdPolicy = Field(default_factory=CGPAThresholdPolicy)
    placement_percentage: PlacementPercentagePolicy = Field(default_factory=PlacementPercentagePolicy)
    offer_category: OfferCategoryPolicy = Field(default_factory=OfferCategoryPolicy)

    @field_validator("*", mode="before")
    @classmethod
    def missing_block_is_disabled(cls, value):
        return {} if value is None else value


# ============================================================
# ELIGIBILITY SCHEMAS
# ============================================================

class EligibilityRequest(CamelModel):
    student_id: int
    company_id: str


class EligibilityResult(CamelModel):
    is_eligible: bool
    reasons: List[str] = []
    student_id: int
    company_id: str
    student_name: str
    company_name: str
    # Elaboration when the Offer Category policy decides the outcome
    policy_specifics: Optional[str] = None

