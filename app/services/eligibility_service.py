"""
Eligibility Service

PURPOSE:
Entry points of the policy engine:
- decide(student_id, company_id)   -> one verdict with its reason trail
- eligible_students(company_id)    -> every student allowed to apply

HOW IT WORKS:
1. Read the current policy document once
2. Resolve student / company (NotFoundError fails the whole call)
3. Count placed students, only when the Placement Percentage Policy is on
4. Hand the snapshot to the pure engine (eligibility_engine.decide_for)

All facts are fetched before any policy is evaluated. The batch call takes
one placement snapshot and reuses it for every student, so every student
in the batch is judged against the same denominator.
"""

import logging
from typing import List, Optional

from app.schemas.schemas import EligibilityResult, PlacementStats, PolicyConfig, Student
from app.services.eligibility_engine import decide_for, with_offer_category
from app.services.fact_service import FactGatherer
from app.services.policy_service import PolicyConfigService

logger = logging.getLogger(__name__)


class EligibilityService:
    """
    Decides whether students may apply to a company.

    Holds no state between calls; facts and the policy document are read
    fresh on every call.
    """

    def __init__(
        self,
        facts: Optional[FactGatherer] = None,
        policies: Optional[PolicyConfigService] = None
    ):
        self.facts = facts or FactGatherer()
        self.policies = policies or PolicyConfigService()

    def _placement_snapshot(self, config: PolicyConfig) -> Optional[PlacementStats]:
        if not config.placement_percentage.enabled:
            return None
        return self.facts.placement_stats()

    def decide(self, student_id: int, company_id: str) -> EligibilityResult:
        """
        Decide whether one student may apply to one company.

        Raises:
            NotFoundError: unknown student or company id
        """
        config = self.policies.get_config()
        student = self.facts.get_student(student_id)
        company = self.facts.get_company(company_id)
        stats = self._placement_snapshot(config)

        result = decide_for(student, company, config, stats)
        logger.info(
            "Eligibility student=%s company=%s eligible=%s",
            student_id, company_id, result.is_eligible
        )
        return result

    def eligible_students(self, company_id: str) -> List[Student]:
        """
        Students (id ascending) whose verdict for this company is Eligible.

        Each carries the currentOfferCategory derived from the same policy
        document the decisions were made with.

        Raises:
            NotFoundError: unknown company id
        """
        config = self.policies.get_config()
        company = self.facts.get_company(company_id)
        stats = self._placement_snapshot(config)
        students = sorted(self.facts.list_students(), key=lambda s: s.id)

        eligible = [
            with_offer_category(student, config) for student in students
            if decide_for(student, company, config, stats).is_eligible
        ]
        logger.info(
            "Eligible students for company=%s: %d of %d",
            company_id, len(eligible), len(students)
        )
        return eligible


def get_eligibility_service() -> EligibilityService:
    """Get eligibility service instance."""
    return EligibilityService()


def decide(student_id: int, company_id: str) -> EligibilityResult:
    return get_eligibility_service().decide(student_id, company_id)


def eligible_students(company_id: str) -> List[Student]:
    return get_eligibility_service().eligible_students(company_id)
