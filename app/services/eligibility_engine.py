"""
Eligibility Engine - Decision Combinator

Turns the six per-policy verdicts into one EligibilityResult.

RULES:
1. Unplaced student              -> Eligible (policies only govern
                                    applications made after placement)
2. Any overriding verdict        -> Eligible; override reasons first, then
                                    the blocks it beat, for transparency
3. Else any blocking verdict     -> Not Eligible; blocking reasons
4. Else                          -> Eligible; nothing restricts it

Every blocking policy can be overridden, CGPA Threshold included.
Reasons always follow catalog order, whatever order verdicts arrive in.

Everything here is pure: the caller fetches the student, the company, the
policy snapshot and the placement stats up front and passes them in.
"""

import logging
from typing import Iterable, List, Optional

from app.schemas.schemas import (
    Company, EligibilityResult, OfferTier, PlacementStats, PolicyConfig,
    PolicyKind, Student
)
from app.services.policy_evaluators import (
    PolicyVerdict, classify_offer_tier, evaluate_all
)

logger = logging.getLogger(__name__)

UNPLACED_REASON = "Student is not yet placed, no restriction policies apply."
UNRESTRICTED_REASON = "No active policy restricts this application."
OVERRIDDEN_BLOCK_PREFIX = "Would otherwise be blocked by: "

CATALOG_POSITION = {kind: position for position, kind in enumerate(PolicyKind)}


def combine_verdicts(
    student: Student,
    company: Company,
    verdicts: Iterable[PolicyVerdict]
) -> EligibilityResult:
    """Fold per-policy verdicts of a placed student into the final verdict."""
    ordered = sorted(verdicts, key=lambda verdict: CATALOG_POSITION[verdict.kind])
    blocking = [v for v in ordered if v.applies and v.blocks]
    overriding = [v for v in ordered if v.applies and v.overrides]

    if overriding:
        reasons = [v.reason for v in overriding]
        reasons += [OVERRIDDEN_BLOCK_PREFIX + v.reason for v in blocking]
        return _result(student, company, True, reasons)

    if blocking:
        specifics = next(
            (v.specifics for v in blocking if v.kind == PolicyKind.offer_category),
            None
        )
        return _result(student, company, False, [v.reason for v in blocking], specifics)

    return _result(student, company, True, [UNRESTRICTED_REASON])


def decide_for(
    student: Student,
    company: Company,
    config: PolicyConfig,
    stats: Optional[PlacementStats] = None
) -> EligibilityResult:
    """
    Decide one (student, company) pair against a policy snapshot.

    Args:
        student: Student snapshot
        company: Company snapshot
        config: Policy document current at decision time
        stats: Placement snapshot; required when PlacementPercentage is enabled

    Returns:
        EligibilityResult with the verdict and its reason trail
    """
    if not student.is_placed:
        return _result(student, company, True, [UNPLACED_REASON])

    verdicts = evaluate_all(student, company, config, stats)
    for verdict in verdicts:
        if verdict.applies:
            logger.debug(
                "student=%s company=%s policy=%s blocks=%s overrides=%s",
                student.id, company.id, verdict.kind.value, verdict.blocks, verdict.overrides
            )
    return combine_verdicts(student, company, verdicts)


def with_offer_category(student: Student, config: PolicyConfig) -> Student:
    """
    Fill in the derived currentOfferCategory field.

    Only placed students have a tier, and only while the Offer Category
    policy is enabled (its thresholds are meaningless otherwise).
    """
    tier: Optional[OfferTier] = None
    if student.is_placed and config.offer_category.enabled:
        tier = classify_offer_tier(student.current_salary, config.offer_category)
    return student.model_copy(update={"current_offer_category": tier})


def _result(
    student: Student,
    company: Company,
    is_eligible: bool,
    reasons: List[str],
    specifics: Optional[str] = None
) -> EligibilityResult:
    return EligibilityResult(
        is_eligible=is_eligible,
        reasons=reasons,
        student_id=student.id,
        company_id=company.id,
        student_name=student.name,
        company_name=company.name,
        policy_specifics=specifics
    )
