"""
Policy Evaluators

PURPOSE:
One pure function per policy kind. Each looks at the student, the company
offer, its own block of the policy document and (for the placement
percentage rule) the population snapshot, and returns a PolicyVerdict.

VERDICT SHAPE:
- applies:   the policy is enabled and relevant to this application
- blocks:    the policy forbids the application
- overrides: the policy allows the application despite any block
- reason:    human-readable explanation, present only on blocking or
             overriding verdicts (neutral verdicts explain nothing)

Evaluators never fetch anything and never look at each other's verdicts;
combining them is the decision combinator's job (eligibility_engine).

Money and CGPA comparisons go through Decimal so that boundary cases
(exact hike, CGPA one hundredth below the minimum) compare in base 10.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Callable, List, Optional, Tuple

from app.schemas.schemas import (
    Company, OfferCategoryPolicy, OfferTier, PlacementStats, PolicyConfig,
    PolicyKind, Student
)


@dataclass(frozen=True)
class PolicyVerdict:
    kind: PolicyKind
    applies: bool = False
    blocks: bool = False
    overrides: bool = False
    reason: Optional[str] = None
    specifics: Optional[str] = None


def _decimal(value: float) -> Decimal:
    return Decimal(str(value))


def _amount(value) -> str:
    return f"{value:.2f}"


# ============================================================
# MAXIMUM COMPANIES
# ============================================================

def evaluate_maximum_companies(
    student: Student,
    company: Company,
    config: PolicyConfig,
    stats: Optional[PlacementStats]
) -> PolicyVerdict:
    """Block once the student has used up the allowed number of applications."""
    kind = PolicyKind.maximum_companies
    policy = config.maximum_companies
    if not policy.enabled:
        return PolicyVerdict(kind)

    if student.companies_applied < policy.max_n:
        return PolicyVerdict(kind, applies=True)

    if policy.max_n == 0:
        reason = "Blocked by Maximum Companies Policy: Already placed and 0 additional applications allowed."
    else:
        reason = (
            f"Blocked by Maximum Companies Policy: Already applied to {student.companies_applied} "
            f"companies, max allowed is {policy.max_n}."
        )
    return PolicyVerdict(kind, applies=True, blocks=True, reason=reason)


# ============================================================
# DREAM OFFER / DREAM COMPANY (overriding policies)
# ============================================================

def evaluate_dream_offer(
    student: Student,
    company: Company,
    config: PolicyConfig,
    stats: Optional[PlacementStats]
) -> PolicyVerdict:
    """Override every block when the offer reaches the student's dream amount."""
    kind = PolicyKind.dream_offer
    if not config.dream_offer.enabled or student.dream_offer <= 0:
        return PolicyVerdict(kind)

    offered = _amount(company.offered_salary)
    dream = _amount(student.dream_offer)

    if _decimal(company.offered_salary) >= _decimal(student.dream_offer):
        return PolicyVerdict(
            kind,
            applies=True,
            overrides=True,
            reason=(
                f"Allowed by Dream Offer Policy: Company salary ({offered}) meets or exceeds "
                f"student's dream offer ({dream})."
            )
        )

    return PolicyVerdict(kind, applies=True)


def evaluate_dream_company(
    student: Student,
    company: Company,
    config: PolicyConfig,
    stats: Optional[PlacementStats]
) -> PolicyVerdict:
    """Override every block when the company is the student's declared dream company."""
    kind = PolicyKind.dream_company
    dream_company = (student.dream_company or "").strip()
    if not config.dream_company.enabled or not dream_company:
        return PolicyVerdict(kind)

    if company.name.strip().casefold() == dream_company.casefold():
        return PolicyVerdict(
            kind,
            applies=True,
            overrides=True,
            reason=f"Allowed by Dream Company Policy: {company.name} is student's declared dream company."
        )

    return PolicyVerdict(kind, applies=True)


# ============================================================
# CGPA THRESHOLD
# ============================================================

def evaluate_cgpa_threshold(
    student: Student,
    company: Company,
    config: PolicyConfig,
    stats: Optional[PlacementStats]
) -> PolicyVerdict:
    """Gate high-salary offers (at/above the salary bound) on a minimum CGPA."""
    kind = PolicyKind.cgpa_threshold
    policy = config.cgpa_threshold
    if not policy.enabled:
        return PolicyVerdict(kind)

    # Below the salary bound the policy has nothing to say
    if _decimal(company.offered_salary) < _decimal(policy.high_salary_threshold):
        return PolicyVerdict(kind)

    cgpa = _amount(student.cgpa)
    minimum = _amount(policy.minimum_cgpa)
    offered = _amount(company.offered_salary)

    if _decimal(student.cgpa) < _decimal(policy.minimum_cgpa):
        return PolicyVerdict(
            kind,
            applies=True,
            blocks=True,
            reason=(
                f"Blocked by CGPA Threshold Policy: CGPA ({cgpa}) is below minimum ({minimum}) "
                f"for high-paying offer ({offered})."
            )
        )

    return PolicyVerdict(kind, applies=True)


# ============================================================
# PLACEMENT PERCENTAGE
# ============================================================

def current_placement_percentage(stats: PlacementStats) -> Decimal:
    """
    Campus placement percentage computed from the raw counts, so that
    9 of 10 placed is exactly 90 (ratio * 100 would drift in binary floats).
    """
    if stats.total_count == 0:
        return Decimal(0)
    return Decimal(stats.placed_count * 100) / Decimal(stats.total_count)


def evaluate_placement_percentage(
    student: Student,
    company: Company,
    config: PolicyConfig,
    stats: Optional[PlacementStats]
) -> PolicyVerdict:
    """Hold back every additional application until campus placement reaches the target."""
    kind = PolicyKind.placement_percentage
    policy = config.placement_percentage
    if not policy.enabled:
        return PolicyVerdict(kind)

    if stats is None:
        raise ValueError("placement statistics are required while the Placement Percentage Policy is enabled")

    current = current_placement_percentage(stats)
    target = _decimal(policy.target_percentage)

    if current < target:
        return PolicyVerdict(
            kind,
            applies=True,
            blocks=True,
            reason=(
                f"Blocked by Placement Percentage Policy: Current overall placement "
                f"({_amount(current)}%) is below target ({_amount(target)}%)."
            )
        )

    return PolicyVerdict(kind, applies=True)


# ============================================================
# OFFER CATEGORY
# ============================================================

def classify_offer_tier(current_salary: float, policy: OfferCategoryPolicy) -> OfferTier:
    """L1 at/above the L1 threshold, L2 at/above the L2 threshold, L3 below."""
    salary = _decimal(current_salary)
    if salary >= _decimal(policy.l1_threshold_amount):
        return OfferTier.l1
    if salary >= _decimal(policy.l2_threshold_amount):
        return OfferTier.l2
    return OfferTier.l3


def required_offer_amount(current_salary: float, hike_percentage: float) -> Decimal:
    """Smallest offer that meets the hike requirement (meeting it exactly is enough)."""
    return _decimal(current_salary) * (1 + _decimal(hike_percentage) / 100)


def evaluate_offer_category(
    student: Student,
    company: Company,
    config: PolicyConfig,
    stats: Optional[PlacementStats]
) -> PolicyVerdict:
    """
    Tier-based restriction on a placed student's current offer.

    L1: hard ceiling, blocks everything.
    L2: blocks unless the new offer carries the required hike.
    L3: neutral.
    """
    kind = PolicyKind.offer_category
    policy = config.offer_category
    if not policy.enabled:
        return PolicyVerdict(kind)

    tier = classify_offer_tier(student.current_salary, policy)
    current = _amount(student.current_salary)

    if tier == OfferTier.l1:
        return PolicyVerdict(
            kind,
            applies=True,
            blocks=True,
            reason="Blocked by Offer Category Policy: L1 placed students cannot apply to any other companies.",
            specifics=(
                f"Offer category L1: current salary {current} is at or above the L1 threshold "
                f"{_amount(policy.l1_threshold_amount)}; no further applications are allowed."
            )
        )

    if tier == OfferTier.l3:
        return PolicyVerdict(kind, applies=True)

    required = required_offer_amount(student.current_salary, policy.required_hike_percentage)
    offered = _decimal(company.offered_salary)
    hike = _amount(policy.required_hike_percentage)

    specifics = (
        f"Offer category L2: current salary {current}, required hike {hike}% "
        f"-> minimum offer {_amount(required)}; offered {_amount(offered)}"
    )
    if student.current_salary > 0:
        actual_hike = (offered - _decimal(student.current_salary)) * 100 / _decimal(student.current_salary)
        specifics += f" ({_amount(actual_hike)}% hike)."
    else:
        specifics += "."

    if offered < required:
        return PolicyVerdict(
            kind,
            applies=True,
            blocks=True,
            reason=(
                f"Blocked by Offer Category Policy (L2): Company salary ({_amount(offered)}) does not meet "
                f"required hike ({hike}% over current salary {current})."
            ),
            specifics=specifics
        )

    return PolicyVerdict(kind, applies=True, specifics=specifics)


# ============================================================
# CATALOG
# ============================================================

Evaluator = Callable[[Student, Company, PolicyConfig, Optional[PlacementStats]], PolicyVerdict]

# Catalog evaluation order: reasons are reported in this order
POLICY_CATALOG: List[Tuple[PolicyKind, Evaluator]] = [
    (PolicyKind.maximum_companies, evaluate_maximum_companies),
    (PolicyKind.dream_offer, evaluate_dream_offer),
    (PolicyKind.dream_company, evaluate_dream_company),
    (PolicyKind.cgpa_threshold, evaluate_cgpa_threshold),
    (PolicyKind.placement_percentage, evaluate_placement_percentage),
    (PolicyKind.offer_category, evaluate_offer_category),
]


def evaluate_all(
    student: Student,
    company: Company,
    config: PolicyConfig,
    stats: Optional[PlacementStats] = None
) -> List[PolicyVerdict]:
    """Run every evaluator in catalog order."""
    return [evaluate(student, company, config, stats) for _, evaluate in POLICY_CATALOG]
