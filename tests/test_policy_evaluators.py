"""
Unit tests for the per-policy evaluators.

Each test enables only the policy under test.
"""

import pytest

from app.schemas.schemas import OfferTier, PlacementStats, PolicyKind
from app.services.policy_evaluators import (
    POLICY_CATALOG,
    classify_offer_tier,
    evaluate_all,
    evaluate_cgpa_threshold,
    evaluate_dream_company,
    evaluate_dream_offer,
    evaluate_maximum_companies,
    evaluate_offer_category,
    evaluate_placement_percentage,
)


OFFER_CATEGORY = {
    "enabled": True,
    "l1ThresholdAmount": 3000000,
    "l2ThresholdAmount": 1000000,
    "requiredHikePercentage": 30,
}


class TestDisabledPolicies:

    def test_every_disabled_policy_does_not_apply(self, make_student, make_company, make_config):
        verdicts = evaluate_all(
            make_student(companies_applied=99, cgpa=1.0, dream_offer=1, dream_company="Acme Corp"),
            make_company(),
            make_config(),
            PlacementStats(placed_count=0, total_count=10),
        )
        assert [v.kind for v in verdicts] == [kind for kind, _ in POLICY_CATALOG]
        assert not any(v.applies or v.blocks or v.overrides for v in verdicts)
        assert all(v.reason is None for v in verdicts)

    def test_catalog_order(self):
        assert [kind for kind, _ in POLICY_CATALOG] == list(PolicyKind)


class TestMaximumCompanies:

    def test_blocks_at_limit(self, make_student, make_company, make_config):
        config = make_config(maximumCompanies={"enabled": True, "maxN": 3})
        verdict = evaluate_maximum_companies(make_student(companies_applied=3), make_company(), config, None)
        assert verdict.applies and verdict.blocks
        assert "Already applied to 3 companies, max allowed is 3" in verdict.reason

    def test_one_below_limit_is_not_blocked(self, make_student, make_company, make_config):
        config = make_config(maximumCompanies={"enabled": True, "maxN": 3})
        verdict = evaluate_maximum_companies(make_student(companies_applied=2), make_company(), config, None)
        assert verdict.applies
        assert not verdict.blocks
        assert verdict.reason is None

    def test_zero_allows_nothing_after_placement(self, make_student, make_company, make_config):
        config = make_config(maximumCompanies={"enabled": True, "maxN": 0})
        verdict = evaluate_maximum_companies(make_student(companies_applied=0), make_company(), config, None)
        assert verdict.blocks
        assert "0 additional applications allowed" in verdict.reason


class TestDreamOffer:

    def test_overrides_when_offer_meets_dream(self, make_student, make_company, make_config):
        config = make_config(dreamOffer={"enabled": True})
        verdict = evaluate_dream_offer(
            make_student(dream_offer=1500000), make_company(offered_salary=1500000), config, None
        )
        assert verdict.overrides
        assert not verdict.blocks
        assert verdict.reason.startswith("Allowed by Dream Offer Policy")

    def test_lower_offer_is_neutral(self, make_student, make_company, make_config):
        config = make_config(dreamOffer={"enabled": True})
        verdict = evaluate_dream_offer(
            make_student(dream_offer=1500000), make_company(offered_salary=1499999), config, None
        )
        assert verdict.applies
        assert not verdict.overrides
        assert not verdict.blocks
        assert verdict.reason is None

    def test_no_dream_offer_declared(self, make_student, make_company, make_config):
        config = make_config(dreamOffer={"enabled": True})
        verdict = evaluate_dream_offer(make_student(dream_offer=0), make_company(), config, None)
        assert not verdict.applies


class TestDreamCompany:

    def test_case_insensitive_match_overrides(self, make_student, make_company, make_config):
        config = make_config(dreamCompany={"enabled": True})
        verdict = evaluate_dream_company(
            make_student(dream_company="acme CORP"), make_company(name="Acme Corp"), config, None
        )
        assert verdict.overrides
        assert "Acme Corp is student's declared dream company" in verdict.reason

    def test_other_company_does_not_override(self, make_student, make_company, make_config):
        config = make_config(dreamCompany={"enabled": True})
        verdict = evaluate_dream_company(
            make_student(dream_company="Globex"), make_company(name="Acme Corp"), config, None
        )
        assert not verdict.overrides
        assert verdict.applies
        assert verdict.reason is None

    def test_unset_dream_company(self, make_student, make_company, make_config):
        config = make_config(dreamCompany={"enabled": True})
        verdict = evaluate_dream_company(make_student(dream_company=""), make_company(), config, None)
        assert not verdict.applies


class TestCGPAThreshold:

    CONFIG = {"enabled": True, "minimumCGPA": 7.0, "highSalaryThreshold": 1200000}

    def test_blocks_at_salary_threshold(self, make_student, make_company, make_config):
        config = make_config(cgpaThreshold=self.CONFIG)
        verdict = evaluate_cgpa_threshold(
            make_student(cgpa=6.99), make_company(offered_salary=1200000), config, None
        )
        assert verdict.blocks
        assert "CGPA (6.99) is below minimum (7.00)" in verdict.reason

    def test_does_not_apply_below_salary_threshold(self, make_student, make_company, make_config):
        config = make_config(cgpaThreshold=self.CONFIG)
        verdict = evaluate_cgpa_threshold(
            make_student(cgpa=6.99), make_company(offered_salary=1199999), config, None
        )
        assert not verdict.applies
        assert verdict.reason is None

    def test_meeting_minimum_is_neutral(self, make_student, make_company, make_config):
        config = make_config(cgpaThreshold=self.CONFIG)
        verdict = evaluate_cgpa_threshold(
            make_student(cgpa=7.0), make_company(offered_salary=5000000), config, None
        )
        assert verdict.applies
        assert not verdict.blocks
        assert not verdict.overrides
        assert verdict.reason is None


class TestPlacementPercentage:

    def test_exactly_at_target_is_not_blocked(self, make_student, make_company, make_config):
        config = make_config(placementPercentage={"enabled": True, "targetPercentage": 90})
        verdict = evaluate_placement_percentage(
            make_student(), make_company(), config, PlacementStats(placed_count=9, total_count=10)
        )
        assert verdict.applies
        assert not verdict.blocks
        assert verdict.reason is None

    def test_one_point_below_target_is_blocked(self, make_student, make_company, make_config):
        config = make_config(placementPercentage={"enabled": True, "targetPercentage": 90})
        verdict = evaluate_placement_percentage(
            make_student(), make_company(), config, PlacementStats(placed_count=89, total_count=100)
        )
        assert verdict.blocks
        assert "(89.00%) is below target (90.00%)" in verdict.reason

    def test_blocks_regardless_of_offer_size(self, make_student, make_company, make_config):
        config = make_config(placementPercentage={"enabled": True, "targetPercentage": 50})
        verdict = evaluate_placement_percentage(
            make_student(), make_company(offered_salary=1), config, PlacementStats(placed_count=1, total_count=10)
        )
        assert verdict.blocks

    def test_empty_population_counts_as_zero_percent(self, make_student, make_company, make_config):
        config = make_config(placementPercentage={"enabled": True, "targetPercentage": 10})
        verdict = evaluate_placement_percentage(
            make_student(), make_company(), config, PlacementStats(placed_count=0, total_count=0)
        )
        assert verdict.blocks

    def test_requires_stats_when_enabled(self, make_student, make_company, make_config):
        config = make_config(placementPercentage={"enabled": True, "targetPercentage": 10})
        with pytest.raises(ValueError):
            evaluate_placement_percentage(make_student(), make_company(), config, None)


class TestOfferCategory:

    @pytest.mark.parametrize("salary,tier", [
        (3000000, OfferTier.l1),
        (2999999, OfferTier.l2),
        (1000000, OfferTier.l2),
        (999999, OfferTier.l3),
        (0, OfferTier.l3),
    ])
    def test_tier_boundaries(self, make_config, salary, tier):
        config = make_config(offerCategory=OFFER_CATEGORY)
        assert classify_offer_tier(salary, config.offer_category) == tier

    def test_l1_always_blocks(self, make_student, make_company, make_config):
        config = make_config(offerCategory=OFFER_CATEGORY)
        verdict = evaluate_offer_category(
            make_student(current_salary=3500000), make_company(offered_salary=9000000), config, None
        )
        assert verdict.blocks
        assert "L1" in verdict.specifics

    def test_l2_exact_hike_is_enough(self, make_student, make_company, make_config):
        config = make_config(offerCategory=OFFER_CATEGORY)
        verdict = evaluate_offer_category(
            make_student(current_salary=2000000), make_company(offered_salary=2600000), config, None
        )
        assert verdict.applies
        assert not verdict.blocks
        assert verdict.reason is None
        assert "minimum offer 2600000.00" in verdict.specifics

    def test_l2_one_below_required_hike_blocks(self, make_student, make_company, make_config):
        config = make_config(offerCategory=OFFER_CATEGORY)
        verdict = evaluate_offer_category(
            make_student(current_salary=2000000), make_company(offered_salary=2599999), config, None
        )
        assert verdict.blocks
        assert "minimum offer 2600000.00" in verdict.specifics
        assert "offered 2599999.00" in verdict.specifics

    def test_l3_is_neutral(self, make_student, make_company, make_config):
        config = make_config(offerCategory=OFFER_CATEGORY)
        verdict = evaluate_offer_category(
            make_student(current_salary=500000), make_company(offered_salary=100), config, None
        )
        assert verdict.applies
        assert not verdict.blocks
        assert not verdict.overrides
        assert verdict.reason is None
