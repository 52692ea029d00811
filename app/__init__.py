"""
Placement Policy Engine
Decides which students may apply to which company offers under
configurable college placement policies.

Architecture:
- services/policy_evaluators: one pure rule per policy kind
- services/eligibility_engine: combines verdicts (overrides beat blocks)
- services/eligibility_service: fetches facts, single and batch decisions
- SQL store: students, companies, the active policy document
"""

__version__ = "1.0.0"
