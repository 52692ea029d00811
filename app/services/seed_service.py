"""
Seed Service - first-run data.

On startup (when SEED_ON_STARTUP is set):
- create the schema
- load students.json / companies.json into EMPTY tables only
- store the default policy document if none is stored

Seed files use the same camelCase shape as the API.
"""

import json
import logging
import os
from typing import List

from app.core.config import Settings
from app.db.schema import init_schema
from app.schemas.schemas import Company, StudentCreate
from app.services.fact_service import CompanyService, StudentService
from app.services.policy_service import DEFAULT_POLICY_DOCUMENT, PolicyConfigService

logger = logging.getLogger(__name__)


def _load_json_list(path: str) -> List[dict]:
    if not os.path.exists(path):
        logger.warning("Seed file not found: %s", path)
        return []
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, list):
        raise ValueError(f"Seed file {path} must contain a JSON array")
    return data


def seed_students(path: str, service: StudentService) -> int:
    if service.count() > 0:
        return 0
    records = _load_json_list(path)
    for record in records:
        service.insert(StudentCreate.model_validate(record), student_id=record.get("id"))
    logger.info("Loaded %d students from %s", len(records), path)
    return len(records)


def seed_companies(path: str, service: CompanyService) -> int:
    if service.count() > 0:
        return 0
    records = _load_json_list(path)
    for record in records:
        service.insert(Company.model_validate(record))
    logger.info("Loaded %d companies from %s", len(records), path)
    return len(records)


def seed_database(settings: Settings) -> dict:
    """
    Prepare the store for first use. Safe to run on every startup.

    Returns:
        Counts of what was inserted
    """
    init_schema()

    students = seed_students(
        os.path.join(settings.seed_data_dir, "students.json"), StudentService()
    )
    companies = seed_companies(
        os.path.join(settings.seed_data_dir, "companies.json"), CompanyService()
    )

    policies = PolicyConfigService()
    policy_seeded = not policies.is_configured()
    if policy_seeded:
        policies.set_config(DEFAULT_POLICY_DOCUMENT)
        logger.info("Default policy configuration initialized")

    return {"students": students, "companies": companies, "policy": policy_seeded}
