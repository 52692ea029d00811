"""
Policy Config Service - the single active policy document.

The document is stored as JSON in the one-row policy_config table.
Writes validate the whole six-block document first and replace it in one
statement: a rejected write leaves the stored document untouched.
Reads always return the current document; there is no versioning.
"""

import logging
from typing import Any, Dict

from pydantic import ValidationError
from sqlalchemy import text

from app.core.errors import InvalidConfigError
from app.db.database import get_db_session, execute_raw_sql
from app.schemas.schemas import PolicyConfig

logger = logging.getLogger(__name__)

ACTIVE_CONFIG_ID = 1

# Seeded when no document is stored yet
DEFAULT_POLICY_DOCUMENT: Dict[str, Any] = {
    "maximumCompanies": {"enabled": True, "maxN": 5},
    "dreamOffer": {"enabled": True},
    "dreamCompany": {"enabled": True},
    "cgpaThreshold": {"enabled": True, "minimumCGPA": 7.0, "highSalaryThreshold": 1200000},
    "placementPercentage": {"enabled": False, "targetPercentage": 80},
    "offerCategory": {
        "enabled": True,
        "l1ThresholdAmount": 2000000,
        "l2ThresholdAmount": 1000000,
        "requiredHikePercentage": 30
    }
}


def validate_policy_document(document: Any) -> PolicyConfig:
    """
    Validate a raw policy document.

    Raises:
        InvalidConfigError: listing every out-of-range parameter
    """
    if isinstance(document, PolicyConfig):
        return document
    if not isinstance(document, dict):
        raise InvalidConfigError("Policy configuration must be a JSON object")

    try:
        return PolicyConfig.model_validate(document)
    except ValidationError as e:
        errors = [
            {
                "field": ".".join(str(part) for part in error["loc"]),
                "message": error["msg"]
            }
            for error in e.errors()
        ]
        raise InvalidConfigError("Invalid policy configuration", errors) from e


class PolicyConfigService:
    """Reads and replaces the active policy document."""

    def get_config(self) -> PolicyConfig:
        """Current document; the default one if nothing is stored yet."""
        rows = execute_raw_sql(
            "SELECT document FROM policy_config WHERE config_id = :id",
            {"id": ACTIVE_CONFIG_ID}
        )
        if not rows:
            return PolicyConfig.model_validate(DEFAULT_POLICY_DOCUMENT)
        return PolicyConfig.model_validate_json(rows[0]["document"])

    def set_config(self, document: Any) -> PolicyConfig:
        """
        Replace the whole document.

        Args:
            document: camelCase dict (or PolicyConfig); missing blocks read as disabled

        Returns:
            The stored PolicyConfig

        Raises:
            InvalidConfigError: nothing is written
        """
        try:
            config = validate_policy_document(document)
        except InvalidConfigError as e:
            logger.warning("Rejected policy configuration: %s", e.errors)
            raise

        with get_db_session() as db:
            db.execute(
                text("""
                    INSERT INTO policy_config (config_id, document, updated_at)
                    VALUES (:id, :document, CURRENT_TIMESTAMP)
                    ON CONFLICT (config_id) DO UPDATE SET
                        document = EXCLUDED.document,
                        updated_at = CURRENT_TIMESTAMP
                """),
                {"id": ACTIVE_CONFIG_ID, "document": config.model_dump_json(by_alias=True)}
            )

        logger.info("Policy configuration updated: %s", config.model_dump(by_alias=True))
        return config

    def is_configured(self) -> bool:
        rows = execute_raw_sql(
            "SELECT COUNT(*) AS total FROM policy_config WHERE config_id = :id",
            {"id": ACTIVE_CONFIG_ID}
        )
        return int(rows[0]["total"]) > 0


def get_policy_service() -> PolicyConfigService:
    """Get policy config service instance."""
    return PolicyConfigService()


def get_policy_config() -> PolicyConfig:
    return get_policy_service().get_config()


def set_policy_config(document: Any) -> PolicyConfig:
    return get_policy_service().set_config(document)
