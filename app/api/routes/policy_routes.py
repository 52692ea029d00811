"""
Policy Routes

GET /policies - Current policy configuration
POST /policies/configure - Replace the policy configuration
PUT /policies - Same as POST /policies/configure
"""

from fastapi import APIRouter, Body
from typing import Any, Dict

from app.services.policy_service import get_policy_service
from app.schemas.schemas import PolicyConfig

router = APIRouter(prefix="/policies", tags=["Policies"])


@router.get("", response_model=PolicyConfig)
async def get_policies():
    """Current policy configuration (all six blocks)."""
    return get_policy_service().get_config()


@router.post("/configure", response_model=PolicyConfig)
async def configure_policies(document: Dict[str, Any] = Body(...)):
    """
    Replace the whole policy configuration.

    Missing blocks are stored as disabled. Any out-of-range parameter
    rejects the entire document (422) and the stored one stays active.
    """
    return get_policy_service().set_config(document)


@router.put("", response_model=PolicyConfig)
async def replace_policies(document: Dict[str, Any] = Body(...)):
    """Alias of POST /policies/configure."""
    return get_policy_service().set_config(document)
