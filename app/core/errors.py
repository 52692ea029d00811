"""
Error Taxonomy

PlacementError
├── NotFoundError         unknown student or company id (404)
├── InvalidConfigError    policy document rejected at write time (422)
└── DuplicateRecordError  record id already taken (409)

Decisions never recover from these: if a fact cannot be resolved, no
verdict is produced and the error reaches the caller. The HTTP layer maps
each class to its status code (see app.main).
"""

from typing import Any, Dict, List, Optional


class PlacementError(Exception):
    """Base class for all domain errors."""

    status_code: int = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        return {"detail": self.message}


class NotFoundError(PlacementError):
    """A student or company id does not resolve to a record."""

    status_code = 404

    def __init__(self, entity: str, identifier: Any):
        self.entity = entity
        self.identifier = identifier
        super().__init__(f"{entity} not found for ID: {identifier}")


class InvalidConfigError(PlacementError):
    """
    A policy document failed validation.

    The whole six-block document is rejected; nothing is clamped or
    partially applied.
    """

    status_code = 422

    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None):
        self.errors = errors or []
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        return {"detail": self.message, "errors": self.errors}


class DuplicateRecordError(PlacementError):
    status_code = 409

    def __init__(self, entity: str, identifier: Any):
        super().__init__(f"{entity} already exists for ID: {identifier}")
