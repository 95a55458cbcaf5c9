# perks_api/schemas/__init__.py
"""
Pydantic schemas for request validation and response serialization.
"""

from perks_api.schemas.perk import (
    DeleteResponse,
    PerkCreate,
    PerkEnvelope,
    PerkResponse,
    PerkUpdate,
    validate_perk_create,
    validate_perk_update,
)

__all__ = [
    "DeleteResponse",
    "PerkCreate",
    "PerkEnvelope",
    "PerkResponse",
    "PerkUpdate",
    "validate_perk_create",
    "validate_perk_update",
]
