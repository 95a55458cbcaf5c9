# perks_api/models/__init__.py
"""
SQLAlchemy ORM models for database entities.
"""

from perks_api.models.perk import Perk, PerkCategory

__all__ = [
    "Perk",
    "PerkCategory",
]
