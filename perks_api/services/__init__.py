# perks_api/services/__init__.py
"""
Persistence services organized by domain.
"""

from perks_api.services.perks import (
    create_perk,
    delete_perk,
    find_perks_by_title,
    get_perk,
    list_perks,
    update_perk,
)

__all__ = [
    "create_perk",
    "delete_perk",
    "find_perks_by_title",
    "get_perk",
    "list_perks",
    "update_perk",
]
