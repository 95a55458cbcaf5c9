# perks_api/services/perks.py
"""
Persistence operations for perks.

Each function takes the request's ``AsyncSession`` and issues a single
query or unit of work. Ordering, id assignment, timestamps and merchant
uniqueness are left to the database. Absent rows are reported as ``None``
(or ``False`` for deletes) so the route layer decides the response.
"""
from __future__ import annotations

from typing import Optional, Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from perks_api.core.exceptions import DuplicateKeyError
from perks_api.core.logging import get_structlog_logger
from perks_api.models.perk import Perk
from perks_api.schemas.perk import PerkCreate, PerkUpdate

logger = get_structlog_logger(__name__)

UNIQUE_VIOLATION_SQLSTATE = "23505"


def parse_perk_id(raw: str) -> Optional[UUID]:
    """Parse a path id; malformed ids cannot match any perk."""
    try:
        return UUID(str(raw))
    except ValueError:
        return None


def is_unique_violation(exc: IntegrityError) -> bool:
    orig = exc.orig
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if sqlstate == UNIQUE_VIOLATION_SQLSTATE:
        return True
    return "unique" in str(orig).lower()


async def list_perks(session: AsyncSession) -> Sequence[Perk]:
    stmt = select(Perk).order_by(Perk.created_at.desc())
    result = await session.execute(stmt)
    return result.scalars().all()


async def find_perks_by_title(session: AsyncSession, title: str) -> Sequence[Perk]:
    stmt = (
        select(Perk)
        .where(Perk.title == title)
        .order_by(Perk.created_at.desc())
    )
    result = await session.execute(stmt)
    return result.scalars().all()


async def get_perk(session: AsyncSession, perk_id: str) -> Optional[Perk]:
    key = parse_perk_id(perk_id)
    if key is None:
        return None
    return await session.get(Perk, key)


async def create_perk(session: AsyncSession, data: PerkCreate) -> Perk:
    """Insert a perk; a merchant collision raises ``DuplicateKeyError``."""
    perk = Perk(**data.to_columns())
    session.add(perk)

    try:
        await session.commit()
    except IntegrityError as e:
        await session.rollback()
        if not is_unique_violation(e):
            raise
        logger.warning("perk.duplicate", merchant=data.merchant)
        raise DuplicateKeyError(details={"merchant": data.merchant}) from e

    await session.refresh(perk)
    logger.info("perk.created", perk_id=str(perk.id), merchant=perk.merchant)
    return perk


async def update_perk(
    session: AsyncSession,
    perk_id: str,
    changes: PerkUpdate,
) -> Optional[Perk]:
    """Merge submitted fields into the stored perk and return its new state."""
    perk = await get_perk(session, perk_id)
    if perk is None:
        return None

    columns = changes.to_columns()
    perk.update(**columns)
    # Merchant collisions are not special-cased here
    await session.commit()
    await session.refresh(perk)

    logger.info("perk.updated", perk_id=str(perk.id), fields=sorted(columns))
    return perk


async def delete_perk(session: AsyncSession, perk_id: str) -> bool:
    perk = await get_perk(session, perk_id)
    if perk is None:
        return False

    await session.delete(perk)
    await session.commit()

    logger.info("perk.deleted", perk_id=str(perk.id))
    return True


__all__ = [
    "create_perk",
    "delete_perk",
    "find_perks_by_title",
    "get_perk",
    "list_perks",
    "parse_perk_id",
    "update_perk",
]
