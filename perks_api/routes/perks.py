# perks_api/routes/perks.py
from __future__ import annotations

from typing import Any, List, Optional

from fastapi import APIRouter, Body, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from perks_api.core.exceptions import NotFoundError, ValidationError
from perks_api.db.session import get_session
from perks_api.schemas.perk import (
    DeleteResponse,
    PerkEnvelope,
    PerkResponse,
    validate_perk_create,
    validate_perk_update,
)
from perks_api.services import perks as perk_service

router = APIRouter(prefix="/perks", tags=["perks"])

TITLE_REQUIRED_MESSAGE = "Title query parameter is required"


async def list_all_perks(session: AsyncSession) -> List[PerkResponse]:
    perks = await perk_service.list_perks(session)
    return [PerkResponse.model_validate(perk) for perk in perks]


async def filter_perks(session: AsyncSession, title: Optional[str]) -> List[PerkResponse]:
    if not title:
        raise ValidationError(TITLE_REQUIRED_MESSAGE)

    perks = await perk_service.find_perks_by_title(session, title)
    return [PerkResponse.model_validate(perk) for perk in perks]


@router.get(
    "",
    response_model=List[PerkResponse],
    responses={status.HTTP_400_BAD_REQUEST: {"description": "Query string without a title"}},
)
async def list_perks(
    request: Request,
    title: Optional[str] = Query(None, description="Exact title to match"),
    session: AsyncSession = Depends(get_session),
):
    """List every perk, newest first, or only those with an exact title.

    Any query string makes this a filter request, which requires ``title``.
    """
    if request.query_params:
        return await filter_perks(session, title)
    return await list_all_perks(session)


@router.get("/{perk_id}", response_model=PerkEnvelope)
async def get_perk(perk_id: str, session: AsyncSession = Depends(get_session)):
    perk = await perk_service.get_perk(session, perk_id)
    if perk is None:
        raise NotFoundError(details={"perk_id": perk_id})
    return PerkEnvelope(perk=PerkResponse.model_validate(perk))


@router.post("", response_model=PerkEnvelope, status_code=status.HTTP_201_CREATED)
async def create_perk(
    payload: Any = Body(default=None),
    session: AsyncSession = Depends(get_session),
):
    data = validate_perk_create(payload)
    perk = await perk_service.create_perk(session, data)
    return PerkEnvelope(perk=PerkResponse.model_validate(perk))


@router.patch("/{perk_id}", response_model=PerkEnvelope)
async def update_perk(
    perk_id: str,
    payload: Any = Body(default=None),
    session: AsyncSession = Depends(get_session),
):
    """Partially update a perk; fields left out of the body keep their values."""
    changes = validate_perk_update(payload)
    perk = await perk_service.update_perk(session, perk_id, changes)
    if perk is None:
        raise NotFoundError(details={"perk_id": perk_id})
    return PerkEnvelope(perk=PerkResponse.model_validate(perk))


@router.delete("/{perk_id}", response_model=DeleteResponse)
async def delete_perk(perk_id: str, session: AsyncSession = Depends(get_session)):
    deleted = await perk_service.delete_perk(session, perk_id)
    if not deleted:
        raise NotFoundError(details={"perk_id": perk_id})
    return DeleteResponse(ok=True)
