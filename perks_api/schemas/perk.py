# perks_api/schemas/perk.py
"""
Request validators and response shapes for perks.

Create and update payloads are validated by ``validate_perk_create`` and
``validate_perk_update``, which raise ``ValidationError`` (HTTP 400) with a
single readable message. Unknown keys and explicit ``null`` values are
rejected by both schemas.
"""
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Iterable, Optional
from uuid import UUID

import pydantic
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from perks_api.core.exceptions import ValidationError
from perks_api.models.perk import PerkCategory

# Error locations FastAPI prefixes onto request validation errors
_REQUEST_LOCATIONS = {"body", "query", "path", "header", "cookie"}


def format_validation_errors(errors: Iterable[Dict[str, Any]]) -> str:
    """Collapse pydantic error dicts into one message, e.g. ``title: Field required``."""
    messages = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if part not in _REQUEST_LOCATIONS]
        field = ".".join(loc) or "value"
        msg = error.get("msg", "Invalid value")
        if msg.startswith("Value error, "):
            msg = msg[len("Value error, "):]
        messages.append(f"{field}: {msg}")
    return "; ".join(messages) or "Invalid request"


class PerkCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: str = Field(..., min_length=2)
    description: Optional[str] = None
    category: PerkCategory = PerkCategory.OTHER
    discount_percent: float = Field(
        default=0,
        ge=0,
        le=100,
        allow_inf_nan=False,
        alias="discountPercent",
    )
    merchant: Optional[str] = None

    @field_validator("description", "merchant", mode="before")
    def reject_null(cls, v):
        if v is None:
            raise ValueError("must be a string")
        return v

    @field_validator("discount_percent", mode="before")
    def reject_bool(cls, v):
        if isinstance(v, bool):
            raise ValueError("must be a number")
        return v

    def to_columns(self) -> Dict[str, Any]:
        return self.model_dump()


class PerkUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: Optional[str] = Field(None, min_length=2)
    description: Optional[str] = None
    category: Optional[PerkCategory] = None
    discount_percent: Optional[float] = Field(
        None,
        ge=0,
        le=100,
        allow_inf_nan=False,
        alias="discountPercent",
    )
    merchant: Optional[str] = None

    @field_validator("*", mode="before")
    def reject_null(cls, v):
        if v is None:
            raise ValueError("must not be null")
        return v

    @field_validator("discount_percent", mode="before")
    def reject_bool(cls, v):
        if isinstance(v, bool):
            raise ValueError("must be a number")
        return v

    @model_validator(mode="after")
    def require_one_field(self):
        if not self.model_fields_set:
            raise ValueError("at least one field must be provided")
        return self

    def to_columns(self) -> Dict[str, Any]:
        """Only the submitted fields, keyed by column name."""
        return self.model_dump(exclude_unset=True)


def validate_perk_create(payload: Any) -> PerkCreate:
    try:
        return PerkCreate.model_validate(payload)
    except pydantic.ValidationError as e:
        raise ValidationError(format_validation_errors(e.errors())) from e


def validate_perk_update(payload: Any) -> PerkUpdate:
    try:
        return PerkUpdate.model_validate(payload)
    except pydantic.ValidationError as e:
        raise ValidationError(format_validation_errors(e.errors())) from e


class PerkResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: UUID
    title: str
    description: Optional[str] = None
    category: PerkCategory
    discount_percent: float = Field(alias="discountPercent")
    merchant: Optional[str] = None
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")


class PerkEnvelope(BaseModel):
    perk: PerkResponse


class DeleteResponse(BaseModel):
    ok: bool = True
