# perks_api/models/perk.py
from __future__ import annotations

import enum
from typing import Optional

from sqlalchemy import CheckConstraint, Enum, Float, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from perks_api.db.base import Base


class PerkCategory(str, enum.Enum):
    FOOD = "food"
    TECH = "tech"
    TRAVEL = "travel"
    FITNESS = "fitness"
    OTHER = "other"


class Perk(Base):
    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    category: Mapped[PerkCategory] = mapped_column(
        Enum(
            PerkCategory,
            name="perk_category",
            native_enum=False,
            create_constraint=True,
            values_callable=lambda kinds: [kind.value for kind in kinds],
        ),
        nullable=False,
        default=PerkCategory.OTHER,
        server_default=PerkCategory.OTHER.value,
    )
    discount_percent: Mapped[float] = mapped_column(
        Float,
        nullable=False,
        default=0,
        server_default="0",
    )
    # Duplicate merchants surface as IntegrityError on insert
    merchant: Mapped[Optional[str]] = mapped_column(String, nullable=True, unique=True)

    __table_args__ = (
        CheckConstraint(
            "discount_percent >= 0 AND discount_percent <= 100",
            name="discount_percent_range",
        ),
        Index("idx_perks_title_created", "title", "created_at"),
    )
