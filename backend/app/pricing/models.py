"""Domain models for premium pack pricing."""
from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..entitlements import TierLimits


class PremiumPrice(BaseModel):
    """Active price row for a purchasable pack."""

    id: Optional[int] = None
    pack_name: str
    price_ar: float = Field(ge=0)
    price_usd: Optional[float] = Field(default=None, ge=0)
    duration_days: Optional[int] = None
    features: List[str] = Field(default_factory=list)
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(frozen=True)

    @field_validator("features", mode="before")
    @classmethod
    def _default_features(cls, value: object) -> object:
        return [] if value is None else value


class PackComparison(BaseModel):
    """One row of the pack comparison table."""

    pack_name: str
    price: float
    features: List[str] = Field(default_factory=list)
    limits: Optional[TierLimits] = None

    model_config = ConfigDict(frozen=True)
