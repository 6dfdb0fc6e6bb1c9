"""Domain models for premium packs, tier limits and usage snapshots."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, field_validator

UNLIMITED = -1


class Pack(str, Enum):
    """Canonical identifiers for premium packs."""

    SIMPLE = "simple"
    STARTER = "starter"
    PRO = "pro"
    ENTREPRISE = "entreprise"


@dataclass(frozen=True)
class TierLimits:
    """Limits granted by a pack. ``-1`` marks an unlimited quota."""

    max_ads: int
    max_photos: int
    max_featured_ads: int
    max_modifications: int
    has_stats: bool = False
    has_advanced_stats: bool = False
    has_auto_boost: bool = False
    has_complete_stats: bool = False
    multi_users: Optional[int] = None

    def to_dict(self) -> Dict[str, int | bool]:
        """Serialize limits using the API's camelCase keys."""

        data: Dict[str, int | bool] = {
            "maxAds": self.max_ads,
            "maxPhotos": self.max_photos,
            "maxFeaturedAds": self.max_featured_ads,
            "maxModifications": self.max_modifications,
            "hasStats": self.has_stats,
            "hasAdvancedStats": self.has_advanced_stats,
            "hasAutoBoost": self.has_auto_boost,
            "hasCompleteStats": self.has_complete_stats,
        }
        if self.multi_users is not None:
            data["multiUsers"] = self.multi_users
        return data


def ensure_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Return ``value`` as an aware UTC datetime; naive values are taken as UTC."""

    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class UserEntitlement(BaseModel):
    """Per-user usage snapshot read from the usage ledger."""

    user_id: int
    pack: Optional[str] = Pack.SIMPLE.value
    ads_count: int = 0
    featured_ads_used: int = 0
    ad_modifications_used: int = 0
    boost_count_used: int = 0
    premium_start_date: Optional[datetime] = None
    premium_end_date: Optional[datetime] = None

    model_config = ConfigDict(frozen=True)

    @field_validator("pack", mode="before")
    @classmethod
    def _normalize_pack(cls, value: object) -> Optional[str]:
        if isinstance(value, Pack):
            return value.value
        return value  # type: ignore[return-value]

    @field_validator(
        "ads_count",
        "featured_ads_used",
        "ad_modifications_used",
        "boost_count_used",
    )
    @classmethod
    def _validate_counter(cls, value: int) -> int:
        if value < 0:
            raise ValueError("usage counters must be >= 0")
        return value

    @field_validator("premium_start_date", "premium_end_date")
    @classmethod
    def _normalize_timestamp(cls, value: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(value)


@dataclass(frozen=True)
class RemainingQuota:
    """Remaining quota per limit, ``-1`` when the limit is unlimited."""

    ads: int
    featured_ads: int
    modifications: int

    def to_dict(self) -> Dict[str, int]:
        return {
            "ads": self.ads,
            "featuredAds": self.featured_ads,
            "modifications": self.modifications,
        }


@dataclass(frozen=True)
class EntitlementSnapshot:
    """Resolved view of a user's entitlement at a point in time."""

    entitlement: UserEntitlement
    limits: TierLimits
    is_premium_active: bool
    remaining: RemainingQuota

    @property
    def current_pack(self) -> Optional[str]:
        return self.entitlement.pack
