"""API schemas for premium endpoints."""
from __future__ import annotations

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..entitlements import EntitlementSnapshot, RemainingQuota, TierLimits
from ..feature_gates import QuotaDecision
from ..pricing import PackComparison, PremiumPrice


class LimitsOut(BaseModel):
    max_ads: int = Field(alias="maxAds")
    max_photos: int = Field(alias="maxPhotos")
    max_featured_ads: int = Field(alias="maxFeaturedAds")
    max_modifications: int = Field(alias="maxModifications")
    has_stats: bool = Field(alias="hasStats")
    has_advanced_stats: bool = Field(alias="hasAdvancedStats")
    has_auto_boost: bool = Field(alias="hasAutoBoost")
    has_complete_stats: bool = Field(alias="hasCompleteStats", default=False)
    multi_users: Optional[int] = Field(alias="multiUsers", default=None)

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_limits(cls, limits: TierLimits) -> "LimitsOut":
        return cls(
            max_ads=limits.max_ads,
            max_photos=limits.max_photos,
            max_featured_ads=limits.max_featured_ads,
            max_modifications=limits.max_modifications,
            has_stats=limits.has_stats,
            has_advanced_stats=limits.has_advanced_stats,
            has_auto_boost=limits.has_auto_boost,
            has_complete_stats=limits.has_complete_stats,
            multi_users=limits.multi_users,
        )


class UsageOut(BaseModel):
    ads_count: int = Field(alias="adsCount")
    featured_ads_used: int = Field(alias="featuredAdsUsed")
    modifications_used: int = Field(alias="modificationsUsed")
    boosts_used: int = Field(alias="boostsUsed")

    model_config = ConfigDict(populate_by_name=True)


class RemainingOut(BaseModel):
    ads: int
    featured_ads: int = Field(alias="featuredAds")
    modifications: int

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_remaining(cls, remaining: RemainingQuota) -> "RemainingOut":
        return cls(
            ads=remaining.ads,
            featured_ads=remaining.featured_ads,
            modifications=remaining.modifications,
        )


class MyLimitsResponse(BaseModel):
    current_pack: Optional[str] = Field(alias="currentPack")
    is_premium_active: bool = Field(alias="isPremiumActive")
    premium_start_date: Optional[datetime] = Field(alias="premiumStartDate", default=None)
    premium_end_date: Optional[datetime] = Field(alias="premiumEndDate", default=None)
    limits: LimitsOut
    usage: UsageOut
    remaining: RemainingOut
    features: List[str] = Field(default_factory=list)
    price: float = 0.0

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_snapshot(
        cls,
        snapshot: EntitlementSnapshot,
        features: Optional[List[str]] = None,
        price: float = 0.0,
    ) -> "MyLimitsResponse":
        entitlement = snapshot.entitlement
        return cls(
            current_pack=snapshot.current_pack,
            is_premium_active=snapshot.is_premium_active,
            premium_start_date=entitlement.premium_start_date,
            premium_end_date=entitlement.premium_end_date,
            limits=LimitsOut.from_limits(snapshot.limits),
            usage=UsageOut(
                ads_count=entitlement.ads_count,
                featured_ads_used=entitlement.featured_ads_used,
                modifications_used=entitlement.ad_modifications_used,
                boosts_used=entitlement.boost_count_used,
            ),
            remaining=RemainingOut.from_remaining(snapshot.remaining),
            features=list(features or []),
            price=price,
        )


class CanDoRequest(BaseModel):
    action: Optional[Any] = None


class CanDoResponse(BaseModel):
    can_do: bool = Field(alias="canDo")
    reason: str = ""
    current_pack: Optional[str] = Field(alias="currentPack")
    limits: LimitsOut

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_decision(cls, decision: QuotaDecision, current_pack: Optional[str]) -> "CanDoResponse":
        return cls(
            can_do=decision.can_do,
            reason=decision.reason,
            current_pack=current_pack,
            limits=LimitsOut.from_limits(decision.limits),
        )


class PremiumPriceOut(BaseModel):
    id: Optional[int] = None
    pack_name: str = Field(alias="packName")
    price_ar: float = Field(alias="priceAr")
    price_usd: Optional[float] = Field(alias="priceUsd", default=None)
    duration_days: Optional[int] = Field(alias="durationDays", default=None)
    features: List[str] = Field(default_factory=list)
    is_active: bool = Field(alias="isActive", default=True)
    created_at: Optional[datetime] = Field(alias="createdAt", default=None)
    updated_at: Optional[datetime] = Field(alias="updatedAt", default=None)

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_price(cls, price: PremiumPrice) -> "PremiumPriceOut":
        return cls(**price.model_dump())


class PricingListResponse(BaseModel):
    pricing: List[PremiumPriceOut]


class PackPricingResponse(BaseModel):
    pack: PremiumPriceOut


class PackComparisonOut(BaseModel):
    pack_name: str = Field(alias="packName")
    price: float
    features: List[str] = Field(default_factory=list)
    limits: Optional[LimitsOut] = None

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_comparison(cls, row: PackComparison) -> "PackComparisonOut":
        return cls(
            pack_name=row.pack_name,
            price=row.price,
            features=list(row.features),
            limits=LimitsOut.from_limits(row.limits) if row.limits else None,
        )


class PackComparisonResponse(BaseModel):
    comparison: List[PackComparisonOut]
