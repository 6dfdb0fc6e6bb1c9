"""Convenience wrapper around usage snapshots for feature gating."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional

from ..entitlements import (
    EntitlementResolver,
    EntitlementSnapshot,
    Pack,
    RemainingQuota,
    TierLimits,
    UserEntitlement,
)
from .enforcement import require_premium, require_specific_pack
from .quota import QuotaDecision, assert_can_perform, can_perform


@dataclass(frozen=True)
class EntitlementContext:
    """Facade exposing gating-centric helpers for a user's entitlement."""

    entitlement: UserEntitlement
    resolver: EntitlementResolver = field(default_factory=EntitlementResolver)

    @property
    def pack(self) -> Optional[str]:
        return self.entitlement.pack

    @property
    def limits(self) -> TierLimits:
        return self.resolver.resolve_limits(self.entitlement.pack)

    @property
    def is_premium_active(self) -> bool:
        return self.resolver.is_premium_active(self.entitlement.premium_end_date)

    @property
    def remaining(self) -> RemainingQuota:
        return self.resolver.remaining(self.entitlement)

    def snapshot(self) -> EntitlementSnapshot:
        return self.resolver.snapshot(self.entitlement)

    def can_perform(self, action: object) -> QuotaDecision:
        """Return the quota decision for ``action``."""

        return can_perform(self.entitlement, action, resolver=self.resolver)

    def assert_can_perform(self, action: object) -> QuotaDecision:
        """Raise when ``action`` exceeds the pack quota."""

        return assert_can_perform(self.entitlement, action, resolver=self.resolver)

    def require_premium(self) -> Pack:
        return require_premium(self.entitlement, resolver=self.resolver)

    def require_pack(self, allowed_packs: Iterable[Pack | str]) -> Pack:
        return require_specific_pack(self.entitlement, allowed_packs, resolver=self.resolver)
