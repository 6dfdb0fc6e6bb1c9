"""Resolve pack limits and premium windows for usage snapshots."""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from .catalog import DEFAULT_TIER_CATALOG, TierCatalog, parse_pack
from .models import (
    UNLIMITED,
    EntitlementSnapshot,
    Pack,
    RemainingQuota,
    TierLimits,
    UserEntitlement,
    ensure_utc,
)

logger = logging.getLogger(__name__)


def remaining_quota(limit: int, used: int) -> int:
    """Return what is left of ``limit`` after ``used``, or ``-1`` if unlimited."""

    if limit == UNLIMITED:
        return UNLIMITED
    return max(0, limit - used)


class EntitlementResolver:
    """Maps packs to tier limits and evaluates premium windows.

    The resolver holds no mutable state: the catalog is read-only and the clock
    is only read. A single instance is shared across requests.
    """

    def __init__(
        self,
        catalog: TierCatalog = DEFAULT_TIER_CATALOG,
        *,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self._catalog = catalog
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    @property
    def catalog(self) -> TierCatalog:
        return self._catalog

    def now(self) -> datetime:
        return ensure_utc(self._clock())  # type: ignore[return-value]

    def resolve_pack(self, pack: object) -> Pack:
        """Return the canonical pack, falling back for unknown values."""

        resolved = parse_pack(pack)
        if resolved is None or resolved not in self._catalog:
            logger.debug("Unrecognized pack %r, using %s limits", pack, self._catalog.fallback.value)
            return self._catalog.fallback
        return resolved

    def resolve_limits(self, pack: object) -> TierLimits:
        """Return the limits for ``pack``. Never raises."""

        return self._catalog[self.resolve_pack(pack)]

    def is_premium_active(self, premium_end_date: Optional[datetime]) -> bool:
        """True iff the window has an end date strictly after now."""

        if premium_end_date is None:
            return False
        return ensure_utc(premium_end_date) > self.now()  # type: ignore[operator]

    def remaining(self, entitlement: UserEntitlement) -> RemainingQuota:
        limits = self.resolve_limits(entitlement.pack)
        return RemainingQuota(
            ads=remaining_quota(limits.max_ads, entitlement.ads_count),
            featured_ads=remaining_quota(limits.max_featured_ads, entitlement.featured_ads_used),
            modifications=remaining_quota(
                limits.max_modifications, entitlement.ad_modifications_used
            ),
        )

    def snapshot(self, entitlement: UserEntitlement) -> EntitlementSnapshot:
        """Resolve limits, activity and remaining quota for ``entitlement``."""

        return EntitlementSnapshot(
            entitlement=entitlement,
            limits=self.resolve_limits(entitlement.pack),
            is_premium_active=self.is_premium_active(entitlement.premium_end_date),
            remaining=self.remaining(entitlement),
        )
