"""Static tier table for premium packs."""
from __future__ import annotations

from types import MappingProxyType
from typing import Iterator, Mapping, Optional, Tuple

from .models import UNLIMITED, Pack, TierLimits

SIMPLE_LIMITS = TierLimits(
    max_ads=3,
    max_photos=3,
    max_featured_ads=0,
    max_modifications=5,
)

STARTER_LIMITS = TierLimits(
    max_ads=10,
    max_photos=5,
    max_featured_ads=0,
    max_modifications=10,
    has_stats=True,
)

PRO_LIMITS = TierLimits(
    max_ads=50,
    max_photos=15,
    max_featured_ads=5,
    max_modifications=20,
    has_stats=True,
    has_advanced_stats=True,
    has_auto_boost=True,
)

ENTREPRISE_LIMITS = TierLimits(
    max_ads=UNLIMITED,
    max_photos=30,
    max_featured_ads=15,
    max_modifications=UNLIMITED,
    has_stats=True,
    has_advanced_stats=True,
    has_auto_boost=True,
    has_complete_stats=True,
    multi_users=5,
)

TIER_LIMITS: Mapping[Pack, TierLimits] = MappingProxyType(
    {
        Pack.SIMPLE: SIMPLE_LIMITS,
        Pack.STARTER: STARTER_LIMITS,
        Pack.PRO: PRO_LIMITS,
        Pack.ENTREPRISE: ENTREPRISE_LIMITS,
    }
)

FALLBACK_PACK = Pack.SIMPLE


def parse_pack(value: object) -> Optional[Pack]:
    """Return the :class:`Pack` named by ``value`` or ``None`` if unrecognized."""

    if isinstance(value, Pack):
        return value
    if not isinstance(value, str):
        return None
    try:
        return Pack(value)
    except ValueError:
        return None


class TierCatalog:
    """Read-only lookup over a pack → limits table."""

    def __init__(
        self,
        limits: Mapping[Pack, TierLimits] = TIER_LIMITS,
        *,
        fallback: Pack = FALLBACK_PACK,
    ) -> None:
        if fallback not in limits:
            raise ValueError(f"fallback pack {fallback.value!r} missing from tier table")
        self._limits = MappingProxyType(dict(limits))
        self._fallback = fallback

    @property
    def fallback(self) -> Pack:
        return self._fallback

    def get(self, pack: Pack) -> Optional[TierLimits]:
        return self._limits.get(pack)

    def __getitem__(self, pack: Pack) -> TierLimits:
        return self._limits[pack]

    def items(self) -> Iterator[Tuple[Pack, TierLimits]]:
        return iter(self._limits.items())

    def __contains__(self, pack: object) -> bool:
        return pack in self._limits


DEFAULT_TIER_CATALOG = TierCatalog()
