"""Pricing lookups and the pack comparison table."""
from __future__ import annotations

from typing import List, Optional, Tuple

from ..entitlements import EntitlementResolver, Pack, parse_pack
from .models import PackComparison, PremiumPrice
from .repository import PricingRepository

PURCHASABLE_PACKS: Tuple[Pack, ...] = (Pack.STARTER, Pack.PRO, Pack.ENTREPRISE)

FREE_PACK_FEATURES: Tuple[str, ...] = (
    "3 simultaneous ads",
    "3 photos per ad",
    "Basic messaging",
    "Limited statistics",
)


class PricingService:
    """Reads active prices and joins them with the tier table."""

    def __init__(
        self,
        repository: PricingRepository,
        resolver: EntitlementResolver,
    ) -> None:
        self._repository = repository
        self._resolver = resolver

    def list_pricing(self) -> List[PremiumPrice]:
        return list(self._repository.list_active())

    def get_pack_pricing(self, pack_name: str) -> PremiumPrice:
        """Return the active price of a purchasable pack.

        Raises ``ValueError`` for names outside :data:`PURCHASABLE_PACKS` and
        ``LookupError`` when no active price exists.
        """

        pack = parse_pack(pack_name)
        if pack not in PURCHASABLE_PACKS:
            accepted = ", ".join(item.value for item in PURCHASABLE_PACKS)
            raise ValueError(f"Invalid pack name. Accepted values: {accepted}")

        price = self._repository.get_active(pack.value)
        if price is None:
            raise LookupError(f"No active price for pack {pack.value}")
        return price

    def pack_offer(self, pack_name: Optional[str]) -> Tuple[List[str], float]:
        """Return ``(features, price)`` of the active row for ``pack_name``.

        Packs without an active row, including the free pack, report no
        features and a zero price.
        """

        if not pack_name:
            return [], 0.0
        price = self._repository.get_active(pack_name)
        if price is None:
            return [], 0.0
        return list(price.features), price.price_ar

    def compare(self) -> List[PackComparison]:
        """Return the free pack followed by every active priced pack."""

        catalog = self._resolver.catalog
        comparison = [
            PackComparison(
                pack_name=Pack.SIMPLE.value,
                price=0.0,
                features=list(FREE_PACK_FEATURES),
                limits=catalog.get(Pack.SIMPLE),
            )
        ]
        for price in self._repository.list_active():
            pack = parse_pack(price.pack_name)
            if pack == Pack.SIMPLE:
                continue
            comparison.append(
                PackComparison(
                    pack_name=price.pack_name,
                    price=price.price_ar,
                    features=list(price.features),
                    limits=catalog.get(pack) if pack is not None else None,
                )
            )
        return comparison
