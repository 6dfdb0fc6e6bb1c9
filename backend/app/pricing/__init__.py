"""Premium pricing package: price rows, repository and comparison."""

from .models import PackComparison, PremiumPrice
from .repository import PostgresPricingRepository, PricingRepository
from .service import FREE_PACK_FEATURES, PURCHASABLE_PACKS, PricingService

__all__ = [
    "FREE_PACK_FEATURES",
    "PURCHASABLE_PACKS",
    "PackComparison",
    "PostgresPricingRepository",
    "PremiumPrice",
    "PricingRepository",
    "PricingService",
]
