"""Premium pack limits, usage snapshots and entitlement resolution."""

from .catalog import (
    DEFAULT_TIER_CATALOG,
    TIER_LIMITS,
    TierCatalog,
    parse_pack,
)
from .models import (
    UNLIMITED,
    EntitlementSnapshot,
    Pack,
    RemainingQuota,
    TierLimits,
    UserEntitlement,
)
from .repository import PostgresUsageLedger, UsageLedger, UserNotFoundError
from .service import EntitlementResolver, remaining_quota

__all__ = [
    "DEFAULT_TIER_CATALOG",
    "TIER_LIMITS",
    "TierCatalog",
    "parse_pack",
    "UNLIMITED",
    "EntitlementSnapshot",
    "Pack",
    "RemainingQuota",
    "TierLimits",
    "UserEntitlement",
    "PostgresUsageLedger",
    "UsageLedger",
    "UserNotFoundError",
    "EntitlementResolver",
    "remaining_quota",
]
