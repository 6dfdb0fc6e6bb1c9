"""Application wiring for premium entitlements and pricing."""
from __future__ import annotations

import logging
from functools import lru_cache
from typing import List, Optional, Tuple

from ..entitlements import (
    DEFAULT_TIER_CATALOG,
    EntitlementResolver,
    EntitlementSnapshot,
    PostgresUsageLedger,
    UsageLedger,
    UserEntitlement,
)
from ..feature_gates import EntitlementContext, QuotaDecision, parse_action
from ..pricing import PackComparison, PostgresPricingRepository, PremiumPrice, PricingService

logger = logging.getLogger("premium")


@lru_cache(maxsize=1)
def get_entitlement_resolver() -> EntitlementResolver:
    return EntitlementResolver(DEFAULT_TIER_CATALOG)


@lru_cache(maxsize=1)
def get_usage_ledger() -> UsageLedger:
    return PostgresUsageLedger()


@lru_cache(maxsize=1)
def get_pricing_service() -> PricingService:
    return PricingService(
        repository=PostgresPricingRepository(),
        resolver=get_entitlement_resolver(),
    )


def load_entitlement(user_id: int) -> UserEntitlement:
    """Read the user's usage snapshot from the ledger."""

    try:
        return get_usage_ledger().get_entitlement(user_id)
    except LookupError:
        raise
    except Exception:
        logger.exception("Failed to read usage ledger for user %s", user_id)
        raise


def get_entitlement_context(user_id: int) -> EntitlementContext:
    return EntitlementContext(load_entitlement(user_id), get_entitlement_resolver())


def get_limits_snapshot(user_id: int) -> EntitlementSnapshot:
    """Return limits, premium status, usage and remaining quota for a user."""

    return get_entitlement_context(user_id).snapshot()


def get_pack_offer(pack_name: Optional[str]) -> Tuple[List[str], float]:
    """Return the features and price listed for the user's current pack."""

    return get_pricing_service().pack_offer(pack_name)


def check_action(user_id: int, action: object) -> tuple[QuotaDecision, UserEntitlement]:
    """Return the quota decision for ``action`` along with the snapshot it used."""

    kind = parse_action(action)
    context = get_entitlement_context(user_id)
    decision = context.can_perform(kind)
    return decision, context.entitlement


def list_pricing() -> List[PremiumPrice]:
    return get_pricing_service().list_pricing()


def get_pack_pricing(pack_name: str) -> PremiumPrice:
    return get_pricing_service().get_pack_pricing(pack_name)


def compare_packs() -> List[PackComparison]:
    return get_pricing_service().compare()


__all__ = [
    "check_action",
    "compare_packs",
    "get_entitlement_context",
    "get_entitlement_resolver",
    "get_limits_snapshot",
    "get_pack_offer",
    "get_pack_pricing",
    "get_pricing_service",
    "get_usage_ledger",
    "list_pricing",
    "load_entitlement",
]
