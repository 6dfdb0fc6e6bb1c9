"""Quota decisions for usage-limited ad actions."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional, Tuple

from ..entitlements import UNLIMITED, EntitlementResolver, TierLimits, UserEntitlement
from .exceptions import FeatureGateError, InvalidActionError

logger = logging.getLogger(__name__)


class ActionKind(str, Enum):
    """Actions a user can ask the quota gate about."""

    CREATE_AD = "create_ad"
    FEATURE_AD = "feature_ad"
    MODIFY_AD = "modify_ad"
    BOOST_AD = "boost_ad"


@dataclass(frozen=True)
class QuotaDecision:
    """Outcome of a quota check."""

    action: ActionKind
    can_do: bool
    reason: str
    limits: TierLimits

    def to_dict(self) -> Dict[str, object]:
        return {
            "action": self.action.value,
            "canDo": self.can_do,
            "reason": self.reason,
            "limits": self.limits.to_dict(),
        }


# action -> (limit accessor, usage accessor, denial label)
_QUOTA_RULES: Dict[
    ActionKind,
    Tuple[Callable[[TierLimits], int], Callable[[UserEntitlement], int], str],
] = {
    ActionKind.CREATE_AD: (
        lambda limits: limits.max_ads,
        lambda usage: usage.ads_count,
        "Ad limit reached",
    ),
    ActionKind.FEATURE_AD: (
        lambda limits: limits.max_featured_ads,
        lambda usage: usage.featured_ads_used,
        "Featured ad limit reached",
    ),
    ActionKind.MODIFY_AD: (
        lambda limits: limits.max_modifications,
        lambda usage: usage.ad_modifications_used,
        "Modification limit reached",
    ),
}


def parse_action(action: object) -> ActionKind:
    """Return the :class:`ActionKind` for ``action`` or raise :class:`InvalidActionError`."""

    if isinstance(action, ActionKind):
        return action
    if not isinstance(action, str) or not action:
        raise InvalidActionError(action)
    try:
        return ActionKind(action)
    except ValueError as exc:
        raise InvalidActionError(action) from exc


def can_perform(
    entitlement: UserEntitlement,
    action: object,
    *,
    resolver: Optional[EntitlementResolver] = None,
) -> QuotaDecision:
    """Decide whether ``action`` fits within the entitlement's pack limits.

    The premium window is not consulted here, only the stored pack; callers
    that need an active window combine this with :func:`require_premium`.
    Boosts are paid separately and always pass.
    """

    kind = parse_action(action)
    resolver = resolver or EntitlementResolver()
    limits = resolver.resolve_limits(entitlement.pack)

    rule = _QUOTA_RULES.get(kind)
    if rule is None:
        return QuotaDecision(action=kind, can_do=True, reason="", limits=limits)

    limit_of, usage_of, label = rule
    limit = limit_of(limits)
    allowed = limit == UNLIMITED or usage_of(entitlement) < limit
    reason = "" if allowed else f"{label} ({limit})"
    if not allowed:
        logger.info(
            "Quota denied user=%s pack=%s action=%s limit=%s",
            entitlement.user_id,
            entitlement.pack,
            kind.value,
            limit,
        )
    return QuotaDecision(action=kind, can_do=allowed, reason=reason, limits=limits)


def assert_can_perform(
    entitlement: UserEntitlement,
    action: object,
    *,
    resolver: Optional[EntitlementResolver] = None,
    error_code: str = "quota_exceeded",
) -> QuotaDecision:
    """Raise :class:`FeatureGateError` when ``action`` exceeds the pack quota."""

    decision = can_perform(entitlement, action, resolver=resolver)
    if not decision.can_do:
        raise FeatureGateError(
            code=error_code,
            message=decision.reason,
            detail={
                "action": decision.action.value,
                "currentPack": entitlement.pack,
                "limits": decision.limits.to_dict(),
            },
        )
    return decision
