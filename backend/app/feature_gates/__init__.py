"""Feature gating utilities coordinating quota and premium enforcement."""
from .context import EntitlementContext
from .enforcement import require_premium, require_specific_pack
from .exceptions import FeatureGateError, InvalidActionError
from .quota import ActionKind, QuotaDecision, assert_can_perform, can_perform, parse_action

__all__ = [
    "ActionKind",
    "EntitlementContext",
    "FeatureGateError",
    "InvalidActionError",
    "QuotaDecision",
    "assert_can_perform",
    "can_perform",
    "parse_action",
    "require_premium",
    "require_specific_pack",
]
