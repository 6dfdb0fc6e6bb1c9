"""Helpers for enforcing premium requirements on API and service layers."""
from __future__ import annotations

from typing import Iterable, Optional

from ..entitlements import EntitlementResolver, Pack, UserEntitlement, parse_pack
from .exceptions import FeatureGateError


def require_premium(
    entitlement: UserEntitlement,
    *,
    resolver: Optional[EntitlementResolver] = None,
    error_code: str = "premium_required",
    message: str | None = None,
) -> Pack:
    """Ensure the user holds a paid pack with an active premium window.

    Parameters
    ----------
    entitlement:
        Usage snapshot as returned by the usage ledger.
    resolver:
        Resolver providing the clock used to evaluate the premium window.
    error_code:
        Optional override for the surfaced error code. Defaults to
        ``"premium_required"``.
    message:
        Optional human-friendly message explaining the failure.

    Returns the resolved pack on success.
    """

    resolver = resolver or EntitlementResolver()
    pack = resolver.resolve_pack(entitlement.pack)
    is_active = resolver.is_premium_active(entitlement.premium_end_date)

    if pack == Pack.SIMPLE or not is_active:
        raise FeatureGateError(
            code=error_code,
            message=message or "An active premium subscription is required.",
            detail={"currentPack": entitlement.pack, "isPremiumActive": is_active},
        )
    return pack


def require_specific_pack(
    entitlement: UserEntitlement,
    allowed_packs: Iterable[Pack | str],
    *,
    resolver: Optional[EntitlementResolver] = None,
    error_code: str = "pack_insufficient",
) -> Pack:
    """Ensure the user's active pack is one of ``allowed_packs``."""

    allowed = []
    for candidate in allowed_packs:
        parsed = parse_pack(candidate)
        if parsed is None:
            raise ValueError(f"Unknown pack: {candidate!r}")
        allowed.append(parsed)

    resolver = resolver or EntitlementResolver()
    pack = parse_pack(entitlement.pack)
    is_active = resolver.is_premium_active(entitlement.premium_end_date)

    if pack not in allowed or not is_active:
        names = [item.value for item in allowed]
        raise FeatureGateError(
            code=error_code,
            message=f"This feature requires one of the packs: {', '.join(names)}.",
            detail={"currentPack": entitlement.pack, "allowedPacks": names},
        )
    return pack  # type: ignore[return-value]
