from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from backend.app.entitlements import EntitlementResolver, Pack, UserEntitlement
from backend.app.feature_gates import (
    ActionKind,
    EntitlementContext,
    FeatureGateError,
    InvalidActionError,
    assert_can_perform,
    can_perform,
    require_premium,
    require_specific_pack,
)

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def resolver() -> EntitlementResolver:
    return EntitlementResolver(clock=lambda: NOW)


def _entitlement(pack: str = "simple", **usage) -> UserEntitlement:
    return UserEntitlement(user_id=7, pack=pack, **usage)


def test_pro_create_ad_boundary(resolver):
    allowed = can_perform(_entitlement("pro", ads_count=49), "create_ad", resolver=resolver)
    denied = can_perform(_entitlement("pro", ads_count=50), "create_ad", resolver=resolver)

    assert allowed.can_do is True
    assert allowed.reason == ""
    assert denied.can_do is False
    assert "50" in denied.reason


def test_starter_scenario(resolver):
    entitlement = _entitlement("starter", ads_count=10, featured_ads_used=0)

    create = can_perform(entitlement, ActionKind.CREATE_AD, resolver=resolver)
    feature = can_perform(entitlement, ActionKind.FEATURE_AD, resolver=resolver)

    assert create.can_do is False
    assert "10" in create.reason
    assert feature.can_do is False
    assert "0" in feature.reason
    assert feature.limits.max_featured_ads == 0


@pytest.mark.parametrize("ads_count", [0, 10_000, 10**9])
def test_unlimited_sentinel_always_allows(resolver, ads_count):
    decision = can_perform(_entitlement("entreprise", ads_count=ads_count), "create_ad", resolver=resolver)

    assert decision.can_do is True


@pytest.mark.parametrize("used", [0, 1_000_000])
def test_unlimited_modifications_always_allow(resolver, used):
    decision = can_perform(
        _entitlement("entreprise", ad_modifications_used=used), "modify_ad", resolver=resolver
    )

    assert decision.can_do is True


@pytest.mark.parametrize("pack", ["vip", "PRO", "Pro "])
def test_unknown_pack_uses_simple_limits(resolver, pack):
    decision = can_perform(_entitlement(pack, ads_count=3), "create_ad", resolver=resolver)

    assert decision.limits.max_ads == 3
    assert decision.can_do is False
    assert "3" in decision.reason


def test_modify_ad_limit(resolver):
    assert can_perform(_entitlement("simple", ad_modifications_used=4), "modify_ad", resolver=resolver).can_do
    denied = can_perform(_entitlement("simple", ad_modifications_used=5), "modify_ad", resolver=resolver)

    assert denied.can_do is False
    assert denied.reason == "Modification limit reached (5)"


def test_boost_is_always_allowed(resolver):
    decision = can_perform(_entitlement("simple", boost_count_used=999), "boost_ad", resolver=resolver)

    assert decision.can_do is True
    assert decision.reason == ""


@pytest.mark.parametrize("action", ["delete_ad", "", None, 3])
def test_invalid_action_raises(resolver, action):
    with pytest.raises(InvalidActionError) as exc:
        can_perform(_entitlement(), action, resolver=resolver)

    assert exc.value.code == "invalid_action"
    assert exc.value.to_http_exception().status_code == 400


def test_decision_is_idempotent(resolver):
    entitlement = _entitlement("pro", featured_ads_used=5)

    first = can_perform(entitlement, "feature_ad", resolver=resolver)
    second = can_perform(entitlement, "feature_ad", resolver=resolver)

    assert first == second


def test_expired_window_does_not_affect_quota(resolver):
    entitlement = _entitlement("pro", ads_count=20, premium_end_date=NOW - timedelta(days=3))

    assert can_perform(entitlement, "create_ad", resolver=resolver).can_do is True


def test_assert_can_perform_raises_quota_error(resolver):
    with pytest.raises(FeatureGateError) as exc:
        assert_can_perform(_entitlement("starter", ads_count=10), "create_ad", resolver=resolver)

    assert exc.value.code == "quota_exceeded"
    assert exc.value.status_code == 403
    assert exc.value.payload["limits"]["maxAds"] == 10
    assert exc.value.payload["currentPack"] == "starter"


def test_require_premium_allows_active_paid_pack(resolver):
    entitlement = _entitlement("pro", premium_end_date=NOW + timedelta(days=1))

    assert require_premium(entitlement, resolver=resolver) == Pack.PRO


@pytest.mark.parametrize(
    ("pack", "end_date"),
    [
        ("simple", NOW + timedelta(days=30)),
        ("pro", NOW - timedelta(seconds=1)),
        ("entreprise", None),
        ("vip", NOW + timedelta(days=30)),
    ],
)
def test_require_premium_rejects(resolver, pack, end_date):
    with pytest.raises(FeatureGateError) as exc:
        require_premium(_entitlement(pack, premium_end_date=end_date), resolver=resolver)

    assert exc.value.code == "premium_required"
    assert exc.value.payload["currentPack"] == pack


def test_require_specific_pack(resolver):
    active_pro = _entitlement("pro", premium_end_date=NOW + timedelta(days=1))
    active_starter = _entitlement("starter", premium_end_date=NOW + timedelta(days=1))
    expired_entreprise = _entitlement("entreprise", premium_end_date=NOW - timedelta(days=1))

    assert require_specific_pack(active_pro, ["pro", "entreprise"], resolver=resolver) == Pack.PRO

    with pytest.raises(FeatureGateError) as exc:
        require_specific_pack(active_starter, ["pro", "entreprise"], resolver=resolver)
    assert exc.value.code == "pack_insufficient"
    assert exc.value.payload["allowedPacks"] == ["pro", "entreprise"]

    with pytest.raises(FeatureGateError):
        require_specific_pack(expired_entreprise, [Pack.ENTREPRISE], resolver=resolver)


def test_require_specific_pack_rejects_unknown_allowed_pack(resolver):
    with pytest.raises(ValueError):
        require_specific_pack(_entitlement("pro"), ["gold"], resolver=resolver)


def test_entitlement_context_helpers(resolver):
    context = EntitlementContext(
        _entitlement("starter", ads_count=4, premium_end_date=NOW + timedelta(days=2)),
        resolver,
    )

    assert context.limits.max_ads == 10
    assert context.is_premium_active is True
    assert context.remaining.ads == 6
    assert context.can_perform("create_ad").can_do is True
    assert context.require_premium() == Pack.STARTER

    with pytest.raises(FeatureGateError):
        context.require_pack(["pro"])
    with pytest.raises(FeatureGateError):
        context.assert_can_perform("feature_ad")


def test_feature_gate_error_converts_to_http_exception():
    error = FeatureGateError(code="premium_required", message="upgrade")
    http_exc = error.to_http_exception()

    assert http_exc.status_code == 403
    assert http_exc.detail["error"] == "premium_required"
