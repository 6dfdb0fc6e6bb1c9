from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from backend.app.entitlements import (
    TIER_LIMITS,
    EntitlementResolver,
    Pack,
    TierCatalog,
    TierLimits,
    UserEntitlement,
    parse_pack,
    remaining_quota,
)

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def resolver() -> EntitlementResolver:
    return EntitlementResolver(clock=lambda: NOW)


@pytest.mark.parametrize(
    ("pack", "max_ads", "max_photos", "max_featured", "max_modifications"),
    [
        (Pack.SIMPLE, 3, 3, 0, 5),
        (Pack.STARTER, 10, 5, 0, 10),
        (Pack.PRO, 50, 15, 5, 20),
        (Pack.ENTREPRISE, -1, 30, 15, -1),
    ],
)
def test_published_tier_table(resolver, pack, max_ads, max_photos, max_featured, max_modifications):
    limits = resolver.resolve_limits(pack)

    assert limits.max_ads == max_ads
    assert limits.max_photos == max_photos
    assert limits.max_featured_ads == max_featured
    assert limits.max_modifications == max_modifications
    assert limits is TIER_LIMITS[pack]


def test_feature_flags_per_pack(resolver):
    simple = resolver.resolve_limits("simple")
    starter = resolver.resolve_limits("starter")
    pro = resolver.resolve_limits("pro")
    entreprise = resolver.resolve_limits("entreprise")

    assert (simple.has_stats, simple.has_advanced_stats, simple.has_auto_boost) == (False, False, False)
    assert (starter.has_stats, starter.has_advanced_stats, starter.has_auto_boost) == (True, False, False)
    assert (pro.has_stats, pro.has_advanced_stats, pro.has_auto_boost) == (True, True, True)
    assert entreprise.has_complete_stats is True
    assert not any(limits.has_complete_stats for limits in (simple, starter, pro))
    assert entreprise.multi_users == 5
    assert pro.multi_users is None


@pytest.mark.parametrize("pack", ["vip", "", None, 42, "PRO", "PRO ", " pro", "Entreprise"])
def test_unknown_pack_falls_back_to_simple(resolver, pack):
    limits = resolver.resolve_limits(pack)

    assert limits == resolver.resolve_limits(Pack.SIMPLE)
    assert resolver.resolve_pack(pack) == Pack.SIMPLE


@pytest.mark.parametrize("pack", ["PRO", "Pro", "pro "])
def test_pack_names_must_match_exactly(pack):
    assert parse_pack(pack) is None
    assert parse_pack("pro") == Pack.PRO


def test_limits_serialize_with_camel_case_keys():
    data = TIER_LIMITS[Pack.ENTREPRISE].to_dict()

    assert data["maxAds"] == -1
    assert data["multiUsers"] == 5
    assert data["hasCompleteStats"] is True
    assert "multiUsers" not in TIER_LIMITS[Pack.PRO].to_dict()


def test_tier_table_is_read_only():
    with pytest.raises(TypeError):
        TIER_LIMITS[Pack.SIMPLE] = TierLimits(1, 1, 1, 1)  # type: ignore[index]


def test_catalog_requires_fallback_pack():
    with pytest.raises(ValueError):
        TierCatalog({Pack.PRO: TIER_LIMITS[Pack.PRO]})


def test_custom_catalog_is_used_by_resolver():
    custom = TierLimits(max_ads=1, max_photos=1, max_featured_ads=0, max_modifications=0)
    resolver = EntitlementResolver(TierCatalog({Pack.SIMPLE: custom}), clock=lambda: NOW)

    assert resolver.resolve_limits("pro") is custom


def test_premium_active_requires_future_end_date(resolver):
    assert resolver.is_premium_active(NOW + timedelta(seconds=1)) is True
    assert resolver.is_premium_active(NOW) is False
    assert resolver.is_premium_active(NOW - timedelta(days=1)) is False
    assert resolver.is_premium_active(None) is False


def test_naive_end_date_is_treated_as_utc(resolver):
    naive_future = (NOW + timedelta(hours=1)).replace(tzinfo=None)
    naive_past = (NOW - timedelta(hours=1)).replace(tzinfo=None)

    assert resolver.is_premium_active(naive_future) is True
    assert resolver.is_premium_active(naive_past) is False


def test_end_date_in_other_timezone_is_compared_as_instant(resolver):
    plus_three = timezone(timedelta(hours=3))
    # 14:30 at +03:00 is 11:30 UTC, before NOW
    end = datetime(2026, 3, 1, 14, 30, tzinfo=plus_three)

    assert resolver.is_premium_active(end) is False


def test_null_end_date_is_inactive_even_for_paid_pack(resolver):
    entitlement = UserEntitlement(user_id=1, pack="entreprise", premium_end_date=None)

    assert resolver.snapshot(entitlement).is_premium_active is False


@pytest.mark.parametrize(
    ("limit", "used", "expected"),
    [(10, 4, 6), (10, 10, 0), (10, 14, 0), (-1, 0, -1), (-1, 10_000, -1), (0, 0, 0)],
)
def test_remaining_quota(limit, used, expected):
    assert remaining_quota(limit, used) == expected


def test_snapshot_projects_remaining_quota(resolver):
    entitlement = UserEntitlement(
        user_id=9,
        pack="pro",
        ads_count=12,
        featured_ads_used=7,
        ad_modifications_used=3,
        premium_end_date=NOW + timedelta(days=10),
    )

    snapshot = resolver.snapshot(entitlement)

    assert snapshot.current_pack == "pro"
    assert snapshot.is_premium_active is True
    assert snapshot.remaining.to_dict() == {"ads": 38, "featuredAds": 0, "modifications": 17}


def test_snapshot_reports_unlimited_sentinel(resolver):
    entitlement = UserEntitlement(user_id=9, pack="entreprise", ads_count=500, ad_modifications_used=80)

    remaining = resolver.remaining(entitlement)

    assert remaining.ads == -1
    assert remaining.modifications == -1
    assert remaining.featured_ads == 15


def test_negative_counters_are_rejected():
    with pytest.raises(ValidationError):
        UserEntitlement(user_id=1, ads_count=-1)


def test_entitlement_accepts_pack_enum():
    entitlement = UserEntitlement(user_id=1, pack=Pack.STARTER)

    assert entitlement.pack == "starter"
