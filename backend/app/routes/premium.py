"""API routes exposing premium pricing, limits and quota checks."""
from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Header, HTTPException, status

from ..entitlements import UserNotFoundError
from ..feature_gates import InvalidActionError
from ..schemas.premium import (
    CanDoRequest,
    CanDoResponse,
    MyLimitsResponse,
    PackComparisonOut,
    PackComparisonResponse,
    PackPricingResponse,
    PremiumPriceOut,
    PricingListResponse,
)
from ..services import premium as premium_service


try:  # pragma: no cover - resolve shared context when imported from FastAPI app
    from backend import app_context
except ModuleNotFoundError as exc:  # pragma: no cover
    if exc.name != "backend":
        raise
    from ... import app_context  # type: ignore[no-redef]


def _get_current_user(authorization: Optional[str] = Header(None)) -> Any:
    return app_context.get_current_user(authorization=authorization)


router = APIRouter(prefix="/api/premium", tags=["premium"])


@router.get("/pricing", response_model=PricingListResponse)
def list_pricing() -> PricingListResponse:
    prices = premium_service.list_pricing()
    return PricingListResponse(pricing=[PremiumPriceOut.from_price(price) for price in prices])


@router.get("/pricing/{pack_name}", response_model=PackPricingResponse)
def get_pack_pricing(pack_name: str) -> PackPricingResponse:
    try:
        price = premium_service.get_pack_pricing(pack_name)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except LookupError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return PackPricingResponse(pack=PremiumPriceOut.from_price(price))


@router.get("/compare", response_model=PackComparisonResponse)
def compare_packs() -> PackComparisonResponse:
    rows = premium_service.compare_packs()
    return PackComparisonResponse(
        comparison=[PackComparisonOut.from_comparison(row) for row in rows]
    )


@router.get("/my-limits", response_model=MyLimitsResponse)
def get_my_limits(*, current_user=Depends(_get_current_user)) -> MyLimitsResponse:
    """Return the current pack, its limits, usage, remaining quota and offer."""

    try:
        snapshot = premium_service.get_limits_snapshot(current_user.id)
    except UserNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    features, price = premium_service.get_pack_offer(snapshot.current_pack)
    return MyLimitsResponse.from_snapshot(snapshot, features=features, price=price)


@router.post("/can-do", response_model=CanDoResponse)
def can_do(
    payload: Optional[CanDoRequest] = Body(None),
    *,
    current_user=Depends(_get_current_user),
) -> CanDoResponse:
    """Report whether the user may perform ``payload.action`` right now."""

    action = payload.action if payload is not None else None
    try:
        decision, entitlement = premium_service.check_action(current_user.id, action)
    except InvalidActionError as exc:
        raise exc.to_http_exception() from exc
    except UserNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return CanDoResponse.from_decision(decision, entitlement.pack)
