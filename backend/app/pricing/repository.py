"""Persistence layer for premium pack prices."""
from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, List, Mapping, Optional, Protocol

import psycopg2.extras
from psycopg2.extensions import connection as PgConnection
from psycopg2.extensions import cursor as PgCursor

from ..entitlements.repository import managed_connection
from .models import PremiumPrice


class PricingRepository(Protocol):
    """Data access layer for active premium prices."""

    def list_active(self) -> List[PremiumPrice]:
        ...

    def get_active(self, pack_name: str) -> Optional[PremiumPrice]:
        ...


def _row_to_price(row: Mapping[str, object]) -> PremiumPrice:
    price_usd = row.get("price_usd")
    return PremiumPrice(
        id=row.get("id"),
        pack_name=row["pack_name"],
        price_ar=float(row["price_ar"]),
        price_usd=float(price_usd) if price_usd is not None else None,
        duration_days=row.get("duration_days"),
        features=row.get("features"),
        is_active=bool(row.get("is_active", True)),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


_PRICE_COLUMNS = """
    id,
    pack_name,
    price_ar,
    price_usd,
    duration_days,
    features,
    is_active,
    created_at,
    updated_at
"""


class PostgresPricingRepository:
    """Concrete repository reading the ``premium_pricing`` table."""

    def __init__(self, *, conn: Optional[PgConnection] = None) -> None:
        self._conn = conn

    @contextmanager
    def _cursor(self) -> Iterator[PgCursor]:
        with managed_connection(self._conn) as (connection, _managed):
            cursor = connection.cursor(cursor_factory=psycopg2.extras.RealDictCursor)
            try:
                yield cursor
            finally:
                cursor.close()

    def list_active(self) -> List[PremiumPrice]:
        with self._cursor() as cursor:
            cursor.execute(
                f"""
                SELECT {_PRICE_COLUMNS}
                FROM premium_pricing
                WHERE is_active = true
                ORDER BY price_ar ASC
                """
            )
            rows = cursor.fetchall()
        return [_row_to_price(row) for row in rows]

    def get_active(self, pack_name: str) -> Optional[PremiumPrice]:
        with self._cursor() as cursor:
            cursor.execute(
                f"""
                SELECT {_PRICE_COLUMNS}
                FROM premium_pricing
                WHERE pack_name = %s AND is_active = true
                """,
                (pack_name,),
            )
            row = cursor.fetchone()
        return _row_to_price(row) if row else None
