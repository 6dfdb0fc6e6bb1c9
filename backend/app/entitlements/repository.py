"""Read-only access to per-user premium usage counters."""
from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Mapping, Optional, Protocol

import psycopg2.extras
from psycopg2.extensions import connection as PgConnection
from psycopg2.extensions import cursor as PgCursor

from .models import Pack, UserEntitlement

try:  # pragma: no cover - resolve connection helper when imported from FastAPI app
    from backend.app_context import get_conn
except ModuleNotFoundError as exc:  # pragma: no cover
    if exc.name != "backend":
        raise
    from ...app_context import get_conn  # type: ignore[no-redef]


class UserNotFoundError(LookupError):
    """Raised when the usage ledger has no row for a user."""

    def __init__(self, user_id: int) -> None:
        self.user_id = user_id
        super().__init__(f"User {user_id} not found")


class UsageLedger(Protocol):
    """Lookup of the usage snapshot backing entitlement decisions."""

    def get_entitlement(self, user_id: int) -> UserEntitlement:
        ...


@contextmanager
def managed_connection(conn: Optional[PgConnection] = None):
    """Context manager that manages transaction boundaries for optional connections."""

    if conn is not None:
        yield conn, False
        return

    connection = get_conn()
    try:
        yield connection, True
        connection.commit()
    except Exception:
        connection.rollback()
        raise
    finally:
        connection.close()


def _row_to_entitlement(user_id: int, row: Mapping[str, object]) -> UserEntitlement:
    return UserEntitlement(
        user_id=user_id,
        pack=row.get("premium_pack") or Pack.SIMPLE.value,
        ads_count=int(row.get("ads_count") or 0),
        featured_ads_used=int(row.get("featured_ads_used") or 0),
        ad_modifications_used=int(row.get("ad_modifications_used") or 0),
        boost_count_used=int(row.get("boost_count_used") or 0),
        premium_start_date=row.get("premium_start_date"),
        premium_end_date=row.get("premium_end_date"),
    )


class PostgresUsageLedger:
    """Usage ledger backed by the ``users`` table."""

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

    def get_entitlement(self, user_id: int) -> UserEntitlement:
        with self._cursor() as cursor:
            cursor.execute(
                """
                SELECT
                    premium_pack,
                    ads_count,
                    featured_ads_used,
                    ad_modifications_used,
                    boost_count_used,
                    premium_start_date,
                    premium_end_date
                FROM users
                WHERE id = %s
                """,
                (user_id,),
            )
            row = cursor.fetchone()

        if row is None:
            raise UserNotFoundError(user_id)
        return _row_to_entitlement(user_id, row)
