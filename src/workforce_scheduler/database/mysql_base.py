"""Cursor and row helpers shared by the MySQL repositories.

Every repository call is its own short transaction: it opens a connection,
runs its statements on one cursor and commits once at the end.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import date, datetime
from typing import Any, Iterator, Optional, Sequence

from .connection import DatabaseConnection

logger = logging.getLogger(__name__)

Row = dict[str, Any]


@contextmanager
def transaction(conn_factory: DatabaseConnection) -> Iterator[Any]:
    """Yield a buffered dict cursor; commit on exit, roll back on any exception."""
    conn = conn_factory.connect()
    cur = conn.cursor(dictionary=True, buffered=True)
    try:
        yield cur
        conn.commit()
    except Exception:
        logger.warning("rolling back transaction on %s", conn_factory.config.describe())
        conn.rollback()
        raise
    finally:
        cur.close()
        conn.close()


def one_row(cur) -> Optional[Row]:
    return cur.fetchone() or None


def all_rows(cur) -> list[Row]:
    return list(cur.fetchall() or ())


def placeholders(values: Sequence[object]) -> str:
    """`%s,%s,...` for an IN (...) clause."""
    if not values:
        raise ValueError("IN clause needs at least one value")
    return ",".join(["%s"] * len(values))


def to_date(value: Any) -> Optional[date]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.strptime(str(value)[:10], "%Y-%m-%d").date()
