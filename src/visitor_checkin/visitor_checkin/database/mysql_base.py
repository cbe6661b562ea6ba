from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

import mysql.connector
from mysql.connector import errorcode

from ..core.exceptions import ConflictError, StorageError
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True, conflict_message: Optional[str] = None):
    """Yield (conn, cursor); commit on success, roll back on any error.

    Driver errors surface as StorageError so callers only see domain errors.
    With conflict_message set, a duplicate-key error raises ConflictError
    instead (a concurrent insert won the race).
    """

    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.IntegrityError as e:
        conn.rollback()
        if conflict_message is None or e.errno != errorcode.ER_DUP_ENTRY:
            logger.error("MySQL error on %s: %s", conn_factory.target, e)
            raise StorageError("Database operation failed") from e
        logger.info("Unique key violation on %s: %s", conn_factory.target, e)
        raise ConflictError(conflict_message) from e
    except mysql.connector.Error as e:
        conn.rollback()
        logger.error("MySQL error on %s: %s", conn_factory.target, e)
        raise StorageError("Database operation failed") from e
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    return list(cur.fetchall() or [])


def as_float(value: Any) -> float:
    """Normalize MySQL DECIMAL/DOUBLE columns to float.

    mysql-connector returns DECIMAL as decimal.Decimal, DOUBLE as float, and
    some drivers hand back strings for computed columns.
    """

    if isinstance(value, float):
        return value
    if isinstance(value, (Decimal, int)):
        return float(value)
    if isinstance(value, str):
        return float(value.strip())
    raise TypeError(f"Unsupported MySQL numeric value type: {type(value)!r}")


def as_datetime(value: Any) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    if isinstance(value, str):
        return datetime.fromisoformat(value.strip())
    raise TypeError(f"Unsupported MySQL DATETIME value type: {type(value)!r}")
