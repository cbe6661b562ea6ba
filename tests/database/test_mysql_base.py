from __future__ import annotations

import pytest
from mysql.connector import errorcode
from mysql.connector.errors import IntegrityError, OperationalError

from src.visitor_checkin.visitor_checkin.core.exceptions import ConflictError, StorageError
from src.visitor_checkin.visitor_checkin.database.mysql_base import db_cursor


class FailingCursor:
    def __init__(self, error):
        self._error = error

    def execute(self, sql, params=None):
        raise self._error

    def close(self):
        pass


class FakeConnection:
    def __init__(self, error):
        self._error = error
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def cursor(self, dictionary=True):
        return FailingCursor(self._error)

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


class FakeFactory:
    target = "root@localhost:3306/visitor_checkin_test"

    def __init__(self, error):
        self.conn = FakeConnection(error)

    def connect(self):
        return self.conn


def _duplicate_key():
    return IntegrityError(msg="Duplicate entry '7' for key 'uq_location_user'", errno=errorcode.ER_DUP_ENTRY)


def test_duplicate_key_becomes_conflict_when_requested():
    factory = FakeFactory(_duplicate_key())

    with pytest.raises(ConflictError, match="Only one location allowed per user"):
        with db_cursor(factory, conflict_message="Only one location allowed per user") as (_, cur):
            cur.execute("INSERT INTO LocationCoordinates (user_id) VALUES (%s)", (7,))

    assert factory.conn.rolled_back
    assert not factory.conn.committed
    assert factory.conn.closed


def test_duplicate_key_without_conflict_message_is_storage_error():
    factory = FakeFactory(_duplicate_key())

    with pytest.raises(StorageError):
        with db_cursor(factory) as (_, cur):
            cur.execute("INSERT INTO qrcodes (code) VALUES (%s)", ("x",))


def test_other_integrity_errors_stay_storage_errors():
    factory = FakeFactory(IntegrityError(msg="Cannot add or update a child row", errno=errorcode.ER_NO_REFERENCED_ROW_2))

    with pytest.raises(StorageError):
        with db_cursor(factory, conflict_message="conflict") as (_, cur):
            cur.execute("INSERT INTO qrcodes (user_id) VALUES (%s)", (99,))


def test_driver_errors_become_storage_errors():
    factory = FakeFactory(OperationalError(msg="Lost connection"))

    with pytest.raises(StorageError, match="Database operation failed"):
        with db_cursor(factory) as (_, cur):
            cur.execute("SELECT 1")

    assert factory.conn.rolled_back
