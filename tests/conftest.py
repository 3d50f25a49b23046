from contextlib import contextmanager

import pytest

from db import mysql_client


class FakeCursor:
    def __init__(self, db):
        self.db = db
        self.description = None
        self._rows = []

    def execute(self, sql, params=None):
        self.db.executed.append((sql, params))
        rows, error, rowcount = self.db.lookup(sql)
        if error is not None:
            raise error
        if rows is None:
            self.description = None
            self._rows = []
        else:
            width = len(rows[0]) if rows else 1
            self.description = [("col%d" % i,) for i in range(width)]
            self._rows = list(rows)
        if rowcount is not None:
            return rowcount
        return len(self._rows)

    def fetchall(self):
        return tuple(self._rows)

    def __iter__(self):
        return iter(self._rows)

    def close(self):
        pass

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()


class FakeConnection:
    def __init__(self, db):
        self.db = db

    def cursor(self, cursorclass=None):
        self.db.cursor_classes.append(cursorclass)
        return FakeCursor(self.db)

    def thread_id(self):
        return self.db.thread_id


class FakeDb:
    """Scripted stand-in for the pool: statements are matched by substring."""

    def __init__(self):
        self.handlers = []
        self.executed = []
        self.cursor_classes = []
        self.connections_opened = 0
        self.connections_released = 0
        self.thread_id = 42

    def add(self, needle, rows=None, error=None, rowcount=None):
        self.handlers.append((needle, rows, error, rowcount))

    def lookup(self, sql):
        for needle, rows, error, rowcount in self.handlers:
            if needle in sql:
                return rows, error, rowcount
        raise AssertionError("unexpected SQL: %s" % sql)

    def ran(self, needle):
        return [sql for sql, _ in self.executed if needle in sql]

    @contextmanager
    def get_connection(self):
        self.connections_opened += 1
        try:
            yield FakeConnection(self)
        finally:
            self.connections_released += 1


@pytest.fixture
def fake_db(monkeypatch):
    db = FakeDb()
    monkeypatch.setattr(mysql_client, "get_connection", db.get_connection)
    return db
