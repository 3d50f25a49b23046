import threading
import time

import pymysql
import pytest

import db_repo
from db import mysql_client
from models import STATUS_FAILED, STATUS_REJECTED
from tests.conftest import FakeConnection, FakeDb


class FakePooledConnection(FakeConnection):
    def __init__(self, db, pool):
        super().__init__(db)
        self.pool = pool

    def close(self):
        self.pool.returned += 1


class FakePool:
    def __init__(self, db):
        self.db = db
        self.checked_out = 0
        self.returned = 0

    def connect(self):
        self.checked_out += 1
        return FakePooledConnection(self.db, self)


@pytest.fixture
def fake_pool(monkeypatch):
    pool = FakePool(FakeDb())
    monkeypatch.setattr(mysql_client, "_POOL", pool)
    return pool


def test_run_query_returns_connection(fake_pool):
    fake_pool.db.add("SELECT", rows=[("a", 1)])
    res = mysql_client.run_query("SELECT x, y FROM t")
    assert res == {"columns": ["col0", "col1"], "rows": [("a", 1)]}
    assert fake_pool.checked_out == fake_pool.returned == 1


def test_rejected_write_never_checks_out(fake_pool):
    res = db_repo.execute_write_command("SELECT 1")
    assert res.status == STATUS_REJECTED
    assert fake_pool.checked_out == 0


def test_failed_write_returns_connection(fake_pool):
    fake_pool.db.add("INSERT", error=pymysql.err.IntegrityError(1062, "Duplicate entry"))
    res = db_repo.execute_write_command("INSERT INTO t VALUES (1)")
    assert res.status == STATUS_FAILED
    assert res.message.endswith("(MySQL error 1062)")
    assert fake_pool.checked_out == fake_pool.returned == 1


def test_write_through_pool(fake_pool):
    fake_pool.db.add("UPDATE", rowcount=2)
    res = db_repo.execute_write_command("UPDATE t SET a = 1")
    assert res.is_success
    assert res.rows_affected == 2
    assert fake_pool.returned == 1


def test_pool_is_built_once_under_concurrency(monkeypatch):
    built = []

    def slow_pool(*args, **kwargs):
        time.sleep(0.05)
        pool = object()
        built.append(pool)
        return pool

    monkeypatch.setattr(mysql_client, "_POOL", None)
    monkeypatch.setattr(mysql_client, "QueuePool", slow_pool)

    seen = []
    threads = [threading.Thread(target=lambda: seen.append(mysql_client.get_pool()))
               for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(built) == 1
    assert all(p is built[0] for p in seen)
