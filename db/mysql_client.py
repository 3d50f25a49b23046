# db/mysql_client.py
import logging
import threading
from contextlib import contextmanager

import pymysql
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import QueuePool

from config import (
    DB_SERVER, DB_PORT, DB_NAME, DB_USER_ID, DB_PASSWORD,
    DB_CONNECTION_TIMEOUT_SEC, DB_COMMAND_TIMEOUT_SEC, DB_POOL_SIZE,
)

LOG = logging.getLogger(__name__)

# errors that come from the server, the driver or the pool (not from our own code)
DB_ERRORS = (pymysql.MySQLError, SQLAlchemyError)

_POOL = None
_POOL_LOCK = threading.Lock()


def _connect():
    return pymysql.connect(
        host=DB_SERVER,
        port=DB_PORT,
        user=DB_USER_ID,
        password=DB_PASSWORD,
        database=DB_NAME or None,
        charset="utf8mb4",
        connect_timeout=DB_CONNECTION_TIMEOUT_SEC,
        read_timeout=DB_COMMAND_TIMEOUT_SEC,
        write_timeout=DB_COMMAND_TIMEOUT_SEC,
        autocommit=True,
    )


def get_pool():
    global _POOL
    if _POOL is None:
        with _POOL_LOCK:
            if _POOL is None:
                LOG.info("creating MySQL pool for %s@%s:%s/%s (size=%s)",
                         DB_USER_ID, DB_SERVER, DB_PORT, DB_NAME, DB_POOL_SIZE)
                _POOL = QueuePool(
                    _connect,
                    pool_size=DB_POOL_SIZE,
                    max_overflow=0,
                    timeout=DB_CONNECTION_TIMEOUT_SEC,
                    recycle=3600,
                )
    return _POOL


@contextmanager
def get_connection():
    """Check a connection out of the pool; it goes back on exit, error or not."""
    conn = get_pool().connect()
    try:
        yield conn
    finally:
        conn.close()


def run_query(sql, params=None):
    """Run one statement on its own pooled connection and return columns + rows."""
    with get_connection() as conn:
        cur = conn.cursor()
        try:
            if params:
                cur.execute(sql, params)
            else:
                cur.execute(sql)
            cols = [c[0] for c in cur.description] if cur.description else []
            rows = cur.fetchall() if cur.description else []
            return {"columns": cols, "rows": list(rows)}
        finally:
            cur.close()
