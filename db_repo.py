# db_repo.py
"""
Database access facade used by the HTTP routes.

Command execution and status reporting never raise for database problems:
they return records whose ``status`` tells the caller whether the command
was rejected up front, failed in MySQL or was cancelled. Listing tables and
grants raise ``DatabaseAccessError`` instead, so an empty answer always means
"no data".
"""
import logging
import time
from datetime import datetime, timedelta
from typing import List, Optional

import pymysql

import config
import query_templates
from db import mysql_client
from db.mysql_client import DB_ERRORS
from db.values import get_int_value, get_string_value
from models import (
    CommandType, DbStatus, QueryStatus, ReadCommandResult, WriteCommandResult,
    STATUS_CANCELLED, STATUS_FAILED, STATUS_REJECTED,
)
from sql_validator import classify_sql

LOG = logging.getLogger(__name__)

ER_QUERY_INTERRUPTED = 1317
ER_QUERY_TIMEOUT = 3024
CANCEL_ERROR_CODES = (ER_QUERY_INTERRUPTED, ER_QUERY_TIMEOUT)


class DatabaseAccessError(Exception):
    """A catalog lookup could not be completed."""


def error_code(exc) -> Optional[int]:
    args = getattr(exc, "args", ())
    if args and isinstance(args[0], int):
        return args[0]
    return None


def failure_status(exc) -> QueryStatus:
    """Turn a driver/pool error into a caller-safe QueryStatus."""
    code = error_code(exc)
    if code in CANCEL_ERROR_CODES:
        status, msg = STATUS_CANCELLED, "Command was cancelled before completion"
    elif code is not None:
        status, msg = STATUS_FAILED, f"Command failed during execution (MySQL error {code})"
    else:
        status, msg = STATUS_FAILED, "Command failed during execution"
    if config.EXPOSE_DB_ERRORS:
        msg = f"{msg}: {exc}"
    return QueryStatus(is_success=False, status=status, message=msg)


def _elapsed_ms(started):
    return round((time.perf_counter() - started) * 1000, 3)


def _reject(command_text, expected: CommandType, result_cls):
    kind = classify_sql(command_text)
    if kind == CommandType.UNKNOWN:
        msg = "Supplied command is not valid"
    elif kind != expected:
        msg = f"Supplied command is not a {expected.value} command"
    else:
        return None
    LOG.info("rejected %s command: %s", expected.value, msg)
    return result_cls(command_text=command_text, is_success=False,
                      status=STATUS_REJECTED, message=msg)


# -------------------------
# status
# -------------------------
def get_db_status(now: Optional[datetime] = None) -> DbStatus:
    status = DbStatus(
        db_ip=config.DB_SERVER,
        db_name=config.DB_NAME,
        db_user_id=config.DB_USER_ID,
    )
    try:
        res = mysql_client.run_query(query_templates.DB_STATUS)
    except DB_ERRORS as e:
        LOG.error("db status query failed: %s", e)
        status.query_status = failure_status(e)
        return status

    values = {get_string_value(name): val for name, val in res["rows"]}
    uptime_sec = get_int_value(values.get("Uptime"))
    if uptime_sec is not None:
        uptime = timedelta(seconds=uptime_sec)
        status.uptime_sec = uptime_sec
        status.uptime = str(uptime)
        status.start_time = (now or datetime.now()) - uptime
    status.mysql_version = get_string_value(values.get("version"))
    status.server_connection_timeout_sec = get_int_value(values.get("connect_timeout"))
    status.app_connection_timeout_sec = config.DB_CONNECTION_TIMEOUT_SEC
    status.default_command_timeout_sec = config.DB_COMMAND_TIMEOUT_SEC
    status.query_status = QueryStatus(is_success=True)
    return status


# -------------------------
# catalog
# -------------------------
def list_all_tables() -> List[str]:
    try:
        res = mysql_client.run_query(query_templates.LIST_TABLES)
    except DB_ERRORS as e:
        LOG.error("listing tables failed: %s", e)
        raise DatabaseAccessError("could not list tables") from e
    return [get_string_value(row[0]) for row in res["rows"]]


def show_grants() -> str:
    try:
        res = mysql_client.run_query(query_templates.SHOW_GRANTS)
    except DB_ERRORS as e:
        LOG.error("show grants failed: %s", e)
        raise DatabaseAccessError("could not read grants") from e
    return "\n".join(get_string_value(row[0]) for row in res["rows"])


# -------------------------
# ad-hoc commands
# -------------------------
def execute_read_command(command_text: Optional[str]) -> ReadCommandResult:
    rejected = _reject(command_text, CommandType.READ, ReadCommandResult)
    if rejected:
        return rejected

    try:
        with mysql_client.get_connection() as conn:
            connection_id = conn.thread_id()
            started = time.perf_counter()
            # unbuffered: rows are streamed and counted, never held
            with conn.cursor(pymysql.cursors.SSCursor) as cur:
                cur.execute(command_text)
                count = sum(1 for _ in cur)
            elapsed = _elapsed_ms(started)
    except DB_ERRORS as e:
        LOG.error("read command failed: %s", e)
        qs = failure_status(e)
        return ReadCommandResult(command_text=command_text, is_success=False,
                                 status=qs.status, message=qs.message)

    LOG.debug("read command on connection %s returned %d rows in %sms",
              connection_id, count, elapsed)
    return ReadCommandResult(
        command_text=command_text,
        is_success=True,
        connection_id=connection_id,
        elapsed_ms=elapsed,
        result_count=count,
    )


def execute_write_command(command_text: Optional[str]) -> WriteCommandResult:
    rejected = _reject(command_text, CommandType.WRITE, WriteCommandResult)
    if rejected:
        return rejected

    try:
        with mysql_client.get_connection() as conn:
            connection_id = conn.thread_id()
            started = time.perf_counter()
            with conn.cursor() as cur:
                affected = cur.execute(command_text)
            elapsed = _elapsed_ms(started)
    except DB_ERRORS as e:
        LOG.error("write command failed: %s", e)
        qs = failure_status(e)
        return WriteCommandResult(command_text=command_text, is_success=False,
                                  status=qs.status, message=qs.message)

    LOG.info("write command on connection %s affected %s rows in %sms",
             connection_id, affected, elapsed)
    return WriteCommandResult(
        command_text=command_text,
        is_success=True,
        connection_id=connection_id,
        elapsed_ms=elapsed,
        rows_affected=affected,
    )
