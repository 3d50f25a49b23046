# table_info.py
import logging
from typing import Dict, Iterable, List, Optional

import config
import query_templates
from db import mysql_client
from db.mysql_client import DB_ERRORS
from db.values import get_int_value, get_long_value, get_string_value
from db_repo import DatabaseAccessError, error_code
from models import TableColumn, TableIndex, TableIndexColumn, TableInfo
from sql_validator import is_valid_identifier, quote_identifier

LOG = logging.getLogger(__name__)

ER_BAD_FIELD_ERROR = 1054


def index_parts(rows: Iterable) -> List[TableIndexColumn]:
    """
    One entry per STATISTICS row
    (index_name, column_name, seq_in_index, index_type, non_unique, expression).
    Functional key parts have no column name; their expression stands in for it.
    """
    parts = []
    for index_name, column_name, seq, index_type, non_unique, expression in rows:
        column = get_string_value(column_name)
        if column is None:
            column = get_string_value(expression)
        seq = get_int_value(seq)
        if column is None:
            column = f"(key part {seq})"
        parts.append(TableIndexColumn(
            index_name=get_string_value(index_name),
            column=column,
            seq_in_index=seq,
            is_unique=get_int_value(non_unique) == 0,
            index_type=get_string_value(index_type),
        ))
    return parts


def fold_index_parts(parts: Iterable[TableIndexColumn]) -> List[TableIndex]:
    """
    Fold per-column index parts into one TableIndex per index name.
    Parts are expected in (index_name, seq_in_index) order; that order is kept in `columns`.
    """
    folded: Dict[str, TableIndex] = {}
    for part in parts:
        idx = folded.get(part.index_name)
        if idx is None:
            idx = TableIndex(
                index_name=part.index_name,
                is_unique=part.is_unique,
                index_type=part.index_type,
            )
            folded[part.index_name] = idx
        idx.columns[part.column] = part.seq_in_index
    return list(folded.values())


def fold_index_rows(rows: Iterable) -> List[TableIndex]:
    return fold_index_parts(index_parts(rows))


def table_exists(table_name: str) -> bool:
    res = mysql_client.run_query(query_templates.TABLE_EXISTS, (table_name,))
    rows = res["rows"]
    return bool(rows) and (get_int_value(rows[0][0]) or 0) > 0


def _index_rows(table_name: str):
    try:
        return mysql_client.run_query(query_templates.TABLE_INDEXES, (table_name,))["rows"]
    except DB_ERRORS as e:
        if error_code(e) != ER_BAD_FIELD_ERROR:
            raise
    LOG.info("STATISTICS has no EXPRESSION column, reading indexes without it")
    return mysql_client.run_query(query_templates.TABLE_INDEXES_LEGACY, (table_name,))["rows"]


def get_table_info(table_name: str) -> Optional[TableInfo]:
    """
    Describe a table of the current schema: columns, indexes and (if enabled) row count.
    Returns None when the table does not exist.
    Raises ValueError for a name MySQL could never accept and DatabaseAccessError when MySQL fails.
    """
    if not is_valid_identifier(table_name):
        raise ValueError(f"invalid table name: {table_name!r}")

    try:
        if not table_exists(table_name):
            LOG.info("table %s not found", table_name)
            return None

        row_count = None
        if config.TABLE_INFO_ROW_COUNT:
            sql = query_templates.TABLE_ROW_COUNT.format(table=quote_identifier(table_name))
            res = mysql_client.run_query(sql)
            row_count = get_long_value(res["rows"][0][0]) if res["rows"] else None

        res = mysql_client.run_query(query_templates.TABLE_COLUMNS, (table_name,))
        columns = [
            TableColumn(column_name=get_string_value(name), column_type=get_string_value(ctype))
            for name, ctype in res["rows"]
        ]

        parts = index_parts(_index_rows(table_name))
    except DB_ERRORS as e:
        LOG.error("describing table %s failed: %s", table_name, e)
        raise DatabaseAccessError(f"could not describe table {table_name}") from e

    return TableInfo(
        table_name=table_name,
        row_count=row_count,
        columns=columns,
        indexes=fold_index_parts(parts),
        indexes_individual=parts,
    )
