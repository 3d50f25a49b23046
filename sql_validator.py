# sql_validator.py
"""
Leading-keyword classification of ad-hoc SQL.

This is a prefix heuristic, not a parser: a statement starting with a comment,
a CTE (``WITH ... INSERT``) or a multi-statement batch is judged only by its
first keyword and may be misclassified.
"""
import re
from typing import Optional

from models import CommandType

READ_COMMAND_RE = re.compile(r"^\s*(SELECT|SHOW|DESCRIBE|EXPLAIN)\s+", re.IGNORECASE)
WRITE_COMMAND_RE = re.compile(
    r"^\s*(INSERT|UPDATE|DELETE|REPLACE|ALTER|CREATE|DROP|TRUNCATE|LOAD|RENAME|SET)\s+",
    re.IGNORECASE,
)

# any BMP character MySQL accepts in a quoted identifier: no control chars,
# 64 max, no trailing space
TABLE_NAME_RE = re.compile(r"[^\x00-\x1f\x7f\U00010000-\U0010ffff]{0,63}[^\x00-\x20\x7f\U00010000-\U0010ffff]")


def classify_sql(sql: Optional[str]) -> CommandType:
    if not sql:
        return CommandType.UNKNOWN
    if READ_COMMAND_RE.match(sql):
        return CommandType.READ
    if WRITE_COMMAND_RE.match(sql):
        return CommandType.WRITE
    return CommandType.UNKNOWN


def is_valid_identifier(name: Optional[str]) -> bool:
    return bool(name) and TABLE_NAME_RE.fullmatch(name) is not None


def quote_identifier(name: str) -> str:
    return "`" + name.replace("`", "``") + "`"
