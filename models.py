# models.py
# Response containers serialised by the HTTP layer
from dataclasses import dataclass, field, asdict
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional

STATUS_OK = "ok"
STATUS_REJECTED = "rejected"
STATUS_FAILED = "failed"
STATUS_CANCELLED = "cancelled"


class CommandType(Enum):
    READ = "read"
    WRITE = "write"
    UNKNOWN = "unknown"


@dataclass
class QueryStatus:
    is_success: bool
    status: str = STATUS_OK
    message: Optional[str] = None


@dataclass
class TableColumn:
    column_name: str
    column_type: Optional[str]


@dataclass
class TableIndex:
    index_name: str
    columns: Dict[str, int] = field(default_factory=dict)   # column -> 1-based position in index
    is_unique: bool = False
    index_type: Optional[str] = None


@dataclass
class TableIndexColumn:
    index_name: str
    column: str    # column name, or the expression of a functional key part
    seq_in_index: Optional[int]
    is_unique: bool
    index_type: Optional[str]


@dataclass
class TableInfo:
    table_name: str
    row_count: Optional[int]
    columns: List[TableColumn]
    indexes: List[TableIndex]
    indexes_individual: List[TableIndexColumn] = field(default_factory=list)

    def to_dict(self):
        return asdict(self)


@dataclass
class CommandExecutionResponse:
    command_text: Optional[str]
    is_success: bool
    status: str = STATUS_OK
    message: Optional[str] = None
    connection_id: Optional[int] = None
    elapsed_ms: Optional[float] = None

    def to_dict(self):
        return asdict(self)


@dataclass
class ReadCommandResult(CommandExecutionResponse):
    result_count: Optional[int] = None


@dataclass
class WriteCommandResult(CommandExecutionResponse):
    rows_affected: Optional[int] = None


@dataclass
class DbStatus:
    db_ip: Optional[str] = None
    db_name: Optional[str] = None
    db_user_id: Optional[str] = None
    uptime: Optional[str] = None
    uptime_sec: Optional[int] = None
    start_time: Optional[datetime] = None
    mysql_version: Optional[str] = None
    server_connection_timeout_sec: Optional[int] = None
    app_connection_timeout_sec: Optional[int] = None
    default_command_timeout_sec: Optional[int] = None
    query_status: Optional[QueryStatus] = None

    def to_dict(self, include_query_status=True):
        d = asdict(self)
        if self.start_time is not None:
            d["start_time"] = self.start_time.isoformat()
        if not include_query_status:
            d.pop("query_status", None)
        return d
