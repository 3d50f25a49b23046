# query_templates.py
# Catalog queries issued by the service. Parameters use pymysql's %s placeholders.

DB_STATUS = """
    SELECT VARIABLE_NAME, VARIABLE_VALUE
    FROM performance_schema.global_status
    WHERE VARIABLE_NAME = 'Uptime'
    UNION ALL
    SELECT VARIABLE_NAME, VARIABLE_VALUE
    FROM performance_schema.global_variables
    WHERE VARIABLE_NAME IN ('version', 'connect_timeout')
"""

LIST_TABLES = """
    SELECT TABLE_NAME
    FROM information_schema.TABLES
    WHERE TABLE_SCHEMA = DATABASE()
    ORDER BY TABLE_NAME
"""

TABLE_EXISTS = """
    SELECT COUNT(*)
    FROM information_schema.TABLES
    WHERE TABLE_SCHEMA = DATABASE() AND TABLE_NAME = %s
"""

# `table` must already be quoted with sql_validator.quote_identifier
TABLE_ROW_COUNT = "SELECT COUNT(*) FROM {table}"

TABLE_COLUMNS = """
    SELECT COLUMN_NAME, COLUMN_TYPE
    FROM information_schema.COLUMNS
    WHERE TABLE_SCHEMA = DATABASE() AND TABLE_NAME = %s
    ORDER BY ORDINAL_POSITION
"""

# EXPRESSION (MySQL 8.0.13+) carries functional key parts, whose COLUMN_NAME is NULL
TABLE_INDEXES = """
    SELECT INDEX_NAME, COLUMN_NAME, SEQ_IN_INDEX, INDEX_TYPE, NON_UNIQUE, EXPRESSION
    FROM information_schema.STATISTICS
    WHERE TABLE_SCHEMA = DATABASE() AND TABLE_NAME = %s
    ORDER BY INDEX_NAME, SEQ_IN_INDEX
"""

# servers without functional key parts have no EXPRESSION column
TABLE_INDEXES_LEGACY = """
    SELECT INDEX_NAME, COLUMN_NAME, SEQ_IN_INDEX, INDEX_TYPE, NON_UNIQUE, NULL AS EXPRESSION
    FROM information_schema.STATISTICS
    WHERE TABLE_SCHEMA = DATABASE() AND TABLE_NAME = %s
    ORDER BY INDEX_NAME, SEQ_IN_INDEX
"""

SHOW_GRANTS = "SHOW GRANTS FOR CURRENT_USER()"
