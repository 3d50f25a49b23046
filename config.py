# config.py
# Values come from the environment (or a local .env file); defaults suit a local MySQL.
import os
from dotenv import load_dotenv

load_dotenv()


def _env_bool(name, default=False):
    val = os.getenv(name)
    if val is None:
        return default
    return val.strip().lower() in ("1", "true", "yes", "on")


# Database
DB_SERVER = os.getenv("DB_SERVER", "localhost")
DB_PORT = int(os.getenv("DB_PORT", "3306"))
DB_NAME = os.getenv("DB_NAME", "")
DB_USER_ID = os.getenv("DB_USER_ID", "root")
DB_PASSWORD = os.getenv("DB_PASSWORD", "")
DB_CONNECTION_TIMEOUT_SEC = int(os.getenv("DB_CONNECTION_TIMEOUT_SEC", "15"))
DB_COMMAND_TIMEOUT_SEC = int(os.getenv("DB_COMMAND_TIMEOUT_SEC", "30"))   # read/write timeout per round trip
DB_POOL_SIZE = int(os.getenv("DB_POOL_SIZE", "100"))

# HTTP
PORT = int(os.getenv("PORT", "8000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# COUNT(*) on the described table; off by default since it scans large tables
TABLE_INFO_ROW_COUNT = _env_bool("TABLE_INFO_ROW_COUNT")

# Relay raw MySQL error text to callers (keep off outside development)
EXPOSE_DB_ERRORS = _env_bool("EXPOSE_DB_ERRORS")
