"""Schema names and fixed values shared by the tooling."""

from enum import Enum


# Database objects
TRADES_TABLE = "trades"
ALEMBIC_VERSION_TABLE = "alembic_version"

# Migrations
DEFAULT_UPGRADE_TARGET = "head"
DEFAULT_DOWNGRADE_TARGET = "-1"
SCHEMA_FILE_HEADER = "-- @generated automatically by trade-with-me print-schema.\n"

# Smoke test
CREATE_TRADE_PATH = "/trade"
DEFAULT_API_BASE_URL = "http://localhost:3000"
DEFAULT_INITIATOR_ADDRESS = "some_initiator_address"

# Logging
LOG_FORMAT = "%(message)s"


class TradeStatus(str, Enum):
    """Status values written by the trade service.

    The column itself is free text, other values are stored as given.
    """

    CREATED = "Created"
    EXPIRED = "Expired"
