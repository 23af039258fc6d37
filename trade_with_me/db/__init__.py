"""Database module for schema management and persistence."""

from trade_with_me.db.models import Base, TradeRecord
from trade_with_me.db.repository import TradeRepository
from trade_with_me.db.schema_dump import SchemaDumpError, dump_schema, render_schema
from trade_with_me.db.migrator import MigrationError, MigrationRunner

__all__ = [
    "Base",
    "TradeRecord",
    "TradeRepository",
    "SchemaDumpError",
    "dump_schema",
    "render_schema",
    "MigrationError",
    "MigrationRunner",
]
