"""Render the live database schema as SQL DDL."""

from pathlib import Path

import structlog
from sqlalchemy import MetaData, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.schema import CreateIndex, CreateTable

from trade_with_me.config.constants import ALEMBIC_VERSION_TABLE, SCHEMA_FILE_HEADER

logger = structlog.get_logger(__name__)

TRIGGERS_QUERY = text(
    """
    SELECT t.tgname, pg_get_triggerdef(t.oid)
    FROM pg_trigger t
    JOIN pg_class c ON c.oid = t.tgrelid
    JOIN pg_namespace n ON n.oid = c.relnamespace
    WHERE NOT t.tgisinternal AND n.nspname = current_schema()
    ORDER BY c.relname, t.tgname
    """
)


class SchemaDumpError(Exception):
    """Raised when the schema cannot be read or written."""

    pass


def render_schema(engine: Engine) -> str:
    """
    Introspect the database behind engine and render its schema.

    Tables are emitted in name order, alembic's bookkeeping table is left
    out. On PostgreSQL the user defined triggers follow the tables.
    """
    metadata = MetaData()
    try:
        metadata.reflect(
            bind=engine,
            only=lambda name, _: name != ALEMBIC_VERSION_TABLE,
        )

        statements = []
        for name in sorted(metadata.tables):
            table = metadata.tables[name]
            statements.append(str(CreateTable(table).compile(dialect=engine.dialect)).strip() + ";")
            for index in sorted(table.indexes, key=lambda i: i.name or ""):
                statements.append(str(CreateIndex(index).compile(dialect=engine.dialect)).strip() + ";")

        if engine.dialect.name == "postgresql":
            with engine.connect() as conn:
                for _, definition in conn.execute(TRIGGERS_QUERY):
                    statements.append(f"{definition};")
    except SQLAlchemyError as e:
        raise SchemaDumpError(f"Failed to introspect database: {e}") from e

    logger.debug("Schema rendered", tables=len(metadata.tables))
    return SCHEMA_FILE_HEADER + "\n" + "\n\n".join(statements) + "\n"


def dump_schema(engine: Engine, path: str | Path) -> Path:
    """Write the rendered schema to path and return it."""
    schema = render_schema(engine)
    target = Path(path)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(schema, encoding="utf-8")
    except OSError as e:
        raise SchemaDumpError(f"Failed to write schema to {target}: {e}") from e

    logger.info("Schema written", path=str(target))
    return target
