"""Apply schema migrations and regenerate the schema file."""

import os
from pathlib import Path
from typing import TextIO

import structlog
from alembic import command
from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from sqlalchemy import create_engine, pool
from sqlalchemy.engine import Engine

from trade_with_me.config.constants import DEFAULT_DOWNGRADE_TARGET, DEFAULT_UPGRADE_TARGET
from trade_with_me.config.settings import Settings
from trade_with_me.db.schema_dump import dump_schema

logger = structlog.get_logger(__name__)

MIGRATIONS_DIR = Path(__file__).resolve().parent / "migrations"


class MigrationError(Exception):
    """Raised when the migration tool fails."""

    def __init__(self, action: str, cause: BaseException):
        self.action = action
        self.cause = cause
        self.message = f"{action} failed: {cause}"
        super().__init__(self.message)


def build_alembic_config(database_url: str, output_buffer: TextIO | None = None) -> Config:
    """Alembic config pointing at the packaged migrations."""
    config = Config(output_buffer=output_buffer)
    config.set_main_option("script_location", str(MIGRATIONS_DIR))
    # Escape '%' for the ini style interpolation alembic applies
    config.set_main_option("sqlalchemy.url", database_url.replace("%", "%%"))
    return config


class MigrationRunner:
    """
    Sequential, fail-fast migration runner.

    Exports DATABASE_URL, applies pending migrations and, when they
    succeed, writes the resulting schema to a file.
    """

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.alembic_config = build_alembic_config(settings.connection_url)

    def export_database_url(self) -> str:
        """Make the connection URL visible to the migration environment."""
        url = self.settings.connection_url
        os.environ["DATABASE_URL"] = url
        logger.info(f"DATABASE_URL is set to: {self.settings.masked_connection_url}")
        return url

    def create_engine(self) -> Engine:
        return create_engine(self.settings.sqlalchemy_url, poolclass=pool.NullPool)

    def upgrade(self, revision: str = DEFAULT_UPGRADE_TARGET) -> None:
        """Apply migrations up to revision."""
        logger.info("Running migrations", target=revision)
        try:
            command.upgrade(self.alembic_config, revision)
        except Exception as e:
            logger.error("An error occurred while running migrations.", error=str(e))
            raise MigrationError("upgrade", e) from e
        logger.info("Migrations ran successfully.")

    def downgrade(self, revision: str = DEFAULT_DOWNGRADE_TARGET) -> None:
        """Revert migrations down to revision."""
        logger.info("Reverting migrations", target=revision)
        try:
            command.downgrade(self.alembic_config, revision)
        except Exception as e:
            logger.error("An error occurred while reverting migrations.", error=str(e))
            raise MigrationError("downgrade", e) from e
        logger.info("Migrations reverted successfully.")

    def current_revision(self) -> str | None:
        """Revision recorded in the database, None for an empty database."""
        engine = self.create_engine()
        try:
            with engine.connect() as conn:
                return MigrationContext.configure(conn).get_current_revision()
        finally:
            engine.dispose()

    def print_schema(self, schema_file: str | Path | None = None) -> Path:
        """Write the current database schema to schema_file."""
        target = Path(schema_file or self.settings.schema_file)
        engine = self.create_engine()
        try:
            return dump_schema(engine, target)
        finally:
            engine.dispose()

    def run(
        self,
        schema_file: str | Path | None = None,
        revision: str = DEFAULT_UPGRADE_TARGET,
    ) -> Path:
        """
        Export the URL, migrate, then dump the schema.

        Raises:
            MigrationError: migrations failed, the schema is left untouched
            SchemaDumpError: migrations applied but the schema file was not written
        """
        self.export_database_url()
        self.upgrade(revision)
        return self.print_schema(schema_file)
