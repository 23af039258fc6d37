"""Tests for the trades migration, rendered in alembic offline mode."""

import io
import re

import pytest
from alembic import command

from trade_with_me.db.migrator import build_alembic_config

REVISION = "20241203_105611"


def _render(monkeypatch: pytest.MonkeyPatch, action: str, target: str) -> str:
    monkeypatch.setenv("DATABASE_URL", "postgres://trade_user:pw@localhost:5432/trade_with_me")
    buffer = io.StringIO()
    config = build_alembic_config("postgres://trade_user:pw@localhost:5432/trade_with_me", buffer)

    getattr(command, action)(config, target, sql=True)
    return buffer.getvalue()


@pytest.fixture
def upgrade_sql(monkeypatch: pytest.MonkeyPatch) -> str:
    return _render(monkeypatch, "upgrade", "head")


@pytest.fixture
def downgrade_sql(monkeypatch: pytest.MonkeyPatch) -> str:
    return _render(monkeypatch, "downgrade", f"{REVISION}:base")


def _normalize(sql: str) -> str:
    return re.sub(r"\s+", " ", sql)


class TestUpgrade:
    """Tests for the generated upgrade SQL."""

    def test_creates_trades_table(self, upgrade_sql: str) -> None:
        sql = _normalize(upgrade_sql)

        assert "CREATE TABLE Trades (" in sql
        assert "id UUID PRIMARY KEY DEFAULT gen_random_uuid()" in sql
        assert "initiator TEXT NOT NULL" in sql
        assert "counterparty TEXT," in sql
        assert "status TEXT NOT NULL" in sql
        assert "status_details JSONB," in sql
        assert "created_at TIMESTAMP WITH TIME ZONE DEFAULT CURRENT_TIMESTAMP" in sql
        assert "updated_at TIMESTAMP WITH TIME ZONE DEFAULT CURRENT_TIMESTAMP" in sql

    def test_creates_trigger_function(self, upgrade_sql: str) -> None:
        sql = _normalize(upgrade_sql)

        assert "CREATE OR REPLACE FUNCTION update_updated_at_column() RETURNS TRIGGER" in sql
        assert "NEW.updated_at = CURRENT_TIMESTAMP;" in sql
        assert "RETURN NEW;" in sql
        assert "LANGUAGE plpgsql" in sql

    def test_creates_trigger(self, upgrade_sql: str) -> None:
        sql = _normalize(upgrade_sql)

        assert (
            "CREATE TRIGGER set_updated_at BEFORE UPDATE ON Trades FOR EACH ROW "
            "EXECUTE FUNCTION update_updated_at_column();"
        ) in sql

    def test_statement_order(self, upgrade_sql: str) -> None:
        """Test that the table exists before the trigger is bound to it."""
        table = upgrade_sql.index("CREATE TABLE Trades")
        function = upgrade_sql.index("CREATE OR REPLACE FUNCTION")
        trigger = upgrade_sql.index("CREATE TRIGGER")

        assert table < function < trigger

    def test_records_revision(self, upgrade_sql: str) -> None:
        assert REVISION in upgrade_sql


class TestDowngrade:
    """Tests for the generated downgrade SQL."""

    def test_drops_everything(self, downgrade_sql: str) -> None:
        trigger = downgrade_sql.index("DROP TRIGGER IF EXISTS set_updated_at ON Trades")
        function = downgrade_sql.index("DROP FUNCTION IF EXISTS update_updated_at_column()")
        table = downgrade_sql.index("DROP TABLE IF EXISTS Trades")

        assert trigger < function < table
