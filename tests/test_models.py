"""Tests for the trade models."""

import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.schema import CreateTable

from trade_with_me.config.constants import TradeStatus
from trade_with_me.db.models import TradeRecord
from trade_with_me.models import NewTrade


class TestNewTrade:
    """Tests for the NewTrade dataclass."""

    def test_defaults(self) -> None:
        trade = NewTrade(initiator="addr1", status="created")

        assert trade.counterparty is None
        assert trade.status_details is None

    def test_status_enum_stored_as_text(self) -> None:
        trade = NewTrade(initiator="addr1", status=TradeStatus.CREATED)

        assert trade.status == "Created"

    @pytest.mark.parametrize("initiator, status", [("", "created"), ("addr1", "")])
    def test_required_fields(self, initiator: str, status: str) -> None:
        with pytest.raises(ValueError):
            NewTrade(initiator=initiator, status=status)


class TestTradeRecord:
    """Tests for the trades table mapping."""

    def test_table_name(self) -> None:
        assert TradeRecord.__tablename__ == "trades"

    def test_nullability(self) -> None:
        columns = TradeRecord.__table__.c

        assert columns.id.primary_key
        assert not columns.initiator.nullable
        assert not columns.status.nullable
        assert columns.counterparty.nullable
        assert columns.status_details.nullable

    def test_server_defaults(self) -> None:
        columns = TradeRecord.__table__.c

        assert str(columns.id.server_default.arg) == "gen_random_uuid()"
        assert str(columns.created_at.server_default.arg) == "CURRENT_TIMESTAMP"
        assert str(columns.updated_at.server_default.arg) == "CURRENT_TIMESTAMP"

    def test_postgres_ddl_matches_migration(self) -> None:
        ddl = str(CreateTable(TradeRecord.__table__).compile(dialect=postgresql.dialect()))

        assert "id UUID DEFAULT gen_random_uuid() NOT NULL" in ddl
        assert "status_details JSONB" in ddl
        assert "created_at TIMESTAMP WITH TIME ZONE DEFAULT CURRENT_TIMESTAMP" in ddl
        assert "updated_at TIMESTAMP WITH TIME ZONE DEFAULT CURRENT_TIMESTAMP" in ddl


class TestTradeStatus:
    """Tests for TradeStatus."""

    def test_values(self) -> None:
        assert TradeStatus("Created") is TradeStatus.CREATED
        assert TradeStatus("Expired") is TradeStatus.EXPIRED

    def test_invalid(self) -> None:
        with pytest.raises(ValueError):
            TradeStatus("Unknown")
