"""Database repository for trade rows."""

import uuid
from typing import Any

import structlog
from sqlalchemy import create_engine, select
from sqlalchemy.orm import sessionmaker

from trade_with_me.config.constants import TradeStatus
from trade_with_me.config.settings import mask_password, to_sqlalchemy_url
from trade_with_me.db.models import TradeRecord
from trade_with_me.models import NewTrade

logger = structlog.get_logger(__name__)


class TradeRepository:
    """
    Synchronous repository over the trades table.
    """

    def __init__(self, database_url: str) -> None:
        """
        Initialize repository.

        Args:
            database_url: postgres:// or postgresql:// connection URL
        """
        self.database_url = to_sqlalchemy_url(database_url)
        self._engine = create_engine(
            self.database_url,
            pool_pre_ping=True,
            echo=False,
        )
        self._session_factory = sessionmaker(
            bind=self._engine,
            autoflush=False,
            expire_on_commit=False,
        )
        logger.debug("Trade repository ready", url=mask_password(self.database_url))

    def close(self) -> None:
        """Close database connection."""
        self._engine.dispose()

    def insert_trade(self, new_trade: NewTrade) -> TradeRecord:
        """Insert a trade and return it with the server generated columns."""
        with self._session_factory() as session:
            record = TradeRecord(
                initiator=new_trade.initiator,
                counterparty=new_trade.counterparty,
                status=new_trade.status,
                status_details=new_trade.status_details,
            )
            session.add(record)
            session.commit()
            session.refresh(record)

        logger.info("Trade inserted", trade_id=str(record.id), initiator=record.initiator)
        return record

    def get_trade(self, trade_id: uuid.UUID) -> TradeRecord | None:
        """Get a trade by ID."""
        with self._session_factory() as session:
            result = session.execute(
                select(TradeRecord).where(TradeRecord.id == trade_id)
            )
            return result.scalar_one_or_none()

    def update_status(
        self,
        trade_id: uuid.UUID,
        status: TradeStatus | str,
        status_details: dict[str, Any] | list[Any] | None = None,
    ) -> TradeRecord | None:
        """
        Change the status of a trade.

        status_details is only replaced when given. updated_at is left to
        the database trigger.

        Returns:
            The refreshed row, or None if no trade has this id
        """
        if isinstance(status, TradeStatus):
            status = status.value

        with self._session_factory() as session:
            record = session.get(TradeRecord, trade_id)
            if record is None:
                logger.warning("Trade not found", trade_id=str(trade_id))
                return None

            record.status = status
            if status_details is not None:
                record.status_details = status_details
            session.commit()
            session.refresh(record)

        logger.info("Trade status updated", trade_id=str(trade_id), status=status)
        return record

    def list_trades(
        self,
        limit: int = 100,
        initiator: str | None = None,
    ) -> list[TradeRecord]:
        """Get recent trades, newest first."""
        with self._session_factory() as session:
            query = select(TradeRecord).order_by(TradeRecord.created_at.desc())

            if initiator:
                query = query.where(TradeRecord.initiator == initiator)

            query = query.limit(limit)
            result = session.execute(query)
            return list(result.scalars().all())
