"""SQLAlchemy database models."""

from sqlalchemy import Column, DateTime, Text, text
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import declarative_base

from trade_with_me.config.constants import TRADES_TABLE

Base = declarative_base()


class TradeRecord(Base):
    """
    Trade row as created by the migrations.

    id and both timestamps are filled in by the server. updated_at is
    maintained by the set_updated_at trigger, never by the application.
    """

    __tablename__ = TRADES_TABLE

    id = Column(
        UUID(as_uuid=True),
        primary_key=True,
        server_default=text("gen_random_uuid()"),
    )
    initiator = Column(Text, nullable=False)
    counterparty = Column(Text)
    status = Column(Text, nullable=False)
    status_details = Column(JSONB(none_as_null=True))

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=text("CURRENT_TIMESTAMP"))
    updated_at = Column(DateTime(timezone=True), server_default=text("CURRENT_TIMESTAMP"))

    def __repr__(self) -> str:
        return f"<TradeRecord id={self.id} initiator={self.initiator!r} status={self.status!r}>"
