"""Create trades table with updated_at trigger.

Revision ID: 20241203_105611
Revises: None
Create Date: 2024-12-03 10:56:11

updated_at is kept current by a BEFORE UPDATE trigger, so every writer
gets the same behaviour without touching the column itself.
"""

from typing import Sequence, Union

import structlog
from alembic import op

logger = structlog.get_logger(__name__)

# revision identifiers, used by Alembic
revision: str = "20241203_105611"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


UPGRADE_DDL: tuple[str, ...] = (
    """
    CREATE TABLE Trades (
        id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
        initiator TEXT NOT NULL,
        counterparty TEXT,
        status TEXT NOT NULL,
        status_details JSONB,
        created_at TIMESTAMP WITH TIME ZONE DEFAULT CURRENT_TIMESTAMP,
        updated_at TIMESTAMP WITH TIME ZONE DEFAULT CURRENT_TIMESTAMP
    )
    """,
    """
    CREATE OR REPLACE FUNCTION update_updated_at_column()
    RETURNS TRIGGER AS $$
    BEGIN
        NEW.updated_at = CURRENT_TIMESTAMP;
        RETURN NEW;
    END;
    $$ LANGUAGE plpgsql
    """,
    """
    CREATE TRIGGER set_updated_at
    BEFORE UPDATE ON Trades
    FOR EACH ROW
    EXECUTE FUNCTION update_updated_at_column()
    """,
)

DOWNGRADE_DDL: tuple[str, ...] = (
    "DROP TRIGGER IF EXISTS set_updated_at ON Trades",
    "DROP FUNCTION IF EXISTS update_updated_at_column()",
    "DROP TABLE IF EXISTS Trades",
)


def _execute_all(statements: Sequence[str]) -> None:
    for statement in statements:
        op.execute(statement)


def upgrade() -> None:
    _execute_all(UPGRADE_DDL)
    logger.info("Created trades table and set_updated_at trigger")


def downgrade() -> None:
    _execute_all(DOWNGRADE_DDL)
    logger.info("Dropped trades table and set_updated_at trigger")
