"""Configuration module."""

from trade_with_me.config.settings import Settings, get_settings
from trade_with_me.config.constants import (
    DEFAULT_API_BASE_URL,
    DEFAULT_INITIATOR_ADDRESS,
    TRADES_TABLE,
    TradeStatus,
)

__all__ = [
    "Settings",
    "get_settings",
    "DEFAULT_API_BASE_URL",
    "DEFAULT_INITIATOR_ADDRESS",
    "TRADES_TABLE",
    "TradeStatus",
]
