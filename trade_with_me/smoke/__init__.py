"""Smoke tests for the trade service."""

from trade_with_me.smoke.create_trade import format_result, send_create_trade

__all__ = ["format_result", "send_create_trade"]
