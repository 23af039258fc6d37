"""Data models for the trade tooling."""

from dataclasses import dataclass
from typing import Any

from trade_with_me.config.constants import TradeStatus


@dataclass
class NewTrade:
    """A trade row before the database assigns id and timestamps."""

    initiator: str
    status: str
    counterparty: str | None = None
    status_details: dict[str, Any] | list[Any] | None = None

    def __post_init__(self) -> None:
        if isinstance(self.status, TradeStatus):
            self.status = self.status.value
        if not self.initiator:
            raise ValueError("initiator is required")
        if not self.status:
            raise ValueError("status is required")


@dataclass
class SmokeTestResult:
    """Outcome of one request against the trade service."""

    status_code: int
    body: str

    @property
    def reached_server(self) -> bool:
        """False when no HTTP response came back at all."""
        return self.status_code != 0
