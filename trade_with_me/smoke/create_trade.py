"""Manual smoke test against the trade service's create endpoint."""

import httpx
import structlog

from trade_with_me.config.constants import (
    CREATE_TRADE_PATH,
    DEFAULT_API_BASE_URL,
    DEFAULT_INITIATOR_ADDRESS,
)
from trade_with_me.models import SmokeTestResult

logger = structlog.get_logger(__name__)


def send_create_trade(
    base_url: str = DEFAULT_API_BASE_URL,
    initiator_address: str = DEFAULT_INITIATOR_ADDRESS,
    client: httpx.Client | None = None,
    timeout: float = 10.0,
) -> SmokeTestResult:
    """
    POST one create-trade request and capture whatever comes back.

    HTTP error statuses are returned as-is. When no response arrives at all
    the result carries status 0 and an empty body.

    Args:
        base_url: Service root, e.g. http://localhost:3000
        initiator_address: Value sent as initiator_address
        client: Optional preconfigured client (tests inject a mock transport)
        timeout: Request timeout in seconds
    """
    url = base_url.rstrip("/") + CREATE_TRADE_PATH
    payload = {"initiator_address": initiator_address}
    headers = {"Content-Type": "application/json"}

    owns_client = client is None
    if client is None:
        client = httpx.Client(timeout=timeout)

    try:
        response = client.post(url, json=payload, headers=headers)
    except httpx.TransportError as e:
        logger.error("Create trade request failed", url=url, error=str(e))
        return SmokeTestResult(status_code=0, body="")
    finally:
        if owns_client:
            client.close()

    logger.debug("Create trade response", url=url, status=response.status_code)
    return SmokeTestResult(status_code=response.status_code, body=response.text)


def format_result(result: SmokeTestResult) -> str:
    """Render a result the way the smoke test prints it."""
    return (
        "Response Body:\n"
        f"{result.body}\n"
        f"HTTP Status: {result.status_code:03d}"
    )
