"""Client configuration and the public market data surface."""

from dataclasses import dataclass, field
from typing import List, Optional, Protocol

from .models import OrderBook, Ticker, Transaction

DEFAULT_BASE_URL = "https://api.quadrigacx.com/v2/"
DEFAULT_TIMEOUT_SECONDS = 10.0


@dataclass(frozen=True)
class ClientConfig:
    """Connection details and credentials for the exchange.

    Attributes:
        client_id: Numeric client identifier issued with the API key.
        api_key: Public API key sent with every signed request.
        api_secret: Shared secret used as the HMAC key. Never sent on the wire.
        base_url: Versioned REST root; resources are appended to it.
        timeout: Per-request timeout in seconds.
    """

    client_id: str
    api_key: str
    api_secret: str = field(repr=False)
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT_SECONDS


class MarketDataClient(Protocol):
    """Protocol describing the unauthenticated market data endpoints."""

    config: ClientConfig

    def get_ticker(self, book: Optional[str] = None) -> Ticker:
        """Return the latest ticker snapshot."""

    def get_order_book(self, book: Optional[str] = None) -> OrderBook:
        """Return the current order book."""

    def get_transactions(self, book: Optional[str] = None, time: Optional[str] = None) -> List[Transaction]:
        """Return recent public trades."""
