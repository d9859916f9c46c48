"""REST client, request signing, and response records for QuadrigaCX."""

from .auth import AuthPayload, NonceGenerator, OrderIdentifier, Signer, sign_message
from .clients import DEFAULT_BASE_URL, ClientConfig, MarketDataClient
from .models import (
    AccountBalance,
    CurrencyBalance,
    LookupOrder,
    OpenOrder,
    OrderBook,
    PriceLevel,
    Ticker,
    Transaction,
)
from .quadriga_client import ExchangeClient

__all__ = [
    "AuthPayload",
    "NonceGenerator",
    "OrderIdentifier",
    "Signer",
    "sign_message",
    "DEFAULT_BASE_URL",
    "ClientConfig",
    "MarketDataClient",
    "AccountBalance",
    "CurrencyBalance",
    "LookupOrder",
    "OpenOrder",
    "OrderBook",
    "PriceLevel",
    "Ticker",
    "Transaction",
    "ExchangeClient",
]
