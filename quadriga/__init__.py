"""Client library for the QuadrigaCX v2 REST API."""

from .data import ClientConfig, DEFAULT_BASE_URL, ExchangeClient
from .infra.errors import (
    BooleanParseError,
    ConfigError,
    ExchangeAPIError,
    ExchangeConnectionError,
    OrderNotFoundError,
    QuadrigaError,
    ResponseDecodeError,
)

__version__ = "0.1.0"

__all__ = [
    "ClientConfig",
    "DEFAULT_BASE_URL",
    "ExchangeClient",
    "QuadrigaError",
    "ExchangeConnectionError",
    "ResponseDecodeError",
    "ExchangeAPIError",
    "BooleanParseError",
    "OrderNotFoundError",
    "ConfigError",
]
