"""Infrastructure utilities for errors, configuration, and logging."""

from .errors import (
    BooleanParseError,
    ConfigError,
    ExchangeAPIError,
    ExchangeConnectionError,
    OrderNotFoundError,
    QuadrigaError,
    ResponseDecodeError,
)
from .logging import JsonFormatter, configure_logging

__all__ = [
    "QuadrigaError",
    "ExchangeConnectionError",
    "ResponseDecodeError",
    "ExchangeAPIError",
    "BooleanParseError",
    "OrderNotFoundError",
    "ConfigError",
    "JsonFormatter",
    "configure_logging",
]
