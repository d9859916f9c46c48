"""Exception hierarchy raised by the QuadrigaCX client."""

from __future__ import annotations

from typing import Optional


class QuadrigaError(Exception):
    """Base class for every error raised by this package."""


class ExchangeConnectionError(QuadrigaError):
    """Transport failure: DNS, TLS, refused connection or timeout."""

    def __init__(self, method: str, url: str, message: str) -> None:
        self.method = method
        self.url = url
        self.message = message
        super().__init__(f"{method} {url} failed: {message}")


class ResponseDecodeError(QuadrigaError, ValueError):
    """Response body was not valid JSON or did not have the expected shape."""

    def __init__(self, message: str, body: Optional[bytes] = None) -> None:
        self.message = message
        self.body = body
        super().__init__(message)


class ExchangeAPIError(ResponseDecodeError):
    """The exchange answered with an error status or an error object."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        api_code: Optional[int] = None,
        body: Optional[bytes] = None,
    ) -> None:
        self.status_code = status_code
        self.api_code = api_code
        super().__init__(message, body=body)

    def __str__(self) -> str:
        parts = []
        if self.status_code is not None:
            parts.append(f"HTTP {self.status_code}")
        if self.api_code is not None:
            parts.append(f"code {self.api_code}")
        parts.append(self.message)
        return ": ".join(parts)


class BooleanParseError(ResponseDecodeError):
    """Cancel response was not a recognised boolean literal."""


class ConfigError(QuadrigaError, ValueError):
    """Client settings could not be read or parsed."""


class OrderNotFoundError(QuadrigaError, LookupError):
    """Order lookup returned no matching order."""

    def __init__(self, order_id: str) -> None:
        self.order_id = order_id
        super().__init__(f"Order {order_id} not found")


__all__ = [
    "QuadrigaError",
    "ExchangeConnectionError",
    "ResponseDecodeError",
    "ExchangeAPIError",
    "BooleanParseError",
    "OrderNotFoundError",
    "ConfigError",
]
