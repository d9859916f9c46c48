"""QuadrigaCX v2 REST client.

Public endpoints are plain GETs. Private endpoints are POSTs whose JSON body
carries the HMAC authentication fields built by :class:`Signer`. Every call is
a single blocking request; failures are raised as :mod:`quadriga.infra.errors`
exceptions and never terminate the process.
"""

from __future__ import annotations

import json
import logging
import time
from typing import Any, Dict, List, Optional

import requests

from quadriga.infra.errors import (
    BooleanParseError,
    ExchangeAPIError,
    ExchangeConnectionError,
    OrderNotFoundError,
    ResponseDecodeError,
)

from .auth import NonceGenerator, OrderIdentifier, Signer
from .clients import DEFAULT_BASE_URL, DEFAULT_TIMEOUT_SECONDS, ClientConfig, MarketDataClient
from .models import AccountBalance, LookupOrder, OpenOrder, OrderBook, Ticker, Transaction

JSON_CONTENT_TYPE = "application/json; charset=utf-8"

_TRUE_LITERALS = {"1", "t", "T", "TRUE", "true", "True"}
_FALSE_LITERALS = {"0", "f", "F", "FALSE", "false", "False"}


def parse_bool_literal(body: bytes) -> bool:
    """Parse a cancel response such as ``"true"`` or ``true`` into a bool."""

    text = body.decode("utf-8", errors="replace").strip().strip('"')
    if text in _TRUE_LITERALS:
        return True
    if text in _FALSE_LITERALS:
        return False
    raise BooleanParseError(f"Invalid boolean literal: {text!r}", body=body)


class ExchangeClient(MarketDataClient):
    """Client for QuadrigaCX market data and account endpoints."""

    def __init__(
        self,
        client_id: str,
        api_key: str,
        api_secret: str,
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
        logger: Optional[logging.Logger] = None,
        nonce_generator: Optional[NonceGenerator] = None,
    ) -> None:
        self.config = ClientConfig(
            client_id=client_id,
            api_key=api_key,
            api_secret=api_secret,
            base_url=base_url,
            timeout=timeout,
        )
        self.session = session or requests.Session()
        self.logger = logger or logging.getLogger(__name__)
        self.signer = Signer(client_id, api_key, api_secret, nonce_generator=nonce_generator)

    @classmethod
    def from_config(
        cls,
        config: ClientConfig,
        session: Optional[requests.Session] = None,
        logger: Optional[logging.Logger] = None,
        nonce_generator: Optional[NonceGenerator] = None,
    ) -> "ExchangeClient":
        return cls(
            config.client_id,
            config.api_key,
            config.api_secret,
            base_url=config.base_url,
            timeout=config.timeout,
            session=session,
            logger=logger,
            nonce_generator=nonce_generator,
        )

    def url(self, resource: str) -> str:
        return f"{self.config.base_url}{resource}"

    # --- Public endpoints -------------------------------------------------
    def get_ticker(self, book: Optional[str] = None) -> Ticker:
        """Return the trading summary, optionally for a specific book."""

        body = self._rest_get("ticker", params=self._params(book=book))
        return Ticker.from_payload(self._decode_json(body))

    def get_order_book(self, book: Optional[str] = None) -> OrderBook:
        """Return the order book, for the default book unless ``book`` is given."""

        body = self._rest_get("order_book", params=self._params(book=book))
        return OrderBook.from_payload(self._decode_json(body))

    def get_transactions(self, book: Optional[str] = None, time: Optional[str] = None) -> List[Transaction]:
        """Return recent public trades. ``time`` is ``minute`` or ``hour``."""

        body = self._rest_get("transactions", params=self._params(book=book, time=time))
        return Transaction.list_from_payload(self._decode_json(body))

    # --- Private endpoints ------------------------------------------------
    def get_account_balance(self) -> AccountBalance:
        body = self._rest_post("balance", self.signer.body())
        return AccountBalance.from_payload(self._decode_json(body))

    def get_open_orders(self, book: Optional[str] = None) -> List[OpenOrder]:
        body = self._rest_post("open_orders", self.signer.body(book=book))
        return OpenOrder.list_from_payload(self._decode_json(body))

    def lookup_order(self, order_id: str) -> LookupOrder:
        """Return the order with ``order_id``.

        Raises:
            OrderNotFoundError: the exchange returned an empty list.
        """

        lookup = OrderIdentifier(id=order_id)
        body = self._rest_post("lookup_order", self.signer.body(**lookup.to_dict()))
        payload = self._decode_json(body)
        if isinstance(payload, dict):
            # Single order objects are accepted as well as one-element lists.
            payload = [payload]
        if not isinstance(payload, list):
            raise ResponseDecodeError(f"Unexpected lookup_order response: {payload!r}", body=body)
        if not payload:
            self.logger.info(
                "Order %s not found", order_id,
                extra={"event": "order_not_found", "order_id": order_id},
            )
            raise OrderNotFoundError(order_id)
        return LookupOrder.from_payload(payload[0])

    def cancel_order(self, order_id: str) -> bool:
        """Cancel ``order_id``; return the exchange's success flag."""

        cancel = OrderIdentifier(id=order_id)
        body = self._rest_post("cancel_order", self.signer.body(**cancel.to_dict()))
        if body.lstrip().startswith(b"{"):
            self._decode_json(body)
        return parse_bool_literal(body)

    # --- Lifecycle --------------------------------------------------------
    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "ExchangeClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # --- REST helpers -----------------------------------------------------
    def _rest_get(self, resource: str, params: Optional[Dict[str, str]] = None) -> bytes:
        url = self.url(resource)
        return self._send("GET", url, params=params)

    def _rest_post(self, resource: str, payload: Dict[str, Any]) -> bytes:
        url = self.url(resource)
        data = json.dumps(payload).encode("utf-8")
        return self._send("POST", url, data=data, headers={"Content-Type": JSON_CONTENT_TYPE})

    def _send(self, method: str, url: str, **kwargs: Any) -> bytes:
        started = time.monotonic()
        try:
            response = self.session.request(method, url, timeout=self.config.timeout, **kwargs)
            body = response.content
        except requests.RequestException as exc:
            self.logger.warning(
                "%s %s failed: %s", method, url, exc,
                extra={"event": "request_failed", "method": method, "url": url},
            )
            raise ExchangeConnectionError(method, url, str(exc)) from exc

        elapsed_ms = (time.monotonic() - started) * 1000.0
        self.logger.debug(
            "%s %s -> %s", method, url, response.status_code,
            extra={
                "event": "http_response",
                "method": method,
                "url": url,
                "status": response.status_code,
                "elapsed_ms": round(elapsed_ms, 3),
                "bytes": len(body),
            },
        )

        if not 200 <= response.status_code < 300:
            message, api_code = self._error_details(body)
            self.logger.warning(
                "%s %s returned HTTP %s", method, url, response.status_code,
                extra={"event": "http_error", "method": method, "url": url, "status": response.status_code},
            )
            raise ExchangeAPIError(
                message or response.reason or "request failed",
                status_code=response.status_code,
                api_code=api_code,
                body=body,
            )
        return body

    def _decode_json(self, body: bytes) -> Any:
        try:
            payload = json.loads(body)
        except ValueError as exc:
            raise ResponseDecodeError(f"Invalid JSON response: {exc}", body=body) from exc

        if isinstance(payload, dict) and payload.get("error"):
            message, api_code = self._error_details(body, payload)
            self.logger.warning(
                "Exchange error %s: %s", api_code, message,
                extra={"event": "exchange_error", "api_code": api_code},
            )
            raise ExchangeAPIError(message or "exchange error", api_code=api_code, body=body)
        return payload

    @staticmethod
    def _error_details(body: bytes, payload: Any = None) -> tuple[Optional[str], Optional[int]]:
        if payload is None:
            try:
                payload = json.loads(body)
            except ValueError:
                return None, None
        if not isinstance(payload, dict):
            return None, None
        error = payload.get("error")
        if isinstance(error, dict):
            code = error.get("code")
            try:
                code = int(code) if code is not None else None
            except (TypeError, ValueError):
                code = None
            return error.get("message"), code
        if isinstance(error, str):
            return error, None
        return None, None

    @staticmethod
    def _params(**values: Optional[str]) -> Optional[Dict[str, str]]:
        params = {key: value for key, value in values.items() if value is not None}
        return params or None


__all__ = ["ExchangeClient", "JSON_CONTENT_TYPE", "parse_bool_literal"]
