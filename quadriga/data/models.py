"""Typed records decoded from QuadrigaCX REST responses.

The exchange encodes every number as a string. Each record converts the
fields it knows about to ``float``/``int`` and keeps the decoded JSON in
``raw`` so callers can reach anything the record does not model. Fields the
exchange omits decode to ``None``.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from quadriga.infra.errors import ResponseDecodeError


def _safe_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    try:
        if value is None or value == "":
            return None
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _safe_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    try:
        if value is None or value == "":
            return None
        return int(value)
    except (TypeError, ValueError):
        return None


def _parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse unix seconds, milliseconds or nanoseconds, or
    ``YYYY-MM-DD HH:MM:SS`` strings, as UTC.

    Raises:
        ResponseDecodeError: a numeric timestamp outside the platform range.
    """

    if value is None or value == "":
        return None
    numeric = _safe_float(value)
    if numeric is not None:
        if abs(numeric) > 1e17:
            numeric = numeric / 1e9
        elif abs(numeric) > 1e12:
            numeric = numeric / 1000.0
        try:
            return datetime.fromtimestamp(numeric, tz=timezone.utc)
        except (OverflowError, OSError, ValueError) as exc:
            raise ResponseDecodeError(f"Timestamp out of range: {value!r}") from exc
    if isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed.astimezone(timezone.utc)
    return None


def _expect_dict(payload: Any, record: str) -> Dict[str, Any]:
    if not isinstance(payload, dict):
        raise ResponseDecodeError(f"Expected a JSON object for {record}, got {type(payload).__name__}")
    return payload


def _expect_list(payload: Any, record: str) -> List[Any]:
    if not isinstance(payload, list):
        raise ResponseDecodeError(f"Expected a JSON array for {record}, got {type(payload).__name__}")
    return payload


@dataclass
class Ticker:
    """Trading summary for a book over the last 24 hours."""

    high: Optional[float]
    low: Optional[float]
    last: Optional[float]
    bid: Optional[float] = None
    ask: Optional[float] = None
    volume: Optional[float] = None
    vwap: Optional[float] = None
    timestamp: Optional[datetime] = None
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_payload(cls, payload: Any) -> "Ticker":
        data = _expect_dict(payload, "ticker")
        return cls(
            high=_safe_float(data.get("high")),
            low=_safe_float(data.get("low")),
            last=_safe_float(data.get("last")),
            bid=_safe_float(data.get("bid")),
            ask=_safe_float(data.get("ask")),
            volume=_safe_float(data.get("volume")),
            vwap=_safe_float(data.get("vwap")),
            timestamp=_parse_timestamp(data.get("timestamp")),
            raw=data,
        )


@dataclass
class PriceLevel:
    price: float
    amount: float


@dataclass
class OrderBook:
    """Outstanding bids (best first) and asks (best first)."""

    bids: List[PriceLevel]
    asks: List[PriceLevel]
    timestamp: Optional[datetime] = None
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_payload(cls, payload: Any) -> "OrderBook":
        data = _expect_dict(payload, "order book")
        return cls(
            bids=cls._levels(data.get("bids")),
            asks=cls._levels(data.get("asks")),
            timestamp=_parse_timestamp(data.get("timestamp")),
            raw=data,
        )

    @staticmethod
    def _levels(side: Any) -> List[PriceLevel]:
        levels: List[PriceLevel] = []
        for level in _expect_list(side or [], "order book side"):
            if not isinstance(level, (list, tuple)) or len(level) < 2:
                raise ResponseDecodeError(f"Malformed order book level: {level!r}")
            price, amount = _safe_float(level[0]), _safe_float(level[1])
            if price is None or amount is None:
                raise ResponseDecodeError(f"Non-numeric order book level: {level!r}")
            levels.append(PriceLevel(price=price, amount=amount))
        return levels

    def best_bid(self) -> Optional[PriceLevel]:
        return self.bids[0] if self.bids else None

    def best_ask(self) -> Optional[PriceLevel]:
        return self.asks[0] if self.asks else None


@dataclass
class Transaction:
    """A single public trade."""

    tid: Optional[int]
    price: Optional[float]
    amount: Optional[float]
    side: Optional[str]
    date: Optional[datetime]
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_payload(cls, payload: Any) -> "Transaction":
        data = _expect_dict(payload, "transaction")
        return cls(
            tid=_safe_int(data.get("tid")),
            price=_safe_float(data.get("price")),
            amount=_safe_float(data.get("amount")),
            side=data.get("side"),
            date=_parse_timestamp(data.get("date")),
            raw=data,
        )

    @classmethod
    def list_from_payload(cls, payload: Any) -> List["Transaction"]:
        return [cls.from_payload(item) for item in _expect_list(payload, "transactions")]


@dataclass
class CurrencyBalance:
    balance: Optional[float] = None
    reserved: Optional[float] = None
    available: Optional[float] = None


@dataclass
class AccountBalance:
    """Balances keyed by lowercase currency code, plus the account fee."""

    currencies: Dict[str, CurrencyBalance]
    fee: Optional[float] = None
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)

    _SUFFIXES = ("balance", "reserved", "available")

    @classmethod
    def from_payload(cls, payload: Any) -> "AccountBalance":
        data = _expect_dict(payload, "account balance")
        currencies: Dict[str, CurrencyBalance] = {}
        for key, value in data.items():
            currency, _, suffix = key.rpartition("_")
            if not currency or suffix not in cls._SUFFIXES:
                continue
            entry = currencies.setdefault(currency.lower(), CurrencyBalance())
            setattr(entry, suffix, _safe_float(value))
        return cls(currencies=currencies, fee=_safe_float(data.get("fee")), raw=data)

    def get(self, currency: str) -> Optional[CurrencyBalance]:
        return self.currencies.get(currency.lower())


@dataclass
class OpenOrder:
    """An order resting on the book. ``type`` is 0 for buy, 1 for sell."""

    id: str
    datetime: Optional[datetime]
    type: Optional[int]
    price: Optional[float]
    amount: Optional[float]
    status: Optional[int]
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_payload(cls, payload: Any) -> "OpenOrder":
        data = _expect_dict(payload, "open order")
        return cls(
            id=str(data.get("id", "")),
            datetime=_parse_timestamp(data.get("datetime")),
            type=_safe_int(data.get("type")),
            price=_safe_float(data.get("price")),
            amount=_safe_float(data.get("amount")),
            status=_safe_int(data.get("status")),
            raw=data,
        )

    @classmethod
    def list_from_payload(cls, payload: Any) -> List["OpenOrder"]:
        return [cls.from_payload(item) for item in _expect_list(payload, "open orders")]

    @property
    def side(self) -> Optional[str]:
        return {0: "buy", 1: "sell"}.get(self.type) if self.type is not None else None


@dataclass
class LookupOrder:
    """Full order detail as returned by ``lookup_order``.

    ``status`` is -1 cancelled, 0 active, 1 partially filled, 2 complete.
    """

    id: str
    book: Optional[str]
    price: Optional[float]
    amount: Optional[float]
    type: Optional[int]
    status: Optional[int]
    created: Optional[datetime]
    updated: Optional[datetime]
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_payload(cls, payload: Any) -> "LookupOrder":
        data = _expect_dict(payload, "order")
        return cls(
            id=str(data.get("id", "")),
            book=data.get("book"),
            price=_safe_float(data.get("price")),
            amount=_safe_float(data.get("amount")),
            type=_safe_int(data.get("type")),
            status=_safe_int(data.get("status")),
            created=_parse_timestamp(data.get("created")),
            updated=_parse_timestamp(data.get("updated")),
            raw=data,
        )


def to_dict(record: Any) -> Dict[str, Any]:
    """Return a JSON-serializable view of a record, without ``raw``."""

    payload = asdict(record)
    payload.pop("raw", None)
    return payload


__all__ = [
    "Ticker",
    "PriceLevel",
    "OrderBook",
    "Transaction",
    "CurrencyBalance",
    "AccountBalance",
    "OpenOrder",
    "LookupOrder",
    "to_dict",
]
