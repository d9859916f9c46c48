"""Request signing for authenticated QuadrigaCX endpoints.

Every private POST carries ``key``, ``nonce`` and ``signature``. The signature
is the lowercase hex HMAC-SHA256 of ``nonce + client_id + api_key`` keyed with
the API secret. The exchange rejects nonces that do not increase, so nonces
come from a per-client :class:`NonceGenerator`.
"""

from __future__ import annotations

import hashlib
import hmac
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional


class NonceGenerator:
    """Nanosecond wall-clock nonces that are strictly increasing.

    If the clock does not advance between calls (coarse resolution) or steps
    backwards, the previous value plus one is returned instead.
    """

    def __init__(self, clock: Optional[Callable[[], int]] = None) -> None:
        self._clock = clock or time.time_ns
        self._last = 0
        self._lock = threading.Lock()

    def next(self) -> str:
        with self._lock:
            value = max(int(self._clock()), self._last + 1)
            self._last = value
        return str(value)


@dataclass(frozen=True)
class AuthPayload:
    """Authentication fields merged into every private request body."""

    key: str
    signature: str
    nonce: str

    def to_dict(self) -> Dict[str, str]:
        return {"key": self.key, "signature": self.signature, "nonce": self.nonce}


@dataclass(frozen=True)
class OrderIdentifier:
    id: str

    def to_dict(self) -> Dict[str, str]:
        return {"id": self.id}


def sign_message(nonce: str, client_id: str, api_key: str, api_secret: str) -> str:
    """Return the hex HMAC-SHA256 signature for a nonce and credentials."""

    message = f"{nonce}{client_id}{api_key}".encode("utf-8")
    return hmac.new(api_secret.encode("utf-8"), message, hashlib.sha256).hexdigest()


class Signer:
    """Builds fresh :class:`AuthPayload` objects for one set of credentials."""

    def __init__(
        self,
        client_id: str,
        api_key: str,
        api_secret: str,
        nonce_generator: Optional[NonceGenerator] = None,
    ) -> None:
        self.client_id = client_id
        self.api_key = api_key
        self._api_secret = api_secret
        self.nonce_generator = nonce_generator or NonceGenerator()

    def sign(self) -> AuthPayload:
        nonce = self.nonce_generator.next()
        signature = sign_message(nonce, self.client_id, self.api_key, self._api_secret)
        return AuthPayload(key=self.api_key, signature=signature, nonce=nonce)

    def body(self, **fields: Any) -> Dict[str, Any]:
        """Return a request body: auth fields plus any endpoint fields."""

        payload: Dict[str, Any] = self.sign().to_dict()
        payload.update({key: value for key, value in fields.items() if value is not None})
        return payload


__all__ = ["NonceGenerator", "AuthPayload", "OrderIdentifier", "sign_message", "Signer"]
