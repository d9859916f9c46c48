"""Config loading utilities for the exchange client and command line."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from quadriga.data.clients import DEFAULT_BASE_URL, DEFAULT_TIMEOUT_SECONDS, ClientConfig
from quadriga.infra.errors import ConfigError

ENV_PREFIX = "QUADRIGA_"


def env_or_default(key: str, default: Optional[str]) -> Optional[str]:
    return os.getenv(key, default)


def _setting(raw: Dict[str, Any], name: str, default: Optional[str]) -> Optional[str]:
    value = raw.get(name)
    if value is None:
        return env_or_default(f"{ENV_PREFIX}{name.upper()}", default)
    return str(value)


def _build(raw: Dict[str, Any]) -> ClientConfig:
    timeout = _setting(raw, "timeout", None)
    try:
        timeout_seconds = float(timeout) if timeout else DEFAULT_TIMEOUT_SECONDS
    except ValueError as exc:
        raise ConfigError(f"Invalid timeout: {timeout!r}") from exc
    return ClientConfig(
        client_id=_setting(raw, "client_id", "") or "",
        api_key=_setting(raw, "api_key", "") or "",
        api_secret=_setting(raw, "api_secret", "") or "",
        base_url=_setting(raw, "base_url", DEFAULT_BASE_URL) or DEFAULT_BASE_URL,
        timeout=timeout_seconds,
    )


def load_config(path: str | Path) -> ClientConfig:
    """Load client settings from YAML, falling back to ``QUADRIGA_*`` env vars.

    The file may hold the settings at the top level or under a ``quadriga``
    key. A missing file is an error; missing keys are not.

    Raises:
        ConfigError: the file is not a YAML mapping or a value is malformed.
    """

    resolved = Path(path).expanduser().resolve()
    with resolved.open("r", encoding="utf-8") as f:
        try:
            raw = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Config file {resolved} is not valid YAML: {exc}") from exc
    if not isinstance(raw, dict):
        raise ConfigError(f"Config file {resolved} must contain a mapping")
    section = raw.get("quadriga", raw)
    return _build(section if isinstance(section, dict) else {})


def config_from_env() -> ClientConfig:
    """Build a :class:`ClientConfig` from ``QUADRIGA_*`` env vars only."""

    return _build({})


__all__ = ["load_config", "config_from_env", "env_or_default", "ENV_PREFIX"]
