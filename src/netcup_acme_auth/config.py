"""Configuration loading and validation from the environment and a credentials file."""

from __future__ import annotations

import json
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path

from netcup_acme_auth.client import DEFAULT_TIMEOUT, NETCUP_ENDPOINT

_CONFIG_FILENAME = "config.json"


@dataclass(frozen=True)
class Credentials:
    """netcup API credentials. Only used to log in."""

    customer_number: str
    api_key: str = field(repr=False)
    api_password: str = field(repr=False)


@dataclass(frozen=True)
class AppConfig:
    """Application configuration."""

    credentials: Credentials
    endpoint_url: str = NETCUP_ENDPOINT
    timeout: float = DEFAULT_TIMEOUT


def _require_env(name: str) -> str:
    value = os.environ.get(name)
    if not value:
        raise ValueError(f"Required environment variable {name} is not set")
    return value


def default_config_path() -> Path:
    """``config.json`` next to the running executable or script."""
    return Path(sys.argv[0]).resolve().with_name(_CONFIG_FILENAME)


def load_credentials(path: Path) -> Credentials:
    """Read credentials from a JSON file with the keys ``CID``, ``API_PW`` and ``API_KEY``."""
    try:
        contents = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ValueError(f"Failed to load {path}: {exc}") from exc
    try:
        data = json.loads(contents)
    except ValueError as exc:
        raise ValueError(f"Failed to parse {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a JSON object")

    values = {}
    for key in ("CID", "API_PW", "API_KEY"):
        value = data.get(key)
        if not isinstance(value, str) or not value:
            raise ValueError(f"{path}: '{key}' must be a non-empty string")
        values[key] = value

    return Credentials(
        customer_number=values["CID"],
        api_key=values["API_KEY"],
        api_password=values["API_PW"],
    )


def load_config(config_path: Path | None = None) -> AppConfig:
    """Load and validate configuration.

    Credentials come from ``NETCUP_CUSTOMER_NUMBER``, ``NETCUP_API_KEY`` and
    ``NETCUP_API_PASSWORD`` when the first is set; otherwise from the JSON file
    at ``config_path``, ``$NETCUP_CONFIG`` or ``config.json`` beside the
    executable, in that order.
    """
    if os.environ.get("NETCUP_CUSTOMER_NUMBER"):
        credentials = Credentials(
            customer_number=_require_env("NETCUP_CUSTOMER_NUMBER"),
            api_key=_require_env("NETCUP_API_KEY"),
            api_password=_require_env("NETCUP_API_PASSWORD"),
        )
    else:
        env_path = os.environ.get("NETCUP_CONFIG")
        path = config_path or (Path(env_path) if env_path else default_config_path())
        credentials = load_credentials(path)

    endpoint_url = os.environ.get("NETCUP_ENDPOINT", NETCUP_ENDPOINT)

    raw_timeout = os.environ.get("NETCUP_TIMEOUT", str(DEFAULT_TIMEOUT))
    try:
        timeout = float(raw_timeout)
    except ValueError:
        raise ValueError(f"NETCUP_TIMEOUT must be a number, got: {raw_timeout!r}")
    if not timeout > 0:
        raise ValueError(f"NETCUP_TIMEOUT must be a positive number, got: {timeout}")

    return AppConfig(
        credentials=credentials,
        endpoint_url=endpoint_url,
        timeout=timeout,
    )
