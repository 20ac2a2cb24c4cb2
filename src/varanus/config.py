"""Configuration loading and validation for varanus."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

CONFIG_VERSION = 1

DEFAULT_PATHS = (Path("varanus.yaml"), Path("config.json"))

# camelCase names used by existing deployments
_KEY_ALIASES = {
    "configVersion": "config_version",
    "collectorAddress": "collector_address",
    "logLevel": "log_level",
    "networkAdapterName": "network_adapter",
    "authKey": "auth_key",
}


class ConfigError(Exception):
    """Raised when the configuration cannot be read or is invalid."""


@dataclass
class IntervalConfig:
    """Sampling and reporting cadences, in seconds."""

    load_seconds: float = 1.0
    memory_seconds: float = 3.0
    network_window_seconds: float = 1.0
    disk_seconds: float = 60.0
    disk_timeout_seconds: float = 30.0
    identity_seconds: float = 60.0
    report_warmup_seconds: float = 5.0
    report_seconds: float = 1.0


@dataclass
class AgentConfig:
    """Top-level varanus configuration."""

    collector_address: str = ""
    config_version: int = CONFIG_VERSION
    log_level: int = 1
    network_adapter: str = "eth0"
    auth_key: str = ""
    intervals: IntervalConfig = field(default_factory=IntervalConfig)


def _apply_aliases(data: dict[str, Any]) -> dict[str, Any]:
    """Rename camelCase keys to their snake_case equivalents."""
    for alias, key in _KEY_ALIASES.items():
        if alias in data and key not in data:
            data[key] = data.pop(alias)
    return data


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    """Apply environment variable overrides using VARANUS_ prefix."""
    env_map = {
        "VARANUS_COLLECTOR_ADDRESS": "collector_address",
        "VARANUS_LOG_LEVEL": "log_level",
        "VARANUS_NETWORK_ADAPTER": "network_adapter",
        "VARANUS_AUTH_KEY": "auth_key",
    }
    for env_key, key in env_map.items():
        value = os.environ.get(env_key)
        if value is not None:
            data[key] = value
    return data


def _dict_to_config(data: dict[str, Any]) -> AgentConfig:
    """Convert a raw dictionary to an AgentConfig dataclass."""
    intervals_data = data.get("intervals") or {}
    if not isinstance(intervals_data, dict):
        raise ConfigError("'intervals' must be a mapping")

    try:
        intervals = IntervalConfig(**{
            k: float(v) for k, v in intervals_data.items()
            if k in IntervalConfig.__dataclass_fields__
        })
        return AgentConfig(
            collector_address=str(data.get("collector_address", "")),
            config_version=int(data.get("config_version", CONFIG_VERSION)),
            log_level=int(data.get("log_level", 1)),
            network_adapter=str(data.get("network_adapter", "eth0")),
            auth_key=str(data.get("auth_key", "")),
            intervals=intervals,
        )
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid configuration value: {exc}") from exc


def split_address(address: str) -> tuple[str, int]:
    """Split ``host:port`` (or ``[v6addr]:port``) into its parts.

    Raises :class:`ValueError` when the port is missing or not a number.
    """
    host, sep, port = address.rpartition(":")
    if not sep or not host or not port:
        raise ValueError(f"address {address!r} is not in host:port form")
    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
    try:
        port_num = int(port)
    except ValueError:
        raise ValueError(f"address {address!r} has a non-numeric port") from None
    if not 0 < port_num < 65536:
        raise ValueError(f"address {address!r} has an out-of-range port")
    return host, port_num


def validate_config(cfg: AgentConfig) -> AgentConfig:
    """Check ranges and formats, raising :class:`ConfigError` on failure."""
    if not 0 <= cfg.log_level <= 4:
        raise ConfigError(f"log_level must be between 0 and 4, got {cfg.log_level}")
    try:
        split_address(cfg.collector_address)
    except ValueError as exc:
        raise ConfigError(f"collector_address: {exc}") from exc
    for name, value in vars(cfg.intervals).items():
        if value <= 0:
            raise ConfigError(f"intervals.{name} must be positive, got {value}")
    if cfg.config_version > CONFIG_VERSION:
        logger.warning(
            "Configuration version %d is newer than supported version %d",
            cfg.config_version,
            CONFIG_VERSION,
        )
    return cfg


def _resolve_path(path: str | Path | None) -> Path:
    if path is not None:
        return Path(path)
    for candidate in DEFAULT_PATHS:
        if candidate.exists():
            return candidate
    return DEFAULT_PATHS[0]


def load_config(path: str | Path | None = None) -> AgentConfig:
    """Load configuration from a YAML (or JSON) file with environment overrides.

    Looks for ``varanus.yaml`` and then ``config.json`` in the current
    directory if *path* is None. Unlike most settings files a missing
    configuration is an error: the agent has no sensible collector default.
    """
    path = _resolve_path(path)

    try:
        with open(path, encoding="utf-8") as fh:
            loaded = yaml.safe_load(fh)
    except OSError as exc:
        raise ConfigError(f"Failed to read {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc

    if not isinstance(loaded, dict):
        raise ConfigError(f"{path} does not contain a mapping")

    data = _apply_env_overrides(_apply_aliases(loaded))
    cfg = validate_config(_dict_to_config(data))
    logger.debug("Configuration loaded from %s", path)
    return cfg
