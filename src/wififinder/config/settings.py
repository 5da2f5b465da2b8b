# src/wififinder/config/settings.py
"""
Application settings (Pydantic).

Settings are loaded from `src/wififinder/config/defaults.yaml`, then optionally overridden by:
- an external YAML file via `WIFIFINDER_CONFIG_PATH` (replaces the packaged defaults)
- environment variables (e.g., `WIFIFINDER_LOG_LEVEL`, `WIFIFINDER_OVERPASS_URL`)

Design rule:
- Tuning knobs (timeouts, match radius, default signal) live in YAML, not in business logic.
"""

from __future__ import annotations

import os
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any
from wififinder.core.env import load_dotenv_if_present

import yaml
from pydantic import BaseModel, Field


def _read_package_yaml(filename: str) -> dict[str, Any]:
    """Read a YAML file packaged inside `wififinder.config`."""
    text = resources.files("wififinder.config").joinpath(filename).read_text(encoding="utf-8")
    data = yaml.safe_load(text) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid YAML root object for {filename}; expected a mapping.")
    return data


def _read_yaml_file(path: str | Path) -> dict[str, Any]:
    """Read a YAML file from disk and return its mapping root."""
    data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid YAML root object for {path}; expected a mapping.")
    return data


class AppSettings(BaseModel):
    name: str = "WiFiFinder"
    version: str = "0.1.0"
    log_level: str = "INFO"


class OverpassSettings(BaseModel):
    base_url: str = "https://overpass-api.de/api/interpreter"
    # httpx applies this per phase (connect/read/write/pool); discovery also uses it
    # as the overall deadline for the venue fetch.
    timeout_seconds: float = Field(25, gt=0)
    # Server-side `[timeout:N]` directive embedded in the query.
    query_timeout_seconds: int = Field(25, ge=1)
    user_agent: str = "wififinder/0.1.0 (+https://local)"


class DiscoverySettings(BaseModel):
    default_radius_m: int = Field(1000, ge=0)
    wifi_match_radius_m: float = Field(100, gt=0)
    default_ssid: str = "Free WiFi"
    default_signal_dbm: int = -65


class Settings(BaseModel):
    app: AppSettings = Field(default_factory=AppSettings)
    overpass: OverpassSettings = Field(default_factory=OverpassSettings)
    discovery: DiscoverySettings = Field(default_factory=DiscoverySettings)


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    """Overlay selected environment variables onto raw settings payload.

    Note: We intentionally keep this whitelist small.
    """
    data = dict(data)
    log_level = os.getenv("WIFIFINDER_LOG_LEVEL")
    if log_level:
        data.setdefault("app", {})["log_level"] = log_level

    overpass_url = os.getenv("WIFIFINDER_OVERPASS_URL")
    if overpass_url:
        data.setdefault("overpass", {})["base_url"] = overpass_url

    timeout = os.getenv("WIFIFINDER_HTTP_TIMEOUT_SECONDS")
    if timeout:
        data.setdefault("overpass", {})["timeout_seconds"] = timeout

    return data


@lru_cache
def get_settings() -> Settings:
    """Load and validate settings (cached)."""
    load_dotenv_if_present()
    config_path = os.getenv("WIFIFINDER_CONFIG_PATH")
    raw = _read_yaml_file(config_path) if config_path else _read_package_yaml("defaults.yaml")
    raw = _apply_env_overrides(raw)
    return Settings.model_validate(raw)


@lru_cache
def get_logging_config() -> dict[str, Any]:
    """Load logging configuration (cached)."""
    return _read_package_yaml("logging.yaml")
