"""
Logging configuration.

We use a YAML logging config (`src/wififinder/config/logging.yaml`) and then apply
runtime overrides: an explicit level (CLI `--log-level`) wins over settings
(`app.log_level` / `WIFIFINDER_LOG_LEVEL`).
"""

from __future__ import annotations

import copy
import logging.config

from wififinder.config.settings import get_logging_config, get_settings


def configure_logging(level: str | None = None) -> str:
    """Apply the packaged YAML logging config; returns the effective level name."""
    config = copy.deepcopy(get_logging_config())

    effective = (level or get_settings().app.log_level).upper()
    config.setdefault("root", {})["level"] = effective
    for handler in config.get("handlers", {}).values():
        if isinstance(handler, dict) and "level" in handler:
            handler["level"] = effective

    logging.config.dictConfig(config)
    return effective
