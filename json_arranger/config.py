"""
Configuration for JSON Arranger.

Loaded from:
1. Defaults (this file)
2. Config file ($XDG_CONFIG_HOME/json-arranger/config.toml, section [arranger]) if it exists
3. Environment variables (JSON_ARRANGER_*) override the file
"""

from __future__ import annotations

import contextlib
import logging
import os
import tomllib
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional

from .io_utils import EXPORT_FILENAME

logger = logging.getLogger(__name__)

ENV_PREFIX = "JSON_ARRANGER_"


@dataclass
class AppConfig:
    """Settings for the viewer shell; the engine itself takes no configuration."""
    source_path: Optional[str] = None  # document loaded when the page opens
    source_url: Optional[str] = None  # used when no source_path is set
    fetch_timeout: float = 10.0
    export_filename: str = EXPORT_FILENAME
    log_level: str = "INFO"
    server_name: Optional[str] = None
    server_port: Optional[int] = None


_CONVERTERS = {
    "source_path": str,
    "source_url": str,
    "fetch_timeout": float,
    "export_filename": str,
    "log_level": str,
    "server_name": str,
    "server_port": int,
}


def get_config_path() -> Path:
    """Get config file path, respecting XDG."""
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "json-arranger" / "config.toml"
    return Path.home() / ".config" / "json-arranger" / "config.toml"


def _apply_values(config: AppConfig, values: dict) -> AppConfig:
    for f in fields(config):
        if f.name not in values:
            continue
        with contextlib.suppress(TypeError, ValueError):
            setattr(config, f.name, _CONVERTERS[f.name](values[f.name]))
    return config


def _apply_env(config: AppConfig) -> AppConfig:
    """Apply environment variable overrides."""
    values = {}
    for f in fields(config):
        val = os.environ.get(ENV_PREFIX + f.name.upper())
        if val:
            values[f.name] = val
    return _apply_values(config, values)


def load_config(path: Optional[Path] = None) -> AppConfig:
    """Load config from file if it exists, then apply environment overrides."""
    config = AppConfig()
    path = path or get_config_path()

    if path.exists():
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
            config = _apply_values(config, data.get("arranger", {}))
        except (OSError, tomllib.TOMLDecodeError) as exc:
            logger.warning(f"Ignoring unreadable config file {path}: {exc}")

    return _apply_env(config)
