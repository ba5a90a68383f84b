"""Load and merge configuration from .docscan.toml and env vars."""

from __future__ import annotations

import dataclasses
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from docscan.config.schema import (
    LOG_FORMATS,
    LOG_LEVELS,
    LOG_OUTPUTS,
    DocScanConfig,
    LoggingConfig,
    RulesConfig,
    ServerConfig,
)

CONFIG_FILENAME = ".docscan.toml"


class ConfigError(Exception):
    """Raised when config is malformed or unreadable."""


def find_config_file(base_dir: Path, override: Optional[str] = None) -> Optional[Path]:
    """Locate the config file. *override* takes precedence."""
    if override:
        p = Path(override)
        if not p.is_file():
            raise ConfigError(f"Config file not found: {override}")
        return p
    candidate = base_dir / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def _parse_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc


def _build_section(data: Dict[str, Any], cls: type, section: str):
    """Build a dataclass from a TOML section dict, ignoring unknown keys."""
    raw = data.get(section, {})
    if not isinstance(raw, dict):
        raise ConfigError(f"[{section}] must be a table")
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    return cls(**{k: v for k, v in raw.items() if k in valid_fields})


def _merge_env_overrides(cfg: DocScanConfig) -> None:
    """Apply DOCSCAN_* environment variable overrides."""
    if val := os.environ.get("DOCSCAN_RULES_FILE"):
        cfg.rules.file = val
    if val := os.environ.get("DOCSCAN_RULES_DIR"):
        cfg.rules.directory = val
    if val := os.environ.get("DOCSCAN_HOST"):
        cfg.server.host = val
    if val := os.environ.get("DOCSCAN_PORT"):
        try:
            cfg.server.port = int(val)
        except ValueError:
            pass
    if val := os.environ.get("DOCSCAN_LOG_LEVEL"):
        if val.lower() in LOG_LEVELS:
            cfg.logging.level = val.lower()  # type: ignore[assignment]
    if val := os.environ.get("DOCSCAN_LOG_FORMAT"):
        if val.lower() in LOG_FORMATS:
            cfg.logging.format = val.lower()  # type: ignore[assignment]
    if val := os.environ.get("DOCSCAN_LOGGING"):
        if val.lower() in LOG_OUTPUTS:
            cfg.logging.output = val.lower()  # type: ignore[assignment]


def load_config(
    base_dir: Path,
    config_override: Optional[str] = None,
) -> DocScanConfig:
    """Load, validate, and return a DocScanConfig."""
    config_path = find_config_file(base_dir, config_override)

    if config_path is None:
        cfg = DocScanConfig()
    else:
        raw = _parse_toml(config_path)
        cfg = DocScanConfig(
            rules=_build_section(raw, RulesConfig, "rules"),
            server=_build_section(raw, ServerConfig, "server"),
            logging=_build_section(raw, LoggingConfig, "logging"),
        )

    _merge_env_overrides(cfg)
    return cfg
