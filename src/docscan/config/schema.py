"""Configuration schema — dataclasses for every config section."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

LogLevel = Literal["debug", "info", "warn", "error"]
LogFormat = Literal["text", "json"]
LogOutput = Literal["stderr", "stdout", "file"]

LOG_LEVELS = ("debug", "info", "warn", "error")
LOG_FORMATS = ("text", "json")
LOG_OUTPUTS = ("stderr", "stdout", "file")


@dataclass
class RulesConfig:
    file: str = "rules.yaml"  # active rule set, loaded at startup
    directory: str = "rules"  # named rule sets for /ruleset?rule=NAME


@dataclass
class ServerConfig:
    host: str = "0.0.0.0"
    port: int = 8080
    max_upload_mb: int = 10


@dataclass
class LoggingConfig:
    level: LogLevel = "info"
    format: LogFormat = "text"
    output: LogOutput = "stderr"
    file: str = "docscan.log"  # used when output = "file"


@dataclass
class DocScanConfig:
    rules: RulesConfig = field(default_factory=RulesConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
