"""Configuration schema — dataclasses for every config section."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

OutputFormat = Literal["terminal", "json", "yaml"]

OUTPUT_FORMATS = ("terminal", "json", "yaml")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class StatusConfig:
    include_untracked: bool = True
    diff_context_lines: int = 3


@dataclass
class CompareConfig:
    target_branch: str = ""  # empty = auto-detect main/master
    diff_context_lines: int = 3


@dataclass
class GitConfig:
    binary: str = "git"
    timeout: float = 0  # seconds; 0 = wait indefinitely


@dataclass
class OutputConfig:
    format: OutputFormat = "terminal"


@dataclass
class LoggingConfig:
    level: str = "WARNING"


@dataclass
class GitProbeConfig:
    status: StatusConfig = field(default_factory=StatusConfig)
    compare: CompareConfig = field(default_factory=CompareConfig)
    git: GitConfig = field(default_factory=GitConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
