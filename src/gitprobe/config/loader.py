"""Load and merge configuration from .gitprobe.toml and env vars."""

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

from gitprobe.config.defaults import CONFIG_FILENAME
from gitprobe.config.schema import (
    LOG_LEVELS,
    OUTPUT_FORMATS,
    CompareConfig,
    GitConfig,
    GitProbeConfig,
    LoggingConfig,
    OutputConfig,
    StatusConfig,
)


class ConfigError(Exception):
    """Raised when config is malformed or unreadable."""


def find_config_file(root: Path, override: Optional[str] = None) -> Optional[Path]:
    """Locate the config file. *override* takes precedence."""
    if override:
        p = Path(override)
        if not p.is_file():
            raise ConfigError(f"Config file not found: {override}")
        return p
    candidate = root / CONFIG_FILENAME
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


def _validate(cfg: GitProbeConfig) -> None:
    if cfg.output.format not in OUTPUT_FORMATS:
        raise ConfigError(
            f"Invalid output format {cfg.output.format!r}; "
            f"expected one of {', '.join(OUTPUT_FORMATS)}"
        )
    cfg.logging.level = str(cfg.logging.level).upper()
    if cfg.logging.level not in LOG_LEVELS:
        raise ConfigError(f"Invalid log level {cfg.logging.level!r}")
    for name, value in (
        ("status.diff_context_lines", cfg.status.diff_context_lines),
        ("compare.diff_context_lines", cfg.compare.diff_context_lines),
    ):
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise ConfigError(f"{name} must be a non-negative integer")
    timeout = cfg.git.timeout
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout < 0:
        raise ConfigError("git.timeout must be a non-negative number")


def _merge_env_overrides(cfg: GitProbeConfig) -> None:
    """Apply GITPROBE_* environment variable overrides."""
    if val := os.environ.get("GITPROBE_GIT_BINARY"):
        cfg.git.binary = val
    if val := os.environ.get("GITPROBE_TIMEOUT"):
        try:
            cfg.git.timeout = float(val)
        except ValueError as exc:
            raise ConfigError(f"GITPROBE_TIMEOUT is not a number: {val}") from exc
    if val := os.environ.get("GITPROBE_FORMAT"):
        if val in OUTPUT_FORMATS:
            cfg.output.format = val  # type: ignore[assignment]
    if val := os.environ.get("GITPROBE_LOG_LEVEL"):
        cfg.logging.level = val
    if val := os.environ.get("GITPROBE_TARGET_BRANCH"):
        cfg.compare.target_branch = val


def load_config(
    root: Optional[Path] = None,
    config_override: Optional[str] = None,
) -> GitProbeConfig:
    """Load, validate, and return a GitProbeConfig."""
    config_path = find_config_file(root or Path.cwd(), config_override)

    if config_path is None:
        cfg = GitProbeConfig()
    else:
        raw = _parse_toml(config_path)
        cfg = GitProbeConfig(
            status=_build_section(raw, StatusConfig, "status"),
            compare=_build_section(raw, CompareConfig, "compare"),
            git=_build_section(raw, GitConfig, "git"),
            output=_build_section(raw, OutputConfig, "output"),
            logging=_build_section(raw, LoggingConfig, "logging"),
        )

    _merge_env_overrides(cfg)
    _validate(cfg)
    return cfg
