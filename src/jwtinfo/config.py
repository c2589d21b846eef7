"""
Configuration loading, validation, and typed models.

Supports:
  - optional YAML config file (output and logging defaults)
  - environment variable overrides (JWTINFO_CONFIG, JWTINFO_PRETTY)
  - CLI argument merging via merge_cli_overrides()

No config file is required: without one the built-in defaults apply.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from .formatters import PARTS

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "ENV_CONFIG",
    "ENV_PRETTY",
    "ConfigError",
    "OutputConfig",
    "LoggingConfig",
    "AppConfig",
    "resolve_config_path",
    "load_config",
    "merge_cli_overrides",
]

logger = logging.getLogger(__name__)

# Default config path, only read if it exists
DEFAULT_CONFIG_PATH = os.path.join(os.path.expanduser("~"), ".config", "jwtinfo", "config.yaml")

# Environment variable names
ENV_CONFIG = "JWTINFO_CONFIG"
ENV_PRETTY = "JWTINFO_PRETTY"

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


# ---------------------------------------------------------------------------
# Typed configuration models
# ---------------------------------------------------------------------------

class ConfigError(Exception):
    """Raised when the configuration file is missing or invalid."""


@dataclass(frozen=True)
class OutputConfig:
    pretty: bool = False
    indent: int = 2
    sort_keys: bool = True
    part: str = "body"


@dataclass(frozen=True)
class LoggingConfig:
    verbose: bool = False
    file: str = ""


@dataclass(frozen=True)
class AppConfig:
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


# ---------------------------------------------------------------------------
# Value coercion
# ---------------------------------------------------------------------------

def _as_bool(value, field_name: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
    raise ConfigError(f"Invalid {field_name}: {value!r} — expected a boolean.")


def _section(raw: dict, name: str) -> dict:
    section = raw.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigError(f"'{name}' must be a mapping, got {type(section).__name__}")
    return section


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------

def resolve_config_path(cli_path: str | None = None) -> str | None:
    """Pick the config file to read.

    Precedence: ``--config`` > ``JWTINFO_CONFIG`` > ``DEFAULT_CONFIG_PATH``.
    A path requested by flag or environment is returned even if it does not
    exist, so that load_config() reports it.  The default path is returned
    only if it exists, otherwise None.
    """
    if cli_path:
        return cli_path
    env_path = os.environ.get(ENV_CONFIG)
    if env_path:
        return env_path
    if os.path.isfile(DEFAULT_CONFIG_PATH):
        return DEFAULT_CONFIG_PATH
    return None


def load_config(config_path: str | None = None) -> AppConfig:
    """Load and validate the YAML configuration file.

    ``JWTINFO_PRETTY`` takes precedence over ``output.pretty`` from the file.
    With no *config_path* only defaults and environment overrides apply.

    Raises:
        ConfigError: If the file is missing, malformed, or holds invalid values.
    """
    raw: dict = {}
    if config_path is not None:
        path = Path(config_path)
        if not path.is_file():
            raise ConfigError(f"Config file not found: {config_path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                loaded = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Could not parse config file {config_path}: {exc}") from exc

        if loaded is None:
            loaded = {}
        if not isinstance(loaded, dict):
            raise ConfigError(
                f"Invalid config file format: expected YAML mapping, got {type(loaded).__name__}"
            )
        raw = loaded

    # --- Output ---
    out_section = _section(raw, "output")
    pretty = _as_bool(out_section.get("pretty", False), "output.pretty")

    indent = out_section.get("indent", 2)
    if isinstance(indent, bool) or not isinstance(indent, int) or indent < 0:
        raise ConfigError(f"Invalid output.indent: {indent!r} — expected a non-negative integer.")

    sort_keys = _as_bool(out_section.get("sort_keys", True), "output.sort_keys")

    part = out_section.get("part", "body") or "body"
    if part not in PARTS:
        raise ConfigError(f"Invalid output.part: {part!r}. Expected one of: {', '.join(PARTS)}.")

    env_pretty = os.environ.get(ENV_PRETTY)
    if env_pretty:
        pretty = _as_bool(env_pretty, ENV_PRETTY)

    # --- Logging ---
    log_section = _section(raw, "logging")
    verbose = _as_bool(log_section.get("verbose", False), "logging.verbose")
    log_file = log_section.get("file", "") or ""
    if not isinstance(log_file, str):
        raise ConfigError(f"Invalid logging.file: {log_file!r} — expected a path string.")

    config = AppConfig(
        output=OutputConfig(pretty=pretty, indent=indent, sort_keys=sort_keys, part=part),
        logging=LoggingConfig(verbose=verbose, file=log_file),
    )

    logger.debug("Config loaded from %s", config_path or "(defaults)")
    return config


# ---------------------------------------------------------------------------
# CLI override merging
# ---------------------------------------------------------------------------

def merge_cli_overrides(cfg: AppConfig, args) -> AppConfig:
    """Merge CLI arguments over loaded config, returning a new AppConfig.

    ``args`` is expected to have attributes matching argparse output:
    header, full, pretty, verbose, log_file.  Flags only ever switch a
    setting on; an unset flag leaves the configured value in place.
    """
    output = cfg.output
    part = output.part
    if getattr(args, "full", False):
        part = "full"
    elif getattr(args, "header", False):
        part = "header"

    log_file = getattr(args, "log_file", None)

    return AppConfig(
        output=OutputConfig(
            pretty=output.pretty or getattr(args, "pretty", False),
            indent=output.indent,
            sort_keys=output.sort_keys,
            part=part,
        ),
        logging=LoggingConfig(
            verbose=cfg.logging.verbose or getattr(args, "verbose", False),
            file=log_file if log_file is not None else cfg.logging.file,
        ),
    )
