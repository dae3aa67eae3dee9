"""
Command-line configuration management.

This module handles loading and accessing configuration from multiple sources
with a clear priority order:

    1. Environment variables (highest priority)
    2. Config file (config/chat_formatting.ini)
    3. Built-in defaults (lowest priority)

Configuration is loaded once at module import time and cached. The AppConfig
dataclass provides typed access to all settings. Command-line flags, when
given, take precedence over everything here; that merge happens in cli.py.

Usage:
    from chat_formatting.config import config

    print(config.output.format)
    print(config.translations.path)

Environment Variable Mapping:
    CHATFMT_TRANSLATIONS  -> translations.path
    CHATFMT_OUTPUT        -> output.format
    CHATFMT_LOG_LEVEL     -> logging.level
"""

import configparser
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

# =============================================================================
# PATH CONFIGURATION
# =============================================================================

# Project root directory (contains src/, config/)
PROJECT_ROOT = Path(__file__).parent.parent.parent

CONFIG_DIR = PROJECT_ROOT / "config"
CONFIG_FILE = CONFIG_DIR / "chat_formatting.ini"

OUTPUT_FORMATS = ("legacy", "ansi", "plain")

OutputFormat = Literal["legacy", "ansi", "plain"]


# =============================================================================
# CONFIGURATION DATACLASSES
# =============================================================================


@dataclass
class TranslationSettings:
    """Translation table location."""

    path: str | None = None

    @property
    def absolute_path(self) -> Path | None:
        """Absolute path to the translation table, or None when unset."""
        if not self.path:
            return None
        p = Path(self.path)
        if p.is_absolute():
            return p
        return PROJECT_ROOT / p


@dataclass
class OutputSettings:
    """Rendering target for the legacyfy command."""

    format: OutputFormat = "legacy"


@dataclass
class LoggingSettings:
    """Logging configuration."""

    level: str = "WARNING"


@dataclass
class AppConfig:
    """
    Complete command-line configuration.

    Access via the module-level `config` singleton.
    """

    translations: TranslationSettings = field(default_factory=TranslationSettings)
    output: OutputSettings = field(default_factory=OutputSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)


# =============================================================================
# CONFIGURATION LOADING
# =============================================================================


def _parse_output_format(value: str) -> OutputFormat | None:
    """Normalise an output format name; None if it is not recognised."""
    val = value.strip().lower()
    if val in OUTPUT_FORMATS:
        return val  # type: ignore[return-value]
    return None


def _parse_log_level(value: str) -> str | None:
    """Normalise a logging level name; None if logging does not know it."""
    val = value.strip().upper()
    if val in logging.getLevelNamesMapping():
        return val
    return None


def _load_from_ini(parser: configparser.ConfigParser, cfg: AppConfig) -> None:
    """Load configuration from parsed INI file into AppConfig."""
    if parser.has_section("translations"):
        if parser.has_option("translations", "path"):
            cfg.translations.path = parser.get("translations", "path") or None

    if parser.has_section("output"):
        if parser.has_option("output", "format"):
            fmt = _parse_output_format(parser.get("output", "format"))
            if fmt is not None:
                cfg.output.format = fmt

    if parser.has_section("logging"):
        if parser.has_option("logging", "level"):
            level = _parse_log_level(parser.get("logging", "level"))
            if level is not None:
                cfg.logging.level = level


def _apply_env_overrides(cfg: AppConfig) -> None:
    """Apply environment variable overrides to configuration."""
    if env_translations := os.getenv("CHATFMT_TRANSLATIONS"):
        cfg.translations.path = env_translations

    if env_output := os.getenv("CHATFMT_OUTPUT"):
        fmt = _parse_output_format(env_output)
        if fmt is not None:
            cfg.output.format = fmt

    if env_log := os.getenv("CHATFMT_LOG_LEVEL"):
        level = _parse_log_level(env_log)
        if level is not None:
            cfg.logging.level = level


def load_config(config_file: Path | None = None) -> AppConfig:
    """
    Load configuration from all sources with proper priority.

    Priority (highest wins):
        1. Environment variables
        2. config/chat_formatting.ini (or *config_file* when given)
        3. Built-in defaults

    Returns:
        AppConfig: Fully populated configuration object.
    """
    cfg = AppConfig()

    config_file = config_file or CONFIG_FILE
    if config_file.exists():
        parser = configparser.ConfigParser()
        parser.read(config_file)
        _load_from_ini(parser, cfg)

    _apply_env_overrides(cfg)

    return cfg


def reload_config() -> AppConfig:
    """
    Reload configuration from disk and environment.

    This updates the module-level `config` singleton.

    Returns:
        AppConfig: The newly loaded configuration.
    """
    global config
    config = load_config()
    return config


# =============================================================================
# MODULE-LEVEL SINGLETON
# =============================================================================

config = load_config()
