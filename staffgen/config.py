"""Configuration management for staffgen.

Generator defaults (input mode, birthdate strategy, surname coverage) used
whenever a caller does not pass an explicit option.

Config resolution order (highest priority first):
1. Programmatic (StaffgenConfig passed to configure())
2. Environment variables (STAFFGEN_MODE, STAFFGEN_BIRTHDATE_STRATEGY, ...)
3. Config file (~/.config/staffgen/config.json, managed by `staffgen config`)
4. Hardcoded defaults

A ``.env`` file in the working directory tree is loaded before env vars are read.
"""

import json
import logging
import os
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any

from dotenv import find_dotenv, load_dotenv

from .generator.normalizer import INPUT_MODES
from .generator.samplers import BIRTHDATE_STRATEGIES


logger = logging.getLogger(__name__)


# =============================================================================
# Config file location
# =============================================================================

CONFIG_DIR = Path.home() / ".config" / "staffgen"
CONFIG_FILE = CONFIG_DIR / "config.json"

_TRUE_VALUES = {"true", "1", "yes", "y", "on"}
_FALSE_VALUES = {"false", "0", "no", "n", "off"}


def parse_bool(value: str) -> bool:
    """Parse a human boolean string ("true", "0", "off", ...).

    Raises:
        ValueError: If the string is not a recognized boolean.
    """
    token = value.strip().lower()
    if token in _TRUE_VALUES:
        return True
    if token in _FALSE_VALUES:
        return False
    raise ValueError(f"Invalid boolean: {value!r}")


# =============================================================================
# Config dataclasses
# =============================================================================


@dataclass
class GeneratorConfig:
    """Defaults for generate() options left unset by the caller.

    - mode: "strict" raises on malformed input; "simple"/"rich" fall back to defaults
    - birthdate_strategy: "calendar" (exact) or "approximate" (365.25-day years)
    - surname_coverage: repair surnames so every pool surname appears when possible
    """

    mode: str = "rich"
    birthdate_strategy: str = "calendar"
    surname_coverage: bool = True


@dataclass
class StaffgenConfig:
    """Top-level staffgen configuration.

    Examples:
        # Package use
        configure(StaffgenConfig(generator=GeneratorConfig(mode="strict")))

        # CLI use: loads from ~/.config/staffgen/config.json
        config = StaffgenConfig.load()
    """

    generator: GeneratorConfig = field(default_factory=GeneratorConfig)

    @classmethod
    def load(cls) -> "StaffgenConfig":
        """Load config from file + env vars.

        Priority: env var values > config.json values > defaults.
        """
        # Layer 1: config file
        config = cls.load_file()

        # Layer 2: env var overrides
        _ensure_dotenv()
        if val := os.environ.get("STAFFGEN_MODE"):
            if val in INPUT_MODES:
                config.generator.mode = val
            else:
                logger.warning("Invalid STAFFGEN_MODE=%r, ignoring", val)
        if val := os.environ.get("STAFFGEN_BIRTHDATE_STRATEGY"):
            if val in BIRTHDATE_STRATEGIES:
                config.generator.birthdate_strategy = val
            else:
                logger.warning("Invalid STAFFGEN_BIRTHDATE_STRATEGY=%r, ignoring", val)
        if val := os.environ.get("STAFFGEN_SURNAME_COVERAGE"):
            try:
                config.generator.surname_coverage = parse_bool(val)
            except ValueError:
                logger.warning("Invalid STAFFGEN_SURNAME_COVERAGE=%r, ignoring", val)

        return config

    @classmethod
    def load_file(cls) -> "StaffgenConfig":
        """Load config from the config file alone, without env overrides.

        `staffgen config set` edits this layer.
        """
        config = cls()
        if CONFIG_FILE.exists():
            try:
                with open(CONFIG_FILE) as f:
                    data = json.load(f)
                _apply_dict(config, data)
            except (json.JSONDecodeError, OSError) as exc:
                logger.warning("Failed to load config from %s: %s", CONFIG_FILE, exc)
        return config

    def save(self) -> None:
        """Save config to ~/.config/staffgen/config.json."""
        CONFIG_DIR.mkdir(parents=True, exist_ok=True)
        with open(CONFIG_FILE, "w") as f:
            json.dump(self.to_dict(), f, indent=2)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for display."""
        return {"generator": asdict(self.generator)}


# =============================================================================
# Config dict application
# =============================================================================


def _apply_dict(config: StaffgenConfig, data: dict) -> None:
    """Apply a dict of values onto a StaffgenConfig, skipping invalid entries."""
    generator = data.get("generator") if isinstance(data, dict) else None
    if not isinstance(generator, dict):
        return

    mode = generator.get("mode")
    if mode is not None:
        if mode in INPUT_MODES:
            config.generator.mode = mode
        else:
            logger.warning("Invalid generator.mode=%r in config file, ignoring", mode)

    strategy = generator.get("birthdate_strategy")
    if strategy is not None:
        if strategy in BIRTHDATE_STRATEGIES:
            config.generator.birthdate_strategy = strategy
        else:
            logger.warning(
                "Invalid generator.birthdate_strategy=%r in config file, ignoring",
                strategy,
            )

    coverage = generator.get("surname_coverage")
    if isinstance(coverage, bool):
        config.generator.surname_coverage = coverage
    elif coverage is not None:
        logger.warning(
            "Invalid generator.surname_coverage=%r in config file, ignoring", coverage
        )


# =============================================================================
# .env loading
# =============================================================================

_dotenv_loaded = False


def _ensure_dotenv() -> None:
    """Load .env file into os.environ if not already loaded."""
    global _dotenv_loaded
    if not _dotenv_loaded:
        _dotenv_loaded = True
        dotenv_path = find_dotenv(usecwd=True)
        if dotenv_path:
            load_dotenv(dotenv_path=dotenv_path, override=False)


# =============================================================================
# Global config singleton
# =============================================================================

_config: StaffgenConfig | None = None


def get_config() -> StaffgenConfig:
    """Get the global StaffgenConfig instance.

    First call loads from file + env vars. Subsequent calls return cached instance.
    Use configure() to replace the global config programmatically.
    """
    global _config
    if _config is None:
        _config = StaffgenConfig.load()
    return _config


def configure(config: StaffgenConfig) -> None:
    """Set the global StaffgenConfig programmatically.

    Use this when staffgen is used as a package:
        from staffgen.config import configure, StaffgenConfig, GeneratorConfig
        configure(StaffgenConfig(generator=GeneratorConfig(mode="strict")))
    """
    global _config
    _config = config


def reset_config() -> None:
    """Reset the global config (forces reload on next get_config())."""
    global _config
    _config = None
