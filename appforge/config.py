"""Configuration management for Appforge.

Three zones:
- cli: output mode (human or agent)
- create: how dependencies are scanned and where project files live
- generator: which generator receives the built creation request

Config resolution order (highest priority first):
1. Programmatic (AppforgeConfig constructed in code, installed via configure())
2. Environment variables (APPFORGE_MODE, APPFORGE_RESOURCE_GLOB, etc.)
3. Config file (~/.config/appforge/config.json, managed by `appforge config`)
4. Hardcoded defaults
"""

import json
import logging
import os
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any


logger = logging.getLogger(__name__)


# =============================================================================
# Config file location
# =============================================================================

CONFIG_DIR = Path.home() / ".config" / "appforge"
CONFIG_FILE = CONFIG_DIR / "config.json"

VALID_MODES = ("human", "agent")


# =============================================================================
# Config dataclasses
# =============================================================================


@dataclass
class CliConfig:
    """CLI behaviour.

    - human: rich output, interactive prompts allowed
    - agent: no prompts, exit codes for structured error handling
    """

    mode: str = "human"


@dataclass
class CreateConfig:
    """Settings for the create pipeline and the local project loader."""

    resource_glob: str = "/resources/**/*"
    theme_library_type: str = "theme-library"
    theme_library_prefix: str = "themelib_"
    default_webapp: str = "webapp"
    default_src: str = "src"
    project_file: str = "appforge.yaml"
    manifest_file: str = "manifest.json"


@dataclass
class GeneratorConfig:
    """Generator selection.

    target is a "package.module:attribute" reference. Empty means the
    built-in preview generator, which reports what would be created.
    """

    target: str = ""


# =============================================================================
# Main config class
# =============================================================================


@dataclass
class AppforgeConfig:
    """Top-level appforge configuration.

    Examples:
        # Package use, no files needed
        config = AppforgeConfig(create=CreateConfig(theme_library_type="themelib"))

        # CLI use, loads from ~/.config/appforge/config.json
        config = AppforgeConfig.load()
    """

    cli: CliConfig = field(default_factory=CliConfig)
    create: CreateConfig = field(default_factory=CreateConfig)
    generator: GeneratorConfig = field(default_factory=GeneratorConfig)

    @classmethod
    def load(cls) -> "AppforgeConfig":
        """Load config from file + env vars.

        Priority: env var values > config.json values > defaults.
        """
        config = cls()

        # Layer 1: config file
        if CONFIG_FILE.exists():
            try:
                with open(CONFIG_FILE) as f:
                    data = json.load(f)
                _apply_dict(config, data)
            except (json.JSONDecodeError, OSError) as exc:
                logger.warning("Failed to load config from %s: %s", CONFIG_FILE, exc)

        # Layer 2: env var overrides
        if val := os.environ.get("APPFORGE_MODE"):
            if val in VALID_MODES:
                config.cli.mode = val
            else:
                logger.warning("Invalid APPFORGE_MODE=%r, ignoring", val)
        if val := os.environ.get("APPFORGE_RESOURCE_GLOB"):
            config.create.resource_glob = val
        if val := os.environ.get("APPFORGE_THEME_LIBRARY_TYPE"):
            config.create.theme_library_type = val
        if val := os.environ.get("APPFORGE_PROJECT_FILE"):
            config.create.project_file = val
        if val := os.environ.get("APPFORGE_GENERATOR"):
            config.generator.target = val

        return config

    def save(self) -> None:
        """Save config to ~/.config/appforge/config.json."""
        CONFIG_DIR.mkdir(parents=True, exist_ok=True)
        data: dict[str, Any] = {"cli": asdict(self.cli)}
        if self.create != CreateConfig():
            data["create"] = asdict(self.create)
        if self.generator.target:
            data["generator"] = asdict(self.generator)
        with open(CONFIG_FILE, "w") as f:
            json.dump(data, f, indent=2)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for display."""
        return {
            "cli": asdict(self.cli),
            "create": asdict(self.create),
            "generator": asdict(self.generator),
        }


# =============================================================================
# Config dict application
# =============================================================================


def _apply_dict(config: AppforgeConfig, data: dict) -> None:
    """Apply a dict of values onto an AppforgeConfig."""
    for zone_name in ("cli", "create", "generator"):
        zone_data = data.get(zone_name)
        if not isinstance(zone_data, dict):
            continue
        target = getattr(config, zone_name)
        for k, v in zone_data.items():
            if hasattr(target, k):
                setattr(target, k, v)
            else:
                logger.debug("Ignoring unknown config key %s.%s", zone_name, k)


# =============================================================================
# Global config singleton
# =============================================================================

_config: AppforgeConfig | None = None


def get_config() -> AppforgeConfig:
    """Get the global AppforgeConfig instance.

    First call loads from file + env vars. Subsequent calls return cached instance.
    """
    global _config
    if _config is None:
        _config = AppforgeConfig.load()
    return _config


def configure(config: AppforgeConfig) -> None:
    """Set the global AppforgeConfig programmatically."""
    global _config
    _config = config


def reset_config() -> None:
    """Reset the global config (forces reload on next get_config())."""
    global _config
    _config = None
