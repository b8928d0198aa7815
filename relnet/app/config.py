"""
relnet Configuration.

Central configuration management for the graph engine and CLI.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, get_args

from dotenv import load_dotenv

from relnet.core.errors import ConfigError

ReconcileStrategy = Literal["symmetric", "cardinality"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]


def _choice(name: str, value: Any, allowed: Any) -> Any:
    options = get_args(allowed)
    if value not in options:
        raise ConfigError(f"{name} must be one of {', '.join(options)}, got {value!r}")
    return value


def _integer(name: str, value: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {value!r}") from None


# ============================================================================
# Default Paths
# ============================================================================


def get_default_data_dir() -> Path:
    """Get the default data directory for relnet."""
    if env_path := os.environ.get("RELNET_DATA_DIR"):
        return Path(env_path)

    return Path.home() / ".relnet"


def get_default_config_path() -> Path:
    """Get the default location of the JSON config file."""
    return get_default_data_dir() / "relnet_config.json"


# ============================================================================
# Configuration Classes
# ============================================================================


@dataclass
class GraphConfig:
    """Configuration for graph reconciliation and the rendering surface."""

    # Delay before pinned fixed positions are re-applied to the surface
    pin_settle_delay_ms: int = 300
    # Duration of the recenter animation requested from the surface
    center_duration_ms: int = 500
    reconcile_strategy: ReconcileStrategy = "symmetric"

    def __post_init__(self):
        _choice("reconcile_strategy", self.reconcile_strategy, ReconcileStrategy)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GraphConfig":
        return cls(**{k: v for k, v in data.items() if hasattr(cls, k)})

    def to_dict(self) -> dict[str, Any]:
        return {
            "pin_settle_delay_ms": self.pin_settle_delay_ms,
            "center_duration_ms": self.center_duration_ms,
            "reconcile_strategy": self.reconcile_strategy,
        }


@dataclass
class PathConfig:
    """Configuration for the path finder."""

    default_max_depth: int = 4

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PathConfig":
        return cls(**{k: v for k, v in data.items() if hasattr(cls, k)})

    def to_dict(self) -> dict[str, Any]:
        return {"default_max_depth": self.default_max_depth}


@dataclass
class RelnetConfig:
    """Main configuration for relnet.

    Aggregates all sub-configurations and provides load/save functionality.
    Environment variables (optionally read from a ``.env`` file) override
    values loaded from disk:

        RELNET_LOG_LEVEL, RELNET_PIN_SETTLE_DELAY_MS,
        RELNET_CENTER_DURATION_MS, RELNET_RECONCILE_STRATEGY,
        RELNET_DEFAULT_MAX_DEPTH
    """

    data_dir: Path = field(default_factory=get_default_data_dir)

    graph: GraphConfig = field(default_factory=GraphConfig)
    paths: PathConfig = field(default_factory=PathConfig)

    log_level: LogLevel = "INFO"

    def __post_init__(self):
        _choice("log_level", self.log_level, LogLevel)
        if isinstance(self.data_dir, str):
            self.data_dir = Path(self.data_dir)

    @classmethod
    def load(cls, config_path: str | Path | None = None) -> "RelnetConfig":
        """Load configuration from a JSON file and apply env overrides.

        Args:
            config_path: Path to config file. If None, uses default location.

        Returns:
            RelnetConfig instance
        """
        load_dotenv()

        if config_path is None:
            config_path = get_default_config_path()

        config_path = Path(config_path)

        if config_path.exists():
            with open(config_path, "r", encoding="utf-8") as f:
                config = cls.from_dict(json.load(f))
        else:
            config = cls()

        config.apply_env(os.environ)
        return config

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RelnetConfig":
        """Create config from dictionary."""
        return cls(
            data_dir=Path(data.get("data_dir", get_default_data_dir())),
            graph=GraphConfig.from_dict(data.get("graph", {})),
            paths=PathConfig.from_dict(data.get("paths", {})),
            log_level=data.get("log_level", "INFO"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary."""
        return {
            "data_dir": str(self.data_dir),
            "graph": self.graph.to_dict(),
            "paths": self.paths.to_dict(),
            "log_level": self.log_level,
        }

    def apply_env(self, environ: dict[str, str] | os._Environ) -> None:
        """Override fields from ``RELNET_*`` environment variables.

        Raises:
            ConfigError: A variable holds a value the field cannot take
        """
        if value := environ.get("RELNET_LOG_LEVEL"):
            self.log_level = _choice("RELNET_LOG_LEVEL", value.upper(), LogLevel)
        if value := environ.get("RELNET_PIN_SETTLE_DELAY_MS"):
            self.graph.pin_settle_delay_ms = _integer("RELNET_PIN_SETTLE_DELAY_MS", value)
        if value := environ.get("RELNET_CENTER_DURATION_MS"):
            self.graph.center_duration_ms = _integer("RELNET_CENTER_DURATION_MS", value)
        if value := environ.get("RELNET_RECONCILE_STRATEGY"):
            self.graph.reconcile_strategy = _choice(
                "RELNET_RECONCILE_STRATEGY", value.lower(), ReconcileStrategy
            )
        if value := environ.get("RELNET_DEFAULT_MAX_DEPTH"):
            self.paths.default_max_depth = _integer("RELNET_DEFAULT_MAX_DEPTH", value)

    def save(self, config_path: str | Path | None = None) -> Path:
        """Save configuration to a JSON file.

        Args:
            config_path: Path to save to. If None, uses default location.

        Returns:
            Path to saved file
        """
        if config_path is None:
            config_path = self.data_dir / "relnet_config.json"

        config_path = Path(config_path)
        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2)

        return config_path


# ============================================================================
# Global Config Instance
# ============================================================================


_global_config: RelnetConfig | None = None


def get_config() -> RelnetConfig:
    """Get the global configuration instance."""
    global _global_config
    if _global_config is None:
        _global_config = RelnetConfig.load()
    return _global_config


def set_config(config: RelnetConfig) -> None:
    """Set the global configuration instance."""
    global _global_config
    _global_config = config


def reload_config(config_path: str | Path | None = None) -> RelnetConfig:
    """Reload configuration from disk.

    Args:
        config_path: Optional path to load from

    Returns:
        Newly loaded configuration
    """
    global _global_config
    _global_config = RelnetConfig.load(config_path)
    return _global_config
