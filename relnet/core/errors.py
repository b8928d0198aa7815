"""
Exception hierarchy for relnet.

The graph engine itself recovers locally from inconsistent snapshots and
missing surfaces; only the edges of the system (loading files, CLI input)
raise.
"""

from __future__ import annotations

from pathlib import Path


class RelnetError(Exception):
    """Base class for all relnet errors."""


class NetworkLoadError(RelnetError):
    """A network snapshot file could not be read or validated."""

    def __init__(self, path: str | Path, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Cannot load network from {self.path}: {reason}")


class ConfigError(RelnetError):
    """A configuration value from a file or the environment is invalid."""
