"""
relnet application layer - configuration and CLI.
"""

from relnet.app.config import RelnetConfig, get_config, set_config, reload_config

__all__ = [
    "RelnetConfig",
    "get_config",
    "set_config",
    "reload_config",
]
