"""
relnet utils - logging helpers.
"""

from relnet.utils.logging import setup_logging, get_logger, log_operation

__all__ = [
    "setup_logging",
    "get_logger",
    "log_operation",
]
