"""
Network snapshot loading.
"""

from relnet.storage.loader import load_network, parse_network

__all__ = ["load_network", "parse_network"]
