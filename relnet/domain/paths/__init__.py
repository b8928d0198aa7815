"""
Relationship path finding.
"""

from relnet.domain.paths.finder import (
    Hop,
    Path,
    build_relationship_graph,
    degrees_of_separation,
    describe_path,
    find_paths,
    shortest_paths,
)

__all__ = [
    "Hop",
    "Path",
    "build_relationship_graph",
    "degrees_of_separation",
    "describe_path",
    "find_paths",
    "shortest_paths",
]
