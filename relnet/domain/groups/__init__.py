"""
Group membership and visibility.
"""

from relnet.domain.groups.membership import group_ids, groups_of, members_of, membership_index
from relnet.domain.groups.visibility import VisibilityIndex, VisibilityLists, compute_visibility

__all__ = [
    "group_ids",
    "groups_of",
    "members_of",
    "membership_index",
    "VisibilityIndex",
    "VisibilityLists",
    "compute_visibility",
]
