"""
Privilege hierarchy package.

- definitions: Index constants, the encoding table and the hierarchy.
- privilege: Privilege nodes, the decode matcher and the shared tree.
- privilege_set: Per-index allowed/denied verdicts used for merging and
  as a filter.
"""

from .privilege import Privilege, PrivilegeTree, PRIVILEGES, clone_denied, find_privilege
from .privilege_set import PrivilegeSet, PrivilegeState

__all__ = [
    "Privilege",
    "PrivilegeTree",
    "PRIVILEGES",
    "clone_denied",
    "find_privilege",
    "PrivilegeSet",
    "PrivilegeState",
]
