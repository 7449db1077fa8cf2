"""
ACL decision engine.

Decides whether a principal may exercise a set of privileges on an entity
given the entity's encoded ACL. It provides:

- app.codec: Cursor over encoded ACL text, length-prefixed strings.
- app.privileges: The privilege hierarchy, decode matcher and verdict sets.
- app.acl: Who specifiers, entries, lists and the evaluation algorithm.
- app.access: Facade with read / read-write / any shortcuts.
- app.defaults: Default public and personal ACLs.

Guidelines:
- Evaluation is pure and synchronous; no I/O, no shared mutable state.
- The privilege hierarchy is built once at import and never mutated.
- Corrupt stored ACLs always surface as decode errors, never as a deny.
"""

from .access import Access
from .acl import Ace, AceWho, Acl, AccessRule, CurrentAccess, Principal, WhoKind
from .defaults import build_defaults, get_default_personal_access, get_default_public_access
from .privileges import PRIVILEGES, Privilege, PrivilegeSet

__all__ = [
    "Access",
    "Ace",
    "AceWho",
    "Acl",
    "AccessRule",
    "CurrentAccess",
    "Principal",
    "WhoKind",
    "build_defaults",
    "get_default_personal_access",
    "get_default_public_access",
    "PRIVILEGES",
    "Privilege",
    "PrivilegeSet",
]
