"""
Result models for access evaluation.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple

from ..privileges.privilege import Privilege
from ..privileges.privilege_set import PrivilegeSet
from .ace import Ace


class AccessRule(str, Enum):
    """Precedence step that produced a decision."""
    UNAUTHENTICATED = "unauthenticated"
    OWNER = "owner"
    OWNER_DEFAULT = "owner_default"
    USER = "user"
    GROUP = "group"
    OTHER = "other"
    AUTHENTICATED = "authenticated"
    DEFAULT = "default"


@dataclass
class CurrentAccess:
    """Outcome of evaluating one ACL for one requester."""
    desired: Tuple[Privilege, ...]
    privileges: PrivilegeSet
    access_allowed: bool
    rule: AccessRule
    ace: Optional[Ace] = None
    matched: Tuple[Ace, ...] = ()
    filtered: bool = False
    evaluation_time_ms: float = 0.0

    def is_allowed(self, priv: Privilege) -> bool:
        return self.privileges.is_allowed(priv.index)

    def allowed_by_privilege(self) -> Dict[str, bool]:
        """Verdict for each desired privilege, keyed by name."""
        return {p.name: self.is_allowed(p) for p in self.desired}

    def __bool__(self) -> bool:
        return self.access_allowed

    def to_string(self) -> str:
        ace = self.ace.to_user_string() if self.ace is not None else "none"
        return (f"CurrentAccess{{allowed={self.access_allowed}, rule={self.rule.value}, "
                f"privileges={self.privileges.to_string()}, ace={ace}}}")
