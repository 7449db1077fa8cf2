"""
ACL package.

- who: Encoded subject of an entry (owner, user, group, ...).
- ace: Access control entries and their codec.
- acl: Entry lists and the access evaluation algorithm.
- models: Evaluation results.
- principal: The requester/owner capability the evaluator consumes.
"""

from .ace import Ace
from .acl import Acl
from .models import AccessRule, CurrentAccess
from .principal import AccessPrincipal, Principal
from .who import AceWho, WhoKind

__all__ = [
    "Ace",
    "Acl",
    "AccessRule",
    "CurrentAccess",
    "AccessPrincipal",
    "Principal",
    "AceWho",
    "WhoKind",
]
