"""
Canonical default ACLs for new entities.

Built on first use and cached for the life of the process.
"""

import threading
from typing import NamedTuple, Optional

from shared.logging import get_logger

from .acl.ace import Ace
from .acl.acl import Acl
from .acl import who
from .privileges.privilege import PRIVILEGES
from .privileges.definitions import PRIV_READ

logger = get_logger("acl.defaults")


class DefaultAcls(NamedTuple):
    """Encoded default ACLs."""
    public: str
    personal: str


def build_defaults() -> DefaultAcls:
    """Encode the default ACLs.

    Public entities: owner full access, others and unauthenticated read.
    Personal entities: owner full access, others nothing.
    """
    read = PRIVILEGES.make_priv(PRIV_READ)

    public = Acl([
        Ace(who.OWNER, [PRIVILEGES.all]),
        Ace(who.OTHER, [read]),
        Ace(who.UNAUTHENTICATED, [read]),
    ])

    personal = Acl([
        Ace(who.OWNER, [PRIVILEGES.all]),
        Ace(who.OTHER, [PRIVILEGES.none]),
    ])

    return DefaultAcls(public=public.encode(), personal=personal.encode())


_defaults: Optional[DefaultAcls] = None
_defaults_lock = threading.Lock()


def get_defaults() -> DefaultAcls:
    """Build the defaults once; a failed build is raised and retried next call."""
    global _defaults
    if _defaults is None:
        with _defaults_lock:
            if _defaults is None:
                _defaults = build_defaults()
                logger.debug("Default ACLs built", public=_defaults.public, personal=_defaults.personal)
    return _defaults


def get_default_public_access() -> str:
    return get_defaults().public


def get_default_personal_access() -> str:
    return get_defaults().personal
