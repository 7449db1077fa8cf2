"""
Access decision facade.

Encoded ACLs are kept small, one character per privilege, so they can be
evaluated on every request. ``Access`` is the entry point: each call builds
a fresh ``Acl``, decodes the stored string and evaluates it, so a single
``Access`` can be shared freely between threads.
"""

from typing import Optional, Sequence

from shared.config import AclEngineConfig, get_config
from shared.metrics import MetricsCollector, get_metrics_collector

from .acl.acl import Acl, AclChars
from .acl.models import CurrentAccess
from .acl.principal import AccessPrincipal
from .privileges.definitions import PRIV_ALL, PRIV_READ, PRIV_WRITE, PRIV_WRITE_CONTENT
from .privileges.privilege import PRIVILEGES, Privilege
from .privileges.privilege_set import PrivilegeSet

# Defines no access
NONE = PRIVILEGES.none

# Defines full access to an object
ALL = PRIVILEGES.make_priv(PRIV_ALL)

READ = PRIVILEGES.make_priv(PRIV_READ)

WRITE = PRIVILEGES.make_priv(PRIV_WRITE)

WRITE_CONTENT = PRIVILEGES.make_priv(PRIV_WRITE_CONTENT)

# An empty set asks whether any access exists
PRIV_SET_ANY: Sequence[Privilege] = ()
PRIV_SET_READ: Sequence[Privilege] = (READ,)
PRIV_SET_READ_WRITE: Sequence[Privilege] = (READ, WRITE)


class Access:
    """Evaluate stored ACLs against a requester."""

    def __init__(self, debug: Optional[bool] = None, config: Optional[AclEngineConfig] = None,
                 metrics: Optional[MetricsCollector] = None):
        self.config = config or get_config()
        self.debug = self.config.debug if debug is None else debug

        if metrics is None and self.config.metrics_enabled:
            metrics = get_metrics_collector(self.config.service_name)
        self.metrics = metrics

    def make_priv(self, index: int) -> Privilege:
        """Privilege for the given index."""
        return PRIVILEGES.make_priv(index)

    def _new_acl(self) -> Acl:
        return Acl(debug=self.debug, metrics=self.metrics)

    def evaluate_access(self, who: AccessPrincipal, owner: AccessPrincipal,
                        how: Sequence[Privilege], acl: AclChars,
                        filter_set: Optional[PrivilegeSet] = None) -> CurrentAccess:
        """Evaluate ``acl`` for ``who`` wanting every privilege in ``how``."""
        return self._new_acl().evaluate_access(who, owner, how, acl, filter_set)

    def check_read(self, who: AccessPrincipal, owner: AccessPrincipal, acl: AclChars,
                   filter_set: Optional[PrivilegeSet] = None) -> CurrentAccess:
        return self.evaluate_access(who, owner, PRIV_SET_READ, acl, filter_set)

    def check_read_write(self, who: AccessPrincipal, owner: AccessPrincipal, acl: AclChars,
                         filter_set: Optional[PrivilegeSet] = None) -> CurrentAccess:
        return self.evaluate_access(who, owner, PRIV_SET_READ_WRITE, acl, filter_set)

    def check_any(self, who: AccessPrincipal, owner: AccessPrincipal, acl: AclChars,
                  filter_set: Optional[PrivilegeSet] = None) -> CurrentAccess:
        return self.evaluate_access(who, owner, PRIV_SET_ANY, acl, filter_set)

    def evaluate_access_priv(self, who: AccessPrincipal, owner: AccessPrincipal, priv: int,
                             acl: AclChars, filter_set: Optional[PrivilegeSet] = None) -> CurrentAccess:
        """Check a single privilege given by index."""
        return self.evaluate_access(who, owner, (self.make_priv(priv),), acl, filter_set)
