"""
Access control lists and the access evaluation algorithm.
"""

import time
from functools import reduce
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from shared.errors import AclDecodeError
from shared.logging import get_logger, requester_context
from shared.metrics import MetricsCollector

from ..codec.encoded_acl import EncodedAcl
from ..privileges.privilege import PRIVILEGES, Privilege, PrivilegeTree
from ..privileges.privilege_set import PrivilegeSet, PrivilegeState
from .ace import Ace
from .models import AccessRule, CurrentAccess
from .principal import AccessPrincipal
from .who import AceWho, WhoKind

AclChars = Union[str, Sequence[str]]

# Consulted in order for authenticated non-owners once user and group
# entries have been ruled out. 'all' entries are carried but never consulted
_FALLBACK_RULES = (
    (WhoKind.OTHER, AccessRule.OTHER),
    (WhoKind.AUTHENTICATED, AccessRule.AUTHENTICATED),
)


class Acl:
    """An ordered list of entries.

    Entry order is encoding order, and decides precedence between entries of
    the same kind. Instances are cheap and meant to be used for a single
    evaluation.
    """

    def __init__(self, aces: Optional[Iterable[Ace]] = None, debug: bool = False,
                 tree: PrivilegeTree = PRIVILEGES, metrics: Optional[MetricsCollector] = None):
        self.aces: List[Ace] = list(aces or [])
        self.debug = debug
        self.tree = tree
        self.metrics = metrics
        self.logger = get_logger("acl.evaluator")

    def add_ace(self, ace: Ace):
        self.aces.append(ace)

    def remove_who(self, who: AceWho) -> bool:
        """Drop every entry for ``who``. Returns True if any were removed."""
        before = len(self.aces)
        self.aces = [a for a in self.aces if a.who != who]
        return len(self.aces) != before

    def clear(self):
        self.aces.clear()

    def __iter__(self) -> Iterator[Ace]:
        return iter(self.aces)

    def __len__(self) -> int:
        return len(self.aces)

    # ------------------------------------------------------------------
    # Encoding
    # ------------------------------------------------------------------

    def encode(self) -> str:
        acl = EncodedAcl()
        for ace in self.aces:
            ace.encode(acl)
        return acl.get_encoding()

    @classmethod
    def decode(cls, chars: AclChars, tree: PrivilegeTree = PRIVILEGES, **kwargs) -> "Acl":
        acl = cls(tree=tree, **kwargs)
        acl.decode_aces(chars)
        return acl

    def decode_aces(self, chars: AclChars):
        """Replace the entries with those decoded from ``chars``."""
        acl = EncodedAcl(chars)
        aces = []
        try:
            while acl.has_more():
                aces.append(Ace.decode(acl, self.tree))
        except AclDecodeError as e:
            self.logger.warning(
                "ACL decode failed",
                code=e.code,
                error=e.message,
                position=e.details.get("position"),
                snippet=e.details.get("snippet")
            )
            if self.metrics is not None:
                self.metrics.record_decode_error(e.code)
            raise

        self.aces = aces

    def to_user_string(self) -> str:
        return "; ".join(a.to_user_string() for a in self.aces)

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------

    def evaluate_access(self, who: AccessPrincipal, owner: AccessPrincipal,
                        how: Sequence[Privilege], chars: AclChars,
                        filter_set: Optional[PrivilegeSet] = None) -> CurrentAccess:
        """Evaluate the encoded ACL ``chars`` for ``who``.

        An unauthenticated requester gets the first unauthenticated entry, or
        nothing. For an authenticated requester the first rule below that
        applies decides:

        1. The owner gets the owner entry, or full access without one.
        2. An entry naming the user.
        3. Every entry for a group the user belongs to, merged so that for
           each privilege the more permissive verdict wins. Matching any
           group entry ends the search.
        4. An 'other' entry, then an 'authenticated' entry.
        5. No access.

        Privileges an entry leaves unspecified default to allowed for the
        owner and denied for everybody else. ``filter_set``, when given, caps
        the result. An empty ``how`` asks whether any access exists.
        """
        start_time = time.perf_counter()

        with requester_context(who.account, owner.account):
            self.decode_aces(chars)

        is_owner = (not who.unauthenticated
                    and who.account is not None
                    and who.account == owner.account)

        privileges, rule, ace, matched = self._select(who, is_owner)
        privileges.set_unspecified(is_owner)

        if filter_set is not None:
            privileges = privileges.filter(filter_set)

        how = tuple(how)
        if how:
            allowed = all(privileges.is_allowed(p.index) for p in how)
        else:
            allowed = privileges.any_allowed()

        elapsed = time.perf_counter() - start_time
        ca = CurrentAccess(
            desired=how,
            privileges=privileges,
            access_allowed=allowed,
            rule=rule,
            ace=ace,
            matched=matched,
            filtered=filter_set is not None,
            evaluation_time_ms=elapsed * 1000
        )

        if self.debug:
            self.logger.debug(
                "Access evaluated",
                account=who.account,
                owner=owner.account,
                desired=[p.name for p in how],
                allowed=allowed,
                rule=rule.value,
                privileges=privileges.to_string(),
                ace=ace.to_user_string() if ace is not None else None
            )

        if self.metrics is not None:
            self.metrics.record_evaluation(rule.value, allowed, elapsed)

        return ca

    def _select(self, who: AccessPrincipal,
                is_owner: bool) -> Tuple[PrivilegeSet, AccessRule, Optional[Ace], Tuple[Ace, ...]]:
        if who.unauthenticated:
            ace = self._find_first(WhoKind.UNAUTHENTICATED, who, is_owner)
            if ace is None:
                return PrivilegeSet.make_default_non_owner_privileges(), AccessRule.DEFAULT, None, ()
            return ace.get_privilege_set(), AccessRule.UNAUTHENTICATED, ace, (ace,)

        if is_owner:
            ace = self._find_first(WhoKind.OWNER, who, is_owner)
            if ace is None:
                return PrivilegeSet.make_default_owner_privileges(), AccessRule.OWNER_DEFAULT, None, ()
            return ace.get_privilege_set(), AccessRule.OWNER, ace, (ace,)

        ace = self._find_first(WhoKind.USER, who, is_owner)
        if ace is not None:
            return ace.get_privilege_set(), AccessRule.USER, ace, (ace,)

        groups = tuple(a for a in self.aces
                       if a.who.who_kind == WhoKind.GROUP and a.who.matches(who, is_owner))
        if groups:
            merged = reduce(lambda acc, a: acc.merge(a.get_privilege_set()), groups, PrivilegeSet())
            if len(groups) == 1:
                ace = groups[0]
            else:
                ace = Ace(groups[0].who, self._privileges_for(merged))
            return merged, AccessRule.GROUP, ace, groups

        for kind, rule in _FALLBACK_RULES:
            ace = self._find_first(kind, who, is_owner)
            if ace is not None:
                return ace.get_privilege_set(), rule, ace, (ace,)

        return PrivilegeSet.make_default_non_owner_privileges(), AccessRule.DEFAULT, None, ()

    def _find_first(self, kind: WhoKind, who: AccessPrincipal, is_owner: bool) -> Optional[Ace]:
        for ace in self.aces:
            if ace.who.who_kind == kind and ace.who.matches(who, is_owner):
                return ace
        return None

    def _privileges_for(self, ps: PrivilegeSet) -> List[Privilege]:
        """Explicit privilege list reproducing ``ps`` when applied in order."""
        privs = []
        for p in self.tree:
            state = ps.get(p.index)
            if state == PrivilegeState.ALLOWED:
                privs.append(p)
            elif state == PrivilegeState.DENIED:
                privs.append(self.tree.make_priv(p.index, denied=True))
        return privs
