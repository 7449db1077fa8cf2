"""
Access control entries.

An entry is a who, a list of allowed or denied privileges and, for entries
merged in from a parent during evaluation, the path they came from::

    ACE := WhoSpec (Flag PrivChar)* ['I' EncodedString] ' '

For example ``"WONyAI05 /user "`` is an owner entry allowing all,
inherited from ``/user``.
"""

from dataclasses import dataclass, replace
from typing import Optional, Tuple

from shared.errors import BadPrivilegeFlagError, MalformedError

from ..codec.encoded_acl import EncodedAcl
from ..privileges.privilege import PRIVILEGES, Privilege, PrivilegeTree
from ..privileges.privilege_set import PrivilegeSet
from .who import AceWho

INHERITED_FLAG = "I"
ACE_TERMINATOR = " "


@dataclass(frozen=True)
class Ace:
    """A who plus the privileges allowed or denied to it."""
    who: AceWho
    privileges: Tuple[Privilege, ...] = ()
    inherited_from: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "privileges", tuple(self.privileges))

    @property
    def inherited(self) -> bool:
        return self.inherited_from is not None

    def with_inheritance(self, path: str) -> "Ace":
        """Copy of this entry marked as coming from ``path``."""
        return replace(self, inherited_from=path)

    def get_privilege_set(self) -> PrivilegeSet:
        return PrivilegeSet.from_privileges(self.privileges)

    # ------------------------------------------------------------------
    # Encoding
    # ------------------------------------------------------------------

    def encode(self, acl: EncodedAcl):
        self.who.encode(acl)

        for p in self.privileges:
            p.encode(acl)

        if self.inherited_from is not None:
            acl.add_char(INHERITED_FLAG)
            acl.encode_string(self.inherited_from)

        acl.add_char(ACE_TERMINATOR)

    @classmethod
    def decode(cls, acl: EncodedAcl, tree: PrivilegeTree = PRIVILEGES) -> "Ace":
        who = AceWho.decode(acl)

        privs = []
        while acl.has_more():
            if acl.peek() in (ACE_TERMINATOR, INHERITED_FLAG):
                break

            p = tree.find_privilege(acl)
            if p is None:
                if acl.remaining() == 1:
                    raise BadPrivilegeFlagError(f"Bad privilege flag {acl.error_info()}",
                                                acl.error_details())
                raise MalformedError(f"Unknown privilege {acl.error_info()}", acl.error_details())
            privs.append(p)

        inherited_from = None
        if acl.peek() == INHERITED_FLAG:
            acl.get_char()
            inherited_from = acl.decode_string()
            if inherited_from is None:
                raise MalformedError(f"Missing inherited path {acl.error_info()}", acl.error_details())

        if acl.has_more():
            c = acl.get_char()
            if c != ACE_TERMINATOR:
                acl.back()
                raise MalformedError(f"Expected end of entry, found {c!r} {acl.error_info()}",
                                     acl.error_details())

        return cls(who, privs, inherited_from)

    def to_user_string(self) -> str:
        privs = ", ".join(p.to_user_string() for p in self.privileges) or "(none)"
        s = f"{self.who.to_user_string()}: {privs}"
        if self.inherited_from is not None:
            s = f"{s} (inherited from {self.inherited_from})"
        return s
