"""
The 'who' part of an access control entry.

Encoded as a polarity character, a kind character and a length-prefixed
name::

    Byte 1    N = not who, W = who
    Byte 2    O = owner, U = user, G = group, H = host,
              X = unauthenticated, A = authenticated, Z = other, L = all
    Byte 3..  name, or the null marker when the kind has no name
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from shared.errors import BadWhoTypeError, InvalidStateError, MalformedError

from ..codec.encoded_acl import EncodedAcl
from .principal import AccessPrincipal

WHO_FLAG = "W"
NOT_WHO_FLAG = "N"


class WhoKind(str, Enum):
    """Subject kinds; the value is the encoding character."""
    OWNER = "O"
    USER = "U"
    GROUP = "G"
    HOST = "H"
    UNAUTHENTICATED = "X"
    AUTHENTICATED = "A"
    OTHER = "Z"
    ALL = "L"

    @property
    def named(self) -> bool:
        return self in _NAMED_KINDS


_NAMED_KINDS = frozenset({WhoKind.USER, WhoKind.GROUP, WhoKind.HOST})


@dataclass(frozen=True)
class AceWho:
    """Subject of an entry, optionally negated."""
    who_kind: WhoKind
    name: Optional[str] = None
    not_who: bool = False

    def __post_init__(self):
        if self.who_kind.named and self.name is None:
            raise InvalidStateError(f"{self.who_kind.name} entry requires a name",
                                    {"who_kind": self.who_kind.value})
        if not self.who_kind.named and self.name is not None:
            raise InvalidStateError(f"{self.who_kind.name} entry takes no name",
                                    {"who_kind": self.who_kind.value, "name": self.name})

    @classmethod
    def user(cls, name: str, not_who: bool = False) -> "AceWho":
        return cls(WhoKind.USER, name, not_who)

    @classmethod
    def group(cls, name: str, not_who: bool = False) -> "AceWho":
        return cls(WhoKind.GROUP, name, not_who)

    @classmethod
    def host(cls, name: str, not_who: bool = False) -> "AceWho":
        return cls(WhoKind.HOST, name, not_who)

    def matches(self, who: AccessPrincipal, is_owner: bool) -> bool:
        """Does this subject select ``who``? Negated entries select everyone else.

        Host entries never match; principals carry no host.
        """
        kind = self.who_kind
        if kind == WhoKind.HOST:
            return False

        if kind == WhoKind.OWNER:
            hit = is_owner
        elif kind == WhoKind.USER:
            hit = not who.unauthenticated and who.account == self.name
        elif kind == WhoKind.GROUP:
            hit = not who.unauthenticated and who.is_member_of(self.name)
        elif kind == WhoKind.UNAUTHENTICATED:
            hit = who.unauthenticated
        elif kind == WhoKind.AUTHENTICATED:
            hit = not who.unauthenticated
        elif kind == WhoKind.OTHER:
            hit = not is_owner
        else:
            hit = True

        return hit != self.not_who

    # ------------------------------------------------------------------
    # Encoding
    # ------------------------------------------------------------------

    def encode(self, acl: EncodedAcl):
        acl.add_char(NOT_WHO_FLAG if self.not_who else WHO_FLAG)
        acl.add_char(self.who_kind.value)
        acl.encode_string(self.name)

    @classmethod
    def decode(cls, acl: EncodedAcl) -> "AceWho":
        c = acl.get_char()
        if c == NOT_WHO_FLAG:
            not_who = True
        elif c == WHO_FLAG:
            not_who = False
        else:
            acl.back()
            raise MalformedError(f"Bad who flag {c!r} {acl.error_info()}", acl.error_details())

        c = acl.get_char()
        try:
            kind = WhoKind(c)
        except ValueError:
            acl.back()
            raise BadWhoTypeError(f"Bad who type {c!r} {acl.error_info()}", acl.error_details()) from None

        name = acl.decode_string()
        if kind.named != (name is not None):
            raise MalformedError(f"Name presence does not match who type {kind.name} {acl.error_info()}",
                                 acl.error_details())

        return cls(kind, name, not_who)

    def to_user_string(self) -> str:
        s = self.who_kind.name.lower()
        if self.name is not None:
            s = f"{s} {self.name}"
        if self.not_who:
            s = f"NOT {s}"
        return s


OWNER = AceWho(WhoKind.OWNER)
OTHER = AceWho(WhoKind.OTHER)
UNAUTHENTICATED = AceWho(WhoKind.UNAUTHENTICATED)
AUTHENTICATED = AceWho(WhoKind.AUTHENTICATED)
ALL = AceWho(WhoKind.ALL)
