"""
Privilege hierarchy and the decode-side matching algorithm.
"""

from dataclasses import dataclass, field, replace
from typing import Dict, Iterator, Optional, Tuple

from shared.errors import BadPrivilegeFlagError, InvalidStateError, TruncatedError

from ..codec.encoded_acl import EncodedAcl
from .definitions import (
    ALLOWED, ALLOWED_FLAGS, DENIED, DENIED_FLAGS, PRIV_ENCODING,
    PRIVILEGE_HIERARCHY, PrivilegeDef,
)


@dataclass(frozen=True)
class Privilege:
    """A node in the privilege hierarchy.

    Containment means implication: allowing ``write`` allows everything
    ``write`` contains. A denial shares index, encoding and containment with
    the privilege it denies.
    """
    name: str
    description: str = field(compare=False)
    index: int
    abstract: bool = False
    denial: bool = False
    contained: Tuple["Privilege", ...] = field(default=(), compare=False, repr=False)

    def __post_init__(self):
        if not 0 <= self.index < len(PRIV_ENCODING):
            raise InvalidStateError(
                f"Privilege index {self.index} has no encoding",
                {"index": self.index, "name": self.name}
            )

    @property
    def encoding(self) -> str:
        return PRIV_ENCODING[self.index]

    def walk(self) -> Iterator["Privilege"]:
        """This node and every node it contains, depth first."""
        yield self
        for child in self.contained:
            yield from child.walk()

    def encode(self, acl: EncodedAcl):
        """Append the allow/deny flag and this privilege's character."""
        acl.add_char(DENIED if self.denial else ALLOWED)
        acl.add_char(self.encoding)

    def to_user_string(self) -> str:
        if self.denial:
            return f"NOT {self.name}"
        return self.name


def clone_denied(val: Privilege) -> Privilege:
    """Copy of ``val`` flagged as a denial. Containment is shared, not copied."""
    return replace(val, denial=True)


def _denied_tree(val: Privilege) -> Privilege:
    return replace(val, denial=True, contained=tuple(_denied_tree(c) for c in val.contained))


def _build(defn: PrivilegeDef) -> Privilege:
    return Privilege(
        name=defn.name,
        description=defn.description,
        index=defn.index,
        abstract=defn.abstract,
        contained=tuple(_build(c) for c in defn.contained),
    )


# ----------------------------------------------------------------------
# Decoding
# ----------------------------------------------------------------------

def _is_privilege_flag(c: Optional[str]) -> bool:
    return c in ALLOWED_FLAGS or c in DENIED_FLAGS


def _match_denied(acl: EncodedAcl) -> bool:
    c = acl.get_char()

    if c in DENIED_FLAGS:
        return True

    if c in ALLOWED_FLAGS:
        return False

    acl.back()
    raise BadPrivilegeFlagError(f"Bad privilege flag {c!r} {acl.error_info()}", acl.error_details())


def _match_encoding(sub_root: Privilege, acl: EncodedAcl) -> Optional[Privilege]:
    if acl.remaining() < 1:
        return None

    if not sub_root.abstract:
        c = acl.get_char()
        if c == sub_root.encoding:
            return sub_root
        acl.back()

    for child in sub_root.contained:
        p = _match_encoding(child, acl)
        if p is not None:
            return p

    return None


def find_privilege(allowed_root: Privilege, denied_root: Privilege,
                   acl: EncodedAcl) -> Optional[Privilege]:
    """Decode one flag + privilege pair at the cursor.

    Returns None at the end of the input, or when the character after the
    flag matches nothing in the tree; in that case the cursor is left where
    it started.
    """
    if acl.remaining() < 2:
        if acl.remaining() == 1 and _is_privilege_flag(acl.peek()):
            raise TruncatedError(f"Privilege flag with no privilege {acl.error_info()}",
                                 acl.error_details())
        return None

    if _match_denied(acl):
        p = _match_encoding(denied_root, acl)
    else:
        p = _match_encoding(allowed_root, acl)

    if p is None:
        acl.back()  # back up over the flag

    return p


class PrivilegeTree:
    """The allowed tree, its parallel denied tree and index lookups."""

    def __init__(self, defn: PrivilegeDef = PRIVILEGE_HIERARCHY):
        self.all = _build(defn)
        # Denial of everything; decoding denied flags searches this tree
        self.none = _denied_tree(self.all)

        self._allowed: Dict[int, Privilege] = {}
        self._denied: Dict[int, Privilege] = {}
        for p in self.all.walk():
            if p.index in self._allowed:
                raise InvalidStateError(
                    f"Duplicate privilege index {p.index}",
                    {"index": p.index, "name": p.name}
                )
            self._allowed[p.index] = p
        for p in self.none.walk():
            self._denied[p.index] = p

        self._check_encodings()

    def _check_encodings(self):
        seen: Dict[str, str] = {}
        for p in self.all.walk():
            other = seen.get(p.encoding)
            if other is not None:
                raise InvalidStateError(
                    f"Privileges {other} and {p.name} share encoding {p.encoding!r}",
                    {"encoding": p.encoding}
                )
            seen[p.encoding] = p.name

    @property
    def max_index(self) -> int:
        return max(self._allowed)

    def __contains__(self, index: int) -> bool:
        return index in self._allowed

    def __iter__(self) -> Iterator[Privilege]:
        return self.all.walk()

    def make_priv(self, index: int, denied: bool = False) -> Privilege:
        lookup = self._denied if denied else self._allowed
        try:
            return lookup[index]
        except KeyError:
            raise InvalidStateError(f"No privilege with index {index}", {"index": index}) from None

    def by_name(self, name: str) -> Privilege:
        for p in self.all.walk():
            if p.name == name:
                return p
        raise InvalidStateError(f"No privilege named {name!r}", {"name": name})

    def find_privilege(self, acl: EncodedAcl) -> Optional[Privilege]:
        return find_privilege(self.all, self.none, acl)


# Built once at import; read-only afterwards
PRIVILEGES = PrivilegeTree()
