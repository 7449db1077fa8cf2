"""
Per-privilege verdict vector.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List

from shared.errors import InvalidStateError

from .definitions import PRIV_ENCODING
from .privilege import Privilege

PRIV_SET_SIZE = len(PRIV_ENCODING)


class PrivilegeState(str, Enum):
    """Verdict for one privilege index."""
    UNSPECIFIED = "?"
    ALLOWED = "y"
    DENIED = "n"


# Merge order for group entries: allowed beats denied beats unspecified
_PERMISSIVENESS = {
    PrivilegeState.UNSPECIFIED: 0,
    PrivilegeState.DENIED: 1,
    PrivilegeState.ALLOWED: 2,
}


@dataclass
class PrivilegeSet:
    """One verdict per privilege index.

    Serves as the effective access of a single entry, the accumulator when
    group entries are merged, the final decision vector, and the caller's
    filter capping the maximum access.
    """
    states: List[PrivilegeState] = field(
        default_factory=lambda: [PrivilegeState.UNSPECIFIED] * PRIV_SET_SIZE
    )

    def __post_init__(self):
        if len(self.states) != PRIV_SET_SIZE:
            raise InvalidStateError(
                f"Privilege set has {len(self.states)} entries, expected {PRIV_SET_SIZE}",
                {"size": len(self.states)}
            )

    @classmethod
    def make_default_owner_privileges(cls) -> "PrivilegeSet":
        return cls([PrivilegeState.ALLOWED] * PRIV_SET_SIZE)

    @classmethod
    def make_default_non_owner_privileges(cls) -> "PrivilegeSet":
        return cls([PrivilegeState.DENIED] * PRIV_SET_SIZE)

    @classmethod
    def from_privileges(cls, privs: Iterable[Privilege]) -> "PrivilegeSet":
        """Apply each privilege in order; later entries override earlier ones."""
        ps = cls()
        for p in privs:
            ps.set_privilege(p)
        return ps

    @classmethod
    def from_string(cls, val: str) -> "PrivilegeSet":
        try:
            return cls([PrivilegeState(c) for c in val])
        except ValueError:
            raise InvalidStateError(f"Bad privilege set {val!r}", {"value": val}) from None

    def set_privilege(self, priv: Privilege):
        """Set ``priv`` and everything it contains."""
        state = PrivilegeState.DENIED if priv.denial else PrivilegeState.ALLOWED
        for p in priv.walk():
            self.states[p.index] = state

    def get(self, index: int) -> PrivilegeState:
        self._check_index(index)
        return self.states[index]

    def is_allowed(self, index: int) -> bool:
        return self.get(index) == PrivilegeState.ALLOWED

    def any_allowed(self) -> bool:
        return PrivilegeState.ALLOWED in self.states

    def is_unspecified(self) -> bool:
        return all(s == PrivilegeState.UNSPECIFIED for s in self.states)

    def set_unspecified(self, is_owner: bool):
        """Resolve unspecified entries to the owner or non-owner default."""
        default = PrivilegeState.ALLOWED if is_owner else PrivilegeState.DENIED
        self.states = [default if s == PrivilegeState.UNSPECIFIED else s for s in self.states]

    def merge(self, more: "PrivilegeSet") -> "PrivilegeSet":
        """Index by index, keep the more permissive verdict."""
        return PrivilegeSet([
            a if _PERMISSIVENESS[a] >= _PERMISSIVENESS[b] else b
            for a, b in zip(self.states, more.states)
        ])

    def filter(self, ceiling: "PrivilegeSet") -> "PrivilegeSet":
        """Deny every index the ceiling does not allow."""
        return PrivilegeSet([
            s if c == PrivilegeState.ALLOWED else PrivilegeState.DENIED
            for s, c in zip(self.states, ceiling.states)
        ])

    def copy(self) -> "PrivilegeSet":
        return PrivilegeSet(list(self.states))

    def to_string(self) -> str:
        return "".join(s.value for s in self.states)

    def _check_index(self, index: int):
        if not 0 <= index < PRIV_SET_SIZE:
            raise InvalidStateError(f"Privilege index {index} out of range", {"index": index})

    def __str__(self) -> str:
        return self.to_string()
