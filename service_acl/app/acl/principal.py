"""
Principal capability consumed by the evaluator.

Group membership is resolved by the caller; the engine only asks yes/no
questions of whatever object it is handed.
"""

from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, Optional, Protocol, runtime_checkable


@runtime_checkable
class AccessPrincipal(Protocol):
    """What the evaluator needs to know about a requester or an owner."""

    @property
    def account(self) -> Optional[str]:
        ...

    @property
    def unauthenticated(self) -> bool:
        ...

    def is_member_of(self, group: str) -> bool:
        ...


@dataclass(frozen=True)
class Principal:
    """Plain principal with a pre-resolved set of group names."""
    account: Optional[str]
    groups: FrozenSet[str] = field(default_factory=frozenset)
    unauthenticated: bool = False

    @classmethod
    def user(cls, account: str, groups: Iterable[str] = ()) -> "Principal":
        return cls(account=account, groups=frozenset(groups))

    @classmethod
    def guest(cls) -> "Principal":
        return cls(account=None, unauthenticated=True)

    def is_member_of(self, group: str) -> bool:
        return group in self.groups
