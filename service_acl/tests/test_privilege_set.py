"""
Unit tests for privilege verdict sets.
"""

import pytest

from service_acl.app.privileges.definitions import (
    PRIV_ALL, PRIV_READ, PRIV_READ_ACL, PRIV_UNLOCK, PRIV_WRITE, PRIV_WRITE_CONTENT,
)
from service_acl.app.privileges.privilege import PRIVILEGES
from service_acl.app.privileges.privilege_set import PRIV_SET_SIZE, PrivilegeSet, PrivilegeState
from shared.errors import InvalidStateError


@pytest.fixture
def read():
    return PRIVILEGES.make_priv(PRIV_READ)


@pytest.fixture
def write():
    return PRIVILEGES.make_priv(PRIV_WRITE)


@pytest.fixture
def deny_write():
    return PRIVILEGES.make_priv(PRIV_WRITE, denied=True)


class TestPrivilegeSet:
    """Test cases for PrivilegeSet."""

    def test_starts_unspecified(self):
        ps = PrivilegeSet()

        assert ps.is_unspecified()
        assert not ps.any_allowed()
        assert ps.to_string() == "?" * PRIV_SET_SIZE

    def test_set_privilege_covers_subtree(self, write):
        """Allowing write allows everything write contains."""
        ps = PrivilegeSet.from_privileges([write])

        assert ps.is_allowed(PRIV_WRITE)
        assert ps.is_allowed(PRIV_WRITE_CONTENT)
        assert ps.get(PRIV_READ) == PrivilegeState.UNSPECIFIED

    def test_later_privileges_override(self, deny_write):
        """'all' then 'not write' leaves write and its children denied."""
        ps = PrivilegeSet.from_privileges([PRIVILEGES.all, deny_write])

        assert ps.is_allowed(PRIV_READ)
        assert ps.is_allowed(PRIV_UNLOCK)
        assert ps.get(PRIV_WRITE) == PrivilegeState.DENIED
        assert ps.get(PRIV_WRITE_CONTENT) == PrivilegeState.DENIED

    def test_none_denies_everything(self):
        ps = PrivilegeSet.from_privileges([PRIVILEGES.none])

        assert ps == PrivilegeSet.make_default_non_owner_privileges()

    def test_set_unspecified_owner(self, read):
        ps = PrivilegeSet.from_privileges([PRIVILEGES.make_priv(PRIV_READ, denied=True)])
        ps.set_unspecified(is_owner=True)

        assert not ps.is_allowed(PRIV_READ)
        assert not ps.is_allowed(PRIV_READ_ACL)
        assert ps.is_allowed(PRIV_WRITE)

    def test_set_unspecified_non_owner(self, read):
        ps = PrivilegeSet.from_privileges([read])
        ps.set_unspecified(is_owner=False)

        assert ps.is_allowed(PRIV_READ)
        assert not ps.is_allowed(PRIV_WRITE)
        assert not ps.is_allowed(PRIV_ALL)

    def test_merge_most_permissive(self, read, write):
        """Allowed beats denied beats unspecified, index by index."""
        first = PrivilegeSet.from_privileges([write, PRIVILEGES.make_priv(PRIV_READ, denied=True)])
        second = PrivilegeSet.from_privileges([read, PRIVILEGES.make_priv(PRIV_WRITE, denied=True)])

        merged = first.merge(second)

        assert merged.is_allowed(PRIV_READ)
        assert merged.is_allowed(PRIV_WRITE)
        assert merged.get(PRIV_UNLOCK) == PrivilegeState.UNSPECIFIED

    def test_merge_denied_over_unspecified(self, deny_write):
        merged = PrivilegeSet().merge(PrivilegeSet.from_privileges([deny_write]))

        assert merged.get(PRIV_WRITE) == PrivilegeState.DENIED

    def test_filter(self, read):
        """Anything the ceiling does not allow ends up denied."""
        ps = PrivilegeSet.make_default_owner_privileges()

        filtered = ps.filter(PrivilegeSet.from_privileges([read]))

        assert filtered.is_allowed(PRIV_READ)
        assert filtered.is_allowed(PRIV_READ_ACL)
        assert not filtered.is_allowed(PRIV_WRITE)
        assert ps.is_allowed(PRIV_WRITE)

    def test_string_round_trip(self, read):
        ps = PrivilegeSet.from_privileges([read])

        assert PrivilegeSet.from_string(ps.to_string()) == ps

    def test_from_string_rejects_unknown_state(self):
        with pytest.raises(InvalidStateError):
            PrivilegeSet.from_string("x" * PRIV_SET_SIZE)

    def test_wrong_size_rejected(self):
        with pytest.raises(InvalidStateError):
            PrivilegeSet([PrivilegeState.ALLOWED])

    def test_index_out_of_range(self):
        with pytest.raises(InvalidStateError):
            PrivilegeSet().is_allowed(PRIV_SET_SIZE)

    def test_copy_is_independent(self, read):
        ps = PrivilegeSet()
        dup = ps.copy()
        dup.set_privilege(read)

        assert ps.is_unspecified()
        assert dup.is_allowed(PRIV_READ)
