"""
Unit tests for who specifiers.
"""

import pytest

from service_acl.app.acl import who as whos
from service_acl.app.acl.principal import Principal
from service_acl.app.acl.who import AceWho, WhoKind
from service_acl.app.codec.encoded_acl import EncodedAcl
from shared.errors import BadWhoTypeError, InvalidStateError, MalformedError
from shared.test_helpers import TestDataFactory


def encode(who: AceWho) -> str:
    acl = EncodedAcl()
    who.encode(acl)
    return acl.get_encoding()


class TestAceWhoEncoding:
    """Test cases for encoding and decoding who specifiers."""

    def test_encode_owner(self):
        assert encode(whos.OWNER) == "WON"

    def test_encode_user(self):
        assert encode(AceWho.user("alice")) == "WU05 alice"

    def test_encode_not_who_group(self):
        assert encode(AceWho.group("staff", not_who=True)) == "NG05 staff"

    @pytest.mark.parametrize("who", [
        whos.OWNER,
        whos.OTHER,
        whos.UNAUTHENTICATED,
        whos.AUTHENTICATED,
        whos.ALL,
        AceWho.user("alice"),
        AceWho.group("staff", not_who=True),
        AceWho.host("calendar.example.org"),
    ])
    def test_round_trip(self, who):
        assert AceWho.decode(EncodedAcl(encode(who))) == who

    def test_decode_bad_who_type(self):
        """'Q' is not a who kind."""
        with pytest.raises(BadWhoTypeError) as exc_info:
            AceWho.decode(EncodedAcl("WQN"))

        assert exc_info.value.code == "ACL_BAD_WHO_TYPE"
        assert exc_info.value.position == 1

    def test_decode_bad_polarity(self):
        with pytest.raises(MalformedError):
            AceWho.decode(EncodedAcl("XON"))

    def test_decode_user_without_name(self):
        with pytest.raises(MalformedError):
            AceWho.decode(EncodedAcl("WUN"))

    def test_decode_owner_with_name(self):
        with pytest.raises(MalformedError):
            AceWho.decode(EncodedAcl("WO05 alice"))

    def test_name_required(self):
        with pytest.raises(InvalidStateError):
            AceWho(WhoKind.USER)

    def test_name_forbidden(self):
        with pytest.raises(InvalidStateError):
            AceWho(WhoKind.OWNER, "alice")

    def test_to_user_string(self):
        assert whos.OWNER.to_user_string() == "owner"
        assert AceWho.user("alice", not_who=True).to_user_string() == "NOT user alice"


class TestAceWhoMatching:
    """Test cases for matching principals."""

    @pytest.fixture
    def alice(self):
        return Principal.user("alice", groups=["staff"])

    @pytest.fixture
    def bob(self):
        return Principal.user("bob")

    def test_user(self, alice, bob):
        who = AceWho.user("alice")

        assert who.matches(alice, is_owner=False)
        assert not who.matches(bob, is_owner=False)

    def test_not_who_user(self, alice, bob):
        """A negated entry matches everyone except the named user."""
        who = AceWho.user("alice", not_who=True)

        assert not who.matches(alice, is_owner=False)
        assert who.matches(bob, is_owner=False)

    def test_group(self, alice, bob):
        who = AceWho.group("staff")

        assert who.matches(alice, is_owner=False)
        assert not who.matches(bob, is_owner=False)

    def test_owner_and_other(self, alice):
        assert whos.OWNER.matches(alice, is_owner=True)
        assert not whos.OWNER.matches(alice, is_owner=False)
        assert whos.OTHER.matches(alice, is_owner=False)
        assert not whos.OTHER.matches(alice, is_owner=True)

    def test_authentication(self, alice):
        guest = Principal.guest()

        assert whos.UNAUTHENTICATED.matches(guest, is_owner=False)
        assert not whos.UNAUTHENTICATED.matches(alice, is_owner=False)
        assert whos.AUTHENTICATED.matches(alice, is_owner=False)
        assert not whos.AUTHENTICATED.matches(guest, is_owner=False)
        assert whos.ALL.matches(guest, is_owner=False)

    def test_host_never_matches(self, alice):
        assert not AceWho.host("calendar.example.org").matches(alice, is_owner=False)
        assert not AceWho.host("calendar.example.org", not_who=True).matches(alice, is_owner=False)

    def test_factory_principals(self):
        owner, alice, bob, carol, guest = TestDataFactory.create_test_principals()

        assert all(isinstance(p, Principal) for p in (owner, alice, bob, carol, guest))
        assert AceWho.group("admins").matches(bob, is_owner=False)
        assert not AceWho.group("admins").matches(alice, is_owner=False)
        assert whos.UNAUTHENTICATED.matches(guest, is_owner=False)
