"""
Unit tests for the encoded ACL cursor.
"""

import pytest

from service_acl.app.codec.encoded_acl import EncodedAcl
from shared.errors import MalformedError, TruncatedError


class TestEncodedAclEncoding:
    """Test cases for building encoded ACL text."""

    def test_add_char(self):
        """Characters are appended in order."""
        acl = EncodedAcl()
        acl.add_char("W")
        acl.add_char("O")

        assert acl.get_encoding() == "WO"
        assert len(acl) == 2

    def test_encode_null_string(self):
        """A missing string is written as the null marker."""
        acl = EncodedAcl()
        acl.encode_string(None)

        assert acl.get_encoding() == "N"

    def test_encode_string(self):
        """Strings are written as '0', length, blank, characters."""
        acl = EncodedAcl()
        acl.encode_string("/user")

        assert acl.get_encoding() == "05 /user"

    def test_encode_empty_string(self):
        """An empty string keeps its length prefix."""
        acl = EncodedAcl()
        acl.encode_string("")

        assert acl.get_encoding() == "00 "

    def test_encode_long_string(self):
        """Multi-digit lengths are written in full."""
        acl = EncodedAcl()
        acl.encode_string("abcdefghij")

        assert acl.get_encoding() == "010 abcdefghij"


class TestEncodedAclDecoding:
    """Test cases for reading encoded ACL text."""

    def test_get_char_and_back(self):
        """Reading advances the cursor and back() undoes it."""
        acl = EncodedAcl("WO")

        assert acl.get_char() == "W"
        assert acl.remaining() == 1

        acl.back()
        assert acl.remaining() == 2
        assert acl.get_char() == "W"
        assert acl.get_char() == "O"
        assert not acl.has_more()

    def test_get_char_exhausted(self):
        """Reading past the end is a truncation."""
        acl = EncodedAcl("W")
        acl.get_char()

        with pytest.raises(TruncatedError) as exc_info:
            acl.get_char()

        assert exc_info.value.details["position"] == 1

    def test_peek_does_not_consume(self):
        """peek() leaves the cursor alone."""
        acl = EncodedAcl("yA")

        assert acl.peek() == "y"
        assert acl.remaining() == 2
        assert EncodedAcl("").peek() is None

    def test_accepts_char_sequence(self):
        """A list of characters decodes the same as a string."""
        acl = EncodedAcl(list("05 /user"))

        assert acl.decode_string() == "/user"

    def test_decode_string(self):
        """Exactly the encoded length is consumed."""
        acl = EncodedAcl("05 /userX")

        assert acl.decode_string() == "/user"
        assert acl.remaining() == 1
        assert acl.get_char() == "X"

    def test_decode_null_string(self):
        """The null marker decodes to None."""
        acl = EncodedAcl("N")

        assert acl.decode_string() is None
        assert acl.remaining() == 0

    def test_decode_empty_string(self):
        """A zero length decodes to an empty string."""
        assert EncodedAcl("00 ").decode_string() == ""

    def test_decode_long_string(self):
        """Multi-digit lengths are read in full."""
        assert EncodedAcl("010 abcdefghij").decode_string() == "abcdefghij"

    def test_decode_string_containing_blanks(self):
        """Blanks inside the string are data, not separators."""
        assert EncodedAcl("03 a bZ").decode_string() == "a b"

    @pytest.mark.parametrize("encoded", [
        "X",             # not a string prefix
        "0 abc",         # no length digits
        "0x3 abc",       # non-digit in length
        "05",            # length never terminated
        "012 abc",       # length beyond the input
    ])
    def test_decode_string_malformed(self, encoded):
        """Structural mismatches are reported as malformed."""
        with pytest.raises(MalformedError):
            EncodedAcl(encoded).decode_string()

    def test_error_info(self):
        """Diagnostics include the position and surrounding text."""
        acl = EncodedAcl("WONyA WZNyR ")
        acl.get_char()
        acl.get_char()

        info = acl.error_info()
        details = acl.error_details()

        assert "at 2" in info
        assert details["position"] == 2
        assert "WONyA" in details["snippet"]
