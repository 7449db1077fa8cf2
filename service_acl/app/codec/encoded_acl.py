"""
Position-tracked character buffer used to encode and decode ACLs.
"""

from typing import List, Optional, Sequence, Union

from shared.errors import MalformedError, TruncatedError

NULL_MARKER = "N"
STRING_PREFIX = "0"
STRING_SEPARATOR = " "

# Characters either side of the cursor shown in error snippets
_ERROR_CONTEXT = 10


class EncodedAcl:
    """A character sequence plus a read/write position.

    Encoding appends to the buffer; decoding reads forward from ``pos`` and
    may step back one character to undo a speculative read.
    """

    def __init__(self, chars: Union[str, Sequence[str], None] = None):
        self._chars: List[str] = list(chars) if chars else []
        self.pos = 0

    # ------------------------------------------------------------------
    # Encoding
    # ------------------------------------------------------------------

    def add_char(self, c: str):
        """Append one character."""
        self._chars.append(c)

    def add_chars(self, s: str):
        self._chars.extend(s)

    def encode_string(self, s: Optional[str]):
        """Append ``s`` as a length-prefixed string, or the null marker."""
        if s is None:
            self.add_char(NULL_MARKER)
            return

        self.add_char(STRING_PREFIX)
        self.add_chars(str(len(s)))
        self.add_char(STRING_SEPARATOR)
        self.add_chars(s)

    def get_encoding(self) -> str:
        return "".join(self._chars)

    # ------------------------------------------------------------------
    # Decoding
    # ------------------------------------------------------------------

    def get_char(self) -> str:
        """Return the current character and advance."""
        if self.pos >= len(self._chars):
            raise TruncatedError("Unexpected end of ACL", self.error_details())

        c = self._chars[self.pos]
        self.pos += 1
        return c

    def peek(self) -> Optional[str]:
        """Return the current character without consuming it."""
        if self.pos >= len(self._chars):
            return None
        return self._chars[self.pos]

    def back(self):
        """Step back over the last character read."""
        if self.pos > 0:
            self.pos -= 1

    def remaining(self) -> int:
        return len(self._chars) - self.pos

    def has_more(self) -> bool:
        return self.remaining() > 0

    def decode_string(self) -> Optional[str]:
        """Read a string written by :meth:`encode_string`.

        Returns None for the null marker.
        """
        c = self.get_char()
        if c == NULL_MARKER:
            return None

        if c != STRING_PREFIX:
            raise MalformedError(f"Expected string prefix, found {c!r}", self.error_details())

        digits = []
        while True:
            if not self.has_more():
                raise MalformedError("Unterminated string length", self.error_details())
            c = self.get_char()
            if c == STRING_SEPARATOR:
                break
            if c not in "0123456789":
                raise MalformedError(f"Bad character {c!r} in string length", self.error_details())
            digits.append(c)

        if not digits:
            raise MalformedError("Missing string length", self.error_details())

        length = int("".join(digits))
        if length > self.remaining():
            raise MalformedError(
                f"String length {length} exceeds remaining {self.remaining()}",
                self.error_details()
            )

        s = "".join(self._chars[self.pos:self.pos + length])
        self.pos += length
        return s

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------

    def error_info(self) -> str:
        """Snippet around the cursor for error messages."""
        details = self.error_details()
        return f"at {details['position']}: ...{details['snippet']}..."

    def error_details(self) -> dict:
        start = max(0, self.pos - _ERROR_CONTEXT)
        end = min(len(self._chars), self.pos + _ERROR_CONTEXT)
        return {
            "position": self.pos,
            "snippet": "".join(self._chars[start:end]),
        }

    def __len__(self) -> int:
        return len(self._chars)

    def __repr__(self) -> str:
        return f"EncodedAcl(pos={self.pos}, chars={self.get_encoding()!r})"
