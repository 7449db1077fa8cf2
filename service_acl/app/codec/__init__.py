"""
Character-level codec for stored ACLs.

- encoded_acl: Cursor over an encoded ACL with length-prefixed strings.
"""

from .encoded_acl import EncodedAcl, NULL_MARKER

__all__ = ["EncodedAcl", "NULL_MARKER"]
