"""
Privilege definitions shared by every ACL in the process.

Each privilege has a stable index; the index selects its single-character
encoding. Changing an index or an encoding character invalidates every
stored ACL.
"""

from typing import NamedTuple, Tuple

# Allowed/denied flag preceding each privilege character
ALLOWED = "y"
DENIED = "n"

# Flags written by older releases, still accepted on decode
OLD_ALLOWED = "3"
OLD_DENIED = "2"

ALLOWED_FLAGS = (ALLOWED, OLD_ALLOWED)
DENIED_FLAGS = (DENIED, OLD_DENIED)

PRIV_ALL = 0
PRIV_READ = 1
PRIV_READ_ACL = 2
PRIV_READ_CURRENT_USER_PRIVILEGE_SET = 3
PRIV_READ_FREE_BUSY = 4
PRIV_WRITE = 5
PRIV_WRITE_ACL = 6
PRIV_WRITE_PROPERTIES = 7
PRIV_WRITE_CONTENT = 8
PRIV_BIND = 9
PRIV_SCHEDULE = 10
PRIV_SCHEDULE_REQUEST = 11
PRIV_SCHEDULE_REPLY = 12
PRIV_SCHEDULE_FREE_BUSY = 13
PRIV_UNBIND = 14
PRIV_UNLOCK = 15

PRIV_MAX_TYPE = PRIV_UNLOCK

# Indexed by privilege index
PRIV_ENCODING: Tuple[str, ...] = (
    "A",  # all
    "R",  # read
    "r",  # read-acl
    "P",  # read-current-user-privilege-set
    "F",  # read-free-busy
    "W",  # write
    "a",  # write-acl
    "p",  # write-properties
    "c",  # write-content
    "b",  # bind
    "S",  # schedule
    "t",  # schedule-request
    "q",  # schedule-reply
    "s",  # schedule-free-busy
    "u",  # unbind
    "U",  # unlock
)


class PrivilegeDef(NamedTuple):
    """Declarative form of one node in the hierarchy."""
    index: int
    name: str
    description: str
    abstract: bool = False
    contained: Tuple["PrivilegeDef", ...] = ()


# Children are searched in declaration order when decoding
PRIVILEGE_HIERARCHY = PrivilegeDef(
    PRIV_ALL, "all", "All privileges",
    contained=(
        PrivilegeDef(
            PRIV_READ, "read", "Read any calendar object",
            contained=(
                PrivilegeDef(PRIV_READ_ACL, "read-acl", "Read calendar ACLs"),
                PrivilegeDef(PRIV_READ_CURRENT_USER_PRIVILEGE_SET,
                             "read-current-user-privilege-set",
                             "Read current user privilege set property"),
                PrivilegeDef(PRIV_READ_FREE_BUSY, "read-free-busy", "Read free busy"),
            ),
        ),
        PrivilegeDef(
            PRIV_WRITE, "write", "Write any calendar object",
            contained=(
                PrivilegeDef(PRIV_WRITE_ACL, "write-acl", "Write ACL"),
                PrivilegeDef(PRIV_WRITE_PROPERTIES, "write-properties", "Write calendar properties"),
                PrivilegeDef(PRIV_WRITE_CONTENT, "write-content", "Write calendar content"),
                PrivilegeDef(
                    PRIV_BIND, "bind", "Create a calendar object",
                    contained=(
                        PrivilegeDef(
                            PRIV_SCHEDULE, "schedule", "Schedule",
                            contained=(
                                PrivilegeDef(PRIV_SCHEDULE_REQUEST, "schedule-request",
                                             "Send scheduling requests"),
                                PrivilegeDef(PRIV_SCHEDULE_REPLY, "schedule-reply",
                                             "Send scheduling replies"),
                                PrivilegeDef(PRIV_SCHEDULE_FREE_BUSY, "schedule-free-busy",
                                             "Query free busy"),
                            ),
                        ),
                    ),
                ),
                PrivilegeDef(PRIV_UNBIND, "unbind", "Remove a calendar object"),
            ),
        ),
        PrivilegeDef(PRIV_UNLOCK, "unlock", "Remove a lock"),
    ),
)

