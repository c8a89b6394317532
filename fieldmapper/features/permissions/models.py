"""
Permission codes and mapping directions.

Compatibility between the two:

    direction | r | w | rw
    ----------+---+---+---
    read      | Y | N | Y
    write     | N | Y | Y
"""
from enum import Enum


class Direction(str, Enum):
    """
    Which way a mapping call moves data.

    READ: stored entity -> external view
    WRITE: external view -> stored entity, and differential updates
    """
    READ = "read"
    WRITE = "write"


class Permission(str, Enum):
    """Permission code as written in an ACL declaration."""
    READ = "r"
    WRITE = "w"
    READ_WRITE = "rw"

    def grants(self, direction: Direction) -> bool:
        """Check if this permission satisfies an access request in `direction`."""
        return self in _ALLOWED[direction]


_ALLOWED = {
    Direction.READ: frozenset({Permission.READ, Permission.READ_WRITE}),
    Direction.WRITE: frozenset({Permission.WRITE, Permission.READ_WRITE}),
}
