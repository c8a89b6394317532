"""
Error types raised by the mapping engine.

Both kinds are detected before any field is copied, so a failed call never
leaves a partially written target behind.
"""
from typing import Optional


ACL_EXAMPLE = "staff:r;developer:rw"


class MappingError(Exception):
    """Base class for all mapping failures."""


class FormatError(MappingError, ValueError):
    """
    An ACL declaration is not a list of well-formed role:permission clauses,
    or uses an unknown permission code.
    """

    def __init__(
        self,
        reason: str,
        clause: str,
        acl: str,
        entity_type: Optional[type] = None,
        field: Optional[str] = None,
    ):
        self.reason = reason
        self.clause = clause
        self.acl = acl
        self.entity_type = entity_type
        self.field = field
        super().__init__(self._message())

    def _message(self) -> str:
        location = ""
        if self.entity_type is not None:
            location = f" on {self.entity_type.__name__}.{self.field}"
        return (
            f"Improper ACL format{location}: {self.reason} in clause {self.clause!r} "
            f"of {self.acl!r}, example: {ACL_EXAMPLE!r}"
        )

    def at(self, entity_type: type, field: str) -> "FormatError":
        """Copy of this error bound to the field that declared the ACL."""
        return FormatError(self.reason, self.clause, self.acl, entity_type, field)


class FieldAccessError(MappingError, AttributeError):
    """A schema field cannot be read from the source or set on the target."""

    def __init__(self, entity_type: type, field: str, side: str):
        self.entity_type = entity_type
        self.field = field
        self.side = side
        super().__init__(
            f"Cannot access field {field!r} on {side} {entity_type.__name__}"
        )
