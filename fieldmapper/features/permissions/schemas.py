"""
Pydantic schemas for parsed ACL declarations.
"""
from pydantic import BaseModel, ConfigDict, Field

from fieldmapper.features.permissions.models import Direction, Permission


class AclEntry(BaseModel):
    """One role:permission clause of an ACL declaration."""
    role: str = Field(..., min_length=1, description="Role the clause applies to (exact match)")
    permission: Permission = Field(..., description="Permission code granted to the role")

    model_config = ConfigDict(frozen=True)

    def allows(self, role: str, direction: Direction) -> bool:
        return self.role == role and self.permission.grants(direction)

    def __str__(self) -> str:
        return f"{self.role}:{self.permission.value}"
