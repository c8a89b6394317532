"""
Pydantic view of a secret item.
"""
from pydantic import BaseModel, ConfigDict, Field

from fieldmapper.features.entities.descriptors import acl


class SecretItem(BaseModel):
    """Secret item as exposed to callers."""
    name: str = Field(..., max_length=255, json_schema_extra=acl("staff:r;developer:rw;admin:rw"))
    comment: str = Field(..., max_length=1000, json_schema_extra=acl("staff:rw;developer:rw;admin:rw"))
    secret_info: str = Field(..., json_schema_extra=acl("developer:r;admin:rw"))
    top_secret: str = Field(..., json_schema_extra=acl("admin:rw"))
    # Write-only: nobody but admin reads it back
    can_only_be_written_to: str = Field(..., json_schema_extra=acl("staff:w;developer:w;admin:rw"))

    model_config = ConfigDict(from_attributes=True)
