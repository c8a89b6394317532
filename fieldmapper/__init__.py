"""
Role-based, field-level access-control mapper.

Copies only the fields a role may read or write between the external view
and the stored form of an entity, according to ACLs declared per field:

    class SecretItem(BaseModel):
        name: str = Field(..., json_schema_extra=acl("staff:r;developer:rw;admin:rw"))
        top_secret: str = Field(..., json_schema_extra=acl("admin:rw"))

    view = to_external_view(item, role="staff")
"""
from fieldmapper.core.errors import FieldAccessError, FormatError, MappingError
from fieldmapper.features.entities.descriptors import EntitySchema, FieldSpec, acl
from fieldmapper.features.entities.registry import (
    SchemaRegistry,
    describe,
    register_entity,
    validate_entity,
)
from fieldmapper.features.mapping.engine import MappingEngine
from fieldmapper.features.mapping.operations import (
    apply_update,
    apply_update_batch,
    get_engine,
    to_external_view,
    to_external_view_batch,
    to_internal,
    to_internal_batch,
)
from fieldmapper.features.permissions.models import Direction, Permission
from fieldmapper.features.permissions.parser import format_acl, is_granted, parse_acl
from fieldmapper.features.permissions.schemas import AclEntry

__all__ = [
    "AclEntry",
    "Direction",
    "EntitySchema",
    "FieldAccessError",
    "FieldSpec",
    "FormatError",
    "MappingEngine",
    "MappingError",
    "Permission",
    "SchemaRegistry",
    "acl",
    "apply_update",
    "apply_update_batch",
    "describe",
    "format_acl",
    "get_engine",
    "is_granted",
    "parse_acl",
    "register_entity",
    "to_external_view",
    "to_external_view_batch",
    "to_internal",
    "to_internal_batch",
    "validate_entity",
]
