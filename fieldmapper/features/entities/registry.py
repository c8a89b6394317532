"""
Schema registry.

Builds entity descriptors on first use and memoizes each field's parsed ACL
per (entity type, field). Population is idempotent: concurrent first lookups
may parse the same declaration twice, but only one result is ever published
and readers never see a partially built value.
"""
import threading
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, Optional, Tuple, Union

from fieldmapper.core import config
from fieldmapper.core.errors import FormatError
from fieldmapper.features.entities.descriptors import (
    EntitySchema,
    FieldSpec,
    describe_registered,
    introspect,
)
from fieldmapper.features.permissions.parser import parse_acl
from fieldmapper.features.permissions.schemas import AclEntry
from fieldmapper.utils import get_logger


log = get_logger(__name__)


@dataclass(frozen=True)
class ResolvedField:
    """A schema field with its parsed ACL (None if undeclared)."""
    name: str
    entries: Optional[Tuple[AclEntry, ...]]

    @property
    def declared(self) -> bool:
        return self.entries is not None


class SchemaRegistry:
    """
    Descriptor and parsed-ACL cache for entity types.

    Args:
        acl_key: Metadata key holding ACL declarations
        strict: Reject unknown permission codes instead of dropping them
    """

    def __init__(self, acl_key: Optional[str] = None, strict: Optional[bool] = None):
        self.acl_key = acl_key or config.ACL_KEY
        self.strict = config.STRICT_PERMISSIONS if strict is None else strict
        self._lock = threading.Lock()
        self._registered: Dict[type, EntitySchema] = {}
        self._schemas: Dict[type, EntitySchema] = {}
        self._acls: Dict[Tuple[type, str], Tuple[AclEntry, ...]] = {}

    def register(
        self,
        entity_type: type,
        fields: Iterable[Union[FieldSpec, Tuple[str, Optional[str]]]],
        factory: Optional[Callable[[], Any]] = None,
    ) -> EntitySchema:
        """
        Publish an explicit field table for `entity_type`.

        Registered tables take precedence over introspection. Registering a
        type again replaces its table and drops its cached ACLs.

        Raises:
            ValueError: Two fields share a name
        """
        schema = describe_registered(entity_type, fields, factory)
        with self._lock:
            self._registered[entity_type] = schema
            self._schemas[entity_type] = schema
            for key in [key for key in self._acls if key[0] is entity_type]:
                del self._acls[key]
        log.debug(f"Registered {entity_type.__name__} with fields {schema.field_names}")
        return schema

    def describe(self, entity_type: type) -> EntitySchema:
        """Get the descriptor of `entity_type`, building it on first use."""
        schema = self._schemas.get(entity_type)
        if schema is not None:
            return schema

        schema = introspect(entity_type, self.acl_key)
        with self._lock:
            schema = self._registered.get(entity_type) or self._schemas.setdefault(entity_type, schema)
        log.debug(f"Described {entity_type.__name__}: {schema.field_names}")
        return schema

    def resolve(self, entity_type: type) -> Tuple[ResolvedField, ...]:
        """
        Get every field of `entity_type` with its parsed ACL.

        All declarations are parsed before returning, so a malformed one
        anywhere fails the whole lookup.

        Raises:
            FormatError: A field's declaration does not parse
        """
        schema = self.describe(entity_type)
        return tuple(self._resolve_field(entity_type, spec) for spec in schema.fields)

    def _resolve_field(self, entity_type: type, spec: FieldSpec) -> ResolvedField:
        if spec.acl is None:
            return ResolvedField(spec.name, None)

        key = (entity_type, spec.name)
        entries = self._acls.get(key)
        if entries is None:
            try:
                entries = parse_acl(spec.acl, strict=self.strict)
            except FormatError as exc:
                raise exc.at(entity_type, spec.name) from exc
            with self._lock:
                entries = self._acls.setdefault(key, entries)
        return ResolvedField(spec.name, entries)

    def clear(self) -> None:
        """Drop cached descriptors and ACLs, keeping explicit registrations."""
        with self._lock:
            self._schemas = dict(self._registered)
            self._acls = {}


default_registry = SchemaRegistry()


def register_entity(
    entity_type: type,
    fields: Iterable[Union[FieldSpec, Tuple[str, Optional[str]]]],
    factory: Optional[Callable[[], Any]] = None,
) -> EntitySchema:
    """Register an explicit field table with the default registry."""
    return default_registry.register(entity_type, fields, factory)


def describe(entity_type: type) -> EntitySchema:
    """Get the descriptor of `entity_type` from the default registry."""
    return default_registry.describe(entity_type)


def validate_entity(entity_type: type) -> EntitySchema:
    """
    Parse every ACL declaration of `entity_type` now instead of on first mapping.

    Usage at startup:
        validate_entity(SecretItem)

    Raises:
        FormatError: A field's declaration does not parse
    """
    default_registry.resolve(entity_type)
    return default_registry.describe(entity_type)
