"""
Schema descriptors for entity types.

A descriptor lists a type's fields in declaration order together with their
raw ACL declaration, and knows how to build a fresh instance with every field
at its zero value. Supported entity kinds:
- pydantic models: Field(..., json_schema_extra=acl("staff:r"))
- SQLAlchemy mapped classes: mapped_column(..., info=acl("staff:r"))
- dataclasses: field(..., metadata=acl("staff:r"))
- anything else through explicit registration
"""
import dataclasses
from collections.abc import Mapping
import types
import typing
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, Optional, Tuple, Union

from pydantic import BaseModel
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.orm import Mapper

from fieldmapper.core import config


def acl(declaration: str) -> Dict[str, str]:
    """
    Metadata mapping carrying an ACL declaration under the configured key.

    Usage:
        name: str = Field(..., json_schema_extra=acl("staff:r;admin:rw"))
        name: Mapped[str] = mapped_column(String(100), info=acl("staff:r;admin:rw"))
        name: str = field(default="", metadata=acl("staff:r;admin:rw"))
    """
    return {config.ACL_KEY: declaration}


@dataclass(frozen=True)
class FieldSpec:
    """A field name and its raw ACL declaration (None if undeclared)."""
    name: str
    acl: Optional[str] = None


@dataclass(frozen=True)
class EntitySchema:
    """Field list of an entity type plus a factory for zero-valued instances."""
    entity_type: type
    fields: Tuple[FieldSpec, ...]
    factory: Callable[[], Any]

    def new(self) -> Any:
        return self.factory()

    @property
    def field_names(self) -> Tuple[str, ...]:
        return tuple(spec.name for spec in self.fields)


def zero_factory(annotation: Any) -> Callable[[], Any]:
    """
    Factory producing the zero value of a type annotation.

    Optional types are None, other types use their no-argument constructor
    ("" for str, 0 for int, [] for list...), and None when there is none.
    """
    origin = typing.get_origin(annotation)
    if origin is typing.Annotated:
        return zero_factory(typing.get_args(annotation)[0])
    if origin is Union or origin is types.UnionType:
        args = typing.get_args(annotation)
        if type(None) in args:
            return _none
        return zero_factory(args[0])
    if origin is not None:
        annotation = origin

    if isinstance(annotation, type):
        try:
            annotation()
        except (TypeError, ValueError):
            return _none
        return annotation
    return _none


def _none() -> None:
    return None


def _constant(value: Any) -> Callable[[], Any]:
    return lambda: value


def _declared(metadata: Any, acl_key: str) -> Optional[str]:
    if not isinstance(metadata, Mapping):
        return None
    # An empty declaration is treated as no declaration
    return metadata.get(acl_key) or None


def _unique(entity_type: type, fields: Iterable[FieldSpec]) -> Tuple[FieldSpec, ...]:
    specs = tuple(fields)
    seen = set()
    for spec in specs:
        if spec.name in seen:
            raise ValueError(f"Duplicate field {spec.name!r} on {entity_type.__name__}")
        seen.add(spec.name)
    return specs


# ============================================================================
# Introspection per entity kind
# ============================================================================

def _pydantic_zero(info: Any) -> Callable[[Dict[str, Any]], Any]:
    if info.is_required():
        zero = zero_factory(info.annotation)
        return lambda data: zero()
    if getattr(info, "default_factory_takes_validated_data", False):
        # default_factory(data) sees the zero values of the fields declared before it
        return info.default_factory
    return lambda data: info.get_default(call_default_factory=True)


def describe_pydantic(entity_type: type, acl_key: str) -> EntitySchema:
    fields = []
    zeros: Dict[str, Callable[[Dict[str, Any]], Any]] = {}
    for name, info in entity_type.model_fields.items():
        fields.append(FieldSpec(name, _declared(info.json_schema_extra, acl_key)))
        zeros[name] = _pydantic_zero(info)

    def factory():
        data: Dict[str, Any] = {}
        for name, zero in zeros.items():
            data[name] = zero(data)
        # model_construct skips validation, zero values may violate constraints
        return entity_type.model_construct(**data)

    return EntitySchema(entity_type, _unique(entity_type, fields), factory)


def describe_sqlalchemy(entity_type: type, mapper: Mapper, acl_key: str) -> EntitySchema:
    fields = []
    zeros: Dict[str, Callable[[], Any]] = {}
    for prop in mapper.column_attrs:
        column = prop.columns[0]
        fields.append(FieldSpec(prop.key, _declared(column.info, acl_key)))

        default = column.default
        if default is not None and default.is_scalar:
            zeros[prop.key] = _constant(default.arg)
        elif column.primary_key or column.nullable:
            zeros[prop.key] = _none
        else:
            try:
                zeros[prop.key] = zero_factory(column.type.python_type)
            except NotImplementedError:
                zeros[prop.key] = _none

    def factory():
        return entity_type(**{name: zero() for name, zero in zeros.items()})

    return EntitySchema(entity_type, _unique(entity_type, fields), factory)


def describe_dataclass(entity_type: type, acl_key: str) -> EntitySchema:
    try:
        hints = typing.get_type_hints(entity_type, include_extras=True)
    except NameError:
        hints = {}

    fields = []
    zeros: Dict[str, Callable[[], Any]] = {}
    for f in dataclasses.fields(entity_type):
        fields.append(FieldSpec(f.name, _declared(f.metadata, acl_key)))
        if not f.init:
            continue
        if f.default is not dataclasses.MISSING:
            zeros[f.name] = _constant(f.default)
        elif f.default_factory is not dataclasses.MISSING:
            zeros[f.name] = f.default_factory
        else:
            zeros[f.name] = zero_factory(hints.get(f.name, f.type))

    def factory():
        return entity_type(**{name: zero() for name, zero in zeros.items()})

    return EntitySchema(entity_type, _unique(entity_type, fields), factory)


def describe_registered(
    entity_type: type,
    fields: Iterable[Union[FieldSpec, Tuple[str, Optional[str]]]],
    factory: Optional[Callable[[], Any]] = None,
) -> EntitySchema:
    specs = [
        spec if isinstance(spec, FieldSpec) else FieldSpec(spec[0], spec[1] or None)
        for spec in fields
    ]
    return EntitySchema(entity_type, _unique(entity_type, specs), factory or entity_type)


def introspect(entity_type: type, acl_key: str) -> EntitySchema:
    """
    Build the descriptor of an introspectable entity type.

    Raises:
        TypeError: The type is neither a pydantic model, a SQLAlchemy mapped
            class nor a dataclass
    """
    if isinstance(entity_type, type) and issubclass(entity_type, BaseModel):
        return describe_pydantic(entity_type, acl_key)

    mapper = sa_inspect(entity_type, raiseerr=False)
    if isinstance(mapper, Mapper):
        return describe_sqlalchemy(entity_type, mapper, acl_key)

    if dataclasses.is_dataclass(entity_type):
        return describe_dataclass(entity_type, acl_key)

    raise TypeError(
        f"{getattr(entity_type, '__name__', entity_type)!s} is not a supported entity type, "
        f"use register_entity() to publish its fields"
    )
