"""
Permission-filtered field copying between entity values.

Every call runs in two phases:
1. Plan: resolve the source schema, parse all ACLs, check that every declared
   field is readable on the source and present on the target, that every
   granted field can be set on the target, and allocate a fresh target (or a
   copy of the given one) when asked.
2. Copy: set the granted fields on the target.

Only the plan phase can fail, so a failed call never writes to a target.
Batch calls plan every element before copying any of them.
"""
import dataclasses
import inspect
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Tuple

from pydantic import BaseModel

from fieldmapper.core import config
from fieldmapper.core.errors import FieldAccessError
from fieldmapper.features.entities.registry import SchemaRegistry, default_registry
from fieldmapper.features.permissions.models import Direction
from fieldmapper.features.permissions.parser import is_granted
from fieldmapper.utils import get_logger


log = get_logger(__name__)


@dataclass(frozen=True)
class CopyPlan:
    """Validated copy of `fields` from `source` onto `target`."""
    source: Any
    target: Any
    fields: Tuple[str, ...]

    def execute(self) -> Any:
        for name in self.fields:
            setattr(self.target, name, getattr(self.source, name))
        return self.target


def _ensure_readable(entity: Any, name: str) -> None:
    if not hasattr(entity, name):
        raise FieldAccessError(type(entity), name, "source")


def _ensure_present(entity: Any, name: str) -> None:
    if not hasattr(entity, name):
        raise FieldAccessError(type(entity), name, "target")


def _is_frozen(entity: Any, name: str) -> bool:
    entity_type = type(entity)
    if isinstance(entity, BaseModel):
        if entity_type.model_config.get("frozen"):
            return True
        info = entity_type.model_fields.get(name)
        if info is not None and info.frozen:
            return True

    params = getattr(entity_type, "__dataclass_params__", None)
    if params is not None and params.frozen:
        return True

    attr = inspect.getattr_static(entity_type, name, None)
    return isinstance(attr, property) and attr.fset is None


def _ensure_settable(entity: Any, name: str) -> None:
    if _is_frozen(entity, name):
        raise FieldAccessError(type(entity), name, "target")


class MappingEngine:
    """
    Copies the fields a role may read or write between entity values.

    Args:
        registry: Schema registry (defaults to the shared one)
        workers: Default thread count for batch calls
    """

    def __init__(self, registry: Optional[SchemaRegistry] = None, workers: Optional[int] = None):
        self.registry = registry or default_registry
        self.workers = workers or config.BATCH_WORKERS

    # ========================================================================
    # Core operation
    # ========================================================================

    def map(
        self,
        source: Any,
        target: Any = None,
        *,
        role: str,
        direction: Direction,
        target_type: Optional[type] = None,
        copy_target: bool = False,
    ) -> Any:
        """
        Copy the fields of `source` that `role` may access in `direction`.

        ACLs are read from the schema of type(source). Fields without a
        declaration, or that the role may not access, keep their value on
        `target` (zero values for a fresh target).

        Args:
            source: Entity to copy from
            target: Entity to copy onto; a fresh zero-valued instance of
                `target_type` (default type(source)) when None
            role: Caller role, compared by exact equality
            direction: Which permissions satisfy the request
            copy_target: Write onto a copy of `target` and leave it untouched

        Returns:
            The target (or its copy)

        Raises:
            FormatError: An ACL declaration of the source type does not parse
            FieldAccessError: A declared field is missing on source or target,
                or a granted field cannot be set on the target
        """
        return self._plan(source, target, role, direction, target_type, copy_target).execute()

    def _plan(
        self,
        source: Any,
        target: Any,
        role: str,
        direction: Direction,
        target_type: Optional[type],
        copy_target: bool = False,
    ) -> CopyPlan:
        resolved = self.registry.resolve(type(source))
        declared = [f for f in resolved if f.declared]

        for f in declared:
            _ensure_readable(source, f.name)

        fresh = target is None
        if fresh:
            target = self.registry.describe(target_type or type(source)).new()
        for f in declared:
            _ensure_present(target, f.name)

        granted = tuple(f.name for f in declared if is_granted(f.entries, role, direction))
        for name in granted:
            _ensure_settable(target, name)

        if copy_target and not fresh:
            target = self._copy(target)
        log.debug(
            f"Mapping {len(granted)} of {len(resolved)} fields of {type(source).__name__} "
            f"for role {role!r} ({direction.value})"
        )
        return CopyPlan(source, target, granted)

    def _copy(self, entity: Any) -> Any:
        """Shallow copy of `entity` holding the values of all its schema fields."""
        if isinstance(entity, BaseModel):
            return entity.model_copy()
        if dataclasses.is_dataclass(entity):
            return dataclasses.replace(entity)

        schema = self.registry.describe(type(entity))
        clone = schema.new()
        for name in schema.field_names:
            setattr(clone, name, getattr(entity, name))
        return clone

    def map_batch(
        self,
        pairs: Sequence[Tuple[Any, Any]],
        *,
        role: str,
        direction: Direction,
        target_type: Optional[type] = None,
        workers: Optional[int] = None,
        copy_target: bool = False,
    ) -> List[Any]:
        """
        Map each (source, target) pair, preserving order.

        Every pair is planned before any is copied, so the first error aborts
        the batch with no target written and no partial result returned.

        Args:
            workers: Thread count for the copy phase (default: engine setting)
        """
        plans = [
            self._plan(source, target, role, direction, target_type, copy_target)
            for source, target in pairs
        ]

        workers = workers or self.workers
        if workers > 1 and len(plans) > 1:
            with ThreadPoolExecutor(max_workers=workers) as pool:
                return list(pool.map(CopyPlan.execute, plans))
        return [plan.execute() for plan in plans]

    # ========================================================================
    # Entry points
    # ========================================================================

    def to_external_view(self, entity: Any, role: str, view_type: Optional[type] = None) -> Any:
        """
        New view holding only the fields `role` may read (r or rw) from `entity`.
        """
        return self.map(entity, role=role, direction=Direction.READ, target_type=view_type)

    def to_internal(self, view: Any, role: str, entity_type: Optional[type] = None) -> Any:
        """
        New stored entity holding only the fields `role` may write (w or rw) from `view`.
        """
        return self.map(view, role=role, direction=Direction.WRITE, target_type=entity_type)

    def apply_update(self, old: Any, proposed: Any, role: str, copy: bool = False) -> Any:
        """
        Write the fields `role` may write (w or rw) from `proposed` onto `old`.

        `old` is updated in place and returned, unless `copy` is set: then a
        copy of `old` receives the update and `old` is left as it was. Every
        other field keeps its stored value.
        """
        return self.map(proposed, old, role=role, direction=Direction.WRITE, copy_target=copy)

    def to_external_view_batch(
        self,
        entities: Sequence[Any],
        role: str,
        view_type: Optional[type] = None,
        workers: Optional[int] = None,
    ) -> List[Any]:
        return self.map_batch(
            [(entity, None) for entity in entities],
            role=role,
            direction=Direction.READ,
            target_type=view_type,
            workers=workers,
        )

    def to_internal_batch(
        self,
        views: Sequence[Any],
        role: str,
        entity_type: Optional[type] = None,
        workers: Optional[int] = None,
    ) -> List[Any]:
        return self.map_batch(
            [(view, None) for view in views],
            role=role,
            direction=Direction.WRITE,
            target_type=entity_type,
            workers=workers,
        )

    def apply_update_batch(
        self,
        olds: Sequence[Any],
        proposeds: Sequence[Any],
        role: str,
        workers: Optional[int] = None,
        copy: bool = False,
    ) -> List[Any]:
        """
        Apply `proposeds[i]` onto `olds[i]` for every i (onto copies if `copy`).

        Raises:
            ValueError: The sequences differ in length
        """
        if len(olds) != len(proposeds):
            raise ValueError(
                f"Cannot update {len(olds)} entities from {len(proposeds)} proposals"
            )
        return self.map_batch(
            list(zip(proposeds, olds)),
            role=role,
            direction=Direction.WRITE,
            workers=workers,
            copy_target=copy,
        )
