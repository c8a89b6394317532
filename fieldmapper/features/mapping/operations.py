"""
Module-level entry points backed by a shared MappingEngine.

Usage:
    view = to_external_view(record, role="staff")
    record = apply_update(record, proposed, role="developer")
"""
from typing import Any, List, Optional, Sequence

from fieldmapper.features.mapping.engine import MappingEngine


_engine: Optional[MappingEngine] = None


def get_engine() -> MappingEngine:
    """Get or create the shared engine (default registry, configured workers)."""
    global _engine
    if _engine is None:
        _engine = MappingEngine()
    return _engine


def to_external_view(entity: Any, role: str, view_type: Optional[type] = None) -> Any:
    """Extract the fields `role` may read (r or rw) into a new view."""
    return get_engine().to_external_view(entity, role, view_type)


def to_internal(view: Any, role: str, entity_type: Optional[type] = None) -> Any:
    """Extract the fields `role` may write (w or rw) into a new stored entity."""
    return get_engine().to_internal(view, role, entity_type)


def apply_update(old: Any, proposed: Any, role: str, copy: bool = False) -> Any:
    """Write the fields `role` may write from `proposed` onto `old` (in place unless `copy`)."""
    return get_engine().apply_update(old, proposed, role, copy=copy)


def to_external_view_batch(
    entities: Sequence[Any], role: str, view_type: Optional[type] = None, workers: Optional[int] = None
) -> List[Any]:
    return get_engine().to_external_view_batch(entities, role, view_type, workers)


def to_internal_batch(
    views: Sequence[Any], role: str, entity_type: Optional[type] = None, workers: Optional[int] = None
) -> List[Any]:
    return get_engine().to_internal_batch(views, role, entity_type, workers)


def apply_update_batch(
    olds: Sequence[Any],
    proposeds: Sequence[Any],
    role: str,
    workers: Optional[int] = None,
    copy: bool = False,
) -> List[Any]:
    return get_engine().apply_update_batch(olds, proposeds, role, workers, copy=copy)
