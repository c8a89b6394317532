"""
Mapping feature module.

Extraction toward an external view or internal storage, differential updates,
and their batch forms, all filtered by per-field ACLs.
"""
