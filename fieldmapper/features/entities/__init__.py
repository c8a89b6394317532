"""
Entity schema feature module.

Describes entity types (pydantic models, SQLAlchemy mapped classes,
dataclasses, or explicitly registered classes) as ordered field lists with
their ACL declarations.
"""
