"""
Field permission feature module.

Parses per-field ACL declarations (``role:perm;role:perm``) into structured
entries and decides whether an entry grants access in a mapping direction.
"""
