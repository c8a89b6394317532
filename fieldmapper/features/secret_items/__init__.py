"""
Example entity: a secret item with fields of increasing sensitivity.

Roles: staff, developer, admin.
"""
