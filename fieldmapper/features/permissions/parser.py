"""
ACL declaration parsing.

Syntax (bit-exact, no whitespace trimming):

    role1:perm1;role2:perm2;...
    perm in {r, w, rw}
"""
from typing import Iterable, Tuple

from fieldmapper.core.errors import FormatError
from fieldmapper.features.permissions.models import Direction, Permission
from fieldmapper.features.permissions.schemas import AclEntry
from fieldmapper.utils import get_logger


log = get_logger(__name__)

CLAUSE_SEPARATOR = ";"
ROLE_SEPARATOR = ":"


def parse_acl(raw: str, strict: bool = True) -> Tuple[AclEntry, ...]:
    """
    Parse an ACL declaration into its role:permission entries.

    Args:
        raw: Declaration, e.g. "staff:r;developer:rw;admin:rw"
        strict: If False, clauses with an unknown permission code are
            dropped with a warning instead of raising

    Returns:
        Entries in declaration order, duplicates kept

    Raises:
        FormatError: A clause is not exactly two non-empty tokens, or
            (strict only) its permission code is unknown
    """
    entries = []
    for clause in raw.split(CLAUSE_SEPARATOR):
        tokens = clause.split(ROLE_SEPARATOR)
        if len(tokens) != 2:
            raise FormatError("expected exactly one ':'", clause, raw)
        role, code = tokens
        if not role or not code:
            raise FormatError("empty role or permission", clause, raw)

        try:
            permission = Permission(code)
        except ValueError:
            if strict:
                raise FormatError(f"unknown permission code {code!r}", clause, raw) from None
            log.warning(f"Unknown permission code {code!r} in {raw!r}, clause ignored")
            continue

        entries.append(AclEntry(role=role, permission=permission))
    return tuple(entries)


def is_granted(entries: Iterable[AclEntry], role: str, direction: Direction) -> bool:
    """True if any entry for `role` is compatible with `direction`."""
    return any(entry.allows(role, direction) for entry in entries)


def format_acl(entries: Iterable[AclEntry]) -> str:
    """Render entries back into declaration syntax."""
    return CLAUSE_SEPARATOR.join(str(entry) for entry in entries)
