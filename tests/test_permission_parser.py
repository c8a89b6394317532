import pytest

from fieldmapper import AclEntry, Direction, FormatError, Permission, format_acl, is_granted, parse_acl


def test_parse_multiple_clauses():
    entries = parse_acl("staff:r;developer:rw;admin:rw")

    assert entries == (
        AclEntry(role="staff", permission=Permission.READ),
        AclEntry(role="developer", permission=Permission.READ_WRITE),
        AclEntry(role="admin", permission=Permission.READ_WRITE),
    )


def test_parse_is_deterministic():
    assert parse_acl("staff:w;admin:rw") == parse_acl("staff:w;admin:rw")


def test_format_round_trips_declaration():
    raw = "staff:w;developer:r;admin:rw"
    assert format_acl(parse_acl(raw)) == raw


@pytest.mark.parametrize(
    "raw, bad_clause",
    [
        ("staff", "staff"),
        ("staff:r;admin", "admin"),
        ("staff:r:w", "staff:r:w"),
        (":rw", ":rw"),
        ("admin:", "admin:"),
        ("admin:rw;", ""),
    ],
)
def test_malformed_clause_raises(raw, bad_clause):
    with pytest.raises(FormatError) as exc_info:
        parse_acl(raw)

    assert exc_info.value.clause == bad_clause
    assert exc_info.value.acl == raw


def test_unknown_permission_code_is_rejected_in_strict_mode():
    with pytest.raises(FormatError) as exc_info:
        parse_acl("staff:r;admin:x")

    assert exc_info.value.clause == "admin:x"
    assert "unknown permission code" in str(exc_info.value)


def test_unknown_permission_code_is_dropped_in_lenient_mode(caplog):
    entries = parse_acl("staff:r;admin:x", strict=False)

    assert entries == (AclEntry(role="staff", permission=Permission.READ),)
    assert "Unknown permission code 'x'" in caplog.text


def test_whitespace_is_not_trimmed():
    entries = parse_acl(" staff:r")

    assert entries[0].role == " staff"
    assert not is_granted(entries, "staff", Direction.READ)


def test_format_error_is_a_value_error():
    with pytest.raises(ValueError):
        parse_acl("nonsense")


@pytest.mark.parametrize(
    "permission, direction, expected",
    [
        (Permission.READ, Direction.READ, True),
        (Permission.WRITE, Direction.READ, False),
        (Permission.READ_WRITE, Direction.READ, True),
        (Permission.READ, Direction.WRITE, False),
        (Permission.WRITE, Direction.WRITE, True),
        (Permission.READ_WRITE, Direction.WRITE, True),
    ],
)
def test_direction_compatibility(permission, direction, expected):
    assert permission.grants(direction) is expected


def test_roles_are_case_sensitive():
    entries = parse_acl("Admin:rw")

    assert is_granted(entries, "Admin", Direction.READ)
    assert not is_granted(entries, "admin", Direction.READ)


def test_duplicate_role_clauses_combine_by_or():
    entries = parse_acl("admin:r;admin:w")

    assert is_granted(entries, "admin", Direction.READ)
    assert is_granted(entries, "admin", Direction.WRITE)
    assert not is_granted(entries, "staff", Direction.READ)
