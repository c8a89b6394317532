import pytest

from fieldmapper import apply_update
from tests.conftest import ROLES, SECRET_ITEM_DATA, UPDATED_DATA


WRITABLE = {
    "admin": {"name", "comment", "secret_info", "top_secret", "can_only_be_written_to"},
    "developer": {"name", "comment", "can_only_be_written_to"},
    "staff": {"comment", "can_only_be_written_to"},
    "unauthorized": set(),
}


@pytest.mark.parametrize("role", ROLES)
def test_only_writable_fields_take_proposed_value(role, secret_item, updated_item):
    updated = apply_update(secret_item, updated_item, role)

    for name in SECRET_ITEM_DATA:
        if name in WRITABLE[role]:
            assert getattr(updated, name) == UPDATED_DATA[name], name
        else:
            assert getattr(updated, name) == SECRET_ITEM_DATA[name], name


def test_update_is_in_place(secret_item, updated_item):
    updated = apply_update(secret_item, updated_item, "staff")

    assert updated is secret_item
    assert secret_item.comment == "Updated"


def test_proposal_is_not_modified(secret_item, updated_item):
    apply_update(secret_item, updated_item, "admin")

    assert updated_item.model_dump() == UPDATED_DATA


def test_update_stored_record(secret_record, updated_item):
    updated = apply_update(secret_record, updated_item, "developer")

    assert updated is secret_record
    assert secret_record.id == "01HZX3J9V8K2M4N6P8R0S2T4V6"
    assert secret_record.name == "Updated"
    assert secret_record.secret_info == SECRET_ITEM_DATA["secret_info"]
    assert secret_record.top_secret == SECRET_ITEM_DATA["top_secret"]


def test_update_copy_leaves_old_untouched(secret_item, updated_item):
    updated = apply_update(secret_item, updated_item, "developer", copy=True)

    assert updated is not secret_item
    assert secret_item.model_dump() == SECRET_ITEM_DATA
    assert updated.name == "Updated"
    assert updated.secret_info == SECRET_ITEM_DATA["secret_info"]


def test_update_copy_of_stored_record(secret_record, updated_item):
    updated = apply_update(secret_record, updated_item, "staff", copy=True)

    assert updated is not secret_record
    assert isinstance(updated, type(secret_record))
    assert updated.id == secret_record.id
    assert updated.comment == "Updated"
    assert updated.name == SECRET_ITEM_DATA["name"]
    assert secret_record.comment == SECRET_ITEM_DATA["comment"]


def test_update_copy_of_dataclass():
    from dataclasses import dataclass, field

    from fieldmapper import acl

    @dataclass(frozen=True)
    class Setting:
        key: str = field(default="", metadata=acl("admin:r"))
        value: str = field(default="", metadata=acl("admin:rw"))

    old = Setting("theme", "dark")

    # Frozen targets can still be copied when no field is written
    updated = apply_update(old, Setting("theme", "light"), "staff", copy=True)

    assert updated == old
    assert updated is not old
