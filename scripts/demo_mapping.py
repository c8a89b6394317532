"""
Demonstration of role-filtered mapping on the example secret item.

Shows, for every role, what it sees (to_external_view), what it can set on a
new record (to_internal) and what an update changes (apply_update).

Usage:
    python -m scripts.demo_mapping
"""
from fieldmapper import apply_update, describe, to_external_view, to_internal, validate_entity
from fieldmapper.features.secret_items.models import SecretItemRecord
from fieldmapper.features.secret_items.schemas import SecretItem
from fieldmapper.utils import get_logger


log = get_logger(__name__)


ROLES = ["staff", "developer", "admin", "unauthorized"]


def load_record() -> SecretItemRecord:
    return SecretItemRecord(
        name="Crab Burger Recipe",
        comment="The recipe of the famous crusty crab burger",
        secret_info="Bun, Pickle, Patty, Lettuce",
        top_secret="Do not forget the tomato",
        can_only_be_written_to="Hecho en Crustaceo Cascarudo",
    )


def proposed_update() -> SecretItem:
    return SecretItem(
        name="Updated",
        comment="Updated",
        secret_info="Updated",
        top_secret="Updated",
        can_only_be_written_to="Updated",
    )


def main():
    """Print what each role sees, can set, and can update."""
    # Fail before mapping anything if an ACL is malformed
    validate_entity(SecretItemRecord)
    validate_entity(SecretItem)

    log.info("to_external_view()")
    for role in ROLES:
        view = to_external_view(load_record(), role, view_type=SecretItem)
        log.info(f"  {role} sees: {view.model_dump()}")

    log.info("to_internal()")
    for role in ROLES:
        record = to_internal(proposed_update(), role, entity_type=SecretItemRecord)
        fields = {name: getattr(record, name) for name in describe(SecretItemRecord).field_names}
        log.info(f"  {role} can set: {fields}")

    log.info("apply_update()")
    for role in ROLES:
        item = SecretItem.model_validate(load_record())
        updated = apply_update(item, proposed_update(), role)
        log.info(f"  {role} leaves: {updated.model_dump()}")


if __name__ == "__main__":
    main()
