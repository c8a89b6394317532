from pydantic import BaseModel, Field

from fieldmapper import Direction, MappingEngine, SchemaRegistry, acl, get_engine


class Vault(BaseModel):
    name: str = Field(..., json_schema_extra=acl("staff:r;developer:rw;admin:rw"))
    secret: str = Field(..., json_schema_extra=acl("admin:rw"))


def test_scenario_staff(engine):
    vault = Vault(name="Main", secret="1234")

    view = engine.to_external_view(vault, "staff")

    assert view.name == "Main"
    assert view.secret == ""


def test_scenario_admin(engine):
    vault = Vault(name="Main", secret="1234")

    assert engine.to_external_view(vault, "admin") == vault


def test_scenario_unauthorized(engine):
    view = engine.to_external_view(Vault(name="Main", secret="1234"), "unauthorized")

    assert view.model_dump() == {"name": "", "secret": ""}


def test_map_onto_explicit_target(engine):
    target = Vault(name="old", secret="old")

    result = engine.map(Vault(name="new", secret="new"), target, role="developer", direction=Direction.READ)

    assert result is target
    assert target.name == "new"
    assert target.secret == "old"


def test_engines_use_their_own_registry():
    registry = SchemaRegistry()
    registry.register(Vault, [("name", "guest:r"), ("secret", None)], factory=lambda: Vault(name="", secret=""))
    engine = MappingEngine(registry=registry)

    view = engine.to_external_view(Vault(name="Main", secret="1234"), "guest")

    assert view.name == "Main"
    assert view.secret == ""
    # The shared engine still reads the declarations on the model
    assert get_engine().to_external_view(Vault(name="Main", secret="1234"), "guest").name == ""


def test_get_engine_is_shared():
    assert get_engine() is get_engine()
