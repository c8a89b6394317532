import logging

import pytest

from fieldmapper import MappingEngine, SchemaRegistry
from fieldmapper.features.secret_items.models import SecretItemRecord
from fieldmapper.features.secret_items.schemas import SecretItem


ROLES = ["staff", "developer", "admin", "unauthorized"]

SECRET_ITEM_DATA = {
    "name": "Crab Burger Recipe",
    "comment": "The recipe of the famous crusty crab burger",
    "secret_info": "Bun, Pickle, Patty, Lettuce",
    "top_secret": "Do not forget the tomato",
    "can_only_be_written_to": "Hecho en Crustaceo Cascarudo",
}

UPDATED_DATA = {name: "Updated" for name in SECRET_ITEM_DATA}


@pytest.fixture()
def secret_item():
    return SecretItem(**SECRET_ITEM_DATA)


@pytest.fixture()
def updated_item():
    return SecretItem(**UPDATED_DATA)


@pytest.fixture()
def secret_record():
    return SecretItemRecord(id="01HZX3J9V8K2M4N6P8R0S2T4V6", **SECRET_ITEM_DATA)


@pytest.fixture()
def registry():
    return SchemaRegistry(strict=True)


@pytest.fixture()
def engine(registry):
    return MappingEngine(registry=registry, workers=1)


@pytest.fixture(autouse=True)
def propagate_logs(monkeypatch):
    # Package loggers stop propagation; caplog listens on the root logger
    for name in ("fieldmapper", "scripts"):
        monkeypatch.setattr(logging.getLogger(name), "propagate", True)
