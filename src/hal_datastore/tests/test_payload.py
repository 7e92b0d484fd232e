import datetime

import pytest

from ..datastore import Datastore
from ..model import HalModel
from ..properties import Attribute, HasOne
from .testing import BASE_URL, Car, FakeTransport, Person, Wheel, resource


@pytest.fixture
def target():
    from ..payload import generate_payload

    return generate_payload


@pytest.fixture
def datastore():
    return Datastore(transport=FakeTransport())


def test_attributes_only(target, datastore):
    class Note(HalModel):
        text = Attribute()
        author = HasOne(Person)

    note = Note({"text": "hello"}, datastore)
    note.author = Person(resource(f"{BASE_URL}/people/1"), datastore)

    assert target(note) == {"text": "hello"}


def test_transform_round_trip(target, datastore):
    car = Car({"registered_at": "2021-06-01", "name": "Beetle"}, datastore)
    assert car.registered_at == datetime.date(2021, 6, 1)

    payload = target(car)

    assert payload["registered_at"] == "2021-06-01"
    assert payload["name"] == "Beetle"


def test_has_one(target, datastore):
    owner = datastore.storage.save(Person(resource(f"{BASE_URL}/people/1"), datastore))
    car = Car({"name": "Beetle"}, datastore)
    car.owner = owner

    payload = target(car)

    assert payload["_links"]["owner"]["href"] == owner.self_link


def test_has_one_not_set(target, datastore):
    car = Car({"name": "Beetle"}, datastore)
    payload = target(car)
    assert "owner" not in payload["_links"]
    assert payload["_links"]["wheels"] == []


def test_has_many_skips_none(target, datastore):
    w1 = Wheel(resource(f"{BASE_URL}/wheels/1"), datastore)
    w2 = Wheel(resource(f"{BASE_URL}/wheels/2"), datastore)
    car = Car({}, datastore)
    car.wheels = [w1, None, w2]

    payload = target(car)

    assert payload["_links"]["wheels"] == [
        {"href": f"{BASE_URL}/wheels/1"},
        {"href": f"{BASE_URL}/wheels/2"},
    ]
    assert "previous_owners" not in payload["_links"]


def test_top_level_merge(target, datastore):
    owner = datastore.storage.save(Person(resource(f"{BASE_URL}/people/1"), datastore))
    car = Car({"name": "Beetle"}, datastore)
    car.owner = owner

    payload = car.generate_payload()

    assert set(payload) == {"name", "registered_at", "engine", "_links"}
    assert payload["registered_at"] is None
