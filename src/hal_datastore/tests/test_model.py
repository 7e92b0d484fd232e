import datetime
import logging

import pytest

from ..datastore import Datastore
from ..exceptions import DatastoreNotBoundError, SelfLinkAlreadySetError
from .testing import BASE_URL, Car, Engine, FakeTransport, Person, Wheel, link, resource


@pytest.fixture
def datastore():
    return Datastore(transport=FakeTransport())


class TestAttributes:
    def test_raw_values(self):
        car = Car({"name": "Beetle"})
        assert car.name == "Beetle"

    def test_missing_fields(self):
        car = Car({})
        assert car.name is None
        assert car.registered_at is None

    def test_transform_in(self):
        car = Car({"registered_at": "2020-02-29"})
        assert car.registered_at == datetime.date(2020, 2, 29)

    def test_target_type_wins_over_transform(self):
        car = Car({"engine": {"power": 90, "fuel": "diesel"}})
        assert isinstance(car.engine, Engine)
        assert car.engine.power == 90
        assert car.engine.fuel == "diesel"

    def test_target_type_constructed_for_missing_field(self):
        car = Car({})
        assert isinstance(car.engine, Engine)
        assert car.engine.power is None

    def test_setter(self):
        car = Car({"name": "Beetle"})
        car.name = "Golf"
        assert car.name == "Golf"
        assert car.resource["name"] == "Beetle"

    def test_malformed_resource(self):
        car = Car(["not", "a", "mapping"])
        assert car.resource == {}
        assert car.links == {}


class TestIdentity:
    def test_self_link(self):
        car = Car(resource(f"{BASE_URL}/cars/1"))
        assert car.self_link == f"{BASE_URL}/cars/1"
        assert car.identifier == f"{BASE_URL}/cars/1"
        assert car.id == "1"
        assert car.is_saved

    def test_placeholder(self):
        a = Car()
        b = Car()
        assert a.self_link is None
        assert a.id is None
        assert not a.is_saved
        assert a.identifier.startswith("local-model-")
        assert a.identifier != b.identifier
        assert a.identifier == a.identifier

    def test_assign_self_link(self):
        car = Car()
        car.self_link = f"{BASE_URL}/cars/7"
        assert car.identifier == f"{BASE_URL}/cars/7"
        assert car.resource["_links"]["self"] == {"href": f"{BASE_URL}/cars/7"}

        car.self_link = f"{BASE_URL}/cars/7"
        with pytest.raises(SelfLinkAlreadySetError):
            car.self_link = f"{BASE_URL}/cars/8"

    def test_malformed_links(self):
        car = Car({"_links": "broken"})
        assert car.self_link is None
        assert car.get_relationship_url("owner") == ""
        car.self_link = f"{BASE_URL}/cars/3"
        assert car.self_link == f"{BASE_URL}/cars/3"

    def test_endpoint(self):
        assert Car().endpoint == "cars"

        class Truck(Car):
            pass

        assert Truck.get_endpoint() == "Truck"


class TestHasOne:
    def test_not_linked(self, datastore):
        car = Car(resource(f"{BASE_URL}/cars/1"), datastore)
        assert car.owner is None

    def test_not_fetched_then_saved(self, datastore):
        car = Car(
            resource(f"{BASE_URL}/cars/1", _links={"owner": link(f"{BASE_URL}/people/1")}),
            datastore,
        )
        assert car.owner is None

        owner = Person(resource(f"{BASE_URL}/people/1"), datastore)
        datastore.storage.save(owner)
        assert car.owner is owner

    def test_setter_links_saved_model(self, datastore):
        car = Car({}, datastore)
        owner = Person(resource(f"{BASE_URL}/people/2"), datastore)

        car.owner = owner

        assert car.get_relationship_url("owner") == f"{BASE_URL}/people/2"
        assert datastore.storage.get(f"{BASE_URL}/people/2") is None
        assert car.owner is None

    def test_setter_links_unsaved_model(self, datastore):
        car = Car({}, datastore)
        owner = Person({}, datastore)

        car.owner = owner
        assert car.get_relationship_url("owner") == owner.identifier

        datastore.storage.save(owner)
        assert car.owner is owner

    def test_setter_none(self, datastore):
        car = Car(resource(_links={"owner": link(f"{BASE_URL}/people/1")}), datastore)
        car.owner = None
        assert car.get_relationship_url("owner") == ""

    def test_unbound(self):
        car = Car(resource(_links={"owner": link(f"{BASE_URL}/people/1")}))
        with pytest.raises(DatastoreNotBoundError):
            car.owner


class TestHasMany:
    def test_not_linked(self, datastore):
        assert Car({}, datastore).wheels is None

    def test_not_fetched(self, datastore, caplog):
        car = Car(resource(_links={"wheels": link(f"{BASE_URL}/cars/1/wheels")}), datastore)
        with caplog.at_level(logging.WARNING):
            assert car.wheels is None
        assert "Has many relationship wheels is not fetched." in caplog.text

    def test_assignment_round_trip(self, datastore):
        car = Car({}, datastore)
        w1 = Wheel(resource(f"{BASE_URL}/wheels/1"), datastore)
        w2 = Wheel({}, datastore)

        car.wheels = [w1, w2]

        assert car.wheels == [w1, w2]
        assert car.wheels[0] is w1
        assert car.wheels[1] is w2
        href = car.get_relationship_url("wheels")
        assert href.startswith("local-document-")
        document = datastore.storage.get(href)
        assert document.identifier == href
        assert document.model_class is Wheel

    def test_reassignment_creates_new_document(self, datastore):
        car = Car({}, datastore)
        car.wheels = [Wheel({}, datastore)]
        first = car.get_relationship_url("wheels")
        car.wheels = []
        assert car.get_relationship_url("wheels") != first
        assert car.wheels == []

    def test_setter_none(self, datastore):
        car = Car({}, datastore)
        car.wheels = [Wheel({}, datastore)]
        car.wheels = None
        assert car.wheels is None


class TestEmbedded:
    def test_embedded_section(self):
        car = Car({"_embedded": {"owner": {"name": "Ann"}}})
        assert car.get_embedded_resource("owner") == {"name": "Ann"}
        assert car.get_embedded_resource("wheels") is None

    def test_top_level_field(self):
        car = Car({"owner": {"name": "Bob"}, "_embedded": {"owner": {"name": "Ann"}}})
        assert car.get_embedded_resource("owner") == {"name": "Bob"}

    def test_malformed(self):
        car = Car({"_embedded": [1, 2]})
        assert car.get_embedded_resource("owner") is None
