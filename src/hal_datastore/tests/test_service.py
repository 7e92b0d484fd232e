import pytest

from ..config import NetworkConfig
from ..datastore import Datastore
from .testing import BASE_URL, Car, FakeTransport, collection, resource


@pytest.fixture
def transport():
    return FakeTransport(
        {
            f"{BASE_URL}/cars/1": resource(f"{BASE_URL}/cars/1", name="Beetle"),
            f"{BASE_URL}/cars": collection(
                "cars", resource(f"{BASE_URL}/cars/1", name="Beetle"), total=1
            ),
        }
    )


@pytest.fixture
def target(transport):
    from ..service import ModelService

    datastore = Datastore(transport=transport, network_config=NetworkConfig(base_url=BASE_URL))
    return ModelService(datastore, Car)


@pytest.mark.asyncio
async def test_find_one(target):
    car = await target.find_one("1")
    assert car.name == "Beetle"
    assert target.datastore.storage.get(car.identifier) is car


@pytest.mark.asyncio
async def test_find(target):
    cars = await target.find()
    assert [car.name for car in cars] == ["Beetle"]

    document = await target.find(include_meta=True)
    assert document.meta == {"total": 1}


def test_create_new_model(target):
    car = target.create_new_model({"name": "Golf"})
    assert isinstance(car, Car)
    assert car.name == "Golf"
    assert car.datastore is target.datastore
    assert not car.is_saved
