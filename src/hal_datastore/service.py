import typing

from .config import RequestOptions
from .datastore import Datastore
from .document import HalDocument
from .model import HalModel

M = typing.TypeVar("M", bound=HalModel)


class ModelService(typing.Generic[M]):
    """
    Binds a :py:class:`Datastore` to a single model class.

    .. code-block:: python

       cars = ModelService(datastore, Car)
       car = await cars.find_one("1", includes=["owner"])
    """

    datastore: Datastore
    model_class: typing.Type[M]

    async def find_one(
        self,
        model_id: str,
        includes: typing.Iterable[str] = (),
        request_options: typing.Optional[RequestOptions] = None,
    ) -> M:
        return await self.datastore.find_one(self.model_class, model_id, includes, request_options)

    async def find(
        self,
        params: typing.Optional[typing.Mapping[str, typing.Any]] = None,
        include_meta: bool = False,
        includes: typing.Iterable[str] = (),
        request_options: typing.Optional[RequestOptions] = None,
    ) -> typing.Union[HalDocument, typing.List[HalModel]]:
        return await self.datastore.find(
            self.model_class, params, include_meta, includes, request_options
        )

    def create_new_model(
        self, record_data: typing.Optional[typing.Mapping[str, typing.Any]] = None
    ) -> M:
        return self.datastore.create_model(self.model_class, record_data)

    def __init__(self, datastore: Datastore, model_class: typing.Type[M]):
        self.datastore = datastore
        self.model_class = model_class
