import logging
import typing

from .constants import EMBEDDED_PROPERTY_NAME
from .types import JSONObject, JSONValue
from .utils import is_mapping

if typing.TYPE_CHECKING:
    from .datastore import Datastore  # noqa: F401
    from .model import HalModel  # noqa: F401

logger = logging.getLogger(__name__)


class HalDocument:
    """
    An ordered collection of models plus the metadata of the response it
    was parsed from (counts, page links, ...), passed through as is.

    A document is identified by the URL it was fetched from, or by a local
    identifier when it was synthesized by assigning a has-many relationship.
    """

    items_key: typing.ClassVar[typing.Optional[str]] = None
    """
    The ``_embedded`` entry holding the items. When ``None`` the first
    list-valued entry is used.
    """

    models: typing.List["HalModel"]
    meta: typing.Dict[str, JSONValue]
    model_class: typing.Optional[typing.Type["HalModel"]]
    _identifier: str

    @property
    def identifier(self) -> str:
        return self._identifier

    @classmethod
    def extract_items(cls, body: JSONValue) -> typing.Sequence[typing.Any]:
        if isinstance(body, list):
            return body
        if not is_mapping(body):
            return ()

        embedded = typing.cast(JSONObject, body).get(EMBEDDED_PROPERTY_NAME)
        if not is_mapping(embedded):
            return ()

        if cls.items_key is not None:
            items = embedded.get(cls.items_key)
            return items if isinstance(items, list) else ()

        for value in embedded.values():
            if isinstance(value, list):
                return value
        return ()

    @classmethod
    def from_response(
        cls,
        body: JSONValue,
        model_class: typing.Type["HalModel"],
        datastore: typing.Optional["Datastore"],
        identifier: str,
    ) -> "HalDocument":
        """
        Parses a collection response body.

        :param JSONValue body: the decoded body.
        :param Type[HalModel] model_class: the class every item is parsed into.
        :param Optional[Datastore] datastore: the datastore the models are bound to.
        :param str identifier: the identifier of the document, usually the request URL.
        """
        items = cls.extract_items(body)
        logger.debug("Parsing %d %s items of %s", len(items), model_class.__name__, identifier)
        models = [model_class(item, datastore) for item in items if is_mapping(item)]

        meta: typing.Dict[str, JSONValue] = {}
        if is_mapping(body):
            meta = {
                k: v
                for k, v in typing.cast(JSONObject, body).items()
                if k != EMBEDDED_PROPERTY_NAME
            }
        return cls(models=models, identifier=identifier, model_class=model_class, meta=meta)

    def __iter__(self) -> typing.Iterator["HalModel"]:
        return iter(self.models)

    def __len__(self) -> int:
        return len(self.models)

    def __getitem__(self, index: int) -> "HalModel":
        return self.models[index]

    def __repr__(self) -> str:
        return f"<{type(self).__name__}(identifier={self._identifier!r}, models={len(self.models)})>"

    def __init__(
        self,
        models: typing.Iterable["HalModel"],
        identifier: str,
        model_class: typing.Optional[typing.Type["HalModel"]] = None,
        meta: typing.Optional[typing.Dict[str, JSONValue]] = None,
    ):
        self.models = list(models)
        self._identifier = identifier
        self.model_class = model_class
        self.meta = meta if meta is not None else {}
