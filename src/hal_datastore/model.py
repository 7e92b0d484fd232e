import logging
import typing

from .config import ModelOptions, NetworkConfig, handle_meta
from .constants import (
    EMBEDDED_PROPERTY_NAME,
    HREF_PROPERTY_NAME,
    LINKS_PROPERTY_NAME,
    LOCAL_DOCUMENT_IDENTIFIER_PREFIX,
    LOCAL_MODEL_IDENTIFIER_PREFIX,
    SELF_PROPERTY_NAME,
)
from .document import HalDocument
from .exceptions import DatastoreNotBoundError, SelfLinkAlreadySetError
from .payload import generate_payload
from .properties import (
    Attribute,
    PropertyDescriptor,
    PropertyKind,
    get_properties,
    get_properties_of_kind,
    register_properties,
)
from .storage import HalStorage
from .types import JSONValue, Payload, RawLinks, RawResource
from .utils import generate_local_identifier, is_mapping

if typing.TYPE_CHECKING:
    from .datastore import Datastore  # noqa: F401

logger = logging.getLogger(__name__)


class HalModel:
    """
    The base class of typed models over HAL resources.

    Subclasses declare their attributes and relationships with
    :py:class:`~hal_datastore.properties.Attribute`,
    :py:class:`~hal_datastore.properties.HasOne` and
    :py:class:`~hal_datastore.properties.HasMany`, and optionally an inner
    ``Meta`` class (see :py:func:`~hal_datastore.config.handle_meta`).

    Relationship getters only look at the datastore's storage; they never
    fetch anything.

    :param Optional[RawResource] resource: the raw resource the model wraps.
    :param Optional[Datastore] datastore: the datastore whose storage backs the relationships.
    """

    _options: typing.ClassVar[ModelOptions] = ModelOptions()

    resource: RawResource
    datastore: typing.Optional["Datastore"]
    _local_identifier: str
    _attribute_values: typing.Dict[str, typing.Any]

    def __init_subclass__(cls, **kwargs) -> None:
        super().__init_subclass__(**kwargs)
        properties: typing.Dict[str, PropertyDescriptor] = {}
        for base in cls.__bases__:
            for descr in get_properties(base):
                properties.setdefault(typing.cast(str, descr.name), descr)
        for value in vars(cls).values():
            if isinstance(value, PropertyDescriptor):
                properties[typing.cast(str, value.name)] = value
        register_properties(cls, properties.values())
        cls._options = handle_meta(vars(cls).get("Meta"))

    @classmethod
    def get_properties(cls) -> typing.Tuple[PropertyDescriptor, ...]:
        return get_properties(cls)

    @classmethod
    def get_property(cls, name: str) -> typing.Optional[PropertyDescriptor]:
        for descr in get_properties(cls):
            if descr.name == name:
                return descr
        return None

    @classmethod
    def get_endpoint(cls) -> str:
        return cls._options.endpoint or cls.__name__

    @classmethod
    def get_network_config(cls) -> typing.Optional[NetworkConfig]:
        return cls._options.network_config

    @classmethod
    def get_document_class(cls) -> typing.Optional[typing.Type[HalDocument]]:
        return cls._options.document_class

    @property
    def endpoint(self) -> str:
        return self.get_endpoint()

    @property
    def links(self) -> RawLinks:
        links = self.resource.get(LINKS_PROPERTY_NAME)
        if not is_mapping(links):
            return {}
        return links

    @property
    def self_link(self) -> typing.Optional[str]:
        return self._get_link_href(SELF_PROPERTY_NAME)

    @self_link.setter
    def self_link(self, link: str) -> None:
        current = self.self_link
        if current is not None:
            if current == link:
                return
            raise SelfLinkAlreadySetError(current, link)
        self._ensure_links()[SELF_PROPERTY_NAME] = {HREF_PROPERTY_NAME: link}

    @property
    def identifier(self) -> str:
        """
        The self link when known, otherwise the local placeholder identifier
        assigned at construction.
        """
        return self.self_link or self._local_identifier

    @property
    def id(self) -> typing.Optional[str]:
        self_link = self.self_link
        if not self_link:
            return None
        return self_link.rstrip("/").split("/")[-1]

    @property
    def is_saved(self) -> bool:
        return bool(self.id)

    def get_relationship_url(self, relationship_name: str) -> str:
        return self._get_link_href(relationship_name) or ""

    def get_embedded_resource(self, resource_name: str) -> typing.Optional[JSONValue]:
        if self.resource.get(resource_name) is not None:
            return self.resource[resource_name]

        embedded = self.resource.get(EMBEDDED_PROPERTY_NAME)
        if not is_mapping(embedded):
            return None
        return embedded.get(resource_name)

    def get_attribute(self, name: str) -> typing.Any:
        return self._attribute_values.get(name)

    def set_attribute(self, name: str, value: typing.Any) -> None:
        self._attribute_values[name] = value

    def get_has_one(self, name: str) -> typing.Optional["HalModel"]:
        href = self._get_link_href(name)
        if not href:
            return None
        return self._storage.get(href)

    def set_has_one(self, name: str, model: typing.Optional["HalModel"]) -> None:
        if model is None:
            self._remove_link(name)
            return
        self._ensure_links()[name] = {HREF_PROPERTY_NAME: model.self_link or model.identifier}

    def get_has_many(self, name: str) -> typing.Optional[typing.List["HalModel"]]:
        href = self._get_link_href(name)
        if not href:
            return None

        document = self._storage.get(href)
        if not isinstance(document, HalDocument):
            logger.warning("Has many relationship %s is not fetched.", name)
            return None
        return document.models

    def set_has_many(
        self, name: str, models: typing.Optional[typing.Iterable["HalModel"]]
    ) -> None:
        if models is None:
            self._remove_link(name)
            return

        descr = self.get_property(name)
        document = HalDocument(
            models=list(models),
            identifier=generate_local_identifier(LOCAL_DOCUMENT_IDENTIFIER_PREFIX),
            model_class=descr.target_type if descr is not None else None,
        )
        self._storage.save(document)
        self._ensure_links()[name] = {HREF_PROPERTY_NAME: document.identifier}

    def generate_payload(self) -> Payload:
        return generate_payload(self)

    async def save(self) -> "HalModel":
        if self.datastore is None:
            raise DatastoreNotBoundError(self)
        return await self.datastore.save(self)

    @property
    def _storage(self) -> HalStorage:
        if self.datastore is None:
            raise DatastoreNotBoundError(self)
        return self.datastore.storage

    def _get_link_href(self, name: str) -> typing.Optional[str]:
        link = self.links.get(name)
        if not is_mapping(link):
            return None
        return typing.cast(typing.Mapping[str, str], link).get(HREF_PROPERTY_NAME)

    def _ensure_links(self) -> RawLinks:
        links = self.resource.get(LINKS_PROPERTY_NAME)
        if not is_mapping(links):
            links = self.resource[LINKS_PROPERTY_NAME] = {}
        return links

    def _remove_link(self, name: str) -> None:
        links = self.resource.get(LINKS_PROPERTY_NAME)
        if is_mapping(links):
            links.pop(name, None)

    def _parse_attributes(self) -> None:
        for descr in get_properties_of_kind(type(self), PropertyKind.ATTRIBUTE):
            name = typing.cast(str, descr.name)
            raw_value = self.resource.get(name)
            target_type = descr.target_type
            transform_in = typing.cast(Attribute, descr).transform_in
            if target_type is not None:
                value = target_type(raw_value)
            elif transform_in is not None:
                value = transform_in(raw_value)
            else:
                value = raw_value
            self._attribute_values[name] = value

    def __repr__(self) -> str:
        return f"<{type(self).__name__}(identifier={self.identifier!r})>"

    def __init__(
        self,
        resource: typing.Optional[RawResource] = None,
        datastore: typing.Optional["Datastore"] = None,
    ):
        self.resource = resource if is_mapping(resource) else {}
        self.datastore = datastore
        self._local_identifier = generate_local_identifier(LOCAL_MODEL_IDENTIFIER_PREFIX)
        self._attribute_values = {}
        logger.debug("Parsing attributes of %s", type(self).__name__)
        self._parse_attributes()
