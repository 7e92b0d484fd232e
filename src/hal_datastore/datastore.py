import asyncio
import logging
import typing

from .config import DEFAULT_NETWORK_CONFIG, NetworkConfig, RequestOptions
from .constants import HREF_PROPERTY_NAME, LINKS_PROPERTY_NAME, SELF_PROPERTY_NAME
from .document import HalDocument
from .includes import IncludeResolver
from .interfaces import Response, Transport
from .model import HalModel
from .properties import PropertyKind
from .storage import HalStorage
from .transport import HttpxTransport
from .types import JSONObject, JSONValue, RawResource
from .utils import is_mapping

logger = logging.getLogger(__name__)

M = typing.TypeVar("M", bound=HalModel)


class Datastore:
    """
    Entry point for fetching and writing models.

    Every model and document fetched through a datastore ends up in its
    :py:attr:`storage`, which relationship getters read from.

    :param Optional[Transport] transport: the transport; defaults to :py:class:`~hal_datastore.transport.HttpxTransport`.
    :param Optional[NetworkConfig] network_config: the base URL and endpoint.
    :param Type[HalDocument] document_class: the document class used for collections.
    """

    transport: Transport
    network_config: NetworkConfig
    document_class: typing.Type[HalDocument]
    _storage: HalStorage
    _resolver: IncludeResolver
    _owns_transport: bool

    @property
    def storage(self) -> HalStorage:
        return self._storage

    def build_url(self, model_class: typing.Optional[typing.Type[HalModel]] = None) -> str:
        network_config = self.network_config
        if model_class is not None and model_class.get_network_config() is not None:
            network_config = typing.cast(NetworkConfig, model_class.get_network_config())
        url_parts = [
            network_config.base_url,
            network_config.endpoint,
            model_class.get_endpoint() if model_class is not None else None,
        ]
        return "/".join(part for part in url_parts if part)

    def build_model_url(
        self, model_class: typing.Type[HalModel], model_id: typing.Optional[str] = None
    ) -> str:
        model_url = self.build_url(model_class)
        return f"{model_url}/{model_id}" if model_id else model_url

    def create_model(
        self, model_class: typing.Type[M], resource: typing.Optional[JSONObject] = None
    ) -> M:
        return model_class(dict(resource) if resource is not None else {}, self)

    def create_document(
        self, body: JSONValue, model_class: typing.Type[HalModel], identifier: str
    ) -> HalDocument:
        document_class = model_class.get_document_class() or self.document_class
        return document_class.from_response(body, model_class, self, identifier)

    async def fetch_model(
        self,
        url: str,
        model_class: typing.Type[M],
        request_options: typing.Optional[RequestOptions] = None,
    ) -> M:
        """
        Fetches a single resource, stores the model built from it and
        the relationships embedded in it.
        """
        logger.info("Fetching %s at url:%s", model_class.__name__, url)
        response = await self.transport.get(url, RequestOptions().merge(request_options))
        resource = response.body if is_mapping(response.body) else {}
        model = model_class(typing.cast(RawResource, resource), self)
        self._storage.save(model)
        self._store_embedded(model)
        return model

    async def fetch_document(
        self,
        url: str,
        model_class: typing.Type[HalModel],
        request_options: typing.Optional[RequestOptions] = None,
    ) -> HalDocument:
        logger.info("Fetching %s collection at url:%s", model_class.__name__, url)
        response = await self.transport.get(url, RequestOptions().merge(request_options))
        document = self.create_document(response.body, model_class, url)
        self._storage.save_all(document.models)
        for model in document.models:
            self._store_embedded(model)
        self._storage.save(document)
        return document

    async def find_one(
        self,
        model_class: typing.Type[M],
        model_id: str,
        includes: typing.Iterable[str] = (),
        request_options: typing.Optional[RequestOptions] = None,
    ) -> M:
        """
        Fetches the model ``model_id`` and the relationships named by ``includes``.
        Returns once every include has been resolved.

        :param Type[HalModel] model_class: the model class.
        :param str model_id: the id, appended to the model URL.
        :param Iterable[str] includes: dotted relationship paths to fetch eagerly.
        :param Optional[RequestOptions] request_options: headers and query parameters.
        """
        url = self.build_model_url(model_class, model_id)
        model = await self.fetch_model(url, model_class, request_options)
        await self._resolver.resolve(model, includes)
        return model

    async def find(
        self,
        model_class: typing.Type[HalModel],
        params: typing.Optional[typing.Mapping[str, typing.Any]] = None,
        include_meta: bool = False,
        includes: typing.Iterable[str] = (),
        request_options: typing.Optional[RequestOptions] = None,
    ) -> typing.Union[HalDocument, typing.List[HalModel]]:
        """
        Fetches the collection of ``model_class``.

        :param Type[HalModel] model_class: the model class.
        :param Optional[Mapping[str, Any]] params: query parameters.
        :param bool include_meta: return the :py:class:`HalDocument` instead of the list of models.
        :param Iterable[str] includes: dotted relationship paths to fetch for every model.
        :param Optional[RequestOptions] request_options: headers and query parameters.
        """
        url = self.build_model_url(model_class)
        options = RequestOptions().merge(request_options).merge(
            RequestOptions(params=dict(params or {}))
        )
        document = await self.fetch_document(url, model_class, options)

        includes = list(includes)
        if includes:
            await asyncio.gather(
                *(self._resolver.resolve(model, includes) for model in document.models)
            )

        if include_meta:
            return document
        return document.models

    async def save(
        self, model: M, request_options: typing.Optional[RequestOptions] = None
    ) -> M:
        """
        Writes ``model``: ``PUT`` to its self link when it is saved already,
        ``POST`` to the collection URL otherwise. A self link returned by the
        server is assigned to the model, which is then stored under both
        its placeholder identifier and the new self link.
        """
        payload = model.generate_payload()
        options = RequestOptions().merge(request_options)

        if model.is_saved:
            url = typing.cast(str, model.self_link)
            logger.info("Updating %r at url:%s", model, url)
            response = await self.transport.put(url, payload, options)
        else:
            url = self.build_model_url(type(model))
            logger.info("Creating %r at url:%s", model, url)
            response = await self.transport.post(url, payload, options)

        self_link = self._extract_self_link(response)
        if self_link and model.self_link is None:
            # links made while the model was unsaved point at its placeholder
            self._storage.save(model)
            model.self_link = self_link
        self._storage.save(model)
        return model

    def _extract_self_link(self, response: Response) -> typing.Optional[str]:
        if is_mapping(response.body):
            links = typing.cast(JSONObject, response.body).get(LINKS_PROPERTY_NAME)
            if is_mapping(links):
                self_link = links.get(SELF_PROPERTY_NAME)
                if is_mapping(self_link) and self_link.get(HREF_PROPERTY_NAME):
                    return self_link[HREF_PROPERTY_NAME]
        for name, value in response.headers.items():
            if name.lower() == "location":
                return value
        return None

    def _store_embedded(self, model: HalModel) -> None:
        for descr in model.get_properties():
            if descr.kind is PropertyKind.ATTRIBUTE:
                continue

            name = typing.cast(str, descr.name)
            embedded = model.get_embedded_resource(name)
            href = model.get_relationship_url(name)
            target_type = descr.target_type
            if embedded is None or not href:
                continue
            if not (isinstance(target_type, type) and issubclass(target_type, HalModel)):
                target_type = HalModel

            if descr.kind is PropertyKind.HAS_ONE and is_mapping(embedded):
                related = target_type(typing.cast(RawResource, embedded), self)
                if related.self_link is None:
                    related.self_link = href
                self._storage.save(related)
                logger.debug("Stored embedded %s of %r as %s", name, model, related.identifier)
            elif descr.kind is PropertyKind.HAS_MANY and isinstance(embedded, list):
                document = self.create_document(embedded, target_type, href)
                self._storage.save_all(document.models)
                self._storage.save(document)
                logger.debug("Stored embedded %s of %r as %s", name, model, href)

    async def aclose(self) -> None:
        """
        Closes the transport if this datastore created it. A transport passed
        in by the caller is left open.
        """
        if self._owns_transport:
            await typing.cast(HttpxTransport, self.transport).aclose()

    async def __aenter__(self) -> "Datastore":
        return self

    async def __aexit__(self, exc_type, exc_value, traceback) -> None:
        await self.aclose()

    def __init__(
        self,
        transport: typing.Optional[Transport] = None,
        network_config: typing.Optional[NetworkConfig] = None,
        document_class: typing.Type[HalDocument] = HalDocument,
    ):
        self._owns_transport = transport is None
        self.transport = transport if transport is not None else HttpxTransport()
        self.network_config = (
            network_config if network_config is not None else DEFAULT_NETWORK_CONFIG
        )
        self.document_class = document_class
        self._storage = HalStorage()
        self._resolver = IncludeResolver(self)
