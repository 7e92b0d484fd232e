"""
Eager resolution of relationship paths.

An include path names a chain of relationships starting from a model, with
the segments separated by dots, e.g. ``"owner.company"``. Resolving it
fetches ``owner`` and then the ``company`` of the fetched owner, storing
every result in the datastore's storage so the relationship getters find
them afterwards.
"""

import asyncio
import logging
import typing

from .document import HalDocument
from .exceptions import UnknownRelationshipError
from .model import HalModel
from .properties import PropertyKind

if typing.TYPE_CHECKING:
    from .datastore import Datastore  # noqa: F401

logger = logging.getLogger(__name__)

INCLUDE_PATH_SEPARATOR = "."


def filter_redundant_includes(includes: typing.Iterable[str]) -> typing.List[str]:
    """
    Drops the paths that are prefixes of other requested paths, as resolving
    the longer path resolves the shorter one on the way.

    >>> filter_redundant_includes(["a", "a.b", "a.b.c"])
    ['a.b.c']
    >>> filter_redundant_includes(["a.b", "a.c"])
    ['a.b', 'a.c']

    :param Iterable[str] includes: the requested paths.
    :return: the leaf paths, shortest first.
    """
    pool = sorted(includes, key=len)
    leaves: typing.List[str] = []
    while pool:
        path = pool.pop(0)
        if path in leaves:
            continue
        if any(other != path and other.startswith(path) for other in pool):
            continue
        leaves.append(path)
    return leaves


def split_include(path: str) -> typing.Tuple[str, str]:
    head, _, rest = path.partition(INCLUDE_PATH_SEPARATOR)
    return head, rest


class IncludeResolver:
    """
    Fetches everything needed to satisfy a set of include paths.

    Leaf paths at the same depth are fetched concurrently. The next segment
    of a path is fetched once the previous one has resolved. A path whose
    relationship crosses a has-many relationship continues from every member
    of the fetched collection.

    :param Datastore datastore: the datastore used to fetch and store resources.
    """

    datastore: "Datastore"

    async def resolve(self, model: HalModel, includes: typing.Iterable[str]) -> HalModel:
        """
        Resolves ``includes`` starting from ``model``. The first failing fetch
        makes the whole call fail; other fetches already in flight are not
        cancelled.

        :param HalModel model: the root model.
        :param Iterable[str] includes: dotted relationship paths.
        :return: the root model.
        """
        leaves = filter_redundant_includes(includes)
        if not leaves:
            return model

        logger.info("Resolving includes %r of %r", leaves, model)
        await asyncio.gather(*(self._resolve_path(model, path) for path in leaves))
        return model

    async def _resolve_path(self, model: HalModel, path: str) -> None:
        head, rest = split_include(path)

        descr = model.get_property(head)
        if descr is None:
            raise UnknownRelationshipError(type(model), head)

        url = model.get_relationship_url(head)
        if not url:
            logger.debug("Relationship %s of %r is not linked; skipping %s", head, model, path)
            return

        target_type = descr.target_type
        if not (isinstance(target_type, type) and issubclass(target_type, HalModel)):
            target_type = HalModel

        if descr.kind is PropertyKind.HAS_MANY:
            document = await self.datastore.fetch_document(url, target_type)
            if rest:
                await self._resolve_document(document, rest)
        else:
            related = await self.datastore.fetch_model(url, target_type)
            if rest:
                await self._resolve_path(related, rest)

    async def _resolve_document(self, document: HalDocument, path: str) -> None:
        await asyncio.gather(*(self._resolve_path(model, path) for model in document.models))

    def __init__(self, datastore: "Datastore"):
        self.datastore = datastore
