import threading
import typing


class Identifiable(typing.Protocol):
    @property
    def identifier(self) -> str:
        ...  # pragma: nocover


E = typing.TypeVar("E", bound=Identifiable)


class HalStorage:
    """
    The identity map of a :py:class:`~hal_datastore.datastore.Datastore`.

    Models and documents are kept under the identifier they have at the time
    they are saved. A later save under the same identifier replaces the entry.
    Entries live as long as the storage does.
    """

    _entities: typing.Dict[str, Identifiable]
    _lock: threading.Lock

    def save(self, entity: E) -> E:
        """
        Stores ``entity`` under its identifier, replacing any previous entry.

        :param entity: a model or a document.
        :return: the stored entity.
        """
        with self._lock:
            self._entities[entity.identifier] = entity
        return entity

    def save_all(self, entities: typing.Iterable[E]) -> None:
        for entity in entities:
            self.save(entity)

    def get(self, identifier: typing.Optional[str]) -> typing.Optional[typing.Any]:
        if identifier is None:
            return None
        with self._lock:
            return self._entities.get(identifier)

    def __contains__(self, identifier: object) -> bool:
        with self._lock:
            return identifier in self._entities

    def __len__(self) -> int:
        with self._lock:
            return len(self._entities)

    def __init__(self) -> None:
        self._entities = {}
        self._lock = threading.Lock()
