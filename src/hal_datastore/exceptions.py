import abc
import typing


class HalDatastoreException(Exception, metaclass=abc.ABCMeta):
    @property
    @abc.abstractmethod
    def message(self) -> str:
        ...  # pragma: nocover

    def __str__(self):
        return self.message


class InvalidDeclarationError(HalDatastoreException):
    _message: str

    @property
    def message(self) -> str:
        return self._message

    def __init__(self, message: str):
        super().__init__(message)
        self._message = message


class UnknownRelationshipError(HalDatastoreException):
    model_class: type
    name: str

    @property
    def message(self) -> str:
        return f'no relationship known as "{self.name}" in {self.model_class.__name__}'

    def __init__(self, model_class: type, name: str):
        super().__init__(model_class, name)
        self.model_class = model_class
        self.name = name


class SelfLinkAlreadySetError(HalDatastoreException):
    current: str
    new: str

    @property
    def message(self) -> str:
        return f"self link is already set to {self.current!r}; refusing to replace it with {self.new!r}"

    def __init__(self, current: str, new: str):
        super().__init__(current, new)
        self.current = current
        self.new = new


class DatastoreNotBoundError(HalDatastoreException):
    model: typing.Any

    @property
    def message(self) -> str:
        return f"{self.model!r} is not bound to a datastore"

    def __init__(self, model: typing.Any):
        super().__init__(model)
        self.model = model


class TransportError(HalDatastoreException):
    method: str
    url: str

    @property
    def message(self) -> str:
        if self.__cause__ is not None:
            return f"{self.method} {self.url} failed ({self.__cause__!s})"
        return f"{self.method} {self.url} failed"

    def __init__(self, method: str, url: str):
        super().__init__(method, url)
        self.method = method
        self.url = url
