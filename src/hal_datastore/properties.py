"""
Property descriptors declare the attributes and relationships of a
:py:class:`~hal_datastore.model.HalModel` subclass.

They are declared as class attributes:

.. code-block:: python

   class Car(HalModel):
       name = Attribute()
       registered_at = Attribute(transform_in=parse_date, transform_out=format_date)
       owner = HasOne(Deferred(lambda: Person), include_in_payload=True)
       wheels = HasMany(Wheel)

When the class is created, its descriptors are recorded in a global registry
keyed by the model class. The registry is append-only; a class is registered
exactly once, before any instance of it exists.
"""

import enum
import logging
import threading
import typing

from .deferred import Deferred, resolve
from .exceptions import InvalidDeclarationError
from .utils import assert_not_none

logger = logging.getLogger(__name__)


class PropertyKind(enum.Enum):
    ATTRIBUTE = "attribute"
    HAS_ONE = "has_one"
    HAS_MANY = "has_many"


TargetType = typing.Union[type, Deferred[type], None]


class PropertyDescriptor:
    kind: typing.ClassVar[PropertyKind]
    name: typing.Optional[str] = None
    attribute_name: typing.Optional[str] = None
    _target_type: TargetType = None
    include_in_payload: bool = False

    @property
    def target_type(self) -> typing.Optional[type]:
        return resolve(self._target_type)

    def __set_name__(self, owner: type, name: str) -> None:
        self.attribute_name = name
        if self.name is None:
            self.name = name

    def __get__(self, instance, owner=None):
        raise NotImplementedError()  # pragma: nocover

    def __set__(self, instance, value) -> None:
        raise NotImplementedError()  # pragma: nocover

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


class Attribute(PropertyDescriptor):
    """
    A plain field of the resource.

    :param target_type: a value class constructed from the raw value.
    :param transform_in: a callable converting the raw value when parsing.
    :param transform_out: a callable converting the value back when building payloads.
    :param name: the field name, when it differs from the attribute name.
    """

    kind = PropertyKind.ATTRIBUTE
    transform_in: typing.Optional[typing.Callable[[typing.Any], typing.Any]]
    transform_out: typing.Optional[typing.Callable[[typing.Any], typing.Any]]

    def __get__(self, instance, owner=None):
        if instance is None:
            return self
        return instance.get_attribute(assert_not_none(self.name))

    def __set__(self, instance, value) -> None:
        instance.set_attribute(assert_not_none(self.name), value)

    def __init__(
        self,
        target_type: TargetType = None,
        transform_in: typing.Optional[typing.Callable[[typing.Any], typing.Any]] = None,
        transform_out: typing.Optional[typing.Callable[[typing.Any], typing.Any]] = None,
        name: typing.Optional[str] = None,
    ):
        self._target_type = target_type
        self.transform_in = transform_in
        self.transform_out = transform_out
        self.name = name


class RelationshipDescriptor(PropertyDescriptor):
    def __init__(
        self,
        target_type: TargetType = None,
        include_in_payload: bool = False,
        name: typing.Optional[str] = None,
    ):
        self._target_type = target_type
        self.include_in_payload = include_in_payload
        self.name = name


class HasOne(RelationshipDescriptor):
    """
    A one-to-one relationship, linked through ``_links.<name>.href``.
    """

    kind = PropertyKind.HAS_ONE

    def __get__(self, instance, owner=None):
        if instance is None:
            return self
        return instance.get_has_one(assert_not_none(self.name))

    def __set__(self, instance, value) -> None:
        instance.set_has_one(assert_not_none(self.name), value)


class HasMany(RelationshipDescriptor):
    """
    A one-to-many relationship, linked through ``_links.<name>.href``
    pointing at a collection.
    """

    kind = PropertyKind.HAS_MANY

    def __get__(self, instance, owner=None):
        if instance is None:
            return self
        return instance.get_has_many(assert_not_none(self.name))

    def __set__(self, instance, value) -> None:
        instance.set_has_many(assert_not_none(self.name), value)


_registry: typing.Dict[type, typing.Tuple[PropertyDescriptor, ...]] = {}
_registry_lock = threading.Lock()


def register_properties(
    model_class: type, properties: typing.Iterable[PropertyDescriptor]
) -> typing.Tuple[PropertyDescriptor, ...]:
    """
    Records the property descriptors of ``model_class``. Each class can be registered once.

    :param type model_class: the model class.
    :param Iterable[PropertyDescriptor] properties: the descriptors in declaration order.
    :return: the registered descriptors.
    """
    descriptors = tuple(properties)
    names = set()
    for descr in descriptors:
        if descr.name is None:
            raise InvalidDeclarationError(f"unnamed property {descr!r} in {model_class.__name__}")
        if descr.name in names:
            raise InvalidDeclarationError(
                f'property "{descr.name}" declared twice in {model_class.__name__}'
            )
        attribute_name = descr.attribute_name or descr.name
        if _is_reserved(model_class, attribute_name):
            raise InvalidDeclarationError(
                f'property "{attribute_name}" of {model_class.__name__} shadows an inherited member'
            )
        names.add(descr.name)

    with _registry_lock:
        if model_class in _registry:
            raise InvalidDeclarationError(f"{model_class.__name__} is already registered")
        _registry[model_class] = descriptors

    logger.debug(
        "Registered %d properties for %s", len(descriptors), model_class.__name__
    )
    return descriptors


def _is_reserved(model_class: type, name: str) -> bool:
    for base in model_class.__mro__[1:]:
        value = vars(base).get(name)
        if value is not None and not isinstance(value, PropertyDescriptor):
            return True
        if name in vars(base).get("__annotations__", {}):
            return True
    return False


def get_properties(model_class: type) -> typing.Tuple[PropertyDescriptor, ...]:
    return _registry.get(model_class, ())


def get_properties_of_kind(
    model_class: type, kind: PropertyKind
) -> typing.Tuple[PropertyDescriptor, ...]:
    return tuple(descr for descr in get_properties(model_class) if descr.kind is kind)
