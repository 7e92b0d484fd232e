import typing

T = typing.TypeVar("T")


class Deferred(typing.Generic[T]):
    """
    A forward reference to a model class that is not defined yet.

    Relationships name their target class when the owning class body runs,
    which may be before the target exists:

    .. code-block:: python

       class Person(HalModel):
           cars = HasMany(Deferred(lambda: Car))

    The factory runs on the first call and its result is kept for later calls.

    :param Callable[..., T] factory: returns the referenced value.
    """

    _factory: typing.Callable[..., T]
    _args: typing.Sequence[typing.Any]
    _kwargs: typing.Mapping[str, typing.Any]
    _resolved: bool = False
    _value: typing.Optional[T] = None

    def __call__(self) -> T:
        if not self._resolved:
            self._value = self._factory(*self._args, **self._kwargs)
            self._resolved = True
        return typing.cast(T, self._value)

    def __repr__(self) -> str:
        if self._resolved:
            return f"{type(self).__name__}({self._value!r})"
        return f"{type(self).__name__}(<unresolved>)"

    def __init__(self, factory: typing.Callable[..., T], *args, **kwargs) -> None:
        self._factory = factory
        self._args = args
        self._kwargs = kwargs


def resolve(value: typing.Union[T, Deferred[T], None]) -> typing.Optional[T]:
    """
    Returns ``value``, calling it first when it is a :py:class:`Deferred`.
    """
    if isinstance(value, Deferred):
        return value()
    return value
