import dataclasses
import typing

if typing.TYPE_CHECKING:
    from .document import HalDocument  # noqa: F401


@dataclasses.dataclass
class NetworkConfig:
    """
    Where the resources live. URLs are built by joining the non-empty
    parts ``base_url``, ``endpoint`` and the model endpoint with slashes.
    """

    base_url: str = ""
    endpoint: str = ""


DEFAULT_NETWORK_CONFIG = NetworkConfig()


@dataclasses.dataclass
class RequestOptions:
    headers: typing.Dict[str, str] = dataclasses.field(default_factory=dict)
    params: typing.Dict[str, typing.Any] = dataclasses.field(default_factory=dict)

    def merge(self, other: typing.Optional["RequestOptions"]) -> "RequestOptions":
        """
        Returns new options combining both; values of ``other`` win.
        """
        if other is None:
            return RequestOptions(headers=dict(self.headers), params=dict(self.params))
        return RequestOptions(
            headers={**self.headers, **other.headers},
            params={**self.params, **other.params},
        )


@dataclasses.dataclass
class ModelOptions:
    endpoint: typing.Optional[str] = None
    document_class: typing.Optional[typing.Type["HalDocument"]] = None
    network_config: typing.Optional[NetworkConfig] = None


def handle_meta(meta: typing.Optional[type]) -> ModelOptions:
    """
    Builds :py:class:`ModelOptions` from the inner ``Meta`` class of a model.

    .. code-block:: python

       class Car(HalModel):
           class Meta:
               endpoint = "cars"
    """
    if meta is None:
        return ModelOptions()
    attrs = {k: v for k, v in vars(meta).items() if not k.startswith("__")}
    return ModelOptions(
        endpoint=attrs.get("endpoint"),
        document_class=attrs.get("document_class"),
        network_config=attrs.get("network_config"),
    )
