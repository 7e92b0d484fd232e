import typing

from .constants import HREF_PROPERTY_NAME, LINKS_PROPERTY_NAME
from .properties import Attribute, PropertyKind, get_properties
from .types import Payload

if typing.TYPE_CHECKING:
    from .model import HalModel  # noqa: F401


def generate_payload(model: "HalModel") -> Payload:
    """
    Builds the body written to the server for ``model``.

    Attributes are emitted at the top level, run through ``transform_out``
    when the attribute has one. Relationships flagged ``include_in_payload``
    are emitted as links under ``_links``, which is left out when empty.

    :param HalModel model: the model to serialize.
    :return: the payload.
    """
    payload: Payload = {}
    links: Payload = {}

    for descr in get_properties(type(model)):
        name = typing.cast(str, descr.name)
        if descr.kind is PropertyKind.ATTRIBUTE:
            value = model.get_attribute(name)
            transform_out = typing.cast(Attribute, descr).transform_out
            payload[name] = transform_out(value) if transform_out is not None else value
        elif not descr.include_in_payload:
            continue
        elif descr.kind is PropertyKind.HAS_ONE:
            related = model.get_has_one(name)
            if related is None:
                continue
            links[name] = {HREF_PROPERTY_NAME: related.self_link}
        elif descr.kind is PropertyKind.HAS_MANY:
            links[name] = [
                {HREF_PROPERTY_NAME: related.self_link}
                for related in (model.get_has_many(name) or ())
                if related is not None
            ]

    if links:
        payload[LINKS_PROPERTY_NAME] = links

    return payload
