"""
The transport a :py:class:`~hal_datastore.datastore.Datastore` talks through.

The datastore does not retry, rate-limit or cache at this level; caching is
done by its storage.
"""

import dataclasses
import typing

from .config import RequestOptions
from .types import JSONValue, Payload


@dataclasses.dataclass
class Response:
    body: JSONValue = None
    headers: typing.Mapping[str, str] = dataclasses.field(default_factory=dict)


class Transport(typing.Protocol):
    async def get(self, url: str, options: RequestOptions) -> Response:
        """
        Fetches ``url``.

        :param str url: the URL to fetch.
        :param RequestOptions options: headers and query parameters.
        :return: the decoded response.
        """
        ...  # pragma: nocover

    async def post(self, url: str, payload: Payload, options: RequestOptions) -> Response:
        ...  # pragma: nocover

    async def put(self, url: str, payload: Payload, options: RequestOptions) -> Response:
        ...  # pragma: nocover
