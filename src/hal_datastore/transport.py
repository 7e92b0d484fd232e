import logging
import typing

import httpx

from .config import RequestOptions
from .exceptions import TransportError
from .interfaces import Response
from .types import JSONValue, Payload

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {"Accept": "application/hal+json"}


class HttpxTransport:
    """
    Transport over an :py:class:`httpx.AsyncClient`. Add authentication to the client.

    :param Optional[httpx.AsyncClient] client: the client to use; a new one is created when omitted.
    """

    client: httpx.AsyncClient

    async def get(self, url: str, options: RequestOptions) -> Response:
        return await self._request("GET", url, options)

    async def post(self, url: str, payload: Payload, options: RequestOptions) -> Response:
        return await self._request("POST", url, options, payload)

    async def put(self, url: str, payload: Payload, options: RequestOptions) -> Response:
        return await self._request("PUT", url, options, payload)

    async def aclose(self) -> None:
        await self.client.aclose()

    async def _request(
        self,
        method: str,
        url: str,
        options: RequestOptions,
        payload: typing.Optional[Payload] = None,
    ) -> Response:
        logger.info("%s %s params:%r", method, url, options.params)
        try:
            response = await self.client.request(
                method,
                url,
                params=options.params or None,
                headers={**DEFAULT_HEADERS, **options.headers},
                json=payload,
            )
            response.raise_for_status()
            body = self._decode(response)
        except (httpx.HTTPError, ValueError) as e:
            raise TransportError(method, url) from e

        return Response(body=body, headers=dict(response.headers))

    def _decode(self, response: httpx.Response) -> JSONValue:
        if not response.content:
            return None
        return response.json()

    def __init__(self, client: typing.Optional[httpx.AsyncClient] = None):
        self.client = client if client is not None else httpx.AsyncClient()
