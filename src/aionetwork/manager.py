from __future__ import annotations

import abc
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from enum import Enum
from typing import *

import aiohttp

from .decoding import decode
from .errors import (
    Custom,
    DecodeError,
    FailedToDecode,
    InvalidStatusCode,
    InvalidURL,
    NetworkingError,
)
from .http.aiohttp import AIOHTTP
from .http.types import HttpImplementation, Request, RequestFailed, Response
from .serde import dumps, loads
from .types import Body, Headers, MethodName, URLLike
from .utils import logger, merge_headers, parse_url

JSON_HEADERS: Headers = {"Content-Type": "application/json"}


class HTTPMethod(Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"

    @classmethod
    def coerce(cls, method: Union[HTTPMethod, str]) -> HTTPMethod:
        if isinstance(method, cls):
            return method
        try:
            return cls(str(method).upper())
        except ValueError:
            raise ValueError(f"unsupported HTTP method {method!r}") from None


class RequestExecutor(metaclass=abc.ABCMeta):
    @abc.abstractmethod
    async def make_request(
        self,
        url: Optional[URLLike],
        *,
        method: Union[HTTPMethod, str] = HTTPMethod.GET,
        body: Optional[Body] = None,
        headers: Optional[Mapping[str, str]] = None,
        response_type: Any = Any,
        http: Optional[HttpImplementation] = None,
    ) -> Any:
        """
        Send a request and return the decoded response body, or None if the
        response body was empty.

        Raise a NetworkingError subclass if the request could not be made or
        the response could not be used.
        """


@asynccontextmanager
async def default_http() -> AsyncIterator[HttpImplementation]:
    """
    Transport used when none is injected: a short-lived aiohttp session.
    """
    async with aiohttp.ClientSession() as session:
        yield AIOHTTP(session)


@dataclass(frozen=True)
class NetworkManager(RequestExecutor):
    http: Optional[HttpImplementation] = None
    default_headers: Mapping[str, str] = field(default_factory=dict)

    async def make_request(
        self,
        url: Optional[URLLike],
        *,
        method: Union[HTTPMethod, str] = HTTPMethod.GET,
        body: Optional[Body] = None,
        headers: Optional[Mapping[str, str]] = None,
        response_type: Any = Any,
        http: Optional[HttpImplementation] = None,
    ) -> Any:
        """
        Send a request and decode the JSON response into ``response_type``.

        ``http`` overrides the transport for this call. Without one, the
        manager's own ``http`` is used, and without that a temporary aiohttp
        session is opened for the call.

        An empty response body returns None. Passing ``bytes`` as
        ``response_type`` returns the body without decoding it.

        ``body`` is sent as a JSON object. If it cannot be serialized, the
        request is sent without a body.
        """
        parsed = parse_url(url)
        if parsed is None:
            raise InvalidURL()
        request = self.build_request(
            str(parsed), HTTPMethod.coerce(method), body, headers
        )
        transport = http if http is not None else self.http
        if transport is not None:
            return await self.send(transport, request, response_type)
        async with default_http() as transport:
            return await self.send(transport, request, response_type)

    def build_request(
        self,
        url: str,
        method: HTTPMethod,
        body: Optional[Body],
        headers: Optional[Mapping[str, str]],
    ) -> Request:
        payload = encode_body(body)
        return Request(
            method=cast(MethodName, method.value),
            url=url,
            headers=merge_headers(
                self.default_headers,
                JSON_HEADERS if payload is not None else None,
                headers,
            ),
            body=payload,
        )

    async def send(
        self, http: HttpImplementation, request: Request, response_type: Any
    ) -> Any:
        try:
            logger.debug("sending request %r", request)
            response = await http(request)
            check_status(response)
            if not response.body:
                logger.debug("empty response body")
                return None
            if response_type is bytes:
                return response.body
            return decode_body(response.body, response_type)
        except NetworkingError:
            raise
        except RequestFailed as exc:
            logger.debug("request failed")
            raise Custom(exc.inner) from exc.inner
        except Exception as exc:
            logger.debug("request failed with unexpected error")
            raise Custom(exc) from exc


def encode_body(body: Optional[Body]) -> Optional[bytes]:
    if body is None:
        return None
    try:
        return dumps(dict(body))
    except (TypeError, ValueError):
        # an unserializable body is dropped, the request still goes out
        logger.debug("could not serialize request body, sending without body")
        return None


def check_status(response: Response) -> None:
    if response.status is not None and not 200 <= response.status <= 299:
        logger.debug("unexpected status code %d", response.status)
        raise InvalidStatusCode(response.status)


def decode_body(body: bytes, response_type: Any) -> Any:
    try:
        return decode(loads(body), response_type)
    except DecodeError as exc:
        logger.debug("could not decode response body: %s", exc)
        raise FailedToDecode() from exc


_default_manager = NetworkManager()


async def make_request(
    url: Optional[URLLike],
    *,
    method: Union[HTTPMethod, str] = HTTPMethod.GET,
    body: Optional[Body] = None,
    headers: Optional[Mapping[str, str]] = None,
    response_type: Any = Any,
    http: Optional[HttpImplementation] = None,
) -> Any:
    return await _default_manager.make_request(
        url,
        method=method,
        body=body,
        headers=headers,
        response_type=response_type,
        http=http,
    )
