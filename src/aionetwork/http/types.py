from dataclasses import dataclass
from typing import Awaitable, Callable, Dict, Optional

from aionetwork.types import MethodName


@dataclass(frozen=True)
class Request:
    method: MethodName
    url: str
    headers: Optional[Dict[str, str]]
    body: Optional[bytes]


@dataclass(frozen=True)
class Response:
    # None when the transport has no notion of an HTTP status
    status: Optional[int]
    body: bytes


@dataclass
class RequestFailed(Exception):
    inner: Exception


HttpImplementation = Callable[[Request], Awaitable[Response]]
