import asyncio
from dataclasses import dataclass
from typing import Any, Dict, Optional

import aiohttp

from .types import Request, RequestFailed, Response


@dataclass(frozen=True)
class AIOHTTP:
    session: aiohttp.ClientSession
    # overrides the session's own timeout for requests made through this adapter
    timeout: Optional[aiohttp.ClientTimeout] = None

    async def __call__(self, request: Request) -> Response:
        options: Dict[str, Any] = {}
        if self.timeout is not None:
            options["timeout"] = self.timeout
        try:
            async with self.session.request(
                request.method,
                request.url,
                headers=request.headers,
                data=request.body,
                **options,
            ) as response:
                return Response(response.status, await response.read())
        except asyncio.TimeoutError as exc:
            # aiohttp timeout errors are ClientErrors too
            raise asyncio.TimeoutError() from exc
        except aiohttp.ClientError as exc:
            raise RequestFailed(exc) from exc
