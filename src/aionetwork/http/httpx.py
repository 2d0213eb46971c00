import asyncio
from dataclasses import dataclass
from typing import Dict, Optional, cast

import httpx

from .types import Request, RequestFailed, Response


@dataclass(frozen=True)
class HTTPX:
    client: httpx.AsyncClient

    async def __call__(self, request: Request) -> Response:
        try:
            response = await self.client.request(
                method=request.method,
                url=request.url,
                # httpx is coded with no_implicit_optional=False, we use strict=True
                headers=cast(Dict[str, str], request.headers),
                content=cast(Optional[bytes], request.body),
            )
            return Response(response.status_code, await response.aread())
        except httpx.TimeoutException as exc:
            raise asyncio.TimeoutError() from exc
        except httpx.HTTPError as exc:
            raise RequestFailed(exc) from exc
