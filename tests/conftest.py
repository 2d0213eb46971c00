import asyncio
import json
from typing import AsyncGenerator

import pytest
from _pytest.fixtures import SubRequest
from aiohttp import web
from yarl import URL

from aionetwork.http.types import HttpImplementation


@pytest.fixture(params=["httpx", "aiohttp"])
async def http(request: SubRequest) -> AsyncGenerator[HttpImplementation, None]:
    if request.param == "httpx":
        try:
            import httpx

            from aionetwork.http.httpx import HTTPX
        except ImportError:
            raise pytest.skip("httpx not installed")
        async with httpx.AsyncClient() as client:
            yield HTTPX(client)
    elif request.param == "aiohttp":
        import aiohttp

        from aionetwork.http.aiohttp import AIOHTTP

        async with aiohttp.ClientSession() as session:
            yield AIOHTTP(session)


async def item_handler(request: web.Request) -> web.Response:
    return web.json_response({"name": "x", "tags": ["a", "b"]})


async def empty_handler(request: web.Request) -> web.Response:
    return web.Response(status=204)


async def missing_handler(request: web.Request) -> web.Response:
    return web.json_response({"error": "not found"}, status=404)


async def echo_handler(request: web.Request) -> web.Response:
    raw = await request.read()
    return web.json_response(
        {
            "method": request.method,
            "headers": dict(request.headers),
            "body": json.loads(raw) if raw else None,
        }
    )


async def slow_handler(request: web.Request) -> web.Response:
    await asyncio.sleep(0.5)
    return web.json_response({})


async def bytes_handler(request: web.Request) -> web.Response:
    return web.Response(body=b"\x89PNG\r\n\x1a\n\x00\xff")


@pytest.fixture
async def server_url() -> AsyncGenerator[URL, None]:
    app = web.Application()
    app.add_routes(
        [
            web.get("/item", item_handler),
            web.get("/empty", empty_handler),
            web.get("/missing", missing_handler),
            web.get("/bytes", bytes_handler),
            web.get("/slow", slow_handler),
            web.route("*", "/echo", echo_handler),
        ]
    )
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "127.0.0.1", 0)
    await site.start()
    port = site._server.sockets[0].getsockname()[1]  # type: ignore[union-attr]
    yield URL("http://127.0.0.1").with_port(port)
    await runner.cleanup()
