from dataclasses import dataclass
from typing import List

from aiohttp import ClientSession

from aionetwork.errors import InvalidStatusCode, NetworkingError
from aionetwork.http.aiohttp import AIOHTTP
from aionetwork.manager import HTTPMethod, NetworkManager


@dataclass(frozen=True)
class Todo:
    id: int
    title: str
    completed: bool


async def example():
    async with ClientSession() as session:
        manager = NetworkManager(
            AIOHTTP(session), default_headers={"Accept": "application/json"}
        )

        # Decode a list of objects
        todos = await manager.make_request(
            "https://jsonplaceholder.typicode.com/todos", response_type=List[Todo]
        )
        print(todos[:3])
        # Send a JSON body
        created = await manager.make_request(
            "https://jsonplaceholder.typicode.com/todos",
            method=HTTPMethod.POST,
            body={"title": "write docs", "completed": "false"},
        )
        print(created)
        # Raw bytes, no decoding
        favicon = await manager.make_request(
            "https://jsonplaceholder.typicode.com/favicon.ico", response_type=bytes
        )
        print(len(favicon or b""))
        # Errors are categorized
        try:
            await manager.make_request("https://jsonplaceholder.typicode.com/nope")
        except InvalidStatusCode as exc:
            print("status", exc.code)
        except NetworkingError as exc:
            print(exc.description)
