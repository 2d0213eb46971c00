from dataclasses import dataclass, field
from typing import List, Union

from .types import Request, Response

MockReply = Union[Response, Exception]


@dataclass
class MockHTTP:
    """
    Replays canned replies in order, wrapping around at the end.
    Exceptions in the reply list are raised instead of returned.
    Every request received is kept in ``requests``.
    """

    responses: List[MockReply]
    counter: int = 0
    requests: List[Request] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.responses:
            raise ValueError("MockHTTP needs at least one response")

    async def __call__(self, request: Request) -> Response:
        self.requests.append(request)
        try:
            reply = self.responses[self.counter]
        finally:
            self.counter = (self.counter + 1) % len(self.responses)
        if isinstance(reply, Exception):
            raise reply
        return reply
