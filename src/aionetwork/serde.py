from typing import Any, Callable

from .errors import DecodeError

try:
    dumps: Callable[[Any], bytes]
    from orjson import dumps as dumps, loads as _loads
except ImportError:
    from json import dumps as json_dumps, loads as _loads

    def dumps(payload: Any) -> bytes:
        return json_dumps(payload, separators=(",", ":")).encode("utf8")


def loads(payload: bytes) -> Any:
    """
    Parse a JSON document. Raise DecodeError if the payload is not valid
    UTF-8 encoded JSON.
    """
    try:
        return _loads(payload)
    except ValueError as exc:
        # JSONDecodeError and UnicodeDecodeError, from orjson and json alike
        raise DecodeError(f"invalid JSON: {exc}") from exc
