"""
Turn parsed JSON into instances of a caller-chosen type.

Supported targets:

- ``Any`` and ``object``, which return the JSON value unchanged
- ``str``, ``int``, ``float``, ``bool`` and ``None``
- ``dict`` and ``list``
- ``List[X]``, ``Sequence[X]``, ``Tuple[X, ...]``, ``Dict[str, X]``,
  ``Mapping[str, X]``
- ``Optional[X]``, ``Union[...]`` and ``Literal[...]``
- ``Enum`` subclasses, looked up by value
- dataclasses, attrs classes and ``TypedDict`` types, built from JSON objects
- generic dataclasses and attrs classes, such as ``Page[Item]``

Unknown keys in JSON objects are ignored. A missing key is only an error if
the target field has no default and its type does not allow None. Optional
fields without a default are set to None.
"""
from __future__ import annotations

import collections.abc
import dataclasses
import enum
import types
from typing import *

import attr

from .errors import DecodeError

_UnionType = getattr(types, "UnionType", None)

_SEQUENCE_ORIGINS = frozenset(
    {
        list,
        collections.abc.Sequence,
        collections.abc.MutableSequence,
        collections.abc.Collection,
        collections.abc.Iterable,
    }
)
_MAPPING_ORIGINS = frozenset(
    {dict, collections.abc.Mapping, collections.abc.MutableMapping}
)


def decode(data: Any, response_type: Any, path: str = "$") -> Any:
    if response_type is Any or response_type is object:
        return data
    if response_type is None or response_type is type(None):
        if data is not None:
            raise DecodeError(f"expected null, got {_json_kind(data)}", path)
        return None

    origin = get_origin(response_type)
    if isinstance(origin, type) and (
        dataclasses.is_dataclass(origin) or attr.has(origin)
    ):
        return _decode_parametrized(data, response_type, origin, path)
    if origin is not None:
        return _decode_generic(data, response_type, origin, path)

    if not isinstance(response_type, type):
        raise DecodeError(f"unsupported response type {response_type!r}", path)
    if issubclass(response_type, enum.Enum):
        return _decode_enum(data, response_type, path)
    if response_type is bool:
        if not isinstance(data, bool):
            raise DecodeError(f"expected boolean, got {_json_kind(data)}", path)
        return data
    if response_type is int:
        if isinstance(data, bool) or not isinstance(data, int):
            raise DecodeError(f"expected integer, got {_json_kind(data)}", path)
        return data
    if response_type is float:
        if isinstance(data, bool) or not isinstance(data, (int, float)):
            raise DecodeError(f"expected number, got {_json_kind(data)}", path)
        return float(data)
    if response_type is str:
        if not isinstance(data, str):
            raise DecodeError(f"expected string, got {_json_kind(data)}", path)
        return data
    if dataclasses.is_dataclass(response_type):
        return _decode_dataclass(data, response_type, path)
    if attr.has(response_type):
        return _decode_attrs(data, response_type, path)
    if _is_typed_dict(response_type):
        return _decode_typed_dict(data, response_type, path)
    if response_type is dict:
        return _expect_object(data, path)
    if response_type is list:
        return _expect_array(data, path)
    raise DecodeError(f"unsupported response type {response_type!r}", path)


def _decode_parametrized(
    data: Any, response_type: Any, origin: Type[Any], path: str
) -> Any:
    parameters = getattr(origin, "__parameters__", ())
    typevars = dict(zip(parameters, get_args(response_type)))
    if dataclasses.is_dataclass(origin):
        return _decode_dataclass(data, origin, path, typevars)
    return _decode_attrs(data, origin, path, typevars)


def _decode_generic(data: Any, response_type: Any, origin: Any, path: str) -> Any:
    args = get_args(response_type)
    if origin is Union or (_UnionType is not None and origin is _UnionType):
        for member in args:
            try:
                return decode(data, member, path)
            except DecodeError:
                continue
        raise DecodeError(
            f"{_json_kind(data)} matches none of {response_type!r}", path
        )
    if origin is Literal:
        for option in args:
            if type(option) is type(data) and option == data:
                return data
        raise DecodeError(f"{data!r} is not one of {args!r}", path)
    if origin in _SEQUENCE_ORIGINS:
        item_type = args[0] if args else Any
        return [
            decode(item, item_type, f"{path}[{index}]")
            for index, item in enumerate(_expect_array(data, path))
        ]
    if origin is tuple:
        return _decode_tuple(data, args, path)
    if origin in _MAPPING_ORIGINS:
        key_type, value_type = args if args else (Any, Any)
        return {
            decode(key, key_type, path): decode(value, value_type, f"{path}.{key}")
            for key, value in _expect_object(data, path).items()
        }
    raise DecodeError(f"unsupported response type {response_type!r}", path)


def _decode_tuple(data: Any, args: Tuple[Any, ...], path: str) -> Tuple[Any, ...]:
    items = _expect_array(data, path)
    if not args:
        return tuple(items)
    if len(args) == 2 and args[1] is Ellipsis:
        return tuple(
            decode(item, args[0], f"{path}[{index}]")
            for index, item in enumerate(items)
        )
    if len(items) != len(args):
        raise DecodeError(
            f"expected array of length {len(args)}, got {len(items)}", path
        )
    return tuple(
        decode(item, item_type, f"{path}[{index}]")
        for index, (item, item_type) in enumerate(zip(items, args))
    )


def _decode_enum(data: Any, response_type: Type[enum.Enum], path: str) -> enum.Enum:
    try:
        return response_type(data)
    except ValueError:
        raise DecodeError(
            f"{data!r} is not a valid {response_type.__name__}", path
        ) from None


def _decode_dataclass(
    data: Any,
    response_type: Type[Any],
    path: str,
    typevars: Optional[Mapping[Any, Any]] = None,
) -> Any:
    obj = _expect_object(data, path)
    hints = get_type_hints(response_type)
    kwargs: Dict[str, Any] = {}
    for field in dataclasses.fields(response_type):
        if not field.init:
            continue
        field_type = _bind(hints.get(field.name, Any), typevars)
        if field.name not in obj:
            has_default = (
                field.default is not dataclasses.MISSING
                or field.default_factory is not dataclasses.MISSING
            )
            if not has_default:
                kwargs[field.name] = _absent(field.name, field_type, path)
            continue
        kwargs[field.name] = decode(
            obj[field.name], field_type, f"{path}.{field.name}"
        )
    return _construct(response_type, kwargs, path)


def _decode_attrs(
    data: Any,
    response_type: Type[Any],
    path: str,
    typevars: Optional[Mapping[Any, Any]] = None,
) -> Any:
    obj = _expect_object(data, path)
    hints = get_type_hints(response_type)
    kwargs: Dict[str, Any] = {}
    for attribute in attr.fields(response_type):
        if not attribute.init:
            continue
        name = getattr(attribute, "alias", None) or attribute.name.lstrip("_")
        field_type = _bind(hints.get(attribute.name, attribute.type), typevars)
        if name not in obj:
            if attribute.default is attr.NOTHING:
                kwargs[name] = _absent(name, field_type, path)
            continue
        kwargs[name] = decode(obj[name], field_type, f"{path}.{name}")
    return _construct(response_type, kwargs, path)


def _absent(name: str, field_type: Any, path: str) -> None:
    # a missing key is only acceptable for a field that admits null
    if not _is_optional(field_type):
        raise DecodeError(f"missing key {name!r}", path)
    return None


def _is_optional(field_type: Any) -> bool:
    origin = get_origin(field_type)
    if origin is Union or (_UnionType is not None and origin is _UnionType):
        return type(None) in get_args(field_type)
    return False


def _bind(field_type: Any, typevars: Optional[Mapping[Any, Any]]) -> Any:
    """
    Substitute type variables of a generic model with the arguments it
    was parametrized with. Unbound type variables become Any.
    """
    if field_type is None:
        return Any
    typevars = typevars or {}
    if isinstance(field_type, TypeVar):
        return typevars.get(field_type, Any)
    parameters = getattr(field_type, "__parameters__", ())
    if parameters and get_origin(field_type) is not None:
        return field_type[tuple(typevars.get(p, Any) for p in parameters)]
    return field_type


def _decode_typed_dict(data: Any, response_type: Type[Any], path: str) -> Any:
    obj = _expect_object(data, path)
    hints = get_type_hints(response_type)
    for key in response_type.__required_keys__:
        if key not in obj:
            raise DecodeError(f"missing key {key!r}", path)
    return {
        key: decode(obj[key], value_type, f"{path}.{key}")
        for key, value_type in hints.items()
        if key in obj
    }


def _construct(response_type: Type[Any], kwargs: Dict[str, Any], path: str) -> Any:
    try:
        return response_type(**kwargs)
    except (TypeError, ValueError) as exc:
        raise DecodeError(
            f"could not build {response_type.__name__}: {exc}", path
        ) from exc


def _is_typed_dict(response_type: type) -> bool:
    return issubclass(response_type, dict) and hasattr(
        response_type, "__required_keys__"
    )


def _expect_object(data: Any, path: str) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise DecodeError(f"expected object, got {_json_kind(data)}", path)
    return data


def _expect_array(data: Any, path: str) -> List[Any]:
    if not isinstance(data, list):
        raise DecodeError(f"expected array, got {_json_kind(data)}", path)
    return data


def _json_kind(data: Any) -> str:
    if data is None:
        return "null"
    if isinstance(data, bool):
        return "boolean"
    if isinstance(data, (int, float)):
        return "number"
    if isinstance(data, str):
        return "string"
    if isinstance(data, list):
        return "array"
    if isinstance(data, dict):
        return "object"
    return type(data).__name__
