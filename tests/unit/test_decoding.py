from dataclasses import dataclass, field
from enum import Enum
from typing import (
    Any,
    Dict,
    Generic,
    List,
    Literal,
    Mapping,
    Optional,
    Sequence,
    Tuple,
    TypedDict,
    TypeVar,
    Union,
)

import attr
import pytest

from aionetwork.decoding import decode
from aionetwork.errors import DecodeError


class Color(Enum):
    red = "red"
    green = "green"


@dataclass(frozen=True)
class Owner:
    login: str
    id: int


@dataclass(frozen=True)
class Repo:
    name: str
    owner: Owner
    stars: int = 0
    topics: List[str] = field(default_factory=list)
    license: Optional[str] = None


@attr.s(frozen=True, auto_attribs=True)
class Point:
    x: float
    y: float
    label: str = ""


class Movie(TypedDict):
    title: str
    year: int


class PartialMovie(TypedDict, total=False):
    title: str
    year: int


ItemT = TypeVar("ItemT")


@dataclass(frozen=True)
class User:
    name: str
    nickname: Optional[str]
    avatar: Union[str, None] = "default.png"


@attr.s(frozen=True, auto_attribs=True)
class Account:
    id: int
    email: Optional[str]


@dataclass(frozen=True)
class Page(Generic[ItemT]):
    items: List[ItemT]
    next: Optional[str] = None


@attr.s(frozen=True, auto_attribs=True)
class Envelope(Generic[ItemT]):
    data: ItemT
    meta: Dict[str, ItemT] = attr.ib(factory=dict)


@pytest.mark.parametrize(
    "data,response_type,result",
    [
        ({"a": 1}, Any, {"a": 1}),
        ([1, "a"], object, [1, "a"]),
        ("x", str, "x"),
        (1, int, 1),
        (1, float, 1.0),
        (1.5, float, 1.5),
        (True, bool, True),
        (None, type(None), None),
        (None, Optional[int], None),
        (3, Optional[int], 3),
        ("3", Union[int, str], "3"),
        ({"a": 1}, dict, {"a": 1}),
        ([1], list, [1]),
        ([1, 2], List[int], [1, 2]),
        ([1, 2], Sequence[int], [1, 2]),
        ([1, "a"], Tuple[int, str], (1, "a")),
        ([1, 2, 3], Tuple[int, ...], (1, 2, 3)),
        ({"a": [1]}, Dict[str, List[int]], {"a": [1]}),
        ({"a": "b"}, Mapping[str, str], {"a": "b"}),
        ("red", Color, Color.red),
        ("b", Literal["a", "b"], "b"),
        (
            {"title": "Alien", "year": 1979, "extra": 1},
            Movie,
            {"title": "Alien", "year": 1979},
        ),
        ({"year": 1979}, PartialMovie, {"year": 1979}),
        ({"x": 1, "y": 2.5}, Point, Point(x=1.0, y=2.5)),
    ],
)
def test_decode(data: Any, response_type: Any, result: Any) -> None:
    assert decode(data, response_type) == result


def test_decode_nested_dataclass() -> None:
    data = {
        "name": "aionetwork",
        "owner": {"login": "octocat", "id": 1, "type": "User"},
        "topics": ["http", "asyncio"],
        "private": False,
    }
    assert decode(data, Repo) == Repo(
        name="aionetwork",
        owner=Owner(login="octocat", id=1),
        topics=["http", "asyncio"],
    )


def test_decode_list_of_dataclasses() -> None:
    assert decode([{"login": "a", "id": 1}, {"login": "b", "id": 2}], List[Owner]) == [
        Owner("a", 1),
        Owner("b", 2),
    ]


@pytest.mark.parametrize(
    "data,response_type,path",
    [
        ("1", int, "$"),
        (True, int, "$"),
        (False, float, "$"),
        (1, str, "$"),
        (1, bool, "$"),
        (1, type(None), "$"),
        ([], dict, "$"),
        ({}, list, "$"),
        ("abc", List[str], "$"),
        ([1, "a"], List[int], "$[1]"),
        ([1], Tuple[int, int], "$"),
        ({"a": "b"}, Dict[str, int], "$.a"),
        ("blue", Color, "$"),
        (1, Literal[True], "$"),
        ("c", Literal["a", "b"], "$"),
        (1.5, Union[int, str], "$"),
        ({"title": "Alien"}, Movie, "$"),
        ({"name": "x"}, Repo, "$"),
        ({"name": "x", "owner": {"login": "a"}}, Repo, "$.owner"),
        ({"name": "x", "owner": {"login": "a", "id": "1"}}, Repo, "$.owner.id"),
        ({"x": 1}, Point, "$"),
        ({"x": "1", "y": 1}, Point, "$.x"),
        ({}, set, "$"),
    ],
)
def test_decode_errors(data: Any, response_type: Any, path: str) -> None:
    with pytest.raises(DecodeError) as error:
        decode(data, response_type)
    assert error.value.path == path


def test_missing_optional_field_is_none() -> None:
    assert decode({"name": "x"}, User) == User(name="x", nickname=None)


def test_missing_optional_field_keeps_default() -> None:
    assert decode({"name": "x", "nickname": "y"}, User).avatar == "default.png"


def test_explicit_null_optional_field() -> None:
    assert decode({"name": "x", "nickname": None, "avatar": None}, User) == User(
        name="x", nickname=None, avatar=None
    )


def test_missing_optional_attrs_field_is_none() -> None:
    assert decode({"id": 1}, Account) == Account(id=1, email=None)


def test_missing_required_field_still_fails() -> None:
    with pytest.raises(DecodeError) as error:
        decode({"nickname": "y"}, User)
    assert error.value.path == "$"


def test_decode_generic_dataclass() -> None:
    assert decode({"items": [1, 2]}, Page[int]) == Page(items=[1, 2])


def test_decode_nested_generic_dataclass() -> None:
    data = {"items": [{"login": "a", "id": 1}], "next": "/page/2"}
    assert decode(data, Page[Owner]) == Page(items=[Owner("a", 1)], next="/page/2")


def test_decode_generic_checks_item_type() -> None:
    with pytest.raises(DecodeError) as error:
        decode({"items": [1, "two"]}, Page[int])
    assert error.value.path == "$.items[1]"


def test_decode_unparametrized_generic_dataclass() -> None:
    assert decode({"items": [1, "two"]}, Page) == Page(items=[1, "two"])


def test_decode_generic_attrs() -> None:
    data = {"data": {"items": ["a"]}, "meta": {"first": {"items": []}}}
    assert decode(data, Envelope[Page[str]]) == Envelope(
        data=Page(items=["a"]), meta={"first": Page(items=[])}
    )
