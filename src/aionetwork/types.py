from typing import Dict, Literal, Mapping, Union

from yarl import URL

MethodName = Literal["GET", "POST", "PUT", "DELETE", "PATCH"]

Headers = Dict[str, str]
Body = Mapping[str, str]
URLLike = Union[str, URL]
