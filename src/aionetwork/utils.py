import logging
from typing import Dict, Mapping, Optional

from yarl import URL

from .types import Headers, URLLike

logger = logging.getLogger("aionetwork")


def parse_url(url: Optional[URLLike]) -> Optional[URL]:
    """
    Return an absolute URL, or None if ``url`` is missing or unusable.
    """
    if url is None:
        return None
    if isinstance(url, URL):
        parsed = url
    else:
        if not url.strip():
            return None
        try:
            parsed = URL(url)
        except (TypeError, ValueError):
            return None
    if not parsed.is_absolute() or not parsed.scheme:
        return None
    return parsed


def merge_headers(*sources: Optional[Mapping[str, str]]) -> Headers:
    """
    Merge header mappings left to right. Later values replace earlier ones
    with the same name, compared case-insensitively.
    """
    merged: Dict[str, str] = {}
    for source in sources:
        if not source:
            continue
        for name, value in source.items():
            for existing in [key for key in merged if key.lower() == name.lower()]:
                del merged[existing]
            merged[name] = value
    return merged
