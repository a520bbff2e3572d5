from __future__ import annotations

import re
from typing import Any, Iterable, List, Optional, Tuple, Union

_CAMEL_RE = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def split_attribute_key(key: str) -> Tuple[str, Optional[str]]:
    """Split ``"name:el"`` into ``("name", "el")``; a plain key has no locale."""
    if ":" not in key:
        return key, None
    attribute, _, locale = key.partition(":")
    return attribute, (locale.strip() or None)


def is_empty_value(key: str, value: Any) -> bool:
    # "0" and 0 are values
    return value is None or value == ""


def snake_case(name: str) -> str:
    return _CAMEL_RE.sub("_", name).lower()


def as_locale_list(locales: Union[str, Iterable[str]]) -> List[str]:
    if isinstance(locales, str):
        return [locales]
    return [loc for loc in locales if loc]
