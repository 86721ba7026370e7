"""Query string encoding, decoding and merging for Graph API URLs."""

from collections.abc import Mapping
from typing import Any
from urllib.parse import parse_qsl, urlencode

# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------


def _flatten(prefix: str, value: Any, pairs: list[tuple[str, str]]) -> None:
    if value is None:
        return
    if isinstance(value, Mapping):
        for key, item in value.items():
            _flatten(f"{prefix}[{key}]", item, pairs)
    elif isinstance(value, (list, tuple)):
        for index, item in enumerate(value):
            _flatten(f"{prefix}[{index}]", item, pairs)
    elif isinstance(value, bool):
        pairs.append((prefix, "1" if value else "0"))
    else:
        pairs.append((prefix, str(value)))


def build_query(params: Mapping[str, Any]) -> str:
    """Form-encode ``params`` the way Graph API expects.

    Nested values use bracket notation:
      - {"a": {"b": 1}}   -> a%5Bb%5D=1
      - {"ids": [1, 2]}   -> ids%5B0%5D=1&ids%5B1%5D=2
    Booleans become 1/0 and None values are dropped.
    """
    pairs: list[tuple[str, str]] = []
    for key, value in params.items():
        _flatten(str(key), value, pairs)
    return urlencode(pairs)


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------


def parse_query(query: str) -> dict[str, str]:
    """Decode a form-encoded string into a flat dict.

    Blank values are kept and the last occurrence of a repeated key wins.
    """
    return dict(parse_qsl(query, keep_blank_values=True))


# ---------------------------------------------------------------------------
# Merging
# ---------------------------------------------------------------------------


def _root_key(key: str) -> str:
    """Top-level name of a bracketed key: ``fields[x][0]`` -> ``fields``."""
    return key.split("[", 1)[0]


def append_params_to_url(url: str, params: Mapping[str, Any] | None = None) -> str:
    """Append ``params`` to ``url``, keeping any query the URL already has.

    On a collision the URL wins for the whole top-level key, nested values
    included: ``?fields[x]=2`` merged with ``{"fields": {"x": 1, "y": 3}}``
    keeps only ``fields[x]=2``.
    """
    if not params:
        return url

    if "?" not in url:
        return f"{url}?{build_query(params)}"

    path, query_string = url.split("?", 1)

    merged: dict[str, list[tuple[str, str]]] = {}
    for key, value in params.items():
        pairs: list[tuple[str, str]] = []
        _flatten(str(key), value, pairs)
        merged.setdefault(_root_key(str(key)), []).extend(pairs)

    existing: dict[str, dict[str, str]] = {}
    for key, value in parse_qsl(query_string, keep_blank_values=True):
        existing.setdefault(_root_key(key), {})[key] = value
    merged.update({root: list(values.items()) for root, values in existing.items()})

    return f"{path}?{urlencode([pair for pairs in merged.values() for pair in pairs])}"
