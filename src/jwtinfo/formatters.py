"""
JSON rendering of decoded token parts.
"""

from __future__ import annotations

import json
from typing import Any

from .decoder import Token

__all__ = ["PARTS", "select_part", "render_json", "render_token"]

PARTS = ("body", "header", "full")


def select_part(token: Token, part: str = "body") -> Any:
    """Return the JSON value to print for *part* (body, header or full)."""
    if part == "body":
        return token.body
    if part == "header":
        return token.header
    if part == "full":
        return token.to_dict()
    raise ValueError(f"Unknown token part: {part!r} (expected one of {', '.join(PARTS)})")


def render_json(value: Any, *, pretty: bool = False, indent: int = 2, sort_keys: bool = True) -> str:
    """Serialise *value* as compact single-line JSON, or indented when *pretty*."""
    options = {"sort_keys": sort_keys, "ensure_ascii": False, "allow_nan": False}
    if pretty:
        return json.dumps(value, indent=indent, **options)
    return json.dumps(value, separators=(",", ":"), **options)


def render_token(
    token: Token,
    part: str = "body",
    *,
    pretty: bool = False,
    indent: int = 2,
    sort_keys: bool = True,
) -> str:
    return render_json(select_part(token, part), pretty=pretty, indent=indent, sort_keys=sort_keys)
