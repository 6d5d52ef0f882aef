from __future__ import annotations

"""
Text normalisation helpers shared by the matcher, the price parser and the
catalog loader.

Queries and item fields go through the same lower-casing so that substring
checks in scoring.py compare like with like.

Public helpers:

* normalize_query(text) -> str
    Lower-case, trim, collapse whitespace.

* field_text(item, name) -> str
    Lower-cased text of a title / description / tags field for any item shape.
"""

import re
from typing import Any

from .models import coerce_price

_WS_RE = re.compile(r"\s+")


def collapse_whitespace(text: str) -> str:
    return _WS_RE.sub(" ", text).strip()


def normalize_query(text: Any) -> str:
    """
    Lower-case and trim a raw query.

    Non-string input (None, numbers) is treated as its string form, None as "".
    """
    if text is None:
        return ""
    q = str(text).lower()
    q = collapse_whitespace(q)
    return q


# ---------------------------------------------------------------------------
# Item field access
# ---------------------------------------------------------------------------

def get_field(item: Any, name: str, default: Any = None) -> Any:
    """Read a field from a dict, a pydantic model or any attribute holder."""
    if isinstance(item, dict):
        return item.get(name, default)
    return getattr(item, name, default)


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value != value:  # NaN from pandas rows
        return ""
    return str(value)


def field_text(item: Any, name: str) -> str:
    """
    Lower-cased text for `name`. Tags are joined with single spaces; a bare
    tag string is used as-is.
    """
    value = get_field(item, name)
    if name == "tags":
        if value is None:
            return ""
        if isinstance(value, str):
            return value.lower()
        try:
            return " ".join(_as_text(t) for t in value).lower()
        except TypeError:
            return _as_text(value).lower()
    return _as_text(value).lower()


def item_price(item: Any) -> float:
    return coerce_price(get_field(item, "price"))


def item_condition(item: Any) -> Any:
    value = get_field(item, "condition")
    # Condition enum members compare by value
    return getattr(value, "value", value)
