"""Small text helpers: entity decoding and anchor sanitizing."""

from __future__ import annotations

import re

# Only these entities are decoded; anything else passes through untouched.
_ENTITIES = {
    "&amp;": "&",
    "&lt;": "<",
    "&gt;": ">",
    "&quot;": '"',
    "&#39;": "'",
    "&nbsp;": " ",
    "&mdash;": "—",
    "&ndash;": "–",
    "&hellip;": "…",
    "&copy;": "©",
    "&reg;": "®",
    "&trade;": "™",
}

_ENTITY_RE = re.compile(r"&[#a-zA-Z0-9]+;")
_ANCHOR_UNSAFE_RE = re.compile(r"[^a-zA-Z0-9_-]")
_DASH_RUN_RE = re.compile(r"-+")

MAX_ANCHOR_LENGTH = 100


def decode_entities(text: str) -> str:
    """Decode the fixed set of named HTML entities in *text*.

    Decoding is a single pass, so ``&amp;lt;`` becomes ``&lt;`` and not ``<``.
    """
    return _ENTITY_RE.sub(lambda m: _ENTITIES.get(m.group(0), m.group(0)), text)


def sanitize_anchor(value: str | None) -> str | None:
    """Turn an arbitrary identifier into a safe anchor token.

    Characters outside ``[A-Za-z0-9_-]`` become ``-``, dash runs collapse,
    leading/trailing dashes are trimmed and the result is capped at 100
    characters.  Returns ``None`` when nothing usable is left.
    """
    if not value:
        return None
    token = _ANCHOR_UNSAFE_RE.sub("-", value)
    token = _DASH_RUN_RE.sub("-", token).strip("-")
    token = token[:MAX_ANCHOR_LENGTH]
    return token or None


def fragment_of(value: str | None) -> str | None:
    """Return the part after the last ``#`` of *value*, or *value* itself."""
    if not value:
        return None
    if "#" in value:
        return value.rsplit("#", 1)[-1]
    return value
