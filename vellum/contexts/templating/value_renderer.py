"""
Value Rendering

Converts raw data values into the text substituted for placeholder tokens.
Most values are HTML-escaped; a few keys get special-case rendering:

- addContact: percent-encoded and prefixed with a vCard data URI scheme
- stars: rendered as a five-glyph rating (e.g. 3 -> "★★★☆☆")
- URL-ish keys inside loops: routed through render_url() so unusable values
  fall back to a placeholder image

All functions are pure and never raise on odd input.
"""

import math
import re
from collections.abc import Mapping
from typing import Any, Optional
from urllib.parse import quote

from vellum.contexts.templating.defaults import (
    CONTACT_KEY,
    EMPTY_GLYPH,
    FILLED_GLYPH,
    PLACEHOLDER_IMAGE,
    RATING_KEY,
    RATING_MAX,
    VCARD_PREFIX,
)

HTML_ESCAPES = [
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&#39;"),
]

# Characters encodeURIComponent leaves untouched
URI_COMPONENT_SAFE = "-_.!~*'()"

# Leading float, as parsed by a lenient parseFloat (e.g. "3 stars" -> 3.0)
LEADING_FLOAT = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|[+-]?Infinity)")

URL_KEY_SUFFIX = "Url"
URL_KEY_HINTS = ("image", "photo")


def stringify(value: Any) -> str:
    """
    String form of a data value.

    None renders empty, booleans render lower-case and sequences render as
    their items' string forms joined by commas.

    Example:
        >>> stringify([1, "a", None])
        '1,a,'
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(stringify(item) for item in value)
    return str(value)


def escape_html(value: Any) -> str:
    """
    HTML-escape a value's string form.

    Example:
        >>> escape_html('<b class="x">Tom & Jerry\\'s</b>')
        '&lt;b class=&quot;x&quot;&gt;Tom &amp; Jerry&#39;s&lt;/b&gt;'
    """
    text = stringify(value)
    for char, entity in HTML_ESCAPES:
        text = text.replace(char, entity)
    return text


def render_contact(value: Any) -> str:
    """
    Render a vCard payload as a data URI.

    Falsy values render as the bare prefix.

    Example:
        >>> render_contact("A&B")
        'data:text/vcard;charset=utf-8,A%26B'
    """
    payload = stringify(value) if value else ""
    return VCARD_PREFIX + quote(payload, safe=URI_COMPONENT_SAFE)


def _coerce_rating(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        # Clamp before converting; ints beyond float range overflow
        return float(max(-1, min(value, RATING_MAX)))
    if isinstance(value, float):
        return value
    if isinstance(value, str):
        match = LEADING_FLOAT.match(value)
        if match:
            return float(match.group(1).replace("Infinity", "inf"))
    return None


def render_rating(value: Any) -> str:
    """
    Render a numeric rating as filled and empty star glyphs.

    Non-negative numbers are clamped into [0, 5] and floored. Invalid and
    negative values render as five filled glyphs.

    Examples:
        >>> render_rating(4)
        '★★★★☆'
        >>> render_rating("3")
        '★★★☆☆'
        >>> render_rating(-1)
        '★★★★★'
    """
    number = _coerce_rating(value)
    if number is None or math.isnan(number) or number < 0:
        return FILLED_GLYPH * RATING_MAX

    filled = math.floor(min(float(RATING_MAX), number))
    return FILLED_GLYPH * filled + EMPTY_GLYPH * (RATING_MAX - filled)


def render_value(value: Any, key: str) -> str:
    """
    Render a data value for the placeholder named key.

    Args:
        value: Raw data value
        key: Placeholder key (selects special-case rendering)

    Returns:
        Text to substitute for the token
    """
    if key == CONTACT_KEY:
        return render_contact(value)
    if key == RATING_KEY:
        return render_rating(value)
    return escape_html(value)


def is_url_key(key: str) -> bool:
    """True for keys ending in "Url" or mentioning an image or photo."""
    return key.endswith(URL_KEY_SUFFIX) or any(hint in key for hint in URL_KEY_HINTS)


def render_url(value: Any) -> str:
    """
    Render a value used as a URL.

    Strings are HTML-escaped. None, binary payloads and file-like objects
    (uploads that have no URL yet) fall back to the placeholder image.
    Mappings have no usable string form and fall back as well.
    """
    if isinstance(value, str):
        return escape_html(value)
    if value is None or isinstance(value, (bytes, bytearray, Mapping)) or hasattr(value, "read"):
        return PLACEHOLDER_IMAGE
    return escape_html(value)
