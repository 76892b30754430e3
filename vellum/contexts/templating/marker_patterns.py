"""
Marker Pattern Constants

Centralized regex patterns for the fixed marker syntax recognized by the
templating pipeline. Organized into frozen dataclasses by category for
immutability and clear grouping.

Loop, section, block and swap markers are fixed and are NOT affected by custom
placeholder delimiters.
"""

import re
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class LoopPatterns:
    """
    Loop region markers: {LOOP_START:name} ... {LOOP_END:name}

    Used by the loop expander. The "name" group is the data key of the array.
    """
    START: str = r"\{LOOP_START:(?P<name>\w+)\}"
    END: str = r"\{LOOP_END:(?P<name>\w+)\}"
    # Reserved loop-local token, replaced with the 0-based entry position
    INDEX_TOKEN: str = "{index}"
    INDEX_KEY: str = "index"


@dataclass(frozen=True)
class SectionPatterns:
    """
    Named section markers: <!-- Name section --> ... <!-- EndName section -->

    Used by the section pruner. The closing marker repeats the opening name.
    """
    START: str = r"<!--\s*(?P<name>[^>]+?)\s+section\s*-->"
    END: str = r"<!--\s*End(?P<name>[^>]+?)\s+section\s*-->"


@dataclass(frozen=True)
class LayoutPatterns:
    """
    Layout markers: blocks, reorder containers and inline swap directives.

    Used by the layout engine.
    """
    BLOCK_START: str = r"<!--\s*BLOCK:(?P<name>[\w-]+)\s*-->"
    BLOCK_END: str = r"<!--\s*ENDBLOCK:(?P<name>[\w-]+)\s*-->"
    # Containers are anonymous; the empty group keeps the pair scanner uniform
    REORDER_START: str = r"<!--\s*REORDER(?P<name>)\s*-->"
    REORDER_END: str = r"<!--\s*ENDREORDER(?P<name>)\s*-->"
    SWAP: str = r"\{SWAP:(?P<first>[\w-]+):(?P<second>[\w-]+)\}"


@dataclass(frozen=True)
class ElementPatterns:
    """
    Markup fragment templates removed by the conditional element pruner.

    Templates accept an escaped element id (use .format(id=...)).
    """
    # Social links may wrap across lines (matched with re.DOTALL)
    ANCHOR_WITH_ID: str = r"<a[^>]*id=[\"']{id}[\"'][^>]*>.*?</a>"
    ANY_WITH_ID: str = r"<[^>]*id=[\"']{id}[\"'][^>]*>.*?</[^>]*>"
    # Contact paragraphs are single-line (no re.DOTALL)
    PARAGRAPH_WITH_CLASS: str = r"<p[^>]*class=\"[^\"]*{css_class}[^\"]*\"[^>]*>.*?</p>"
    TITLE_PARAGRAPH: str = r"<p[^>]*id=[\"']title[\"'][^>]*>.*?</p>"


# Placeholder token body: ASCII word characters and hyphens
PLACEHOLDER_BODY: str = r"([A-Za-z0-9_-]+)"

DEFAULT_DELIMITERS: Tuple[str, str] = ("{", "}")


def placeholder_regex(delimiters: Tuple[str, str] = DEFAULT_DELIMITERS) -> re.Pattern:
    """
    Build the placeholder token regex for a pair of open/close delimiters.

    Args:
        delimiters: (open, close) delimiter strings, matched literally

    Returns:
        Compiled regex whose group 1 is the token key

    Example:
        >>> placeholder_regex(("{{", "}}")).findall("Hi {{name}}, {age}")
        ['name']
    """
    open_delim, close_delim = delimiters
    return re.compile(f"{re.escape(open_delim)}{PLACEHOLDER_BODY}{re.escape(close_delim)}")
