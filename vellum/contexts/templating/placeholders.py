"""
Placeholder Resolution

Substitutes {key} tokens with rendered data values. Unresolved tokens are never
deleted: a key missing from every scope leaves the token text verbatim.
"""

import re
from collections.abc import Mapping
from typing import List, Tuple

from vellum.contexts.templating.marker_patterns import DEFAULT_DELIMITERS, placeholder_regex
from vellum.contexts.templating.scopes import MISSING, ScopeChain
from vellum.contexts.templating.value_renderer import is_url_key, render_url, render_value


class PlaceholderResolver:
    """
    Resolves placeholder tokens against a data mapping or a scope chain.

    The delimiters are fixed at construction; the resolver holds no other state
    and can be shared between threads.

    Usage:
        resolver = PlaceholderResolver()
        html = resolver.resolve("<h1>{name}</h1>", {"name": "Ada"})
    """

    def __init__(self, delimiters: Tuple[str, str] = DEFAULT_DELIMITERS):
        self.delimiters = tuple(delimiters)
        self.pattern: re.Pattern = placeholder_regex(self.delimiters)

    def resolve(self, text: str, data: Mapping) -> str:
        """
        Replace tokens whose key exists in data (top-level resolution).

        Args:
            text: Text containing placeholder tokens
            data: Global template data

        Returns:
            Text with known tokens rendered and unknown tokens untouched
        """

        def substitute(match: re.Match) -> str:
            key = match.group(1)
            if key in data:
                return render_value(data[key], key)
            return match.group(0)

        return self.pattern.sub(substitute, text)

    def resolve_scoped(self, text: str, scope: ScopeChain) -> str:
        """
        Replace tokens using a loop scope chain (item first, global last).

        URL-ish keys (ending in "Url", or mentioning image/photo) render through
        the URL renderer so unusable values fall back to a placeholder image.

        Args:
            text: Loop item template
            scope: Lookup chain for the current loop entry

        Returns:
            Text with resolvable tokens rendered
        """

        def substitute(match: re.Match) -> str:
            key = match.group(1)
            value = scope.lookup(key)
            if value is MISSING:
                return match.group(0)
            if is_url_key(key):
                return render_url(value)
            return render_value(value, key)

        return self.pattern.sub(substitute, text)

    def find_tokens(self, text: str) -> List[str]:
        """Keys of all tokens in text, in document order (duplicates kept)."""
        return self.pattern.findall(text)

    def __repr__(self) -> str:
        return f"PlaceholderResolver(delimiters={self.delimiters!r})"
