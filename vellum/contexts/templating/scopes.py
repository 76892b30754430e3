"""
Data context access helpers.

Template data is an untyped mapping whose values may be scalars, None,
sequences of nested mappings (loop data) or nested mappings (namespaces such
as "socialMedia"). These helpers centralize the truthiness rules the pruning
stages share.
"""

from collections.abc import Mapping
from typing import Any, Optional, Tuple

from vellum.contexts.templating.defaults import SOCIAL_MEDIA_NAMESPACE


class _Missing:
    """Sentinel for keys absent from every scope."""

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING = _Missing()


class ScopeChain:
    """
    Ordered chain of lookup scopes, innermost first.

    Inside loop expansion the chain is (item, ..., outer item, global data);
    at the top level it holds only the global data.
    """

    def __init__(self, *scopes: Any):
        # Non-mapping entries (e.g. a loop over plain strings) contribute no keys
        self.scopes: Tuple[Mapping, ...] = tuple(s for s in scopes if isinstance(s, Mapping))

    def child(self, item: Any) -> "ScopeChain":
        """Return a new chain with item as the innermost scope."""
        return ScopeChain(item, *self.scopes)

    def lookup(self, key: str) -> Any:
        """Value of key from the innermost scope that owns it, else MISSING."""
        for scope in self.scopes:
            if key in scope:
                return scope[key]
        return MISSING

    def __contains__(self, key: str) -> bool:
        return any(key in scope for scope in self.scopes)

    def __repr__(self) -> str:
        return f"ScopeChain(depth={len(self.scopes)})"


def is_sequence(value: Any) -> bool:
    """True for list/tuple values (strings and mappings are not loop data)."""
    return isinstance(value, (list, tuple))


def is_blank(value: Any) -> bool:
    """True for falsy values and whitespace-only strings."""
    if not value:
        return True
    return isinstance(value, str) and value.strip() == ""


def is_empty_value(value: Any) -> bool:
    """True for None, the empty string and zero-length sequences."""
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    return is_sequence(value) and len(value) == 0


def lookup_social_value(data: Mapping, field: str) -> Any:
    """
    Resolve a social link field directly or through the socialMedia namespace.

    Tries data[field], then socialMedia[field without "Link"], then
    socialMedia[lower-cased field without "link"]; the first truthy value wins.

    Example:
        >>> lookup_social_value({"socialMedia": {"linkedin": "x"}}, "linkedInLink")
        'x'
    """
    direct = data.get(field)
    if direct:
        return direct

    namespace: Optional[Mapping] = data.get(SOCIAL_MEDIA_NAMESPACE)
    if not isinstance(namespace, Mapping):
        return ""

    for candidate in (field.removesuffix("Link"), field.lower().removesuffix("link")):
        value = namespace.get(candidate)
        if value:
            return value
    return ""
