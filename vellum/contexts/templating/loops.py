"""
Loop Expansion

Expands {LOOP_START:name} ... {LOOP_END:name} regions once per entry of the
array stored under data[name].

Regions are paired with a depth-counting scan, so loops nested inside a loop
body (including loops reusing the same name) are expanded with the current
entry as the innermost lookup scope. A nested loop's array is looked up in the
entry first, then in the enclosing entries, then in the global data.
"""

from collections.abc import Mapping
from typing import Optional

from vellum.contexts.templating.defaults import MAX_NESTED_LOOP_PASSES
from vellum.contexts.templating.logger import _log_debug
from vellum.contexts.templating.marker_patterns import LoopPatterns
from vellum.contexts.templating.placeholders import PlaceholderResolver
from vellum.contexts.templating.scopes import MISSING, ScopeChain, is_sequence
from vellum.utils.text_processing import MarkerPair, find_marker_pairs, replace_marker_pairs

ENTRY_SEPARATOR = "\n"


def _expand_in_scope(text: str, scope: ScopeChain, resolver: PlaceholderResolver) -> str:
    pairs = find_marker_pairs(text, LoopPatterns.START, LoopPatterns.END)
    if not pairs:
        return text

    def expand(pair: MarkerPair) -> str:
        entries = scope.lookup(pair.name)
        if entries is MISSING or not is_sequence(entries) or len(entries) == 0:
            _log_debug(f"Loop '{pair.name}': no entries, region removed")
            return ""

        body = pair.inner(text)
        rendered = []
        for index, entry in enumerate(entries):
            entry_scope = scope.child(entry)
            # Inner loops first so they keep their own {index}
            item_text = _expand_in_scope(body, entry_scope, resolver)
            item_text = item_text.replace(LoopPatterns.INDEX_TOKEN, str(index))
            rendered.append(resolver.resolve_scoped(item_text, entry_scope))

        _log_debug(f"Loop '{pair.name}': expanded {len(rendered)} entries")
        return ENTRY_SEPARATOR.join(rendered)

    return replace_marker_pairs(text, pairs, expand)


def expand_loops(
    text: str, data: Mapping, resolver: Optional[PlaceholderResolver] = None
) -> str:
    """
    Expand every well-formed loop region in text.

    A region whose key is missing, is not a list/tuple, or is empty is removed
    entirely (markers and body). Otherwise each entry renders the body with:
    nested loops expanded, {index} replaced by the 0-based entry position, and
    placeholders resolved item-first with the global data as fallback. Entry
    renderings are joined with a newline.

    Unmatched start or end markers are left as literal text.

    Args:
        text: Template text
        data: Global template data
        resolver: Placeholder resolver (default delimiters when omitted)

    Returns:
        Text with loop regions replaced by their expansion

    Example:
        >>> expand_loops("{LOOP_START:xs}<i>{n}</i>{LOOP_END:xs}", {"xs": [{"n": 1}, {"n": 2}]})
        '<i>1</i>\\n<i>2</i>'
    """
    resolver = resolver or PlaceholderResolver()
    return _expand_in_scope(text, ScopeChain(data), resolver)


def expand_nested_loops(
    text: str,
    data: Mapping,
    resolver: Optional[PlaceholderResolver] = None,
    max_passes: int = MAX_NESTED_LOOP_PASSES,
) -> str:
    """
    Re-run loop expansion until the text stops changing or max_passes is hit.

    Nesting inside loop bodies is already handled by expand_loops(); this pass
    catches loop markers that only appear after substitution (e.g. markers
    carried in by data values). The bound guarantees termination.

    Args:
        text: Text after the first loop and placeholder passes
        data: Global template data
        resolver: Placeholder resolver
        max_passes: Maximum number of expansion passes

    Returns:
        Text after the final pass
    """
    resolver = resolver or PlaceholderResolver()
    current = text
    for pass_number in range(1, max_passes + 1):
        expanded = expand_loops(current, data, resolver)
        if expanded == current:
            break
        _log_debug(f"Nested loop pass {pass_number} changed the text")
        current = expanded
    return current
