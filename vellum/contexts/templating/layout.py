"""
Layout Reordering and Swapping

Works on named blocks:

    <!-- BLOCK:header --> ... <!-- ENDBLOCK:header -->

Blocks can exchange content through inline {SWAP:a:b} directives or a
data-supplied "swaps" list, and a <!-- REORDER --> ... <!-- ENDREORDER -->
container can be replaced by blocks concatenated in "layoutOrder" order.
Block markers never survive into the output.
"""

import re
from collections.abc import Mapping
from typing import AbstractSet, Dict, Iterable, Tuple

from vellum.contexts.templating.defaults import LAYOUT_ORDER_KEY, SWAPS_KEY
from vellum.contexts.templating.logger import _log_debug
from vellum.contexts.templating.marker_patterns import LayoutPatterns
from vellum.contexts.templating.scopes import is_sequence
from vellum.utils.text_processing import (
    MarkerPair,
    find_all_marker_pairs,
    find_marker_pairs,
    replace_marker_pairs,
)


def extract_blocks(text: str) -> Dict[str, str]:
    """
    Map block ids to their content, in first-appearance order.

    Blocks at every depth are collected; a nested block's markers stay in its
    parent's content. A repeated id keeps the content of its last occurrence.
    """
    blocks: Dict[str, str] = {}
    for pair in find_all_marker_pairs(text, LayoutPatterns.BLOCK_START, LayoutPatterns.BLOCK_END):
        blocks[pair.name] = pair.inner(text)
    return blocks


def swap_blocks(blocks: Dict[str, str], first: str, second: str) -> bool:
    """
    Exchange the content of two blocks in place.

    Returns:
        True if both ids exist and the swap happened, False otherwise (no-op)
    """
    if first not in blocks or second not in blocks:
        _log_debug(f"Swap {first} <-> {second} skipped: unknown block id")
        return False
    blocks[first], blocks[second] = blocks[second], blocks[first]
    _log_debug(f"Swapped blocks {first} <-> {second}")
    return True


def apply_inline_swaps(text: str, blocks: Dict[str, str]) -> str:
    """Apply every {SWAP:a:b} directive in order and erase the directives."""
    for match in re.finditer(LayoutPatterns.SWAP, text):
        swap_blocks(blocks, match.group("first"), match.group("second"))
    for block_id, content in blocks.items():
        blocks[block_id] = re.sub(LayoutPatterns.SWAP, "", content)
    return re.sub(LayoutPatterns.SWAP, "", text)


def _data_swaps(data: Mapping) -> Iterable[Tuple[str, str]]:
    swaps = data.get(SWAPS_KEY)
    if not is_sequence(swaps):
        return []
    return [
        (swap.get("from"), swap.get("to"))
        for swap in swaps
        if isinstance(swap, Mapping)
    ]


def reorder_blocks(text: str, blocks: Dict[str, str], order: Iterable[str]) -> str:
    """
    Replace each reorder container (markers included) with the listed blocks'
    content concatenated in order. Unknown ids are skipped.
    """
    order = list(order)
    missing = [block_id for block_id in order if block_id not in blocks]
    if missing:
        _log_debug(f"Reorder skipped unknown block ids: {missing}")
    reordered = "".join(blocks[block_id] for block_id in order if block_id in blocks)

    containers = find_marker_pairs(text, LayoutPatterns.REORDER_START, LayoutPatterns.REORDER_END)
    return replace_marker_pairs(text, containers, lambda pair: reordered)


def splice_blocks(
    text: str, blocks: Dict[str, str], expanding: AbstractSet[str] = frozenset()
) -> str:
    """
    Replace every remaining block region with its current content.

    Spliced content is expanded recursively, so nested blocks lose their
    markers too. A block already being expanded higher up (e.g. after a
    parent/child swap) falls back to its own inner text.

    Args:
        text: Markup containing block regions
        blocks: Block id -> content map
        expanding: Ids on the current expansion path
    """
    pairs = find_marker_pairs(text, LayoutPatterns.BLOCK_START, LayoutPatterns.BLOCK_END)

    def splice(pair: MarkerPair) -> str:
        if pair.name in expanding or pair.name not in blocks:
            return splice_blocks(pair.inner(text), blocks, expanding)
        return splice_blocks(blocks[pair.name], blocks, expanding | {pair.name})

    return replace_marker_pairs(text, pairs, splice)


def apply_layout(text: str, data: Mapping) -> str:
    """
    Apply block swaps and reordering, then splice block content back in.

    Steps:
        1. Extract blocks into an id -> content map
        2. Apply inline {SWAP:a:b} directives (then erase them)
        3. Apply data["swaps"] ({"from", "to"} pairs) in list order
        4. If data["layoutOrder"] is a list, replace the reorder container
        5. Replace every remaining block region with its current content

    Args:
        text: Markup after placeholder resolution
        data: Global template data

    Returns:
        Markup with swapped/reordered content and no block markers

    Example:
        >>> apply_layout(
        ...     "<!-- BLOCK:a -->A<!-- ENDBLOCK:a --><!-- BLOCK:b -->B<!-- ENDBLOCK:b -->",
        ...     {"swaps": [{"from": "a", "to": "b"}]},
        ... )
        'BA'
    """
    blocks = extract_blocks(text)
    result = apply_inline_swaps(text, blocks)

    for first, second in _data_swaps(data):
        swap_blocks(blocks, first, second)

    order = data.get(LAYOUT_ORDER_KEY)
    if is_sequence(order):
        result = reorder_blocks(result, blocks, order)

    return splice_blocks(result, blocks)
