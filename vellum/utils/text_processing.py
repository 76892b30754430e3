"""
Text processing utilities for marker scanning and whitespace cleanup.

Marker pairs (loops, sections, blocks, reorder containers) are matched with an
explicit stack instead of non-greedy regex capture, so nested regions of the
same kind pair up correctly.
"""

import re
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Pattern, Union

PatternLike = Union[str, Pattern[str]]


@dataclass(frozen=True)
class MarkerPair:
    """
    A matched opening/closing marker pair within a text.

    Attributes:
        name: Identifier captured by the markers' "name" group
        start: Offset of the opening marker
        inner_start: Offset just after the opening marker
        inner_end: Offset of the closing marker
        end: Offset just after the closing marker
    """

    name: str
    start: int
    inner_start: int
    inner_end: int
    end: int

    def inner(self, text: str) -> str:
        """Content between the markers."""
        return text[self.inner_start : self.inner_end]

    def outer(self, text: str) -> str:
        """Full region including both markers."""
        return text[self.start : self.end]

    def contains(self, other: "MarkerPair") -> bool:
        return self.start <= other.start and other.end <= self.end


def _compile(pattern: PatternLike) -> Pattern[str]:
    return pattern if isinstance(pattern, re.Pattern) else re.compile(pattern)


def find_all_marker_pairs(
    text: str, open_pattern: PatternLike, close_pattern: PatternLike
) -> List[MarkerPair]:
    """
    Find every balanced marker pair, at any depth, ordered by start offset.

    Both patterns must define a named group "name"; a closing marker pairs with
    the most recent unclosed opening marker of the same name. Openers left
    unclosed when an outer region closes, and closers with no opener, are
    treated as literal text.

    A token matching both patterns (e.g. a section literally named "EndFoo")
    closes an open region when one with the matching name is pending, and opens
    a new region otherwise.

    Args:
        text: Text to scan
        open_pattern: Regex for the opening marker
        close_pattern: Regex for the closing marker

    Returns:
        List of MarkerPair objects sorted by start offset

    Example:
        >>> OPEN, CLOSE = "{LOOP_START:(?P<name>[a-z]+)}", "{LOOP_END:(?P<name>[a-z]+)}"
        >>> text = "{LOOP_START:a}x{LOOP_START:a}y{LOOP_END:a}{LOOP_END:a}"
        >>> [(p.start, p.end) for p in find_all_marker_pairs(text, OPEN, CLOSE)]
        [(0, 54), (15, 42)]
    """
    opens: Dict[int, re.Match] = {m.start(): m for m in _compile(open_pattern).finditer(text)}
    closes: Dict[int, re.Match] = {m.start(): m for m in _compile(close_pattern).finditer(text)}

    stack: List[re.Match] = []
    pairs: List[MarkerPair] = []
    cursor = 0

    for pos in sorted(set(opens) | set(closes)):
        # Tokens overlapping an already consumed token are not markers
        if pos < cursor:
            continue

        close_match = closes.get(pos)
        if close_match is not None:
            name = close_match.group("name")
            opener_idx = _last_index_named(stack, name)
            if opener_idx is not None:
                opener = stack[opener_idx]
                del stack[opener_idx:]
                pairs.append(
                    MarkerPair(
                        name=name,
                        start=opener.start(),
                        inner_start=opener.end(),
                        inner_end=close_match.start(),
                        end=close_match.end(),
                    )
                )
                cursor = close_match.end()
                continue

        open_match = opens.get(pos)
        if open_match is not None:
            stack.append(open_match)
            cursor = open_match.end()

    return sorted(pairs, key=lambda pair: pair.start)


def _last_index_named(stack: List[re.Match], name: str) -> Optional[int]:
    for idx in range(len(stack) - 1, -1, -1):
        if stack[idx].group("name") == name:
            return idx
    return None


def find_marker_pairs(
    text: str, open_pattern: PatternLike, close_pattern: PatternLike
) -> List[MarkerPair]:
    """
    Find the outermost balanced marker pairs (those not nested in another pair).

    The returned pairs never overlap, so they can be rewritten in a single pass
    with replace_marker_pairs().

    Args:
        text: Text to scan
        open_pattern: Regex for the opening marker (with a "name" group)
        close_pattern: Regex for the closing marker (with a "name" group)

    Returns:
        Outermost MarkerPair objects in document order
    """
    outermost: List[MarkerPair] = []
    for pair in find_all_marker_pairs(text, open_pattern, close_pattern):
        if outermost and outermost[-1].contains(pair):
            continue
        outermost.append(pair)
    return outermost


def replace_marker_pairs(
    text: str, pairs: List[MarkerPair], replacement: Callable[[MarkerPair], str]
) -> str:
    """
    Replace each (non-overlapping) marker region with the callback's result.

    Args:
        text: Original text the pairs were found in
        pairs: Non-overlapping pairs in document order
        replacement: Function mapping a pair to its replacement string

    Returns:
        Rewritten text
    """
    parts = []
    last = 0
    for pair in pairs:
        parts.append(text[last : pair.start])
        parts.append(replacement(pair))
        last = pair.end
    parts.append(text[last:])
    return "".join(parts)


def collapse_blank_lines(text: str) -> str:
    """
    Collapse runs of two or more blank lines into a single blank line and
    strip trailing whitespace.

    Example:
        >>> collapse_blank_lines("a\\n\\n\\n\\nb  \\n")
        'a\\n\\nb'
    """
    result = re.sub(r"\n\s*\n\s*\n", "\n\n", text)
    return result.rstrip()


def truncate_display(text: str, max_len: int) -> str:
    """
    Truncate text for display with ellipsis if needed.

    Example:
        >>> truncate_display("this is a very long string", 10)
        'this is...'
    """
    return text if len(text) <= max_len else text[: max_len - 3] + "..."

