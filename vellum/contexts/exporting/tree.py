"""
Markup-to-Tree Conversion

Minimal scanner turning processed markup into an ordered list of element and
text nodes, used for structured (json/ast) export.

This is not a conforming HTML parser: paired tags are matched non-greedily up
to the first closing tag of the same name, so nested elements sharing a tag
name are not split correctly, and comments are stripped before scanning.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Union

COMMENT = re.compile(r"<!--.*?-->", re.DOTALL)

# Paired element (groups 1-3) or a self-closing / unpaired start tag (groups 4-5)
ELEMENT = re.compile(
    r"<([a-zA-Z][a-zA-Z0-9-]*)\s*([^>]*?)>(.*?)</\1>"
    r"|<([a-zA-Z][a-zA-Z0-9-]*)\s*([^>]*?)\s*/?>",
    re.DOTALL,
)

ATTRIBUTE = re.compile(r"([a-zA-Z0-9-]+)=[\"']([^\"']*)[\"']")


@dataclass
class TextNode:
    """A run of text."""

    content: str

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "text", "content": self.content}


@dataclass
class ElementNode:
    """An element with its attributes and ordered children."""

    tag_name: str
    attributes: Dict[str, str] = field(default_factory=dict)
    children: List["TreeNode"] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "element",
            "tagName": self.tag_name,
            "attributes": dict(self.attributes),
            "children": [child.to_dict() for child in self.children],
        }


TreeNode = Union[TextNode, ElementNode]


def parse_attributes(attr_string: str) -> Dict[str, str]:
    """
    Parse name="value" / name='value' pairs into a dict.

    Bare attributes and malformed pairs are ignored.

    Example:
        >>> parse_attributes('class="card" data-id=\\'7\\' hidden')
        {'class': 'card', 'data-id': '7'}
    """
    if not attr_string.strip():
        return {}
    return {name: value for name, value in ATTRIBUTE.findall(attr_string)}


def _parse(markup: str) -> List[TreeNode]:
    nodes: List[TreeNode] = []
    last_index = 0

    for match in ELEMENT.finditer(markup):
        leading = markup[last_index : match.start()].strip()
        if leading:
            nodes.append(TextNode(leading))

        if match.group(1):
            inner = match.group(3)
            # Text-only content becomes a single (untrimmed) text child
            children = _parse(inner) if "<" in inner else [TextNode(inner)]
            nodes.append(ElementNode(match.group(1), parse_attributes(match.group(2)), children))
        else:
            nodes.append(ElementNode(match.group(4), parse_attributes(match.group(5)), []))

        last_index = match.end()

    trailing = markup[last_index:].strip()
    if trailing:
        nodes.append(TextNode(trailing))

    return nodes


def to_tree(markup: str) -> List[TreeNode]:
    """
    Convert markup into a flat list of top-level nodes.

    Args:
        markup: Processed HTML

    Returns:
        Top-level sibling nodes in document order (wrap them to get one root)

    Example:
        >>> [node.to_dict()["type"] for node in to_tree('<p class="x">Hi</p> tail')]
        ['element', 'text']
    """
    return _parse(COMMENT.sub("", markup))


def tree_to_dicts(nodes: List[TreeNode]) -> List[Dict[str, Any]]:
    """JSON-ready representation of a node list."""
    return [node.to_dict() for node in nodes]
