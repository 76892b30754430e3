"""
Markup Format Conversion

Stateless regex conversions from processed HTML to Markdown and plain text.
Handles the tags templates typically produce; anything else passes through
(markdown) or is stripped (text).
"""

import re

# (pattern, replacement) applied in order, case-insensitively
MARKDOWN_RULES = [
    # Headers
    (r"<h1\b[^>]*>(.*?)</h1>", r"# \1"),
    (r"<h2\b[^>]*>(.*?)</h2>", r"## \1"),
    (r"<h3\b[^>]*>(.*?)</h3>", r"### \1"),
    # Paragraphs
    (r"<p\b[^>]*>(.*?)</p>", "\\1\n\n"),
    # Lists
    (r"<ul\b[^>]*>", ""),
    (r"</ul>", "\n"),
    (r"<li\b[^>]*>(.*?)</li>", "- \\1\n"),
    # Bold / italic
    (r"<strong\b[^>]*>(.*?)</strong>", r"**\1**"),
    (r"<b\b[^>]*>(.*?)</b>", r"**\1**"),
    (r"<em\b[^>]*>(.*?)</em>", r"*\1*"),
    (r"<i\b[^>]*>(.*?)</i>", r"*\1*"),
    # Links and images
    (r"<a\b[^>]+href=[\"']([^\"']*)[\"'][^>]*>(.*?)</a>", r"[\2](\1)"),
    (r"<img\b[^>]+src=[\"']([^\"']*)[\"'][^>]*alt=[\"']([^\"']*)[\"'][^>]*/?>", r"![\2](\1)"),
]


def html_to_markdown(html: str) -> str:
    """
    Convert basic HTML to Markdown.

    Example:
        >>> html_to_markdown("<h2>Skills</h2>\\n<ul><li>Python</li></ul>")
        '## Skills\\n- Python\\n\\n'
    """
    text = html
    for pattern, replacement in MARKDOWN_RULES:
        text = re.sub(pattern, replacement, text, flags=re.IGNORECASE)
    return re.sub(r"\n\s*\n\s*\n", "\n\n", text)


def html_to_text(html: str) -> str:
    """
    Strip all tags and collapse whitespace.

    Example:
        >>> html_to_text("<p>Hello <b>world</b></p>\\n<p>again</p>")
        'Hello world again'
    """
    text = re.sub(r"<[^>]*>", "", html)
    return re.sub(r"\s+", " ", text).strip()
