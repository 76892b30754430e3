"""
Template Cleanup

Two cleanup modes:

1. **Whitespace cleanup** (cleanup_template):
   Final pipeline stage. Collapses runs of blank lines and strips trailing
   whitespace.

2. **Rule-table cleanup** (cleanup_content_template_advanced):
   Standalone pass for markup whose placeholders were already filled by some
   other means. Removal is driven by SECTION_CLEANUP_RULES (exact marker
   names) and ELEMENT_CLEANUP_RULES, followed by social link and socials
   group cleanup.
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import List

from vellum.contexts.templating.defaults import (
    EXTRA_SOCIAL_FIELDS,
    MAIN_SOCIAL_FIELDS,
    SOCIAL_MEDIA_FIELDS,
)
from vellum.contexts.templating.logger import _log_debug
from vellum.contexts.templating.marker_patterns import ElementPatterns
from vellum.contexts.templating.scopes import is_blank, is_sequence
from vellum.utils.text_processing import collapse_blank_lines


def cleanup_template(text: str) -> str:
    """Collapse 2+ consecutive blank lines to one and strip trailing whitespace."""
    return collapse_blank_lines(text)


@dataclass(frozen=True)
class SectionCleanupRule:
    """Remove the first <!-- {marker} section --> region when condition is empty."""

    marker: str
    condition: str
    check_array: bool = False

    def should_remove(self, data: Mapping) -> bool:
        value = data.get(self.condition)
        if self.check_array:
            return not is_sequence(value) or len(value) == 0
        return not value


@dataclass(frozen=True)
class ElementCleanupRule:
    """Remove the first element matching pattern when condition is falsy."""

    condition: str
    pattern: str

    def should_remove(self, data: Mapping) -> bool:
        return not data.get(self.condition)


SECTION_CLEANUP_RULES: List[SectionCleanupRule] = [
    SectionCleanupRule("About Me", "aboutMeText"),
    SectionCleanupRule("Services", "service"),
    SectionCleanupRule("Reviews", "reviews", check_array=True),
    SectionCleanupRule("Buttons", "customButtons", check_array=True),
    SectionCleanupRule("Logo", "businessLogoUrl"),
]

ELEMENT_CLEANUP_RULES: List[ElementCleanupRule] = [
    ElementCleanupRule("phone", ElementPatterns.PARAGRAPH_WITH_CLASS.format(css_class="phone")),
    ElementCleanupRule("website", ElementPatterns.PARAGRAPH_WITH_CLASS.format(css_class="website")),
    ElementCleanupRule("address", ElementPatterns.PARAGRAPH_WITH_CLASS.format(css_class="address")),
    ElementCleanupRule("title", ElementPatterns.TITLE_PARAGRAPH),
]

# Social link placeholder left unfilled in an href, e.g. href="{instagramLink}"
UNFILLED_SOCIAL_HREF = r"<a[^>]*href=[\"']\{{{field}\}}[\"'][^>]*>.*?</a>"


def _remove_named_section(text: str, marker: str) -> str:
    name = re.escape(marker)
    pattern = rf"<!-- {name} section -->.*?<!-- End{name} section -->"
    return re.sub(pattern, "", text, count=1, flags=re.DOTALL)


def cleanup_content_template_advanced(template: str, data: Mapping) -> str:
    """
    Remove empty sections, contact elements and social links by rule table.

    Unlike the main pipeline this pass resolves no placeholders and works on
    exact section marker names (e.g. "<!-- About Me section -->").

    Args:
        template: Markup, typically already filled
        data: Form data the markup was filled from

    Returns:
        Cleaned markup with blank lines collapsed
    """
    data = data or {}
    result = template

    for rule in SECTION_CLEANUP_RULES:
        if rule.should_remove(data):
            _log_debug(f"Cleanup: removing '{rule.marker}' section ({rule.condition} empty)")
            result = _remove_named_section(result, rule.marker)

    for rule in ELEMENT_CLEANUP_RULES:
        if rule.should_remove(data):
            result = re.sub(rule.pattern, "", result, count=1, flags=re.DOTALL)

    for field, element_id in SOCIAL_MEDIA_FIELDS:
        if is_blank(data.get(field)):
            pattern = "|".join(
                [
                    UNFILLED_SOCIAL_HREF.format(field=re.escape(field)),
                    ElementPatterns.ANY_WITH_ID.format(id=re.escape(element_id)),
                ]
            )
            result = re.sub(pattern, "", result, flags=re.DOTALL)

    if not any(not is_blank(data.get(field)) for field in EXTRA_SOCIAL_FIELDS):
        result = _remove_named_section(result, "Socials Extra")

    if not any(not is_blank(data.get(field)) for field in MAIN_SOCIAL_FIELDS):
        result = _remove_named_section(result, "Socials")

    return collapse_blank_lines(result)
