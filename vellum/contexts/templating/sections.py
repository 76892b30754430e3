"""
Section Pruning

Handles author-declared conditional regions:

    <!-- About Me section -->
    ...
    <!-- EndAbout Me section -->

Each section is either removed entirely (markers and body) or kept with only
its comment markers stripped. The decision comes from SECTION_RULES, a registry
of named rules matched by case-insensitive substring on the section name, in
registry order. Sections matching no rule fall back to the generic rule: remove
when any placeholder left in the body refers to a present-but-empty value.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from vellum.contexts.templating.defaults import SOCIAL_LINK_FIELDS
from vellum.contexts.templating.logger import _log_debug
from vellum.contexts.templating.marker_patterns import LoopPatterns, SectionPatterns
from vellum.contexts.templating.placeholders import PlaceholderResolver
from vellum.contexts.templating.scopes import is_blank, is_empty_value, lookup_social_value
from vellum.utils.text_processing import MarkerPair, find_marker_pairs, replace_marker_pairs

# decide(section_body, data) -> True to remove the section
RemovalDecision = Callable[[str, Mapping], bool]


@dataclass(frozen=True)
class SectionRule:
    """
    A named section-removal rule.

    Attributes:
        name: Rule identifier (used in logs)
        keywords: Lower-case substrings; the rule applies if any occurs in the
            lower-cased section name
        decide: Returns True when the section should be removed
    """

    name: str
    keywords: Tuple[str, ...]
    decide: RemovalDecision

    def matches(self, section_name: str) -> bool:
        lowered = section_name.lower()
        return any(keyword in lowered for keyword in self.keywords)


def _blank_field(field: str) -> RemovalDecision:
    return lambda body, data: is_blank(data.get(field))


def _falsy_field(field: str) -> RemovalDecision:
    # Missing, None, "" and empty lists all count as falsy
    return lambda body, data: not data.get(field)


def _never(body: str, data: Mapping) -> bool:
    return False


def _no_social_links(body: str, data: Mapping) -> bool:
    return not any(not is_blank(lookup_social_value(data, field)) for field in SOCIAL_LINK_FIELDS)


SECTION_RULES: List[SectionRule] = [
    SectionRule("about_me", ("about me",), _blank_field("aboutMeText")),
    SectionRule("logo", ("logo",), _falsy_field("businessLogo")),
    SectionRule("services", ("services",), _blank_field("service")),
    SectionRule("reviews", ("reviews",), _falsy_field("reviews")),
    SectionRule("buttons", ("buttons",), _falsy_field("customButtons")),
    # Contact fields are pruned one by one by the element pruner
    SectionRule("contact_info", ("contact info",), _never),
    SectionRule("socials", ("social",), _no_social_links),
]


def find_section_rule(section_name: str) -> Optional[SectionRule]:
    """First registered rule matching the section name, or None."""
    for rule in SECTION_RULES:
        if rule.matches(section_name):
            return rule
    return None


def has_empty_reference(body: str, data: Mapping, resolver: PlaceholderResolver) -> bool:
    """
    Generic removal rule.

    True when any placeholder remaining in body (other than {index}) names a key
    present in data whose value is None, "" or an empty list.
    """
    for key in resolver.find_tokens(body):
        if key == LoopPatterns.INDEX_KEY:
            continue
        if key in data and is_empty_value(data[key]):
            return True
    return False


def should_remove_section(
    section_name: str,
    body: str,
    data: Mapping,
    resolver: Optional[PlaceholderResolver] = None,
) -> bool:
    """
    Decide whether a named section is removed.

    Args:
        section_name: Name between the comment opener and the word "section"
        body: Markup between the section markers
        data: Global template data
        resolver: Resolver whose delimiters are used by the generic rule

    Returns:
        True to remove the section, False to keep its body
    """
    rule = find_section_rule(section_name)
    if rule is not None:
        remove = rule.decide(body, data)
        _log_debug(f"Section '{section_name}': rule '{rule.name}' -> {'remove' if remove else 'keep'}")
        return remove

    remove = has_empty_reference(body, data, resolver or PlaceholderResolver())
    _log_debug(f"Section '{section_name}': generic rule -> {'remove' if remove else 'keep'}")
    return remove


def prune_sections(
    text: str, data: Mapping, resolver: Optional[PlaceholderResolver] = None
) -> str:
    """
    Remove or unwrap every well-formed named section.

    Outer sections are decided first; the body of a kept section is pruned in
    turn, so nested sections inside a removed section disappear with it.

    Args:
        text: Markup after placeholder and layout processing
        data: Global template data
        resolver: Placeholder resolver (its delimiters drive the generic rule)

    Returns:
        Markup without section markers
    """
    resolver = resolver or PlaceholderResolver()
    pairs = find_marker_pairs(text, SectionPatterns.START, SectionPatterns.END)
    if not pairs:
        return text

    def prune(pair: MarkerPair) -> str:
        body = pair.inner(text)
        if should_remove_section(pair.name.strip(), body, data, resolver):
            return ""
        return prune_sections(body, data, resolver)

    return replace_marker_pairs(text, pairs, prune)
