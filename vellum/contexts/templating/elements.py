"""
Conditional Element Pruning

Removes individual markup fragments whose backing data is blank, independent
of the section machinery:

- social network links, by element id (e.g. <a id="instagram" ...>)
- contact paragraphs, by CSS class (phone, website, address)
- the <p id="title"> paragraph
"""

import re
from collections.abc import Mapping

from vellum.contexts.templating.defaults import (
    ADDRESS_FIELD,
    ADDRESS_REQUIRED_SUBFIELD,
    CONTACT_CLASS_FIELDS,
    SOCIAL_MEDIA_FIELDS,
    TITLE_FIELD,
)
from vellum.contexts.templating.logger import _log_debug
from vellum.contexts.templating.marker_patterns import ElementPatterns
from vellum.contexts.templating.scopes import is_blank, lookup_social_value


def remove_elements_with_id(text: str, element_id: str) -> str:
    """
    Remove anchors, then any other element, carrying id="element_id".

    Matches are non-greedy up to the first closing tag and may span lines.
    """
    escaped = re.escape(element_id)
    for template in (ElementPatterns.ANCHOR_WITH_ID, ElementPatterns.ANY_WITH_ID):
        text = re.sub(template.format(id=escaped), "", text, flags=re.DOTALL)
    return text


def remove_paragraphs_with_class(text: str, css_class: str) -> str:
    """Remove single-line <p> elements whose class attribute contains css_class."""
    pattern = ElementPatterns.PARAGRAPH_WITH_CLASS.format(css_class=re.escape(css_class))
    return re.sub(pattern, "", text)


def _address_is_blank(address) -> bool:
    if not address:
        return True
    return isinstance(address, Mapping) and not address.get(ADDRESS_REQUIRED_SUBFIELD)


def prune_elements(text: str, data: Mapping) -> str:
    """
    Remove social links and contact fields whose data is blank.

    Social fields are resolved directly or through the "socialMedia" namespace.
    Contact and title paragraphs are checked against the top-level data only;
    an address counts as present only when it is a non-empty string or a
    mapping with a street address.

    Args:
        text: Markup after placeholder resolution
        data: Global template data

    Returns:
        Markup without the blank fields' elements
    """
    result = text

    for field, element_id in SOCIAL_MEDIA_FIELDS:
        if is_blank(lookup_social_value(data, field)):
            pruned = remove_elements_with_id(result, element_id)
            if pruned != result:
                _log_debug(f"Removed '{element_id}' element(s): {field} is blank")
            result = pruned

    for field in CONTACT_CLASS_FIELDS:
        if is_blank(data.get(field)):
            result = remove_paragraphs_with_class(result, field)

    if _address_is_blank(data.get(ADDRESS_FIELD)):
        result = remove_paragraphs_with_class(result, ADDRESS_FIELD)

    if is_blank(data.get(TITLE_FIELD)):
        result = re.sub(ElementPatterns.TITLE_PARAGRAPH, "", result)

    return result
