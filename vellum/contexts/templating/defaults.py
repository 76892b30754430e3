"""
Default values for the templating pipeline.

Provides shared constants used by:
- value_renderer.py (special-case keys, glyphs, asset fallbacks)
- sections.py / elements.py / cleanup.py (social and contact field tables)
- processor.py (default processor options)
"""

from typing import Any, Dict, List, Tuple

# Processor options used when none are given (see ProcessorOptions)
DEFAULT_OPTIONS: Dict[str, Any] = {
    "remove_empty_sections": True,
    "process_loops": True,
    "process_placeholders": True,
    "delimiters": ("{", "}"),
}

# Upper bound on repeated loop expansion passes
MAX_NESTED_LOOP_PASSES = 5

# Special-case placeholder keys
CONTACT_KEY = "addContact"
RATING_KEY = "stars"

VCARD_PREFIX = "data:text/vcard;charset=utf-8,"

RATING_MAX = 5
FILLED_GLYPH = "★"
EMPTY_GLYPH = "☆"

# Rendered for image/URL keys whose value cannot be used as a URL
PLACEHOLDER_IMAGE = "/images/placeholder.jpg"

# Nested namespace holding social links keyed without the "Link" suffix
SOCIAL_MEDIA_NAMESPACE = "socialMedia"

# (data field, element id) pairs for social network links
SOCIAL_MEDIA_FIELDS: List[Tuple[str, str]] = [
    ("instagramLink", "instagram"),
    ("tikTokLink", "tiktok"),
    ("facebookLink", "facebook"),
    ("linkedInLink", "linkedin"),
    ("dribbbleLink", "dribbble"),
    ("youtubeLink", "youtube"),
    ("slackLink", "slack"),
    ("vimeoLink", "vimeo"),
    ("emailLink", "email"),
    ("callLink", "call"),
    ("textLink", "sms"),
]

SOCIAL_LINK_FIELDS: List[str] = [field for field, _ in SOCIAL_MEDIA_FIELDS]

# Social groups used by the rule-table cleanup
MAIN_SOCIAL_FIELDS = ["instagramLink", "tikTokLink", "facebookLink", "linkedInLink", "dribbbleLink"]
EXTRA_SOCIAL_FIELDS = ["youtubeLink", "slackLink", "vimeoLink"]

# Contact paragraphs removed by CSS class when their field is blank
CONTACT_CLASS_FIELDS: List[str] = ["phone", "website"]
ADDRESS_FIELD = "address"
ADDRESS_REQUIRED_SUBFIELD = "streetAddress1"
TITLE_FIELD = "title"

# Data-driven layout directives
LAYOUT_ORDER_KEY = "layoutOrder"
SWAPS_KEY = "swaps"
