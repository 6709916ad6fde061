"""Text extraction for conference pages.

This package provides the regex-based HTML pattern matchers, the domain
extractors built on them and the speaker role classifier.
"""

from gc_podcast.infrastructure.parsing.html_parser import (
    ParsedElement,
    extract_json_number,
    extract_json_value,
    extract_title,
    find,
    find_all,
    find_by_data_content_type,
    find_hrefs,
    find_text_by_class,
    get_attr,
    get_text,
)
from gc_podcast.infrastructure.parsing.roles import classify_role

__all__ = [
    "ParsedElement",
    "classify_role",
    "extract_json_number",
    "extract_json_value",
    "extract_title",
    "find",
    "find_all",
    "find_by_data_content_type",
    "find_hrefs",
    "find_text_by_class",
    "get_attr",
    "get_text",
]
