"""Lightweight regex-based HTML pattern matching.

The conference pages change shape between years and redesigns, so the
scraper matches the few markers it needs with regular expressions instead
of building a full document tree. Every function here tolerates malformed
markup: no match yields an empty result rather than an exception.

Known limitation: closing tags are found by the next literal ``</tag>``
after the opening tag, not by tracking nesting. An element that contains a
nested element with the same tag name is cut short at the nested element's
closing tag.
"""

import re
from dataclasses import dataclass, field

_SELECTOR = re.compile(r"^(\w+)?(?:\[([^=\]]+)(?:=[\"']?([^\"'\]]+)[\"']?)?\])?$")
_ATTRIBUTE = re.compile(r"([\w:-]+)\s*=\s*(?:\"([^\"]*)\"|'([^']*)')")
_HREF = re.compile(r"href\s*=\s*[\"']([^\"']+)[\"']", re.IGNORECASE)
_SCRIPT = re.compile(r"<script[^>]*>[\s\S]*?</script>", re.IGNORECASE)
_STYLE = re.compile(r"<style[^>]*>[\s\S]*?</style>", re.IGNORECASE)
_TAG = re.compile(r"<[^>]+>")
_WHITESPACE = re.compile(r"\s+")
_TITLE_PARAGRAPH = re.compile(
    r"<p[^>]*class\s*=\s*[\"'][^\"']*title[^\"']*[\"'][^>]*>([^<]+)", re.IGNORECASE
)
_SENTENCE_END = re.compile(r"[.!?\n]")

# Tag names end at whitespace, a slash or the end of the tag
_TAG_NAME_END = r"(?=[\s/>])"


@dataclass
class ParsedElement:
    """An element matched in raw markup."""

    tag: str
    attrs: dict[str, str] = field(default_factory=dict)
    content: str = ""  # Inner markup between the opening and closing tag
    outer_html: str = ""  # Full matched text, tags included
    position: int = 0  # Offset of the opening tag in the searched markup


def _escape(text: str) -> str:
    return re.escape(text)


def _build_pattern(
    tag_name: str | None, attr_name: str | None, attr_value: str | None
) -> re.Pattern[str] | None:
    if tag_name and attr_name and attr_value:
        return re.compile(
            rf"<({_escape(tag_name)}){_TAG_NAME_END}[^>]*{_escape(attr_name)}\s*=\s*"
            rf"[\"']{_escape(attr_value)}[\"'][^>]*>",
            re.IGNORECASE,
        )
    if tag_name and attr_name:
        return re.compile(
            rf"<({_escape(tag_name)}){_TAG_NAME_END}[^>]*{_escape(attr_name)}\s*=[^>]*>",
            re.IGNORECASE,
        )
    if attr_name and attr_value:
        return re.compile(
            rf"<(\w+){_TAG_NAME_END}[^>]*{_escape(attr_name)}\s*=\s*"
            rf"[\"']{_escape(attr_value)}[\"'][^>]*>",
            re.IGNORECASE,
        )
    if tag_name:
        return re.compile(rf"<({_escape(tag_name)}){_TAG_NAME_END}[^>]*>", re.IGNORECASE)
    return None


def parse_attributes(tag_string: str) -> dict[str, str]:
    """Parse the attributes of an opening tag into a mapping.

    Later duplicates of an attribute overwrite earlier ones.
    """
    attrs: dict[str, str] = {}
    for match in _ATTRIBUTE.finditer(tag_string):
        value = match.group(2) if match.group(2) is not None else match.group(3)
        attrs[match.group(1)] = value
    return attrs


def find_all(html: str, selector: str) -> list[ParsedElement]:
    """Find all elements matching a simple selector.

    Supported selectors: ``tag``, ``tag[attr]``, ``tag[attr="value"]`` and
    ``[attr="value"]``. Anything else matches nothing.

    Args:
        html: Markup to search
        selector: The selector to match

    Returns
    -------
        Matching elements in document order
    """
    results: list[ParsedElement] = []
    if not html or not selector:
        return results

    selector_match = _SELECTOR.match(selector.strip())
    if not selector_match:
        return results

    tag_name, attr_name, attr_value = selector_match.groups()
    pattern = _build_pattern(tag_name, attr_name, attr_value)
    if pattern is None:
        return results

    for match in pattern.finditer(html):
        start_tag = match.group(0)
        tag = match.group(1).lower()
        attrs = parse_attributes(start_tag)

        # Not nesting-aware: the first closing tag after the opening tag wins
        content_start = match.end()
        close = re.compile(rf"</{_escape(tag)}\s*>", re.IGNORECASE).search(
            html, content_start
        )

        if close is None:
            results.append(
                ParsedElement(
                    tag=tag,
                    attrs=attrs,
                    content="",
                    outer_html=start_tag,
                    position=match.start(),
                )
            )
        else:
            results.append(
                ParsedElement(
                    tag=tag,
                    attrs=attrs,
                    content=html[content_start : close.start()],
                    outer_html=html[match.start() : close.end()],
                    position=match.start(),
                )
            )

    return results


def find(html: str, selector: str) -> ParsedElement | None:
    """Find the first element matching a selector."""
    results = find_all(html, selector)
    return results[0] if results else None


def get_attr(tag_string: str, attr_name: str) -> str | None:
    """Extract an attribute value from a tag string."""
    pattern = re.compile(
        rf"(?<![\w-]){_escape(attr_name)}\s*=\s*[\"']([^\"']+)[\"']", re.IGNORECASE
    )
    match = pattern.search(tag_string or "")
    return match.group(1) if match else None


def get_text(html: str) -> str:
    """Strip markup down to whitespace-collapsed plain text.

    Script and style bodies are removed entirely before the tags are stripped.
    """
    if not html:
        return ""
    text = _SCRIPT.sub("", html)
    text = _STYLE.sub("", text)
    text = _TAG.sub(" ", text)
    return _WHITESPACE.sub(" ", text).strip()


def text_runs(html: str) -> list[str]:
    """Split markup into its non-empty text runs, in document order."""
    if not html:
        return []
    text = _STYLE.sub("", _SCRIPT.sub("", html))
    runs = (_WHITESPACE.sub(" ", run).strip() for run in _TAG.split(text))
    return [run for run in runs if run]


def find_text_by_class(html: str, class_name: str) -> str:
    """Return the first text run of the first element whose class contains a fragment.

    Args:
        html: Markup to search
        class_name: Fragment of the ``class`` attribute to look for

    Returns
    -------
        The stripped text directly after the opening tag, or "" if no element matches
    """
    if not html or not class_name:
        return ""
    pattern = re.compile(
        rf"<[^>]+class\s*=\s*[\"'][^\"']*{_escape(class_name)}[^\"']*[\"'][^>]*>([^<]*)",
        re.IGNORECASE,
    )
    match = pattern.search(html)
    return match.group(1).strip() if match else ""


def find_hrefs(html: str, pattern: str | re.Pattern[str] | None = None) -> list[str]:
    """Extract ``href`` values, optionally filtered.

    Args:
        html: Markup to search
        pattern: Substring or compiled regular expression the href must match

    Returns
    -------
        Matching href values in document order
    """
    hrefs: list[str] = []
    for match in _HREF.finditer(html or ""):
        href = match.group(1)
        if pattern is None:
            hrefs.append(href)
        elif isinstance(pattern, str):
            if pattern in href:
                hrefs.append(href)
        elif pattern.search(href):
            hrefs.append(href)
    return hrefs


def find_by_data_content_type(html: str, content_type: str) -> list[ParsedElement]:
    """Find list items tagged with a ``data-content-type`` marker."""
    return find_all(html, f'li[data-content-type="{content_type}"]')


def extract_title(element: ParsedElement) -> str:
    """Extract a display title from an element.

    Tries an element with a ``title`` class, then a ``<p>`` whose class
    mentions a title, then the first sentence of the element's leading text.
    """
    title = find_text_by_class(element.content, "title")
    if title:
        return title

    paragraph = _TITLE_PARAGRAPH.search(element.content)
    if paragraph:
        return paragraph.group(1).strip()

    first_text = get_text(element.content[:200])
    return _SENTENCE_END.split(first_text)[0].strip()


def extract_json_value(text: str, key: str) -> str | None:
    """Extract a string value stored under a key in JSON-like text.

    Accepts ``"key": "value"``, ``'key': 'value'`` and ``key: "value"``.
    """
    if not text:
        return None
    escaped = _escape(key)
    patterns = [
        rf"\"{escaped}\"\s*:\s*\"([^\"]+)\"",
        rf"'{escaped}'\s*:\s*'([^']+)'",
        rf"(?<![\w\"']){escaped}\s*:\s*\"([^\"]+)\"",
    ]
    for pattern in patterns:
        match = re.search(pattern, text, re.IGNORECASE)
        if match:
            return match.group(1)
    return None


def extract_json_number(text: str, key: str) -> int | None:
    """Extract an integer value stored under a key in JSON-like text."""
    if not text:
        return None
    match = re.search(rf"\"{_escape(key)}\"\s*:\s*(\d+)", text, re.IGNORECASE)
    return int(match.group(1)) if match else None
