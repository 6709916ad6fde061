"""Domain extractors for conference pages and content API payloads.

These functions recover audio links, durations, speaker details, slugs and
conference names from fetched payloads using the pattern matchers in
``html_parser``. Missing markers produce None or defaults, never exceptions,
with the single exception of ``unpack_api_payload`` which rejects payloads
that do not have the content API's shape.
"""

import re
from typing import Any

from gc_podcast.infrastructure.api.content_api import ASSETS_HOST, construct_bio_url
from gc_podcast.infrastructure.exceptions.fetch_exceptions import ResponseFormatError
from gc_podcast.infrastructure.parsing.html_parser import (
    extract_json_value,
    find_text_by_class,
    text_runs,
)
from gc_podcast.infrastructure.parsing.roles import classify_role
from gc_podcast.models import (
    DEFAULT_SPEAKER_NAME,
    LANG_AUDIO_MAP,
    MONTH_NAMES,
    AudioAsset,
    Speaker,
)

AUDIO_QUALITY = "128k"

# Longest plausible speaker name picked up by the positional heuristic
MAX_SPEAKER_NAME_LENGTH = 50

_DURATION_PATTERNS = [
    re.compile(r"\"duration\"\s*:\s*(\d+)"),
    re.compile(r"\"durationMs\"\s*:\s*(\d+)"),
    re.compile(r"data-duration\s*=\s*[\"'](\d+)[\"']"),
]

_API_AUTHOR_NAME = re.compile(
    r"<p[^>]*class\s*=\s*[\"'][^\"']*author-name[^\"']*[\"'][^>]*>([^<]+)", re.IGNORECASE
)
_API_AUTHOR_ROLE = re.compile(
    r"<p[^>]*class\s*=\s*[\"'][^\"']*author-role[^\"']*[\"'][^>]*>([^<]+)", re.IGNORECASE
)
_BY_PREFIX = re.compile(r"^By\s+", re.IGNORECASE)

_HTML_NAME_CLASSES = ("author-name", "byline", "speaker")
_HTML_ROLE_CLASSES = ("author-role", "role")

_H1 = re.compile(r"<h1[^>]*>([^<]+)<", re.IGNORECASE)
_TITLE_TAG = re.compile(r"<title[^>]*>([^<]+)<", re.IGNORECASE)
_TITLE_SUFFIX = re.compile(r"\s*[-|].*$")


def find_mp3_url(html: str, audio_lang: str) -> str | None:
    """Find the most specific MP3 URL in a page.

    Patterns are tried from most to least specific and the first one that
    matches wins:

    1. asset host URL tagged with the 128k quality and the language code
    2. any asset host MP3 URL
    3. the ``src`` of a ``<source>`` tag pointing to an MP3
    4. any http(s) URL ending in ``.mp3``

    Args:
        html: Page markup
        audio_lang: Two-letter audio language code (e.g., "en")

    Returns
    -------
        The MP3 URL, or None if the page links no audio
    """
    if not html:
        return None

    host = re.escape(ASSETS_HOST)
    patterns = [
        re.compile(
            rf"https://{host}/[a-z0-9]+-{AUDIO_QUALITY}-{re.escape(audio_lang)}\.mp3",
            re.IGNORECASE,
        ),
        re.compile(rf"https://{host}/[a-z0-9-]+\.mp3", re.IGNORECASE),
        re.compile(r"source[^>]*src\s*=\s*[\"']([^\"']+\.mp3)[\"']", re.IGNORECASE),
        re.compile(r"https?://[^\s\"'<>]+\.mp3", re.IGNORECASE),
    ]

    for pattern in patterns:
        match = pattern.search(html)
        if match:
            return match.group(1) if pattern.groups else match.group(0)

    return None


def extract_duration(html: str) -> int | None:
    """Extract a duration in milliseconds from embedded duration markers."""
    if not html:
        return None
    for pattern in _DURATION_PATTERNS:
        match = pattern.search(html)
        if match:
            return int(match.group(1))
    return None


def extract_slug_from_url(url: str) -> str:
    """Return the last non-empty path segment of a URL, query string removed."""
    if not url:
        return ""
    clean_url = url.split("?")[0]
    parts = [part for part in clean_url.split("/") if part]
    return parts[-1] if parts else ""


def extract_speaker_name_from_element(content: str) -> str:
    """Best-effort speaker name from an index page talk entry.

    Looks for "author" and "speaker" classes first, then falls back to the
    second text run of the entry (the title usually comes first). Candidates
    mentioning "Session" are rejected since they label the session block.

    Returns
    -------
        The speaker name, or "" if nothing plausible was found
    """
    for class_name in ("author", "speaker"):
        name = find_text_by_class(content, class_name)
        if name and "Session" not in name:
            return name

    runs = text_runs(content)
    if len(runs) >= 2:
        candidate = runs[1]
        if "Session" not in candidate and len(candidate) <= MAX_SPEAKER_NAME_LENGTH:
            return candidate

    return ""


def extract_conference_name(html: str, year: int, month: int) -> str:
    """Read a conference's display name from its index page.

    Uses the first ``<h1>``, then the ``<title>`` with any site suffix
    removed, then a synthesized "{Month} {Year} General Conference".
    """
    h1_match = _H1.search(html or "")
    if h1_match and h1_match.group(1).strip():
        return h1_match.group(1).strip()

    title_match = _TITLE_TAG.search(html or "")
    if title_match:
        title = _TITLE_SUFFIX.sub("", title_match.group(1)).strip()
        if title:
            return title

    return f"{MONTH_NAMES.get(month, str(month))} {year} General Conference"


def _build_speaker(name: str, calling: str, lang: str) -> Speaker:
    return Speaker(
        name=name or DEFAULT_SPEAKER_NAME,
        role_tag=classify_role(calling),
        calling=calling or None,
        bio_url=construct_bio_url(name, lang) if name else None,
    )


def unpack_api_payload(payload: Any) -> tuple[dict[str, Any], str]:
    """Validate a content API payload and return its meta block and body.

    Raises
    ------
        ResponseFormatError: If the payload lacks the meta or content blocks
    """
    if not isinstance(payload, dict):
        raise ResponseFormatError(f"Expected a JSON object, got {type(payload).__name__}")

    meta = payload.get("meta")
    content = payload.get("content")
    if not isinstance(meta, dict) or not isinstance(content, dict):
        raise ResponseFormatError("Content API payload is missing meta or content")

    body = content.get("body")
    if not isinstance(body, str):
        raise ResponseFormatError("Content API payload has no HTML body")

    return meta, body


def extract_audio_from_api(payload: Any, lang: str) -> AudioAsset | None:
    """Extract the primary audio asset from a content API payload.

    The audio entry is the ``meta.audio`` item whose variant is "audio";
    its duration comes from markers in the HTML body.

    Raises
    ------
        ResponseFormatError: If the payload does not have the API's shape
    """
    meta, body = unpack_api_payload(payload)

    entries = meta.get("audio") or []
    if not isinstance(entries, list):
        return None

    entry = next(
        (
            item
            for item in entries
            if isinstance(item, dict) and item.get("variant") == "audio"
        ),
        None,
    )
    if entry is None or not entry.get("mediaUrl"):
        return None

    return AudioAsset(
        url=entry["mediaUrl"],
        quality=AUDIO_QUALITY,
        language=LANG_AUDIO_MAP.get(lang),
        duration_ms=extract_duration(body),
    )


def extract_speaker_from_api(payload: Any, lang: str) -> Speaker:
    """Extract speaker details from a content API payload.

    The name comes from the ``author-name`` paragraph only; ``meta.title``
    holds the page's own title and is never taken as a speaker.

    Raises
    ------
        ResponseFormatError: If the payload does not have the API's shape
    """
    _, body = unpack_api_payload(payload)

    name = ""
    name_match = _API_AUTHOR_NAME.search(body)
    if name_match:
        name = _BY_PREFIX.sub("", name_match.group(1).strip())

    calling = ""
    role_match = _API_AUTHOR_ROLE.search(body)
    if role_match:
        calling = role_match.group(1).strip()

    return _build_speaker(name, calling, lang)


def extract_audio_from_html(html: str, lang: str) -> AudioAsset | None:
    """Extract the audio asset linked from a rendered page."""
    audio_lang = LANG_AUDIO_MAP.get(lang, "en")
    mp3_url = find_mp3_url(html, audio_lang)
    if not mp3_url:
        return None

    return AudioAsset(
        url=mp3_url,
        quality=AUDIO_QUALITY,
        language=audio_lang,
        duration_ms=extract_duration(html),
    )


def extract_speaker_from_html(html: str, lang: str) -> Speaker:
    """Extract speaker details from a rendered page with broad patterns."""
    name = ""
    for class_name in _HTML_NAME_CLASSES:
        name = find_text_by_class(html, class_name)
        if name:
            break

    calling = ""
    for class_name in _HTML_ROLE_CLASSES:
        calling = find_text_by_class(html, class_name)
        if calling:
            break

    if not name:
        name = (
            extract_json_value(html, "authorName")
            or extract_json_value(html, "author")
            or ""
        )

    if not calling:
        calling = (
            extract_json_value(html, "authorRole")
            or extract_json_value(html, "role")
            or ""
        )

    name = _BY_PREFIX.sub("", name)
    return _build_speaker(name, calling, lang)
