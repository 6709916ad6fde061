"""URL construction for the conference site and its content API.

The site serves every study page twice: as rendered HTML under ``/study/...``
and as structured JSON from the content API, which takes the same path as a
``uri`` query parameter.
"""

import re
from urllib.parse import parse_qs, urlencode, urlparse

BASE_URL = "https://www.churchofjesuschrist.org"
API_BASE = f"{BASE_URL}/study/api/v3/language-pages/type/content"
ASSETS_HOST = "assets.churchofjesuschrist.org"

_STUDY_PATH = re.compile(r"/study(/.+)")


def conference_index_url(year: int, month: int, lang: str) -> str:
    """Build the index page URL of a conference.

    Args:
        year: Conference year
        month: Conference month (4 or 10)
        lang: Site language code (e.g., "eng")

    Returns
    -------
        The conference index URL
    """
    return f"{BASE_URL}/study/general-conference/{year}/{month:02d}?lang={lang}"


def to_api_url(page_url: str, default_lang: str) -> str | None:
    """Map a study page URL to its content API URL.

    ``/study/general-conference/2025/10/12stevenson?lang=eng`` maps to
    ``{API_BASE}?lang=eng&uri=/general-conference/2025/10/12stevenson``.

    Args:
        page_url: Absolute URL of a study page
        default_lang: Language to use when the page URL carries none

    Returns
    -------
        The API URL, or None if the URL is not a study page
    """
    parsed = urlparse(page_url)
    match = _STUDY_PATH.match(parsed.path)
    if not match:
        return None

    lang = parse_qs(parsed.query).get("lang", [default_lang])[0] or default_lang
    return f"{API_BASE}?{urlencode({'lang': lang, 'uri': match.group(1)}, safe='/')}"


def normalize_url(url: str, lang: str) -> str:
    """Make a site link absolute and make sure it carries a language.

    Args:
        url: Relative or absolute link
        lang: Site language code to add when missing

    Returns
    -------
        The absolute URL with a ``lang`` parameter
    """
    full_url = f"{BASE_URL}{url}" if url.startswith("/") else url

    if "lang=" not in full_url:
        separator = "&" if "?" in full_url else "?"
        full_url = f"{full_url}{separator}lang={lang}"

    return full_url


def construct_bio_url(name: str, lang: str) -> str:
    """Build a speaker's biography URL from a display name.

    "Jeffrey R. Holland" becomes ``{BASE_URL}/learn/jeffrey-r-holland?lang=eng``.
    """
    slug = name.lower().replace(".", "")
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"[^a-z0-9-]", "", slug)
    return f"{BASE_URL}/learn/{slug}?lang={lang}"
