"""Discovery of sessions and talks from a conference index page.

The index lists session and talk entries as ``<li>`` elements tagged with a
``data-content-type`` marker. Talks are nested under their session in the
page, but the matchers return them as two flat lists, so the entries are
merged back into document order by their offset in the page and walked in
that order to rebuild the session/talk tree.
"""

import logging
from dataclasses import dataclass

from gc_podcast.infrastructure.api.content_api import normalize_url
from gc_podcast.infrastructure.parsing.extractors import (
    extract_slug_from_url,
    extract_speaker_name_from_element,
)
from gc_podcast.infrastructure.parsing.html_parser import (
    ParsedElement,
    extract_title,
    find_by_data_content_type,
    find_hrefs,
)
from gc_podcast.models import DEFAULT_SPEAKER_NAME, Session, Speaker, Talk

# Configure logger
logger = logging.getLogger(__name__)

SESSION_CONTENT_TYPE = "general-conference-session"
TALK_CONTENT_TYPE = "general-conference-talk"


class IndexItemType:
    """Constants for index entry types."""

    SESSION = "session"
    TALK = "talk"


@dataclass
class IndexItem:
    """A session or talk entry located in the index page."""

    item_type: str
    position: int
    element: ParsedElement


def collect_index_items(html: str) -> list[IndexItem]:
    """Find all session and talk entries and sort them into document order."""
    items = [
        IndexItem(IndexItemType.SESSION, element.position, element)
        for element in find_by_data_content_type(html, SESSION_CONTENT_TYPE)
    ]
    items.extend(
        IndexItem(IndexItemType.TALK, element.position, element)
        for element in find_by_data_content_type(html, TALK_CONTENT_TYPE)
    )
    items.sort(key=lambda item: item.position)
    return items


def build_session(element: ParsedElement, order: int, lang: str) -> Session:
    """Build a session from its index entry."""
    title = extract_title(element) or f"Session {order}"
    hrefs = find_hrefs(element.content, "session")
    link = hrefs[0] if hrefs else ""

    return Session(
        name=title,
        slug=extract_slug_from_url(link) or f"session-{order}",
        order=order,
        url=normalize_url(link, lang) if link else "",
        talks=[],
    )


def build_talk(element: ParsedElement, order: int, lang: str) -> Talk:
    """Build a talk from its index entry.

    The speaker role is left unset here; the index page does not show
    callings reliably, so enrichment resolves it from the talk page.
    """
    title = extract_title(element) or f"Talk {order}"
    hrefs = find_hrefs(element.content)
    link = next((href for href in hrefs if "session" not in href), None)
    if link is None:
        link = hrefs[0] if hrefs else ""

    speaker_name = extract_speaker_name_from_element(element.content)

    return Talk(
        title=title,
        slug=extract_slug_from_url(link) or f"talk-{order}",
        order=order,
        url=normalize_url(link, lang) if link else "",
        speaker=Speaker(name=speaker_name or DEFAULT_SPEAKER_NAME, role_tag=None),
    )


def extract_sessions_from_index(html: str, lang: str) -> list[Session]:
    """Rebuild the ordered session/talk tree of a conference index page.

    Each session entry opens a new session and restarts talk numbering; each
    talk entry joins the session opened most recently before it. Talk
    entries that appear before any session are dropped.

    Args:
        html: Raw index page markup
        lang: Site language code used to complete relative links

    Returns
    -------
        Sessions in document order, each with its talks, without audio
    """
    sessions: list[Session] = []
    current_session: Session | None = None
    session_order = 0
    talk_order = 0
    dropped_talks = 0

    for item in collect_index_items(html):
        if item.item_type == IndexItemType.SESSION:
            if current_session is not None:
                sessions.append(current_session)

            session_order += 1
            talk_order = 0
            current_session = build_session(item.element, session_order, lang)
        elif current_session is not None:
            talk_order += 1
            current_session.talks.append(build_talk(item.element, talk_order, lang))
        else:
            dropped_talks += 1

    if current_session is not None:
        sessions.append(current_session)

    if dropped_talks:
        logger.debug(f"Dropped {dropped_talks} talk entries found before any session")

    logger.info(
        f"Discovered {len(sessions)} sessions and "
        f"{sum(len(s.talks) for s in sessions)} talks"
    )
    return sessions
