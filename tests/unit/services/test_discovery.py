"""Unit tests for session and talk discovery from index pages."""

import logging

import pytest

from gc_podcast.infrastructure.api.content_api import BASE_URL
from gc_podcast.infrastructure.parsing.html_parser import ParsedElement
from gc_podcast.services.discovery import (
    IndexItemType,
    build_session,
    build_talk,
    collect_index_items,
    extract_sessions_from_index,
)

PREFIX = "/study/general-conference/2025/10"


def session_entry(slug: str, title: str) -> str:
    """Build a session entry as it appears on the index page."""
    return (
        f'<li data-content-type="general-conference-session">'
        f'<a href="{PREFIX}/{slug}?lang=eng"><p class="title">{title}</p></a></li>'
    )


def talk_entry(slug: str, title: str, speaker: str) -> str:
    """Build a talk entry as it appears on the index page."""
    return (
        f'<li data-content-type="general-conference-talk">'
        f'<a href="{PREFIX}/{slug}?lang=eng">'
        f'<p class="title">{title}</p><p class="primaryMeta">{speaker}</p></a></li>'
    )


@pytest.fixture
def index_html() -> str:
    """Return a flat index page with two sessions and three talks."""
    return (
        "<html><body><h1>October 2025 General Conference</h1><ul>"
        + session_entry("saturday-morning-session", "Saturday Morning Session")
        + talk_entry("11nelson", "Welcome", "Russell M. Nelson")
        + talk_entry("12stevenson", "Be Still", "Gary E. Stevenson")
        + session_entry("saturday-afternoon-session", "Saturday Afternoon Session")
        + talk_entry("21holland", "Hope", "Jeffrey R. Holland")
        + "</ul></body></html>"
    )


class TestCollectIndexItems:
    """Tests for merging session and talk entries."""

    def test_items_are_in_document_order(self, index_html: str) -> None:
        """Test that entries from both lists are merged by page offset."""
        items = collect_index_items(index_html)

        assert [item.item_type for item in items] == [
            IndexItemType.SESSION,
            IndexItemType.TALK,
            IndexItemType.TALK,
            IndexItemType.SESSION,
            IndexItemType.TALK,
        ]
        positions = [item.position for item in items]
        assert positions == sorted(positions)


class TestExtractSessionsFromIndex:
    """Tests for rebuilding the session/talk tree."""

    def test_groups_talks_under_preceding_session(self, index_html: str) -> None:
        """Test the basic session and talk grouping."""
        sessions = extract_sessions_from_index(index_html, "eng")

        assert [s.name for s in sessions] == [
            "Saturday Morning Session",
            "Saturday Afternoon Session",
        ]
        assert [s.order for s in sessions] == [1, 2]
        assert [t.title for t in sessions[0].talks] == ["Welcome", "Be Still"]
        assert [t.title for t in sessions[1].talks] == ["Hope"]

    def test_talk_order_restarts_per_session(self, index_html: str) -> None:
        """Test that talk numbering starts at 1 in every session."""
        sessions = extract_sessions_from_index(index_html, "eng")

        assert [t.order for t in sessions[0].talks] == [1, 2]
        assert [t.order for t in sessions[1].talks] == [1]

    def test_slugs_urls_and_speakers(self, index_html: str) -> None:
        """Test the fields read from each entry."""
        sessions = extract_sessions_from_index(index_html, "eng")
        session = sessions[0]
        talk = session.talks[1]

        assert session.slug == "saturday-morning-session"
        assert session.url == f"{BASE_URL}{PREFIX}/saturday-morning-session?lang=eng"
        assert session.audio is None
        assert talk.slug == "12stevenson"
        assert talk.url == f"{BASE_URL}{PREFIX}/12stevenson?lang=eng"
        assert talk.speaker.name == "Gary E. Stevenson"
        assert talk.speaker.role_tag is None
        assert talk.audio is None

    def test_nested_markup(self) -> None:
        """Test an index where talks are nested inside their session entry."""
        html = (
            '<ul><li data-content-type="general-conference-session">'
            f'<a href="{PREFIX}/sunday-morning-session?lang=eng">'
            '<p class="title">Sunday Morning Session</p></a><ul>'
            + talk_entry("41oaks", "Faith", "Dallin H. Oaks")
            + talk_entry("42eyring", "Love", "Henry B. Eyring")
            + "</ul></li></ul>"
        )

        sessions = extract_sessions_from_index(html, "eng")

        assert len(sessions) == 1
        assert sessions[0].name == "Sunday Morning Session"
        assert sessions[0].slug == "sunday-morning-session"
        assert [t.slug for t in sessions[0].talks] == ["41oaks", "42eyring"]

    def test_talks_before_first_session_are_dropped(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Test that orphan talk entries do not create a session."""
        html = (
            talk_entry("00orphan", "Orphan", "Nobody")
            + session_entry("saturday-morning-session", "Saturday Morning Session")
            + talk_entry("11nelson", "Welcome", "Russell M. Nelson")
        )

        with caplog.at_level(logging.DEBUG, logger="gc_podcast.services.discovery"):
            sessions = extract_sessions_from_index(html, "eng")

        assert len(sessions) == 1
        assert [t.slug for t in sessions[0].talks] == ["11nelson"]
        assert "Dropped 1 talk entries" in caplog.text

    def test_empty_page(self) -> None:
        """Test that a page without entries yields no sessions."""
        assert extract_sessions_from_index("<html><body></body></html>", "eng") == []
        assert extract_sessions_from_index("", "eng") == []

    def test_session_without_talks(self) -> None:
        """Test that a session with no talks is kept."""
        html = session_entry("priesthood-session", "Priesthood Session")

        sessions = extract_sessions_from_index(html, "eng")

        assert len(sessions) == 1
        assert sessions[0].talks == []


class TestBuildEntries:
    """Tests for building single sessions and talks."""

    def test_session_without_link(self) -> None:
        """Test the defaults for a session entry without a link."""
        element = ParsedElement(tag="li", content="<span></span>")

        session = build_session(element, 3, "eng")

        assert session.name == "Session 3"
        assert session.slug == "session-3"
        assert session.url == ""

    def test_talk_prefers_non_session_link(self) -> None:
        """Test that a talk entry linking its session uses the talk link."""
        element = ParsedElement(
            tag="li",
            content=(
                f'<a href="{PREFIX}/saturday-morning-session?lang=eng">back</a>'
                f'<a href="{PREFIX}/13bednar?lang=eng"><p class="title">Talk</p></a>'
            ),
        )

        talk = build_talk(element, 1, "eng")

        assert talk.slug == "13bednar"
        assert talk.url == f"{BASE_URL}{PREFIX}/13bednar?lang=eng"

    def test_talk_without_link_or_speaker(self) -> None:
        """Test the defaults for a bare talk entry."""
        element = ParsedElement(tag="li", content='<p class="title">Untitled</p>')

        talk = build_talk(element, 2, "spa")

        assert talk.title == "Untitled"
        assert talk.slug == "talk-2"
        assert talk.url == ""
        assert talk.speaker.name == "Unknown Speaker"

    def test_relative_link_gets_language(self) -> None:
        """Test that links without a language are completed."""
        element = ParsedElement(
            tag="li", content=f'<a href="{PREFIX}/14kearon"><p class="title">T</p></a>'
        )

        talk = build_talk(element, 1, "por")

        assert talk.url == f"{BASE_URL}{PREFIX}/14kearon?lang=por"
