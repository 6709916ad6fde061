"""Data models for the General Conference scraper.

This module contains data classes representing conferences, sessions, talks,
speakers and audio assets, together with the scraper configuration. The
``to_dict`` methods produce the JSON archive shape read by the feed renderer.
"""

from dataclasses import dataclass, field
from typing import Any, Literal

Language = Literal["eng", "spa", "por"]

SUPPORTED_LANGUAGES: tuple[str, ...] = ("eng", "spa", "por")

# Two-letter codes used in audio asset file names
LANG_AUDIO_MAP: dict[str, str] = {
    "eng": "en",
    "spa": "es",
    "por": "pt",
}

CONFERENCE_MONTHS: tuple[int, ...] = (4, 10)

MONTH_NAMES: dict[int, str] = {4: "April", 10: "October"}

FORMAT_VERSION = "1.0"

DEFAULT_SPEAKER_NAME = "Unknown Speaker"


class RoleTag:
    """Constants for speaker role tags."""

    FIRST_PRESIDENCY = "first-presidency"
    QUORUM_OF_THE_TWELVE = "quorum-of-the-twelve"


def _drop_none(data: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in data.items() if value is not None}


@dataclass
class AudioAsset:
    """Represents an MP3 recording of a session or talk."""

    url: str
    quality: str | None = None  # E.g., "128k"
    language: str | None = None  # Two-letter code, e.g., "en"
    duration_ms: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return _drop_none(
            {
                "url": self.url,
                "quality": self.quality,
                "language": self.language,
                "duration_ms": self.duration_ms,
            }
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AudioAsset":
        return cls(
            url=data["url"],
            quality=data.get("quality"),
            language=data.get("language"),
            duration_ms=data.get("duration_ms"),
        )


@dataclass
class Speaker:
    """Represents the speaker of a talk as shown on the talk page."""

    name: str
    role_tag: str | None = None
    calling: str | None = None
    bio_url: str | None = None

    def to_dict(self) -> dict[str, Any]:
        # role_tag is always present, null when unclassified
        data: dict[str, Any] = {"name": self.name, "role_tag": self.role_tag}
        data.update(_drop_none({"calling": self.calling, "bio_url": self.bio_url}))
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Speaker":
        return cls(
            name=data.get("name") or DEFAULT_SPEAKER_NAME,
            role_tag=data.get("role_tag"),
            calling=data.get("calling"),
            bio_url=data.get("bio_url"),
        )


@dataclass
class Talk:
    """Represents a single address within a session."""

    title: str
    slug: str
    order: int  # 1-based position within the session
    url: str
    speaker: Speaker
    audio: AudioAsset | None = None
    duration_ms: int | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "title": self.title,
            "slug": self.slug,
            "order": self.order,
            "url": self.url,
            "speaker": self.speaker.to_dict(),
        }
        if self.audio is not None:
            data["audio"] = self.audio.to_dict()
        if self.duration_ms is not None:
            data["duration_ms"] = self.duration_ms
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Talk":
        audio = data.get("audio")
        return cls(
            title=data["title"],
            slug=data["slug"],
            order=data["order"],
            url=data.get("url", ""),
            speaker=Speaker.from_dict(data.get("speaker") or {}),
            audio=AudioAsset.from_dict(audio) if audio else None,
            duration_ms=data.get("duration_ms"),
        )


@dataclass
class Session:
    """Represents a contiguous block of the conference broadcast."""

    name: str
    slug: str
    order: int  # 1-based position within the conference
    url: str
    audio: AudioAsset | None = None
    duration_ms: int | None = None
    talks: list[Talk] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "name": self.name,
            "slug": self.slug,
            "order": self.order,
            "url": self.url,
        }
        if self.audio is not None:
            data["audio"] = self.audio.to_dict()
        if self.duration_ms is not None:
            data["duration_ms"] = self.duration_ms
        data["talks"] = [talk.to_dict() for talk in self.talks]
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Session":
        audio = data.get("audio")
        return cls(
            name=data["name"],
            slug=data["slug"],
            order=data["order"],
            url=data.get("url", ""),
            audio=AudioAsset.from_dict(audio) if audio else None,
            duration_ms=data.get("duration_ms"),
            talks=[Talk.from_dict(talk) for talk in data.get("talks", [])],
        )


@dataclass
class Conference:
    """Represents one General Conference in one language."""

    year: int
    month: int  # 4 or 10
    name: str
    url: str
    language: str
    sessions: list[Session] = field(default_factory=list)
    ordinal: str | None = None  # E.g., "195th Semiannual"

    @property
    def talk_count(self) -> int:
        return sum(len(session.talks) for session in self.sessions)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "year": self.year,
            "month": self.month,
            "name": self.name,
        }
        if self.ordinal is not None:
            data["ordinal"] = self.ordinal
        data.update(
            {
                "url": self.url,
                "language": self.language,
                "sessions": [session.to_dict() for session in self.sessions],
            }
        )
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Conference":
        return cls(
            year=data["year"],
            month=data["month"],
            name=data["name"],
            url=data.get("url", ""),
            language=data["language"],
            sessions=[Session.from_dict(s) for s in data.get("sessions", [])],
            ordinal=data.get("ordinal"),
        )


@dataclass
class ConferenceOutput:
    """Envelope written to each conference archive file."""

    scraped_at: str  # ISO-8601 timestamp
    conference: Conference
    version: str = FORMAT_VERSION

    def to_dict(self) -> dict[str, Any]:
        return {
            "scraped_at": self.scraped_at,
            "version": self.version,
            "conference": self.conference.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ConferenceOutput":
        return cls(
            scraped_at=data.get("scraped_at", ""),
            version=data.get("version", FORMAT_VERSION),
            conference=Conference.from_dict(data["conference"]),
        )


@dataclass
class ScraperConfig:
    """Options controlling a conference scrape."""

    language: str = "eng"
    include_session_audio: bool = True
    include_talk_audio: bool = True
    rate_limit_ms: int = 500  # Minimum delay between network requests
    max_concurrent: int = 2  # Advisory cap for callers; the scraper is sequential
    cache_dir: str | None = ".cache"
    use_cache: bool = True
    timeout: int = 30  # Request timeout in seconds
    max_retries: int = 3  # Attempts for the index page on connection errors
    show_progress: bool = False

    def __post_init__(self) -> None:
        if self.language not in SUPPORTED_LANGUAGES:
            raise ValueError(
                f"Unsupported language {self.language!r}; "
                f"expected one of {', '.join(SUPPORTED_LANGUAGES)}"
            )
        if self.rate_limit_ms < 0:
            raise ValueError("rate_limit_ms must not be negative")

    @property
    def caching_enabled(self) -> bool:
        return self.use_cache and bool(self.cache_dir)
