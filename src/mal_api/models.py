"""Data models for series metadata and list statistics."""

from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class _CodedEnum(int, Enum):
    """Enum whose members carry MAL's numeric code and a display label."""

    def __new__(cls, code: int, label: str):
        member = int.__new__(cls, code)
        member._value_ = code
        member.label = label
        return member

    def __str__(self) -> str:
        return self.label

    @classmethod
    def from_code(cls, code: int):
        """Return the member for a numeric code, or None if unknown."""
        try:
            return cls(code)
        except ValueError:
            return None

    @classmethod
    def from_label(cls, label: str):
        """Return the member whose label matches case-insensitively, or None."""
        lowered = label.strip().lower()
        for member in cls:
            if member.label.lower() == lowered:
                return member
        return None


class WatchStatus(_CodedEnum):
    """Status of an anime on a user's list."""

    WATCHING = 1, "watching"
    COMPLETED = 2, "completed"
    ON_HOLD = 3, "on hold"
    DROPPED = 4, "dropped"
    PLAN_TO_WATCH = 6, "plan to watch"


class ReadStatus(_CodedEnum):
    """Status of a manga on a user's list."""

    READING = 1, "reading"
    COMPLETED = 2, "completed"
    ON_HOLD = 3, "on hold"
    DROPPED = 4, "dropped"
    PLAN_TO_READ = 6, "plan to read"


class AnimeType(_CodedEnum):
    TV = 1, "TV"
    OVA = 2, "OVA"
    MOVIE = 3, "Movie"
    SPECIAL = 4, "Special"
    ONA = 5, "ONA"
    MUSIC = 6, "Music"


class AiringStatus(_CodedEnum):
    AIRING = 1, "Currently Airing"
    FINISHED_AIRING = 2, "Finished Airing"
    NOT_YET_AIRED = 3, "Not yet aired"


class MangaType(_CodedEnum):
    MANGA = 1, "Manga"
    NOVEL = 2, "Novel"
    ONE_SHOT = 3, "One-shot"
    DOUJINSHI = 4, "Doujinshi"
    MANHWA = 5, "Manhwa"
    MANHUA = 6, "Manhua"
    OEL = 7, "OEL"


class PublishingStatus(_CodedEnum):
    PUBLISHING = 1, "Publishing"
    FINISHED = 2, "Finished"
    NOT_YET_PUBLISHED = 3, "Not yet published"


class SeriesInfo(BaseModel):
    """Catalog metadata shared by anime and manga.

    Instances are immutable and compare equal when their ids match.
    """

    model_config = ConfigDict(frozen=True)

    id: int = Field(gt=0)
    title: str
    synonyms: list[str] = Field(default_factory=list)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    image_url: str = ""

    def __eq__(self, other) -> bool:
        if not isinstance(other, SeriesInfo):
            return NotImplemented
        return type(self) is type(other) and self.id == other.id

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.id))


class AnimeInfo(SeriesInfo):
    """Basic information about an anime series."""

    episodes: int = Field(default=0, ge=0)
    series_type: Optional[AnimeType] = None
    airing_status: Optional[AiringStatus] = None


class MangaInfo(SeriesInfo):
    """Basic information about a manga series."""

    chapters: int = Field(default=0, ge=0)
    volumes: int = Field(default=0, ge=0)
    series_type: Optional[MangaType] = None
    publishing_status: Optional[PublishingStatus] = None


class AnimeUserInfo(BaseModel):
    """Statistics about a user's anime list."""

    user_id: int = 0
    username: str = ""
    watching: int = 0
    completed: int = 0
    on_hold: int = 0
    dropped: int = 0
    plan_to_watch: int = 0
    days_spent_watching: float = 0.0

    @property
    def total(self) -> int:
        return self.watching + self.completed + self.on_hold + self.dropped + self.plan_to_watch


class MangaUserInfo(BaseModel):
    """Statistics about a user's manga list."""

    user_id: int = 0
    username: str = ""
    reading: int = 0
    completed: int = 0
    on_hold: int = 0
    dropped: int = 0
    plan_to_read: int = 0
    days_spent_watching: float = 0.0

    @property
    def total(self) -> int:
        return self.reading + self.completed + self.on_hold + self.dropped + self.plan_to_read

