"""List entries: a user's relationship to one series."""

from datetime import datetime, timezone
from typing import ClassVar, Generic, Iterator, Optional, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field

from .constants import ListType
from .models import AnimeInfo, AnimeUserInfo, MangaInfo, MangaUserInfo
from .values import AnimeValues, MangaValues


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class _ListEntry(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    last_updated: datetime = Field(default_factory=_utcnow)

    @property
    def id(self) -> int:
        return self.series_info.id

    def touch(self):
        """Mark the entry as just written to MyAnimeList."""
        self.last_updated = _utcnow()

    def __eq__(self, other) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return self.series_info == other.series_info


class AnimeEntry(_ListEntry):
    """An anime on a user's list."""

    LIST_TYPE: ClassVar[ListType] = ListType.ANIME

    series_info: AnimeInfo
    values: AnimeValues = Field(default_factory=AnimeValues)

    @classmethod
    def new(cls, info: AnimeInfo) -> "AnimeEntry":
        """Create an entry for a series that is not on the list yet."""
        return cls(series_info=info)


class MangaEntry(_ListEntry):
    """A manga on a user's list."""

    LIST_TYPE: ClassVar[ListType] = ListType.MANGA

    series_info: MangaInfo
    values: MangaValues = Field(default_factory=MangaValues)

    @classmethod
    def new(cls, info: MangaInfo) -> "MangaEntry":
        return cls(series_info=info)


EntryT = TypeVar("EntryT", AnimeEntry, MangaEntry)


class ListEntries(BaseModel, Generic[EntryT]):
    """Result of reading a user's list: statistics plus every entry."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    user_info: Union[AnimeUserInfo, MangaUserInfo]
    entries: list[EntryT] = Field(default_factory=list)

    def __iter__(self) -> Iterator[EntryT]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def find(self, series_id: int) -> Optional[EntryT]:
        """Return the entry for a series id, or None if it is not on the list."""
        for entry in self.entries:
            if entry.id == series_id:
                return entry
        return None
