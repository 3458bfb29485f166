"""Read, add, update and delete entries on a user's anime or manga list.

Each operation makes at most one request and never retries. When a write
fails, the entry and its staged values are left exactly as they were, so
the same call can be repeated.

Example::

    client = MALClient(Credentials("username", "password"))
    anime_list = client.anime_list()

    toradora = anime_list.read().find(4224)
    toradora.values.set_watched_episodes(25).set_score(10).set_status(WatchStatus.COMPLETED)
    anime_list.update(toradora)
"""

import logging
from typing import Generic, Optional

from .constants import ListType
from .decoder import decode_list, decode_write_result
from .entries import AnimeEntry, EntryT, ListEntries, MangaEntry
from .mal_client import MALClient
from .values import AnimeValues, EntryValues, MangaValues

logger = logging.getLogger(__name__)


class ListHandle(Generic[EntryT]):
    """Operations on one of the user's lists."""

    LIST_TYPE: ListType
    ENTRY_CLASS: type
    VALUES_CLASS: type

    def __init__(self, client: MALClient):
        self.client = client

    def __repr__(self) -> str:
        return f"{type(self).__name__}(username={self.client.username!r})"

    @property
    def _label(self) -> str:
        return self.LIST_TYPE.value

    def _check_entry(self, entry) -> None:
        if not isinstance(entry, self.ENTRY_CLASS):
            raise TypeError(f"expected {self.ENTRY_CLASS.__name__}, got {type(entry).__name__}")

    def _check_values(self, values) -> None:
        if not isinstance(values, self.VALUES_CLASS):
            raise TypeError(f"expected {self.VALUES_CLASS.__name__}, got {type(values).__name__}")

    def read(self, username: Optional[str] = None) -> ListEntries[EntryT]:
        """Fetch and decode every entry on a user's list.

        Defaults to the list of the account the client was created for.
        """
        request = self.client.requests.build_read_list(self.LIST_TYPE, username)
        response = self.client.send(request, self.client.SERVICE_NAME)
        entries = decode_list(response.text, self.LIST_TYPE)
        logger.info(f"Fetched {len(entries)} {self._label} entries from MyAnimeList")
        return entries

    def add_id(self, series_id: int, values: EntryValues) -> str:
        """Add a series to the list with the staged values.

        An entry without staged values is still added, with MyAnimeList's
        defaults. Returns the result message sent back by MyAnimeList.
        """
        self._check_values(values)
        request = self.client.requests.build_add_entry(self.LIST_TYPE, series_id, values)
        response = self.client.send(request, self.client.SERVICE_NAME)
        result = decode_write_result(response.text)
        values.commit()
        logger.info(f"Added {self._label} {series_id} to list: {result}")
        return result

    def add(self, entry: EntryT) -> str:
        self._check_entry(entry)
        result = self.add_id(entry.id, entry.values)
        entry.touch()
        return result

    def update_id(self, series_id: int, values: EntryValues) -> Optional[str]:
        """Send the staged values of an entry.

        Nothing is sent when no field is staged, and None is returned.
        """
        self._check_values(values)
        if not values.is_dirty:
            logger.debug(f"No staged changes for {self._label} {series_id}, skipping update")
            return None

        request = self.client.requests.build_update_entry(self.LIST_TYPE, series_id, values)
        response = self.client.send(request, self.client.SERVICE_NAME)
        result = decode_write_result(response.text)
        changed = sorted(values.changes())
        values.commit()
        logger.info(f"Updated {self._label} {series_id} ({', '.join(changed)}): {result}")
        return result

    def update(self, entry: EntryT) -> Optional[str]:
        self._check_entry(entry)
        result = self.update_id(entry.id, entry.values)
        if result is not None:
            entry.touch()
        return result

    def delete_id(self, series_id: int) -> str:
        """Remove a series from the list by its id."""
        request = self.client.requests.build_delete_entry(self.LIST_TYPE, series_id)
        response = self.client.send(request, self.client.SERVICE_NAME)
        result = decode_write_result(response.text)
        logger.info(f"Deleted {self._label} {series_id} from list: {result}")
        return result

    def delete(self, entry: EntryT) -> str:
        self._check_entry(entry)
        return self.delete_id(entry.id)


class AnimeList(ListHandle[AnimeEntry]):
    """The user's anime list."""

    LIST_TYPE = ListType.ANIME
    ENTRY_CLASS = AnimeEntry
    VALUES_CLASS = AnimeValues


class MangaList(ListHandle[MangaEntry]):
    """The user's manga list."""

    LIST_TYPE = ListType.MANGA
    ENTRY_CLASS = MangaEntry
    VALUES_CLASS = MangaValues
