"""Decoding of MyAnimeList XML responses into typed models.

Unknown elements are ignored. Numeric elements that are absent or blank
decode to zero, and unset dates to None. Anything present but unreadable
raises :class:`DecodeError` naming the element.
"""

import logging
import xml.etree.ElementTree as ET
from datetime import datetime, timezone
from typing import Union

from pydantic import ValidationError as PydanticValidationError

from .constants import ListType
from .entries import AnimeEntry, ListEntries, MangaEntry
from .exceptions import DecodeError
from .models import (
    AiringStatus,
    AnimeInfo,
    AnimeType,
    AnimeUserInfo,
    MangaInfo,
    MangaType,
    MangaUserInfo,
    PublishingStatus,
    ReadStatus,
    WatchStatus,
)
from .values import AnimeValues, MangaValues
from .xml_utils import child_date, child_float, child_int, child_text, parse_xml, required_text, split_list

logger = logging.getLogger(__name__)


def _build(model_cls, **fields):
    """Construct a model, reporting rejected values as a DecodeError."""
    try:
        return model_cls(**fields)
    except PydanticValidationError as e:
        error = e.errors()[0]
        field = ".".join(str(part) for part in error["loc"]) or None
        raise DecodeError(field, error["msg"]) from e


def _required_int(elem: ET.Element, name: str) -> int:
    value = child_int(elem, name)
    if value <= 0:
        raise DecodeError(name, "missing required XML node")
    return value


def _coded(elem: ET.Element, name: str, enum_cls, required: bool = False):
    """Decode a numeric enum code; absent or zero means unknown."""
    code = child_int(elem, name)
    if code == 0 and not required:
        return None
    member = enum_cls.from_code(code)
    if member is None:
        raise DecodeError(name, f"{code} does not map to a known {enum_cls.__name__}")
    return member


def _labelled(elem: ET.Element, name: str, enum_cls):
    """Decode a textual enum label; absent or blank means unknown."""
    text = child_text(elem, name)
    if not text:
        return None
    member = enum_cls.from_label(text)
    if member is None:
        raise DecodeError(name, f"{text!r} does not map to a known {enum_cls.__name__}")
    return member


def _flag(elem: ET.Element, *names: str) -> bool:
    # The re-watching flag is sometimes blank; MAL also misspells the manga one.
    for name in names:
        text = child_text(elem, name)
        if text:
            return text == "1"
    return False


def _timestamp(elem: ET.Element, name: str) -> datetime:
    value = child_int(elem, name)
    try:
        return datetime.fromtimestamp(value, tz=timezone.utc)
    except (ValueError, OverflowError, OSError) as e:
        raise DecodeError(name, f"invalid timestamp {value}") from e


def _anime_search_result(elem: ET.Element) -> AnimeInfo:
    return _build(
        AnimeInfo,
        id=_required_int(elem, "id"),
        title=required_text(elem, "title"),
        synonyms=split_list(child_text(elem, "synonyms"), ";"),
        episodes=child_int(elem, "episodes"),
        series_type=_labelled(elem, "type", AnimeType),
        airing_status=_labelled(elem, "status", AiringStatus),
        start_date=child_date(elem, "start_date"),
        end_date=child_date(elem, "end_date"),
        image_url=child_text(elem, "image") or "",
    )


def _manga_search_result(elem: ET.Element) -> MangaInfo:
    return _build(
        MangaInfo,
        id=_required_int(elem, "id"),
        title=required_text(elem, "title"),
        synonyms=split_list(child_text(elem, "synonyms"), ";"),
        chapters=child_int(elem, "chapters"),
        volumes=child_int(elem, "volumes"),
        series_type=_labelled(elem, "type", MangaType),
        publishing_status=_labelled(elem, "status", PublishingStatus),
        start_date=child_date(elem, "start_date"),
        end_date=child_date(elem, "end_date"),
        image_url=child_text(elem, "image") or "",
    )


def decode_search(payload: str, list_type: ListType) -> list[Union[AnimeInfo, MangaInfo]]:
    """Decode a search response into series infos."""
    if not payload or not payload.strip():
        return []
    root = parse_xml(payload)
    parse = _anime_search_result if ListType(list_type) == ListType.ANIME else _manga_search_result
    results = [parse(elem) for elem in root.iter("entry")]
    logger.debug(f"Decoded {len(results)} {ListType(list_type).value} search results")
    return results


def _anime_user_info(elem: ET.Element) -> AnimeUserInfo:
    return AnimeUserInfo(
        user_id=child_int(elem, "user_id"),
        username=child_text(elem, "user_name") or "",
        watching=child_int(elem, "user_watching"),
        completed=child_int(elem, "user_completed"),
        on_hold=child_int(elem, "user_onhold"),
        dropped=child_int(elem, "user_dropped"),
        plan_to_watch=child_int(elem, "user_plantowatch"),
        days_spent_watching=child_float(elem, "user_days_spent_watching"),
    )


def _manga_user_info(elem: ET.Element) -> MangaUserInfo:
    return MangaUserInfo(
        user_id=child_int(elem, "user_id"),
        username=child_text(elem, "user_name") or "",
        reading=child_int(elem, "user_reading"),
        completed=child_int(elem, "user_completed"),
        on_hold=child_int(elem, "user_onhold"),
        dropped=child_int(elem, "user_dropped"),
        plan_to_read=child_int(elem, "user_plantoread"),
        days_spent_watching=child_float(elem, "user_days_spent_watching"),
    )


def _anime_entry(elem: ET.Element) -> AnimeEntry:
    info = _build(
        AnimeInfo,
        id=_required_int(elem, "series_animedb_id"),
        title=required_text(elem, "series_title"),
        synonyms=split_list(child_text(elem, "series_synonyms"), ";"),
        episodes=child_int(elem, "series_episodes"),
        series_type=_coded(elem, "series_type", AnimeType),
        airing_status=_coded(elem, "series_status", AiringStatus),
        start_date=child_date(elem, "series_start"),
        end_date=child_date(elem, "series_end"),
        image_url=child_text(elem, "series_image") or "",
    )
    values = AnimeValues(
        watched_episodes=child_int(elem, "my_watched_episodes"),
        status=_coded(elem, "my_status", WatchStatus, required=True),
        start_date=child_date(elem, "my_start_date"),
        finish_date=child_date(elem, "my_finish_date"),
        score=child_int(elem, "my_score"),
        rewatching=_flag(elem, "my_rewatching"),
        tags=split_list(child_text(elem, "my_tags"), ","),
    )
    return AnimeEntry(series_info=info, last_updated=_timestamp(elem, "my_last_updated"), values=values)


def _manga_entry(elem: ET.Element) -> MangaEntry:
    info = _build(
        MangaInfo,
        id=_required_int(elem, "series_mangadb_id"),
        title=required_text(elem, "series_title"),
        synonyms=split_list(child_text(elem, "series_synonyms"), ";"),
        chapters=child_int(elem, "series_chapters"),
        volumes=child_int(elem, "series_volumes"),
        series_type=_coded(elem, "series_type", MangaType),
        publishing_status=_coded(elem, "series_status", PublishingStatus),
        start_date=child_date(elem, "series_start"),
        end_date=child_date(elem, "series_end"),
        image_url=child_text(elem, "series_image") or "",
    )
    values = MangaValues(
        read_chapters=child_int(elem, "my_read_chapters"),
        read_volumes=child_int(elem, "my_read_volumes"),
        status=_coded(elem, "my_status", ReadStatus, required=True),
        score=child_int(elem, "my_score"),
        start_date=child_date(elem, "my_start_date"),
        finish_date=child_date(elem, "my_finish_date"),
        rereading=_flag(elem, "my_rereadingg", "my_rereading"),
        tags=split_list(child_text(elem, "my_tags"), ","),
    )
    return MangaEntry(series_info=info, last_updated=_timestamp(elem, "my_last_updated"), values=values)


def decode_list(payload: str, list_type: ListType) -> ListEntries:
    """Decode a list read into user statistics and entries."""
    if not payload or not payload.strip():
        raise DecodeError(None, "empty list response")
    root = parse_xml(payload)

    myinfo = root.find("myinfo")
    if myinfo is None:
        raise DecodeError("myinfo", "no user info found")

    if ListType(list_type) == ListType.ANIME:
        user_info = _anime_user_info(myinfo)
        entries = [_anime_entry(elem) for elem in root.findall("anime")]
    else:
        user_info = _manga_user_info(myinfo)
        entries = [_manga_entry(elem) for elem in root.findall("manga")]

    logger.debug(f"Decoded {len(entries)} {ListType(list_type).value} list entries")
    return ListEntries(user_info=user_info, entries=entries)


def decode_write_result(payload: str) -> str:
    """Return the result message of an add/update/delete call.

    MyAnimeList answers writes with a bare word such as ``Created``,
    ``Updated`` or ``Deleted``, sometimes wrapped in an XML element.
    """
    text = (payload or "").strip()
    if text.startswith("<"):
        root = parse_xml(text)
        text = "".join(root.itertext()).strip()
    return text
