"""Unit tests for response decoding."""

from datetime import date, datetime, timezone

import pytest
from mal_api.constants import ListType
from mal_api.decoder import decode_list, decode_search, decode_write_result
from mal_api.entries import AnimeEntry, MangaEntry
from mal_api.exceptions import DecodeError
from mal_api.models import (
    AiringStatus,
    AnimeType,
    AnimeUserInfo,
    MangaType,
    MangaUserInfo,
    PublishingStatus,
    ReadStatus,
    WatchStatus,
)
from mal_api.request_builder import RequestBuilder


def test_decode_anime_list(anime_list_xml):
    """Test decoding a full anime list read."""
    result = decode_list(anime_list_xml, ListType.ANIME)

    assert isinstance(result.user_info, AnimeUserInfo)
    assert result.user_info.user_id == 1234
    assert result.user_info.username == "taiga"
    assert result.user_info.days_spent_watching == pytest.approx(12.34)
    assert len(result) == 2

    toradora = result.find(4224)
    assert isinstance(toradora, AnimeEntry)
    assert toradora.series_info.title == "Toradora!"
    assert toradora.series_info.synonyms == ["Tiger X Dragon"]
    assert toradora.series_info.episodes == 25
    assert toradora.series_info.series_type == AnimeType.TV
    assert toradora.series_info.airing_status == AiringStatus.FINISHED_AIRING
    assert toradora.series_info.start_date == date(2008, 10, 2)
    assert toradora.last_updated == datetime.fromtimestamp(1500000000, tz=timezone.utc)

    assert toradora.values.watched_episodes == 12
    assert toradora.values.status == WatchStatus.WATCHING
    assert toradora.values.start_date == date(2017, 1, 5)
    assert toradora.values.finish_date is None
    assert toradora.values.rewatching is False
    assert toradora.values.tags == ["romance", "comedy"]
    assert not toradora.values.is_dirty

    bebop = result.find(1)
    assert bebop.values.score == 9
    assert bebop.values.status == WatchStatus.COMPLETED
    assert bebop.values.rewatching is True
    assert bebop.values.tags == []


def test_decode_manga_list(manga_list_xml):
    """Test decoding a manga list read, including MAL's misspelled rereading tag."""
    result = decode_list(manga_list_xml, ListType.MANGA)

    assert isinstance(result.user_info, MangaUserInfo)
    assert result.user_info.reading == 1

    berserk = result.find(2)
    assert isinstance(berserk, MangaEntry)
    assert berserk.series_info.series_type == MangaType.MANGA
    assert berserk.series_info.publishing_status == PublishingStatus.PUBLISHING
    assert berserk.series_info.end_date is None
    assert berserk.values.read_chapters == 100
    assert berserk.values.read_volumes == 10
    assert berserk.values.score == 10
    assert berserk.values.status == ReadStatus.READING
    assert berserk.values.rereading is False


def test_missing_numeric_fields_default_to_zero(anime_list_xml):
    """Test absent numeric elements decode to zero without failing."""
    payload = anime_list_xml.replace("<my_score>0</my_score>", "").replace(
        "<series_episodes>25</series_episodes>", ""
    )

    toradora = decode_list(payload, ListType.ANIME).find(4224)

    assert toradora.values.score == 0
    assert toradora.series_info.episodes == 0


def test_unknown_fields_are_ignored(anime_list_xml):
    """Test extra elements do not break decoding."""
    payload = anime_list_xml.replace(
        "<my_score>9</my_score>", "<my_score>9</my_score><my_storage>3</my_storage>"
    )

    assert decode_list(payload, ListType.ANIME).find(1).values.score == 9


def test_unmodified_entry_builds_empty_update(anime_list_xml, credentials):
    """Test re-encoding an untouched decoded entry yields no changed fields."""
    entry = decode_list(anime_list_xml, ListType.ANIME).find(4224)

    request = RequestBuilder(credentials).build_update_entry(ListType.ANIME, entry.id, entry.values)

    assert entry.values.changes() == {}
    assert "<entry />" in request.entry_xml


def test_malformed_numeric_field_names_field(anime_list_xml):
    """Test an unreadable number raises DecodeError naming the element."""
    payload = anime_list_xml.replace("<my_score>9</my_score>", "<my_score>nine</my_score>")

    with pytest.raises(DecodeError) as exc_info:
        decode_list(payload, ListType.ANIME)

    assert exc_info.value.field == "my_score"


@pytest.mark.parametrize("timestamp", ["99999999999999", "-99999999999999"])
def test_out_of_range_timestamp_names_field(anime_list_xml, timestamp):
    """Test a last-updated time outside the datetime range raises DecodeError."""
    payload = anime_list_xml.replace("1500000000", timestamp, 1)

    with pytest.raises(DecodeError) as exc_info:
        decode_list(payload, ListType.ANIME)

    assert exc_info.value.field == "my_last_updated"


@pytest.mark.parametrize(
    "flags",
    [
        "<my_rereading>1</my_rereading>",
        "<my_rereadingg></my_rereadingg><my_rereading>1</my_rereading>",
        "<my_rereadingg>1</my_rereadingg><my_rereading>0</my_rereading>",
    ],
)
def test_rereading_flag_spellings(manga_list_xml, flags):
    """Test both spellings of the rereading tag, preferring a non-blank misspelled one."""
    payload = manga_list_xml.replace("<my_rereadingg>0</my_rereadingg>", flags)

    berserk = decode_list(payload, ListType.MANGA).find(2)

    assert berserk.values.rereading is True


@pytest.mark.parametrize("value", ["2010-00-00", "2010-04-00", "0000-04-12"])
def test_partial_dates_are_unknown(anime_list_xml, value):
    """Test dates MAL only knows in part decode to None."""
    payload = anime_list_xml.replace(
        "<my_start_date>2017-01-05</my_start_date>", f"<my_start_date>{value}</my_start_date>"
    )

    assert decode_list(payload, ListType.ANIME).find(4224).values.start_date is None


@pytest.mark.parametrize("value", ["abc", "2017-13-45", "05/01/2017"])
def test_malformed_date_names_field(anime_list_xml, value):
    """Test an unreadable date raises DecodeError naming the element."""
    payload = anime_list_xml.replace(
        "<my_start_date>2017-01-05</my_start_date>", f"<my_start_date>{value}</my_start_date>"
    )

    with pytest.raises(DecodeError) as exc_info:
        decode_list(payload, ListType.ANIME)

    assert exc_info.value.field == "my_start_date"


def test_unknown_status_code(anime_list_xml):
    """Test an unknown watch status code is reported."""
    payload = anime_list_xml.replace("<my_status>2</my_status>", "<my_status>5</my_status>")

    with pytest.raises(DecodeError) as exc_info:
        decode_list(payload, ListType.ANIME)

    assert exc_info.value.field == "my_status"


def test_missing_id_is_an_error(anime_list_xml):
    """Test an entry without a series id cannot be decoded."""
    payload = anime_list_xml.replace("<series_animedb_id>1</series_animedb_id>", "")

    with pytest.raises(DecodeError) as exc_info:
        decode_list(payload, ListType.ANIME)

    assert exc_info.value.field == "series_animedb_id"


def test_missing_user_info():
    """Test a list without <myinfo> is rejected."""
    with pytest.raises(DecodeError) as exc_info:
        decode_list("<myanimelist></myanimelist>", ListType.ANIME)

    assert exc_info.value.field == "myinfo"


@pytest.mark.parametrize("payload", ["<myanimelist><myinfo>", "not xml at all", ""])
def test_malformed_payload(payload):
    """Test malformed or empty list payloads raise DecodeError."""
    with pytest.raises(DecodeError):
        decode_list(payload, ListType.ANIME)


def test_decode_anime_search(anime_search_xml):
    """Test decoding anime search results."""
    results = decode_search(anime_search_xml, ListType.ANIME)

    assert [r.id for r in results] == [4224, 11553]
    toradora = results[0]
    assert toradora.synonyms == ["Tiger X Dragon"]
    assert toradora.series_type == AnimeType.TV
    assert toradora.airing_status == AiringStatus.FINISHED_AIRING
    assert toradora.end_date == date(2009, 3, 26)
    assert results[1].series_type == AnimeType.SPECIAL
    assert results[1].synonyms == []


def test_decode_manga_search(manga_search_xml):
    """Test decoding manga search results."""
    results = decode_search(manga_search_xml, ListType.MANGA)

    assert len(results) == 1
    assert results[0].title == "Berserk"
    assert results[0].publishing_status == PublishingStatus.PUBLISHING
    assert results[0].chapters == 0


def test_decode_empty_search():
    """Test an empty search body means no results."""
    assert decode_search("", ListType.ANIME) == []
    assert decode_search("<anime></anime>", ListType.ANIME) == []


def test_unknown_search_type(anime_search_xml):
    """Test an unknown series type label is reported."""
    payload = anime_search_xml.replace("<type>TV</type>", "<type>Hologram</type>")

    with pytest.raises(DecodeError) as exc_info:
        decode_search(payload, ListType.ANIME)

    assert exc_info.value.field == "type"


@pytest.mark.parametrize(
    "payload,expected",
    [("Created", "Created"), ("Updated\n", "Updated"), ("<result>Deleted</result>", "Deleted"), ("", "")],
)
def test_decode_write_result(payload, expected):
    """Test write results are returned as plain text."""
    assert decode_write_result(payload) == expected
