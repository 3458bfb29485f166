"""
Shared test fixtures for the mal_api test suite.

This module provides:
- Sample MyAnimeList XML payloads (list reads, searches)
- Credentials and a client wired to a mocked requests session
"""

from unittest.mock import MagicMock

import pytest

from mal_api.credentials import Credentials
from mal_api.mal_client import MALClient


ANIME_LIST_XML = """<?xml version="1.0" encoding="UTF-8"?>
<myanimelist>
    <myinfo>
        <user_id>1234</user_id>
        <user_name>taiga</user_name>
        <user_watching>1</user_watching>
        <user_completed>1</user_completed>
        <user_onhold>0</user_onhold>
        <user_dropped>0</user_dropped>
        <user_plantowatch>0</user_plantowatch>
        <user_days_spent_watching>12.34</user_days_spent_watching>
    </myinfo>
    <anime>
        <series_animedb_id>4224</series_animedb_id>
        <series_title>Toradora!</series_title>
        <series_synonyms>; Tiger X Dragon</series_synonyms>
        <series_type>1</series_type>
        <series_episodes>25</series_episodes>
        <series_status>2</series_status>
        <series_start>2008-10-02</series_start>
        <series_end>2009-03-26</series_end>
        <series_image>https://myanimelist.cdn-dena.com/images/anime/13/22128.jpg</series_image>
        <my_id>0</my_id>
        <my_watched_episodes>12</my_watched_episodes>
        <my_start_date>2017-01-05</my_start_date>
        <my_finish_date>0000-00-00</my_finish_date>
        <my_score>0</my_score>
        <my_status>1</my_status>
        <my_rewatching></my_rewatching>
        <my_rewatching_ep>0</my_rewatching_ep>
        <my_last_updated>1500000000</my_last_updated>
        <my_tags>romance, comedy</my_tags>
    </anime>
    <anime>
        <series_animedb_id>1</series_animedb_id>
        <series_title>Cowboy Bebop</series_title>
        <series_synonyms></series_synonyms>
        <series_type>1</series_type>
        <series_episodes>26</series_episodes>
        <series_status>2</series_status>
        <series_start>1998-04-03</series_start>
        <series_end>1999-04-24</series_end>
        <series_image>https://myanimelist.cdn-dena.com/images/anime/4/19644.jpg</series_image>
        <my_watched_episodes>26</my_watched_episodes>
        <my_start_date>0000-00-00</my_start_date>
        <my_finish_date>2016-12-01</my_finish_date>
        <my_score>9</my_score>
        <my_status>2</my_status>
        <my_rewatching>1</my_rewatching>
        <my_last_updated>1480000000</my_last_updated>
        <my_tags></my_tags>
    </anime>
</myanimelist>
"""

MANGA_LIST_XML = """<?xml version="1.0" encoding="UTF-8"?>
<myanimelist>
    <myinfo>
        <user_id>1234</user_id>
        <user_name>taiga</user_name>
        <user_reading>1</user_reading>
        <user_completed>0</user_completed>
        <user_onhold>0</user_onhold>
        <user_dropped>0</user_dropped>
        <user_plantoread>0</user_plantoread>
        <user_days_spent_watching>3.5</user_days_spent_watching>
    </myinfo>
    <manga>
        <series_mangadb_id>2</series_mangadb_id>
        <series_title>Berserk</series_title>
        <series_synonyms>Berserk: The Prototype</series_synonyms>
        <series_type>1</series_type>
        <series_chapters>0</series_chapters>
        <series_volumes>0</series_volumes>
        <series_status>1</series_status>
        <series_start>1989-08-25</series_start>
        <series_end>0000-00-00</series_end>
        <series_image>https://myanimelist.cdn-dena.com/images/manga/1/157931.jpg</series_image>
        <my_read_chapters>100</my_read_chapters>
        <my_read_volumes>10</my_read_volumes>
        <my_start_date>0000-00-00</my_start_date>
        <my_finish_date>0000-00-00</my_finish_date>
        <my_score>10</my_score>
        <my_status>1</my_status>
        <my_rereadingg>0</my_rereadingg>
        <my_reread_chapters>0</my_reread_chapters>
        <my_last_updated>1500000000</my_last_updated>
        <my_tags></my_tags>
    </manga>
</myanimelist>
"""

ANIME_SEARCH_XML = """<?xml version="1.0" encoding="utf-8"?>
<anime>
  <entry>
    <id>4224</id>
    <title>Toradora!</title>
    <english>Toradora!</english>
    <synonyms>Tiger X Dragon</synonyms>
    <episodes>25</episodes>
    <score>8.39</score>
    <type>TV</type>
    <status>Finished Airing</status>
    <start_date>2008-10-02</start_date>
    <end_date>2009-03-26</end_date>
    <synopsis>Ryuuji Takasu is a gentle high school student.</synopsis>
    <image>https://myanimelist.cdn-dena.com/images/anime/13/22128.jpg</image>
  </entry>
  <entry>
    <id>11553</id>
    <title>Toradora!: SOS! Kuishinbou Banbanzai</title>
    <english></english>
    <synonyms></synonyms>
    <episodes>4</episodes>
    <type>Special</type>
    <status>Finished Airing</status>
    <start_date>2009-01-01</start_date>
    <end_date>0000-00-00</end_date>
    <image>https://myanimelist.cdn-dena.com/images/anime/10/30051.jpg</image>
  </entry>
</anime>
"""

MANGA_SEARCH_XML = """<?xml version="1.0" encoding="utf-8"?>
<manga>
  <entry>
    <id>2</id>
    <title>Berserk</title>
    <synonyms>Berserk: The Prototype</synonyms>
    <chapters>0</chapters>
    <volumes>0</volumes>
    <type>Manga</type>
    <status>Publishing</status>
    <start_date>1989-08-25</start_date>
    <end_date>0000-00-00</end_date>
    <image>https://myanimelist.cdn-dena.com/images/manga/1/157931.jpg</image>
  </entry>
</manga>
"""


def make_response(status_code=200, text=""):
    """Build a mocked requests.Response."""
    response = MagicMock()
    response.status_code = status_code
    response.text = text
    return response


@pytest.fixture
def credentials():
    """Credentials with a password, so every endpoint can be called."""
    return Credentials("taiga", "palmtop")


@pytest.fixture
def session():
    """Mocked requests session; set ``session.request.return_value`` per test."""
    mock_session = MagicMock()
    mock_session.request.return_value = make_response(200, "")
    return mock_session


@pytest.fixture
def client(credentials, session):
    """MAL client sending through the mocked session."""
    return MALClient(credentials, session=session)


@pytest.fixture
def anime_list_xml():
    return ANIME_LIST_XML


@pytest.fixture
def manga_list_xml():
    return MANGA_LIST_XML


@pytest.fixture
def anime_search_xml():
    return ANIME_SEARCH_XML


@pytest.fixture
def manga_search_xml():
    return MANGA_SEARCH_XML
