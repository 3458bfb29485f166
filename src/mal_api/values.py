"""Staged list-entry values.

A values object holds the authoritative state of a list entry as last known
from MyAnimeList, plus a record of changes staged by the caller. Only staged
fields are serialized into an add/update request; everything else is left
for the server to keep as it is. Changes are committed once MyAnimeList has
accepted them, and stay staged if the request fails.
"""

import logging
import xml.etree.ElementTree as ET
from datetime import date
from enum import Enum
from typing import Any, Callable, NamedTuple, Optional

from .constants import SCORE_MAX, SCORE_MIN
from .exceptions import ValidationError
from .models import ReadStatus, WatchStatus
from .xml_utils import date_to_str

logger = logging.getLogger(__name__)


class FieldChange(NamedTuple):
    """A staged change of one field."""

    old: Any
    new: Any


def _encode_int(value: int) -> str:
    return str(int(value))


def _encode_bool(value: bool) -> str:
    return "1" if value else "0"


def _encode_tags(value: list[str]) -> str:
    return ",".join(value)


def _validate_count(field: str, value) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(field, f"expected an integer, got {value!r}")
    if value < 0:
        raise ValidationError(field, f"must be >= 0, got {value}")
    return value


def _validate_score(value) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError("score", f"expected an integer, got {value!r}")
    if not SCORE_MIN <= value <= SCORE_MAX:
        raise ValidationError("score", f"must be between {SCORE_MIN} and {SCORE_MAX}, got {value}")
    return value


def _validate_date(field: str, value) -> Optional[date]:
    if value is not None and not isinstance(value, date):
        raise ValidationError(field, f"expected a date or None, got {value!r}")
    return value


def _validate_status(status_cls, value, kind: str):
    # Members of another status enum are ints too and must not pass the code lookup
    if isinstance(value, bool) or (isinstance(value, Enum) and not isinstance(value, status_cls)):
        member = None
    else:
        member = status_cls.from_code(value)
    if member is None:
        raise ValidationError("status", f"{value!r} is not a known {kind} status")
    return member


def _validate_flag(field: str, value) -> bool:
    if not isinstance(value, bool):
        raise ValidationError(field, f"expected a bool, got {value!r}")
    return value


def _validate_tag(tag) -> str:
    if not isinstance(tag, str):
        raise ValidationError("tags", f"expected a string, got {tag!r}")
    tag = tag.strip()
    if not tag or "," in tag:
        raise ValidationError("tags", f"tags must be non-empty and contain no commas, got {tag!r}")
    return tag


class EntryValues:
    """Base class for the per-list values trackers.

    Subclasses declare ``FIELDS``, mapping each field name to its XML tag
    and an encoder, and ``DEFAULTS`` for a fresh entry. Field order in
    ``FIELDS`` is the order used when serializing.
    """

    FIELDS: dict[str, tuple[str, Callable[[Any], str]]] = {}
    DEFAULTS: dict[str, Any] = {}

    def __init__(self, **values):
        unknown = set(values) - set(self.FIELDS)
        if unknown:
            raise TypeError(f"unknown fields: {', '.join(sorted(unknown))}")
        self._values = {name: self._default(name) for name in self.FIELDS}
        self._values.update(values)
        self._staged: dict[str, FieldChange] = {}

    def _default(self, name: str):
        default = self.DEFAULTS.get(name)
        if isinstance(default, list):
            return list(default)
        return default

    def __repr__(self) -> str:
        fields = ", ".join(f"{name}={value!r}" for name, value in self._values.items())
        return f"{type(self).__name__}({fields}, staged={sorted(self._staged)})"

    def __eq__(self, other) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return self._values == other._values and self._staged == other._staged

    def _stage(self, name: str, value):
        self._staged[name] = FieldChange(self._values[name], value)
        return self

    @property
    def is_dirty(self) -> bool:
        """True when at least one field is staged."""
        return bool(self._staged)

    @property
    def staged(self) -> dict[str, FieldChange]:
        return dict(self._staged)

    def changes(self) -> dict[str, Any]:
        """Return the staged fields mapped to their new values."""
        return {name: change.new for name, change in self._staged.items()}

    def pending(self, name: str):
        """Return the staged value of a field, falling back to its current one."""
        if name in self._staged:
            return self._staged[name].new
        return self._values[name]

    def as_dict(self) -> dict[str, Any]:
        """Return the authoritative values."""
        return {name: (list(v) if isinstance(v, list) else v) for name, v in self._values.items()}

    def commit(self):
        """Apply staged values as the new authoritative ones and clear them."""
        for name, change in self._staged.items():
            self._values[name] = change.new
        if self._staged:
            logger.debug(f"Committed {len(self._staged)} staged field(s): {', '.join(self._staged)}")
        self._staged.clear()

    def discard(self):
        """Drop all staged changes."""
        self._staged.clear()

    def to_xml(self) -> str:
        """Serialize the staged fields into an ``<entry>`` document."""
        entry = ET.Element("entry")
        for name, (tag, encode) in self.FIELDS.items():
            if name not in self._staged:
                continue
            ET.SubElement(entry, tag).text = encode(self._staged[name].new)
        body = ET.tostring(entry, encoding="unicode")
        return f'<?xml version="1.0" encoding="UTF-8"?>{body}'

    # Setters shared by anime and manga

    def set_score(self, score: int):
        return self._stage("score", _validate_score(score))

    def set_start_date(self, value: Optional[date]):
        return self._stage("start_date", _validate_date("start_date", value))

    def set_finish_date(self, value: Optional[date]):
        return self._stage("finish_date", _validate_date("finish_date", value))

    def set_tags(self, tags: list[str]):
        if isinstance(tags, str):
            raise ValidationError("tags", "expected a list of tags, got a string")
        return self._stage("tags", [_validate_tag(tag) for tag in tags])

    def add_tag(self, tag: str):
        """Stage the current tags plus one more; existing tags are kept."""
        tag = _validate_tag(tag)
        tags = list(self.pending("tags"))
        if tag not in tags:
            tags.append(tag)
        return self._stage("tags", tags)

    @property
    def score(self) -> int:
        return self._values["score"]

    @property
    def start_date(self) -> Optional[date]:
        return self._values["start_date"]

    @property
    def finish_date(self) -> Optional[date]:
        return self._values["finish_date"]

    @property
    def tags(self) -> list[str]:
        return list(self._values["tags"])


class AnimeValues(EntryValues):
    """Values of an anime list entry.

    Setters validate and stage a change, and return the values object so
    calls can be chained::

        entry.values.set_watched_episodes(25).set_score(10).set_status(WatchStatus.COMPLETED)
    """

    FIELDS = {
        "watched_episodes": ("episode", _encode_int),
        "status": ("status", _encode_int),
        "start_date": ("date_start", date_to_str),
        "finish_date": ("date_finish", date_to_str),
        "score": ("score", _encode_int),
        "rewatching": ("enable_rewatching", _encode_bool),
        "tags": ("tags", _encode_tags),
    }
    DEFAULTS = {
        "watched_episodes": 0,
        "status": WatchStatus.PLAN_TO_WATCH,
        "start_date": None,
        "finish_date": None,
        "score": 0,
        "rewatching": False,
        "tags": [],
    }

    def set_watched_episodes(self, watched: int) -> "AnimeValues":
        return self._stage("watched_episodes", _validate_count("watched_episodes", watched))

    def set_status(self, status: WatchStatus) -> "AnimeValues":
        return self._stage("status", _validate_status(WatchStatus, status, "watch"))

    def set_rewatching(self, rewatching: bool) -> "AnimeValues":
        return self._stage("rewatching", _validate_flag("rewatching", rewatching))

    @property
    def watched_episodes(self) -> int:
        return self._values["watched_episodes"]

    @property
    def status(self) -> WatchStatus:
        return self._values["status"]

    @property
    def rewatching(self) -> bool:
        return self._values["rewatching"]


class MangaValues(EntryValues):
    """Values of a manga list entry."""

    FIELDS = {
        "read_chapters": ("chapter", _encode_int),
        "read_volumes": ("volume", _encode_int),
        "status": ("status", _encode_int),
        "score": ("score", _encode_int),
        "start_date": ("date_start", date_to_str),
        "finish_date": ("date_finish", date_to_str),
        "rereading": ("enable_rereading", _encode_bool),
        "tags": ("tags", _encode_tags),
    }
    DEFAULTS = {
        "read_chapters": 0,
        "read_volumes": 0,
        "status": ReadStatus.PLAN_TO_READ,
        "score": 0,
        "start_date": None,
        "finish_date": None,
        "rereading": False,
        "tags": [],
    }

    def set_read_chapters(self, chapters: int) -> "MangaValues":
        return self._stage("read_chapters", _validate_count("read_chapters", chapters))

    def set_read_volumes(self, volumes: int) -> "MangaValues":
        return self._stage("read_volumes", _validate_count("read_volumes", volumes))

    def set_status(self, status: ReadStatus) -> "MangaValues":
        return self._stage("status", _validate_status(ReadStatus, status, "read"))

    def set_rereading(self, rereading: bool) -> "MangaValues":
        return self._stage("rereading", _validate_flag("rereading", rereading))

    @property
    def read_chapters(self) -> int:
        return self._values["read_chapters"]

    @property
    def read_volumes(self) -> int:
        return self._values["read_volumes"]

    @property
    def status(self) -> ReadStatus:
        return self._values["status"]

    @property
    def rereading(self) -> bool:
        return self._values["rereading"]
