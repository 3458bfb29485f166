"""Helpers for reading and writing MyAnimeList XML."""

import re
import xml.etree.ElementTree as ET
from datetime import date, datetime
from typing import Optional

from .constants import MAL_DATE_FORMAT, MAL_EMPTY_DATE, MAL_EMPTY_REQUEST_DATE, MAL_REQUEST_DATE_FORMAT
from .exceptions import DecodeError

# Dates MAL only knows in part, e.g. 2010-00-00 or 2010-04-00
_PARTIAL_DATE = re.compile(r"\d{4}-\d{2}-00|\d{4}-00-\d{2}|0000-\d{2}-\d{2}")


def parse_xml(payload: str) -> ET.Element:
    """Parse a payload into its root element."""
    try:
        return ET.fromstring(payload.strip())
    except ET.ParseError as e:
        raise DecodeError(None, f"malformed XML payload: {e}") from e


def child_text(elem: ET.Element, name: str) -> Optional[str]:
    """Return the stripped text of a child element, or None if it is absent."""
    child = elem.find(name)
    if child is None:
        return None
    return (child.text or "").strip()


def required_text(elem: ET.Element, name: str) -> str:
    """Return the text of a child that must be present and non-blank."""
    text = child_text(elem, name)
    if not text:
        raise DecodeError(name, "missing required XML node")
    return text


def child_int(elem: ET.Element, name: str) -> int:
    """Read an integer child; absent or blank counts as zero."""
    text = child_text(elem, name)
    if not text:
        return 0
    try:
        return int(text)
    except ValueError:
        raise DecodeError(name, f"expected an integer, got {text!r}") from None


def child_float(elem: ET.Element, name: str) -> float:
    """Float counterpart of :func:`child_int`."""
    text = child_text(elem, name)
    if not text:
        return 0.0
    try:
        return float(text)
    except ValueError:
        raise DecodeError(name, f"expected a number, got {text!r}") from None


def parse_date(text: Optional[str], field: Optional[str] = None) -> Optional[date]:
    """Parse a ``YYYY-MM-DD`` date.

    MAL uses ``0000-00-00`` for an unset date and zeroes for unknown
    month/day parts; both decode to None. Any other unreadable text raises
    :class:`DecodeError` for ``field``.
    """
    if not text or text == MAL_EMPTY_DATE:
        return None
    try:
        return datetime.strptime(text, MAL_DATE_FORMAT).date()
    except ValueError:
        if _PARTIAL_DATE.fullmatch(text):
            return None
        raise DecodeError(field, f"expected a YYYY-MM-DD date, got {text!r}") from None


def child_date(elem: ET.Element, name: str) -> Optional[date]:
    return parse_date(child_text(elem, name), name)


def date_to_str(value: Optional[date]) -> str:
    """Format a date the way the list write endpoints expect it."""
    if value is None:
        return MAL_EMPTY_REQUEST_DATE
    return value.strftime(MAL_REQUEST_DATE_FORMAT)


def split_list(text: Optional[str], delimiter: str) -> list[str]:
    """Split delimited text into its non-blank, stripped parts."""
    if not text:
        return []
    return [part.strip() for part in text.split(delimiter) if part.strip()]
