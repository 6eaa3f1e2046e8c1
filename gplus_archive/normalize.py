from __future__ import annotations

import html
import re
from datetime import datetime, timezone

_TAKEOUT_TIMESTAMP_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2} [0-9]{2}:[0-9]{2}:[0-9]{2}[+-][0-9]{4}")
_TAKEOUT_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S%z"

_ASCII_DIGITS = frozenset("0123456789")
_FILENAME_DROP_CHARS = "@!#&()"
_FILENAME_DROP_TABLE = str.maketrans({" ": "_", **{c: None for c in _FILENAME_DROP_CHARS}})


def convert_to_utc(value: str) -> str:
    """
    Normalize a Takeout timestamp (`2011-08-14 20:39:28-0700`) to UTC ISO-8601.

    Anything that does not match that exact shape is returned unchanged.
    """
    if not _TAKEOUT_TIMESTAMP_RE.fullmatch(value):
        return value
    try:
        d = datetime.strptime(value, _TAKEOUT_TIMESTAMP_FORMAT).astimezone(timezone.utc)
    except (ValueError, OverflowError):
        return value
    # Years below 1000 keep four digits.
    return (
        f"{d.year:04d}-{d.month:02d}-{d.day:02d}"
        f"T{d.hour:02d}:{d.minute:02d}:{d.second:02d}Z"
    )


def clean_location(location: str) -> str:
    pos = location.find("Address")
    if pos > 0 and not location[pos - 1].isspace():
        return f"{location[:pos]} {location[pos:]}"
    return location


def clean_title(title: str) -> str:
    """Decode entities, drop inline tags and collapse whitespace."""
    decoded = html.unescape(title)

    out: list[str] = []
    in_tag = False
    for ch in decoded:
        if ch == "<":
            in_tag = True
        elif ch == ">":
            in_tag = False
            out.append(" ")
        elif not in_tag:
            out.append(ch)

    return " ".join("".join(out).split())


def escape_metadata(value: str) -> str:
    """Escape a value for a double-quoted, single-line TOML string."""
    return (
        value.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", " ")
        .replace("\r", " ")
    )


def _has_date_head(name: str) -> bool:
    return len(name) >= 8 and all(c in _ASCII_DIGITS for c in name[:8])


def normalize_filename_stem(name: str) -> str:
    """
    Turn a Takeout post filename stem into a URL-friendly slug.

    `20110814 - Today is my first day` -> `2011-08-14-Today_is_my_first_day`.
    """
    if not _has_date_head(name):
        return name.translate(_FILENAME_DROP_TABLE)

    rest = name[8:]
    while rest.startswith(" - "):
        rest = rest[3:]
    return f"{name[0:4]}-{name[4:6]}-{name[6:8]}-{rest.translate(_FILENAME_DROP_TABLE)}"


def filename_date_prefix(name: str) -> str:
    """Return `YYYY-MM-DD` from a leading `YYYYMMDD`, or an empty string."""
    if not _has_date_head(name):
        return ""
    return f"{name[0:4]}-{name[4:6]}-{name[6:8]}"
