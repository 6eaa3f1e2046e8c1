from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Mapping

FieldPolicy = Literal["first", "last", "append"]

# How repeated matches for the same field are resolved during one walk.
FIELD_POLICIES: Mapping[str, FieldPolicy] = {
    "author": "first",
    "date": "first",
    "canonical_url": "first",
    "title": "first",
    "content": "last",
    "visibility": "last",
    "location": "last",
    "video_url": "last",
    "reshare_author": "last",
    "reshare_content": "last",
    "plus_ones": "last",
    "images": "append",
    "links": "append",
    "comments": "append",
}


@dataclass(frozen=True)
class Comment:
    author: str
    content: str
    date: str = ""


@dataclass(frozen=True)
class Link:
    url: str
    label: str = ""


@dataclass
class PostRecord:
    """
    Accumulator for one Takeout post page.

    Fields are filled by `offer`, which applies FIELD_POLICIES so the
    extractor never has to check for prior values itself.
    """

    author: str = ""
    date: str = ""
    canonical_url: str = ""
    title: str = ""
    content: str = ""

    reshare_author: str | None = None
    reshare_content: str | None = None
    location: str | None = None
    video_url: str | None = None

    images: list[str] = field(default_factory=list)
    links: list[Link] = field(default_factory=list)
    visibility: str = ""
    plus_ones: list[str] = field(default_factory=list)
    comments: list[Comment] = field(default_factory=list)

    def is_set(self, name: str) -> bool:
        return bool(getattr(self, name))

    def offer(self, name: str, value: Any) -> bool:
        """
        Store `value` for field `name` according to its policy.

        Returns True when the record changed.
        """
        policy = FIELD_POLICIES[name]

        if policy == "append":
            getattr(self, name).append(value)
            return True

        if policy == "first" and self.is_set(name):
            return False

        if isinstance(value, list):
            value = list(value)
        setattr(self, name, value)
        return True
