from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Tuple


def _text(record: dict, key: str) -> Optional[str]:
    v = record.get(key)
    if v is None:
        return None
    return str(v)


@dataclass(frozen=True)
class Project:
    slug: Optional[str]
    title: Optional[str]
    summary: Optional[str]
    demo_url: Optional[str] = None
    repo_url: Optional[str] = None

    @classmethod
    def from_record(cls, record: dict) -> "Project":
        return cls(
            slug=_text(record, "slug"),
            title=_text(record, "title"),
            summary=_text(record, "summary"),
            demo_url=_text(record, "demo_url") or None,
            repo_url=_text(record, "repo_url") or None,
        )


@dataclass(frozen=True)
class ExperienceEntry:
    id: Optional[str]
    start: Optional[str]
    end: Optional[str]
    role: Optional[str]
    org: Optional[str]
    summary: Optional[str]

    @classmethod
    def from_record(cls, record: dict) -> "ExperienceEntry":
        return cls(
            id=_text(record, "id"),
            start=_text(record, "start"),
            end=_text(record, "end"),
            role=_text(record, "role"),
            org=_text(record, "org"),
            summary=_text(record, "summary"),
        )


@dataclass(frozen=True)
class EducationEntry:
    id: Optional[str]
    start: Optional[str]
    end: Optional[str]
    degree: Optional[str]
    school: Optional[str]
    summary: Optional[str]

    @classmethod
    def from_record(cls, record: dict) -> "EducationEntry":
        return cls(
            id=_text(record, "id"),
            start=_text(record, "start"),
            end=_text(record, "end"),
            degree=_text(record, "degree"),
            school=_text(record, "school"),
            summary=_text(record, "summary"),
        )


@dataclass(frozen=True)
class Post:
    id: Optional[str]
    title: Optional[str]
    excerpt: Optional[str]
    read_time: Optional[Any]
    tags: Tuple[str, ...] = ()

    @classmethod
    def from_record(cls, record: dict) -> "Post":
        raw_tags = record.get("tags")
        if isinstance(raw_tags, str):
            raw_tags = [raw_tags]
        elif not isinstance(raw_tags, (list, tuple)):
            raw_tags = []
        # Ordered set: first occurrence wins.
        tags = tuple(dict.fromkeys(str(t) for t in raw_tags if t is not None))
        return cls(
            id=_text(record, "id"),
            title=_text(record, "title"),
            excerpt=_text(record, "excerpt"),
            read_time=record.get("read_time"),
            tags=tags,
        )


RECORD_TYPES = {
    "projects": Project,
    "experience": ExperienceEntry,
    "education": EducationEntry,
    "posts": Post,
}
