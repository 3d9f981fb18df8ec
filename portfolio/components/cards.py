from __future__ import annotations

from dataclasses import dataclass
from html import escape
from typing import Iterable, List, Optional, Sequence, Tuple

from portfolio.data.models import EducationEntry, ExperienceEntry, Post, Project


@dataclass(frozen=True)
class Link:
    label: str
    url: str
    kind: str  # "live" | "repo"


@dataclass(frozen=True)
class VisualItem:
    key: Optional[str]
    title: Optional[str]
    meta: Optional[str] = None      # date range / read time
    body: Optional[str] = None
    links: Tuple[Link, ...] = ()
    chips: Tuple[str, ...] = ()


def _date_range(start: Optional[str], end: Optional[str]) -> Optional[str]:
    if not start and not end:
        return None
    return f"{start or ''} – {end or ''}".strip()


def _at(left: Optional[str], right: Optional[str]) -> Optional[str]:
    if left and right:
        return f"{left} @ {right}"
    return left or right


def project_items(records: Iterable[Project]) -> List[VisualItem]:
    items = []
    for p in records:
        links = []
        if p.demo_url:
            links.append(Link("Live", p.demo_url, "live"))
        if p.repo_url:
            links.append(Link("Repo", p.repo_url, "repo"))
        items.append(VisualItem(key=p.slug, title=p.title, body=p.summary, links=tuple(links)))
    return items


def experience_items(records: Iterable[ExperienceEntry]) -> List[VisualItem]:
    return [
        VisualItem(
            key=x.id,
            title=_at(x.role, x.org),
            meta=_date_range(x.start, x.end),
            body=x.summary,
        )
        for x in records
    ]


def education_items(records: Iterable[EducationEntry]) -> List[VisualItem]:
    return [
        VisualItem(
            key=e.id,
            title=_at(e.degree, e.school),
            meta=_date_range(e.start, e.end),
            body=e.summary,
        )
        for e in records
    ]


def post_items(records: Iterable[Post]) -> List[VisualItem]:
    return [
        VisualItem(
            key=p.id,
            title=p.title,
            meta=f"{p.read_time} min read" if p.read_time not in (None, "") else None,
            body=p.excerpt,
            chips=p.tags,
        )
        for p in records
    ]


#
# HTML
#
_LINK_ICONS = {"live": "↗", "repo": "⌥"}


def chips_html(labels: Sequence[str]) -> str:
    spans = "".join(
        f'<span class="chip" aria-label="{escape(t)}">{escape(t)}</span>' for t in labels
    )
    return f'<div class="chips">{spans}</div>'


def card_html(item: VisualItem) -> str:
    parts = []
    if item.title:
        parts.append(f'<h3 class="card-title">{escape(item.title)}</h3>')
    if item.meta:
        parts.append(f'<div class="card-meta">{escape(item.meta)}</div>')
    if item.body:
        parts.append(f'<p class="card-body">{escape(item.body)}</p>')
    if item.links:
        anchors = "".join(
            f'<a class="card-link card-link-{l.kind}" href="{escape(l.url, quote=True)}" '
            f'target="_blank" rel="noopener">{_LINK_ICONS.get(l.kind, "")} {escape(l.label)}</a>'
            for l in item.links
        )
        parts.append(f'<div class="card-links">{anchors}</div>')
    if item.chips:
        parts.append(chips_html(item.chips))
    return "".join(parts)


def grid_html(items: Sequence[VisualItem], variant: str = "project") -> str:
    cards = []
    for item in items:
        media = '<div class="card-media"></div>' if variant == "project" else ""
        cards.append(f'<article class="card card-{variant}">{media}{card_html(item)}</article>')
    return f'<div class="card-grid card-grid-{variant}">{"".join(cards)}</div>'


def timeline_html(heading: str, items: Sequence[VisualItem]) -> str:
    rows = "".join(f'<li class="timeline-item">{card_html(i)}</li>' for i in items)
    return (
        f'<div class="timeline"><h3 class="timeline-heading">{escape(heading)}</h3>'
        f'<ul class="timeline-list">{rows}</ul></div>'
    )
