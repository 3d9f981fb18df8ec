from __future__ import annotations

import logging
from datetime import date
from typing import Callable, Dict, Optional, Sequence

import streamlit as st

from portfolio.components.cards import (
    education_items,
    experience_items,
    grid_html,
    post_items,
    project_items,
    timeline_html,
)
from portfolio.components.hero import render_hero
from portfolio.components.narrative import render_about, render_footer, render_tech, section_html
from portfolio.config import AppConfig
from portfolio.data.client import get_content_client
from portfolio.data.service import COLLECTIONS, ContentResult, load_all


logger = logging.getLogger(__name__)


TAGLINE = (
    "I craft resilient systems and razor‑clean interfaces. From data to design, "
    "I deliver end‑to‑end products with clarity and speed."
)

ABOUT_TEXT = (
    "I'm a full‑stack engineer focused on clear architectures and crisp UX. I ship production "
    "systems across web and cloud, owning discovery, design, and delivery. My tooling spans "
    "TypeScript, React, Node, Python, FastAPI, and cloud infra. I value fast feedback, robust "
    "testing, and humane DX."
)

TECH_STACK = [
    "TypeScript", "React", "Vite", "Tailwind", "Node.js",
    "FastAPI", "MongoDB", "PostgreSQL", "AWS", "Docker",
]


class SectionSlot:
    """A placeholder owned by one section. Writes after close() are dropped."""

    def __init__(self, placeholder, build: Callable[[Sequence], str]):
        self.placeholder = placeholder
        self.build = build
        self.alive = True

    def fill(self, records: Sequence) -> bool:
        if not self.alive:
            return False
        self.placeholder.markdown(self.build(records), unsafe_allow_html=True)
        return True

    def close(self) -> None:
        self.alive = False


BUILDERS: Dict[str, Callable[[Sequence], str]] = {
    "projects": lambda rs: section_html("projects", "Projects", grid_html(project_items(rs), "project")),
    "experience": lambda rs: timeline_html("Experience", experience_items(rs)),
    "education": lambda rs: timeline_html("Education", education_items(rs)),
    "posts": lambda rs: section_html("blog", "Insights", grid_html(post_items(rs), "post")),
}


def _mount_slots() -> Dict[str, SectionSlot]:
    # Fixed vertical order; each slot starts as its empty section.
    slots = {"projects": SectionSlot(st.empty(), BUILDERS["projects"])}

    st.markdown(section_html("xp", "Experience & Education"), unsafe_allow_html=True)
    left, right = st.columns(2, gap="large")
    with left:
        slots["experience"] = SectionSlot(st.empty(), BUILDERS["experience"])
    with right:
        slots["education"] = SectionSlot(st.empty(), BUILDERS["education"])

    slots["posts"] = SectionSlot(st.empty(), BUILDERS["posts"])

    for slot in slots.values():
        slot.fill(())
    return slots


def render_content(cfg: AppConfig, origin: Optional[str] = None) -> None:
    slots = _mount_slots()
    client = get_content_client(cfg, origin=origin)

    def close_all() -> None:
        for slot in slots.values():
            slot.close()

    def deliver(result: ContentResult) -> None:
        slot = slots.get(result.name)
        if slot is not None:
            try:
                slot.fill(result.records)
            except BaseException:
                # Streamlit stops or reruns the script by raising from the write.
                close_all()
                raise
        logger.debug("%s: %d records from %s", result.name, len(result.records), result.source)

    try:
        load_all(
            cfg,
            COLLECTIONS,
            deliver=deliver,
            is_alive=lambda: all(s.alive for s in slots.values()),
            client=client,
        )
    finally:
        close_all()


def render(cfg: AppConfig, origin: Optional[str] = None) -> None:
    render_hero(cfg.owner_title, TAGLINE)
    render_about(ABOUT_TEXT)
    render_tech(TECH_STACK)
    render_content(cfg, origin)
    render_footer(date.today().year, cfg.owner_title)
