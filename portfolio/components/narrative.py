from __future__ import annotations

from html import escape
from typing import Sequence

import streamlit as st

from portfolio.components.cards import chips_html


def section_html(section_id: str, title: str, inner: str = "") -> str:
    """
    Every page section goes through here so nav anchors always resolve,
    including sections whose content has not arrived yet.
    """
    return (
        f'<section id="{escape(section_id, quote=True)}" class="section">'
        f'<h2 class="section-title">{escape(title)}</h2>'
        f"{inner}"
        "</section>"
    )


def render_about(text: str) -> None:
    inner = (
        '<div class="about">'
        '<div class="about-portrait"></div>'
        f'<div class="about-body"><p>{escape(text)}</p></div>'
        "</div>"
    )
    st.markdown(section_html("about", "About", inner), unsafe_allow_html=True)


def render_tech(stack: Sequence[str]) -> None:
    st.markdown(section_html("stack", "Tech Stack", chips_html(stack)), unsafe_allow_html=True)


def render_footer(year: int, owner_title: str) -> None:
    st.markdown(
        f'<footer class="site-footer">© {year} {escape(owner_title)}</footer>',
        unsafe_allow_html=True,
    )
