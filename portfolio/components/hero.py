from __future__ import annotations

from html import escape

import streamlit as st


CODE_SNIPPET = (
    "const greet = (name) => {\n"
    "  return `Hello, ${name}!`\n"
    "}\n"
    "\n"
    "export default greet\n"
    "// build something great!"
)


def hero_html(title: str, tagline: str, cta_label: str = "View Projects", cta_anchor: str = "#projects") -> str:
    # Repeated so the -50% translate loop never shows a gap.
    code = escape(CODE_SNIPPET).replace("\n", "&#10;")
    strip = "".join(f"<pre>{code}</pre>" for _ in range(20))
    return f"""
<section class="hero">
  <div class="hero-strip" aria-hidden="true"><div class="hero-strip-track">{strip}</div></div>
  <h1 class="hero-title">{escape(title)}</h1>
  <p class="hero-narrative">{escape(tagline)}</p>
  <a class="hero-cta" href="{escape(cta_anchor, quote=True)}">{escape(cta_label)} →</a>
</section>
"""


def render_hero(title: str, tagline: str) -> None:
    st.markdown(hero_html(title, tagline), unsafe_allow_html=True)
