from __future__ import annotations

import json
from typing import Mapping

import streamlit as st
import streamlit.components.v1 as components

from portfolio.config import THEME
from portfolio.state.theme import ThemePreference


APP_TITLE = "Portfolio"

# One year.
COOKIE_MAX_AGE = 365 * 24 * 60 * 60


def configure_page(title: str = APP_TITLE) -> None:
    st.set_page_config(
        page_title=title,
        page_icon="",
        layout="wide",
        initial_sidebar_state="collapsed",
    )


def theme_css(mode: str) -> str:
    # Centralized theme tokens (config.py) -> CSS variables
    palette = THEME[mode]
    radius = int(THEME["radius_px"])
    css = """
<style>
:root{
  color-scheme: __MODE__;
  --violet: __ACCENT_PRIMARY__;
  --mint: __ACCENT_SECONDARY__;
  --orange: __ACCENT_TERTIARY__;

  --bg-primary: __BG_PRIMARY__;
  --bg-secondary: __BG_SECONDARY__;
  --card-bg: __CARD_BG__;
  --card-border: __CARD_BORDER__;
  --surface-muted: __SURFACE_MUTED__;

  --text-primary: __TEXT_PRIMARY__;
  --text-secondary: __TEXT_SECONDARY__;
  --text-muted: __TEXT_MUTED__;
  --code-text: __CODE_TEXT__;
  --radius: __RADIUS_PX__px;
  --max-width: __MAX_WIDTH_PX__px;
}

/* Hide default Streamlit chrome */
#MainMenu { visibility: hidden; }
header[data-testid="stHeader"] { visibility: hidden; }
footer { visibility: hidden; }

html, body, [data-testid="stAppViewContainer"]{
  background: var(--bg-primary) !important;
  color: var(--text-primary) !important;
}
::selection{ background: color-mix(in srgb, var(--violet) 20%, transparent); }

.block-container{
  max-width: var(--max-width) !important;
  padding-top: 72px !important;
  padding-bottom: 2rem !important;
}

/* Pinned nav. The page scrolls inside the app container, not the window. */
.site-nav{
  position: fixed;
  top: 0;
  left: 50%;
  transform: translateX(-50%);
  width: min(100%, var(--max-width));
  box-sizing: border-box;
  padding: 0 1rem;
  z-index: 1000;
  backdrop-filter: blur(8px);
  background: var(--bg-secondary);
  display:flex;
  align-items:center;
  justify-content:space-between;
  height: 56px;
  transition: opacity 200ms;
}
.site-nav.nav-hidden{ opacity: 0; pointer-events: none; }
.site-nav .brand{ font-weight: 700; letter-spacing: -0.01em; color: var(--text-primary); text-decoration:none; }
.site-nav .links{ display:flex; gap: 16px; }
.site-nav .links a{
  font-size: 14px;
  font-weight: 500;
  color: var(--text-primary);
  text-decoration: none;
  text-underline-offset: 8px;
}
.site-nav .links a:hover{ text-decoration: underline; }
@media (max-width: 640px){
  .site-nav .links{ display:none; }
}

/* Hero */
.hero{ position: relative; overflow: hidden; padding: 64px 0 40px 0; }
.hero-strip{
  position:absolute; inset: 0 0 auto 0; height: 160px; overflow:hidden; pointer-events:none;
  -webkit-mask-image: linear-gradient(to bottom, black, transparent);
  mask-image: linear-gradient(to bottom, black, transparent);
}
.hero-strip-track{
  white-space: nowrap;
  animation: scroll 12s linear infinite;
  font-family: ui-monospace, SFMono-Regular, Menlo, monospace;
  font-size: 12px;
  opacity: 0.6;
}
.hero-strip-track pre{
  display:inline-block; padding: 0 32px; margin:0; background: transparent;
  color: var(--code-text); vertical-align: top;
}
@keyframes scroll { from { transform: translateX(0); } to { transform: translateX(-50%); } }
@media (prefers-reduced-motion: reduce){
  .hero-strip-track{ animation: none; }
}
.hero-title{
  position: relative;
  font-size: clamp(36px, 6vw, 60px);
  font-weight: 800;
  letter-spacing: -0.02em;
  color: var(--text-primary);
  line-height: 1.05;
  margin: 0;
}
.hero-narrative{
  position: relative;
  max-width: 42rem;
  margin-top: 16px;
  font-size: 16px;
  color: var(--text-secondary);
  line-height: 1.6;
}
.hero-cta{
  position: relative;
  display:inline-flex; align-items:center; gap: 8px;
  margin-top: 24px; padding: 8px 16px;
  border: 1px solid var(--card-border);
  border-radius: var(--radius);
  color: var(--text-primary) !important;
  text-decoration: none !important;
}
.hero-cta:hover{ background: color-mix(in srgb, var(--violet) 10%, transparent); }

/* Sections */
.section{ padding: 48px 0 8px 0; scroll-margin-top: 64px; }
.section-title{
  font-size: clamp(24px, 3vw, 30px);
  font-weight: 700;
  letter-spacing: -0.01em;
  color: var(--text-primary);
  margin: 0 0 24px 0;
}
.about{ display:grid; grid-template-columns: 1fr 2fr; gap: 32px; }
.about-portrait{ aspect-ratio: 3 / 4; border-radius: var(--radius); background: var(--surface-muted); }
.about-body{ color: var(--text-secondary); line-height: 1.75; }
@media (max-width: 768px){ .about{ grid-template-columns: 1fr; } }

/* Chips */
.chips{ display:flex; flex-wrap:wrap; gap: 8px; margin-top: 8px; }
.chip{
  padding: 4px 12px;
  border-radius: 999px;
  border: 1px solid var(--card-border);
  font-size: 12px;
  background: var(--bg-secondary);
  color: var(--text-primary);
  transition: box-shadow 150ms;
}
.chip:hover{ box-shadow: 0 0 0 2px var(--violet); }

/* Cards */
.card-grid{ display:grid; gap: 24px; grid-template-columns: repeat(3, minmax(0, 1fr)); }
@media (max-width: 1024px){ .card-grid{ grid-template-columns: repeat(2, minmax(0, 1fr)); } }
@media (max-width: 640px){ .card-grid{ grid-template-columns: 1fr; } }
.card{
  background: var(--card-bg);
  border: 1px solid var(--card-border);
  border-radius: var(--radius);
  padding: 16px;
  transition: border-color 150ms;
}
.card-project:hover{ border-color: color-mix(in srgb, var(--violet) 70%, transparent); }
.card-media{ aspect-ratio: 16 / 9; border-radius: 4px; background: var(--surface-muted); margin-bottom: 12px; }
.card-title{ font-size: 16px !important; font-weight: 600 !important; margin: 0 !important; padding: 0 !important; color: var(--text-primary) !important; }
.card-meta{ font-size: 12px; color: var(--text-muted); }
.card-body{
  font-size: 14px; color: var(--text-secondary); margin: 8px 0 0 0;
  display: -webkit-box; -webkit-line-clamp: 3; -webkit-box-orient: vertical; overflow: hidden;
}
.card-project .card-body{ -webkit-line-clamp: 2; }
.card-links{ display:flex; gap: 8px; margin-top: 12px; }
.card-link{ font-size: 14px; text-decoration: none; }
.card-link:hover{ text-decoration: underline; }
.card-link-live{ color: var(--violet) !important; }
.card-link-repo{ color: var(--text-secondary) !important; }

/* Timeline */
.timeline-heading{ font-size: 16px !important; font-weight: 600 !important; margin-bottom: 12px !important; color: var(--text-primary) !important; }
.timeline-list{ list-style: none; padding: 0; margin: 0; }
.timeline-item{ border-left: 2px solid var(--card-border); padding-left: 16px; margin-bottom: 16px; }
.timeline-item .card-title{ font-weight: 500 !important; }
.timeline-item .card-meta{ font-size: 14px; color: var(--text-secondary); }

/* Buttons */
div.stButton > button{
  border-radius: var(--radius) !important;
  border: 1px solid var(--card-border) !important;
  background: transparent !important;
  color: var(--text-primary) !important;
}
div.stButton > button:hover{ border-color: var(--violet) !important; }

.site-footer{ padding: 48px 0; text-align: center; font-size: 12px; color: var(--text-muted); }
</style>
"""

    tokens = {
        "__MODE__": mode,
        "__ACCENT_PRIMARY__": str(palette["accent_primary"]),
        "__ACCENT_SECONDARY__": str(palette["accent_secondary"]),
        "__ACCENT_TERTIARY__": str(palette["accent_tertiary"]),
        "__BG_PRIMARY__": str(palette["bg_primary"]),
        "__BG_SECONDARY__": str(palette["bg_secondary"]),
        "__CARD_BG__": str(palette["bg_card"]),
        "__CARD_BORDER__": str(palette["border_color"]),
        "__SURFACE_MUTED__": str(palette["surface_muted"]),
        "__TEXT_PRIMARY__": str(palette["text_primary"]),
        "__TEXT_SECONDARY__": str(palette["text_secondary"]),
        "__TEXT_MUTED__": str(palette["text_muted"]),
        "__CODE_TEXT__": str(palette["code_text"]),
        "__RADIUS_PX__": str(radius),
        "__MAX_WIDTH_PX__": str(int(THEME["max_width_px"])),
    }
    for k, v in tokens.items():
        css = css.replace(k, v)
    return css


# Mode flag on the host page's <html>, mirroring the `light`/`dark` class convention.
_ROOT_FLAG_JS = """
<script>
(function () {
  var root = window.parent.document.documentElement;
  root.classList.remove("light", "dark");
  root.classList.add("__MODE__");
})();
</script>
"""


def apply_theme(pref: ThemePreference) -> None:
    mode = pref.mode.value
    st.markdown(theme_css(mode), unsafe_allow_html=True)
    components.html(_ROOT_FLAG_JS.replace("__MODE__", mode), height=0)


_COOKIE_JS = """
<script>
(function () {
  var doc = window.parent.document;
  var values = __VALUES__;
  Object.keys(values).forEach(function (k) {
    doc.cookie = encodeURIComponent(k) + "=" + encodeURIComponent(values[k]) +
      "; path=/; max-age=__MAX_AGE__; SameSite=Lax";
  });
})();
</script>
"""


def cookie_js(values: Mapping[str, str], max_age: int = COOKIE_MAX_AGE) -> str:
    return _COOKIE_JS.replace("__VALUES__", json.dumps(dict(values), sort_keys=True)).replace(
        "__MAX_AGE__", str(int(max_age))
    )


def write_cookies(values: Mapping[str, str]) -> None:
    """Persist preferences in the visitor's browser; no-op when nothing is queued."""
    if values:
        components.html(cookie_js(values), height=0)
