from __future__ import annotations

import json
from html import escape
from typing import Optional

import streamlit as st
import streamlit.components.v1 as components

from portfolio.state.navigation import NAV_ITEMS, NavMenu
from portfolio.state.theme import ThemeMode, ThemeResolver


# Elements the app may scroll, across Streamlit versions. The document is always watched too.
SCROLL_CONTAINERS = (
    '[data-testid="stMain"]',
    "section.stMain",
    '[data-testid="stAppViewContainer"]',
)

# Same rule as ScrollVisibility: hide on any downward delta, show otherwise.
_SCROLL_JS = """
<script>
(function () {
  var doc = window.parent.document;
  var win = window.parent;
  if (!doc.querySelector(".site-nav")) return;
  if (!win.__siteNavScroll) {
    var lastY = 0;
    win.__siteNavScroll = function (e) {
      var el = e.target === doc ? doc.scrollingElement : e.target;
      var y = el.scrollTop;
      var bar = doc.querySelector(".site-nav");
      if (bar) bar.classList.toggle("nav-hidden", y > lastY);
      lastY = y;
    };
  }
  // Whichever of these actually scrolls drives the bar; elements mounted by a rerun get bound once.
  var selectors = __SELECTORS__;
  for (var i = 0; i < selectors.length; i++) {
    var el = doc.querySelector(selectors[i]);
    if (el && !el.__siteNavBound) {
      el.__siteNavBound = true;
      el.addEventListener("scroll", win.__siteNavScroll, { passive: true });
    }
  }
  if (!doc.__siteNavBound) {
    doc.__siteNavBound = true;
    doc.addEventListener("scroll", win.__siteNavScroll, { passive: true });
  }
  var target = __TARGET__;
  if (target) {
    // Sections may still be mounting.
    setTimeout(function () {
      var el = doc.getElementById(target);
      if (el) el.scrollIntoView({ behavior: "smooth" });
    }, 250);
  }
})();
</script>
"""


def scroll_script(target: Optional[str] = None) -> str:
    """Scroll-hide listener for the pinned bar, plus a one-shot jump to `target`."""
    return _SCROLL_JS.replace("__SELECTORS__", json.dumps(list(SCROLL_CONTAINERS))).replace(
        "__TARGET__", json.dumps(target or "")
    )


def _theme_icon(mode: ThemeMode) -> str:
    return "☀️" if mode is ThemeMode.DARK else "🌙"


def nav_bar_html(brand: str) -> str:
    links = "".join(f'<a href="{item.anchor}">{escape(item.label)}</a>' for item in NAV_ITEMS)
    return (
        '<div class="site-nav">'
        f'<a class="brand" href="#">{escape(brand)}</a>'
        f'<nav class="links">{links}</nav>'
        "</div>"
    )


def render_nav(brand: str, menu: NavMenu, resolver: ThemeResolver) -> Optional[str]:
    """
    Sticky nav bar + theme toggle + collapsible menu for narrow viewports.
    Returns the id of the section picked from the menu on this run, if any.
    """
    st.markdown(nav_bar_html(brand), unsafe_allow_html=True)

    mode = resolver.state.mode
    c1, c2, _ = st.columns([1, 1, 10])
    with c1:
        st.button(
            _theme_icon(mode),
            key="theme_toggle",
            help="Toggle theme",
            on_click=resolver.toggle,
        )
    with c2:
        st.button(
            "✕" if menu.expanded else "☰",
            key="menu_toggle",
            help="Menu",
            on_click=menu.toggle,
        )

    selected = st.session_state.pop("nav_target", None)
    if menu.expanded:
        for item in NAV_ITEMS:
            st.button(
                item.label,
                key=f"nav_{item.id}",
                on_click=_select,
                args=(menu, item.id),
            )
        st.button(
            f"{_theme_icon(mode)} Theme",
            key="theme_toggle_menu",
            on_click=resolver.toggle,
        )

    components.html(scroll_script(selected), height=0)
    return selected


def _select(menu: NavMenu, item_id: str) -> None:
    anchor = menu.select(item_id)
    if anchor:
        st.session_state["nav_target"] = anchor.lstrip("#")
