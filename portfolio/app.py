"""
Routing only.

All page composition lives in portfolio/views/.
All env reads happen ONLY in config.py.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional
from urllib.parse import urlsplit

# Make the `portfolio` package importable when running:
#   streamlit run portfolio/app.py
APP_DIR = os.path.dirname(__file__)
REPO_ROOT = os.path.abspath(os.path.join(APP_DIR, ".."))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

import streamlit as st  # noqa: E402

from portfolio.components.nav import render_nav  # noqa: E402
from portfolio.components.styles import apply_theme, configure_page, write_cookies  # noqa: E402
from portfolio.config import AppConfig, get_config  # noqa: E402
from portfolio.state.navigation import NavMenu  # noqa: E402
from portfolio.state.theme import (  # noqa: E402
    CookieThemeStore,
    JsonFileThemeStore,
    SystemThemeSignal,
    ThemePreference,
    ThemeResolver,
)
from portfolio.views import page  # noqa: E402


logger = logging.getLogger("portfolio")


def _os_prefers_dark() -> Optional[bool]:
    # Streamlit reports the viewer's active base theme, which follows the OS by default.
    theme = getattr(getattr(st, "context", None), "theme", None)
    kind = getattr(theme, "type", None)
    if kind not in ("light", "dark"):
        return None
    return kind == "dark"


def _page_origin() -> Optional[str]:
    url = getattr(getattr(st, "context", None), "url", None)
    if not url:
        return None
    parts = urlsplit(url)
    if not parts.scheme or not parts.netloc:
        return None
    return f"{parts.scheme}://{parts.netloc}"


def _request_cookies() -> dict:
    cookies = getattr(getattr(st, "context", None), "cookies", None)
    return dict(cookies) if cookies else {}


def _log_theme_change(pref: ThemePreference) -> None:
    logger.debug("Theme -> %s (%s)", pref.mode.value, pref.source.value)


def _session_state(cfg: AppConfig) -> tuple[ThemeResolver, NavMenu]:
    if "theme_resolver" not in st.session_state:
        if cfg.theme_store_path:
            store = JsonFileThemeStore(cfg.theme_store_path)
        else:
            store = CookieThemeStore(_request_cookies(), st.session_state)
        st.session_state["theme_resolver"] = ThemeResolver(
            store,
            SystemThemeSignal(_os_prefers_dark()),
            on_change=_log_theme_change,
        )
    if "nav_menu" not in st.session_state:
        st.session_state["nav_menu"] = NavMenu()
    return st.session_state["theme_resolver"], st.session_state["nav_menu"]


def main() -> None:
    cfg = get_config()
    logging.basicConfig(
        level=getattr(logging, cfg.log_level, logging.INFO),
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    )
    configure_page(cfg.owner_title)

    resolver, menu = _session_state(cfg)

    # OS changes only reach the resolver while this run is subscribed.
    with resolver.watch():
        resolver.signal.publish(_os_prefers_dark())
        pref = resolver.resolve()
        apply_theme(pref)
        if isinstance(resolver.store, CookieThemeStore):
            write_cookies(resolver.store.queued())

        render_nav(cfg.owner_title, menu, resolver)
        page.render(cfg, origin=_page_origin())


if __name__ == "__main__":
    main()
