from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv


logger = logging.getLogger(__name__)


#
# Shared theme tokens, one palette per mode.
# - styles.apply_theme() turns the active palette into CSS variables on :root.
# - Accents match the violet / mint / orange brand set.
#
THEME = {
    "light": {
        "bg_primary": "#FFFFFF",
        "bg_secondary": "rgba(255, 255, 255, 0.60)",
        "bg_card": "#FFFFFF",
        "accent_primary": "#7C3AED",   # violet
        "accent_secondary": "#10B981",  # mint
        "accent_tertiary": "#F97316",   # orange
        "text_primary": "#0F172A",
        "text_secondary": "#52525B",
        "text_muted": "#71717A",
        "border_color": "#E4E4E7",
        "surface_muted": "#F4F4F5",
        "code_text": "#52525B",
    },
    "dark": {
        "bg_primary": "#0D1117",
        "bg_secondary": "rgba(13, 17, 23, 0.60)",
        "bg_card": "#0F1218",
        "accent_primary": "#A78BFA",
        "accent_secondary": "#34D399",
        "accent_tertiary": "#FB923C",
        "text_primary": "#E2E8F0",
        "text_secondary": "#A1A1AA",
        "text_muted": "#71717A",
        "border_color": "#27272A",
        "surface_muted": "#18181B",
        "code_text": "#D4D4D8",
    },
    "radius_px": 8,
    "max_width_px": 1152,
}


DEFAULT_OWNER_TITLE = "Full‑stack Engineer"


@dataclass(frozen=True)
class AppConfig:
    # API base URL; "" means same origin as the page.
    backend_url: str

    request_timeout: float

    # Serve generated sample records instead of calling the backend.
    use_sample_content: bool

    # Optional JSON file for the theme preference. None keeps it per-session.
    theme_store_path: Optional[str]

    owner_title: str
    log_level: str

    def api_base(self, origin: Optional[str] = None) -> str:
        base = self.backend_url or origin or ""
        return base.rstrip("/")


def _getenv(name: str, default: Optional[str] = None) -> Optional[str]:
    v = os.getenv(name, default)
    if v is None:
        return None
    v = v.strip()
    return v if v else None


def _getfloat(name: str, default: float) -> float:
    raw = _getenv(name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r (not a number), using %s", name, raw, default)
        return default
    if value <= 0:
        logger.warning("Ignoring %s=%r (must be positive), using %s", name, raw, default)
        return default
    return value


def get_config() -> AppConfig:
    """
    Centralized config: this is the ONLY place env vars are read.
    - Loads `.env` if present (local dev)
    - Every value has a default so the page always renders
    """
    load_dotenv(override=False)

    return AppConfig(
        backend_url=_getenv("BACKEND_URL") or "",
        request_timeout=_getfloat("REQUEST_TIMEOUT_SECONDS", 10.0),
        use_sample_content=(_getenv("USE_SAMPLE_CONTENT", "false") or "false").lower() == "true",
        theme_store_path=_getenv("THEME_STORE_PATH"),
        owner_title=_getenv("SITE_OWNER_TITLE") or DEFAULT_OWNER_TITLE,
        log_level=(_getenv("LOG_LEVEL", "INFO") or "INFO").upper(),
    )
