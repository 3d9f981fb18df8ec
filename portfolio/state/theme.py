"""
Theme state
===========
Light/dark resolution for the page.

- A stored explicit choice always wins.
- Without one, the OS dark-mode signal decides and keeps deciding: OS changes
  flip the page until the visitor picks a mode themselves.
- Only explicit choices are written to the store.
"""
from __future__ import annotations

import json
import logging
import os
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Mapping, MutableMapping, Optional, Protocol


logger = logging.getLogger(__name__)


THEME_KEY = "theme"


class ThemeMode(str, Enum):
    LIGHT = "light"
    DARK = "dark"

    def toggled(self) -> "ThemeMode":
        return ThemeMode.LIGHT if self is ThemeMode.DARK else ThemeMode.DARK

    @classmethod
    def parse(cls, value: object) -> Optional["ThemeMode"]:
        try:
            return cls(value)
        except ValueError:
            return None


class PreferenceSource(str, Enum):
    EXPLICIT = "explicit"
    SYSTEM = "system"


@dataclass(frozen=True)
class ThemePreference:
    mode: ThemeMode
    source: PreferenceSource

    @property
    def is_explicit(self) -> bool:
        return self.source is PreferenceSource.EXPLICIT


# The page shell owns one of these; ThemeResolver is its only writer.
ThemeState = ThemePreference


class ThemeStoreError(RuntimeError):
    pass


class ThemeStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...


class CookieThemeStore:
    """
    Browser cookie store, so a choice survives reloads and new sessions.

    Reads come from the cookies sent when the session opened. The server
    cannot set cookies itself, so writes are queued in `backing` (session
    state in the app); the page writes `queued()` into `document.cookie`
    on every run, and a queued value wins over the request's cookie.
    """

    def __init__(self, cookies: Mapping[str, str], backing: MutableMapping, namespace: str = "cookie_writes"):
        self._cookies = dict(cookies)
        self._backing = backing
        self._ns = namespace

    def get(self, key: str) -> Optional[str]:
        queued = self._backing.get(self._ns) or {}
        if key in queued:
            return queued[key]
        return self._cookies.get(key)

    def set(self, key: str, value: str) -> None:
        queued = dict(self._backing.get(self._ns) or {})
        queued[key] = value
        self._backing[self._ns] = queued

    def queued(self) -> dict:
        return dict(self._backing.get(self._ns) or {})


class JsonFileThemeStore:
    """Single JSON object on disk, e.g. {"theme": "dark"}."""

    def __init__(self, path: str):
        self.path = path
        self._lock = threading.Lock()

    def _read(self) -> dict:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise ThemeStoreError(f"Cannot read {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise ThemeStoreError(f"{self.path} does not hold a JSON object")
        return data

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            value = self._read().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        with self._lock:
            try:
                data = self._read()
            except ThemeStoreError:
                data = {}
            data[key] = value
            tmp = f"{self.path}.tmp"
            try:
                parent = os.path.dirname(self.path)
                if parent:
                    os.makedirs(parent, exist_ok=True)
                with open(tmp, "w", encoding="utf-8") as f:
                    json.dump(data, f)
                os.replace(tmp, self.path)
            except OSError as e:
                raise ThemeStoreError(f"Cannot write {self.path}: {e}") from e


class Subscription:
    """Handle returned by SystemThemeSignal.subscribe(); use as a context manager."""

    def __init__(self, signal: "SystemThemeSignal", callback: Callable[[bool], None]):
        self._signal = signal
        self._callback = callback
        self.active = True

    def unsubscribe(self) -> None:
        if self.active:
            self._signal._remove(self._callback)
            self.active = False

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, *exc) -> None:
        self.unsubscribe()


class SystemThemeSignal:
    """
    Last known OS dark-mode flag. publish() notifies subscribers only when the
    flag actually changes.
    """

    def __init__(self, is_dark: Optional[bool] = None):
        self.is_dark = is_dark
        self._subscribers: List[Callable[[bool], None]] = []

    def subscribe(self, callback: Callable[[bool], None]) -> Subscription:
        self._subscribers.append(callback)
        return Subscription(self, callback)

    def _remove(self, callback: Callable[[bool], None]) -> None:
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def publish(self, is_dark: Optional[bool]) -> None:
        if is_dark is None or is_dark == self.is_dark:
            return
        self.is_dark = is_dark
        for cb in list(self._subscribers):
            cb(is_dark)


class ThemeResolver:
    def __init__(
        self,
        store: ThemeStore,
        signal: SystemThemeSignal,
        on_change: Optional[Callable[[ThemePreference], None]] = None,
    ):
        self.store = store
        self.signal = signal
        self._on_change = on_change
        self._state: Optional[ThemePreference] = None

    @property
    def state(self) -> ThemePreference:
        if self._state is None:
            return self.resolve()
        return self._state

    def _stored(self) -> Optional[ThemeMode]:
        try:
            return ThemeMode.parse(self.store.get(THEME_KEY))
        except (ThemeStoreError, OSError) as e:
            logger.debug("Theme store unavailable, using OS default: %s", e)
            return None

    def _system_mode(self) -> ThemeMode:
        return ThemeMode.DARK if self.signal.is_dark else ThemeMode.LIGHT

    def _apply(self, pref: ThemePreference) -> None:
        changed = pref != self._state
        self._state = pref
        if changed and self._on_change is not None:
            self._on_change(pref)

    def resolve(self) -> ThemePreference:
        stored = self._stored()
        if stored is not None:
            pref = ThemePreference(stored, PreferenceSource.EXPLICIT)
        elif self._state is not None and self._state.is_explicit:
            # Explicit choice made this session but the store lost it.
            pref = self._state
        else:
            pref = ThemePreference(self._system_mode(), PreferenceSource.SYSTEM)
        self._apply(pref)
        return pref

    def set_preference(self, mode: ThemeMode) -> ThemePreference:
        mode = ThemeMode(mode)
        try:
            self.store.set(THEME_KEY, mode.value)
        except (ThemeStoreError, OSError) as e:
            logger.warning("Could not persist theme, keeping it for this session only: %s", e)
        pref = ThemePreference(mode, PreferenceSource.EXPLICIT)
        self._apply(pref)
        return pref

    def toggle(self) -> ThemePreference:
        return self.set_preference(self.state.mode.toggled())

    def has_explicit_preference(self) -> bool:
        if self._state is not None and self._state.is_explicit:
            return True
        return self._stored() is not None

    def _on_system_change(self, is_dark: bool) -> None:
        if self.has_explicit_preference():
            return
        mode = ThemeMode.DARK if is_dark else ThemeMode.LIGHT
        self._apply(ThemePreference(mode, PreferenceSource.SYSTEM))

    def watch(self) -> Subscription:
        return self.signal.subscribe(self._on_system_change)
