from __future__ import annotations

import json

import pytest

from portfolio.components.styles import cookie_js
from portfolio.state.theme import (
    THEME_KEY,
    CookieThemeStore,
    JsonFileThemeStore,
    PreferenceSource,
    SystemThemeSignal,
    ThemeMode,
    ThemePreference,
    ThemeResolver,
    ThemeStoreError,
)


class BrokenStore:
    def get(self, key):
        raise ThemeStoreError("storage disabled")

    def set(self, key, value):
        raise ThemeStoreError("storage disabled")


def make_resolver(stored=None, os_dark=None, store=None):
    store = store if store is not None else CookieThemeStore({}, {})
    if stored is not None:
        store.set(THEME_KEY, stored)
    applied = []
    resolver = ThemeResolver(store, SystemThemeSignal(os_dark), on_change=applied.append)
    return resolver, applied


def test_os_dark_without_stored_preference_resolves_dark():
    resolver, _ = make_resolver(os_dark=True)
    pref = resolver.resolve()
    assert pref == ThemePreference(ThemeMode.DARK, PreferenceSource.SYSTEM)


def test_system_default_is_not_persisted():
    store = CookieThemeStore({}, {})
    resolver, _ = make_resolver(os_dark=True, store=store)
    resolver.resolve()
    assert store.get(THEME_KEY) is None


def test_stored_light_beats_os_dark():
    resolver, _ = make_resolver(stored="light", os_dark=True)
    pref = resolver.resolve()
    assert pref.mode is ThemeMode.LIGHT
    assert pref.is_explicit


def test_no_signal_defaults_to_light():
    resolver, _ = make_resolver()
    assert resolver.resolve().mode is ThemeMode.LIGHT


def test_unknown_stored_value_is_ignored():
    resolver, _ = make_resolver(stored="sepia", os_dark=True)
    assert resolver.resolve() == ThemePreference(ThemeMode.DARK, PreferenceSource.SYSTEM)


def test_os_change_flips_theme_before_explicit_choice():
    resolver, applied = make_resolver(os_dark=False)
    resolver.resolve()
    with resolver.watch():
        resolver.signal.publish(True)
    assert resolver.state.mode is ThemeMode.DARK
    assert [p.mode for p in applied] == [ThemeMode.LIGHT, ThemeMode.DARK]


def test_os_change_ignored_after_set_preference():
    resolver, _ = make_resolver(os_dark=True)
    resolver.resolve()
    with resolver.watch():
        resolver.set_preference(ThemeMode.DARK)
        resolver.signal.publish(False)
    assert resolver.state == ThemePreference(ThemeMode.DARK, PreferenceSource.EXPLICIT)


def test_set_preference_persists():
    store = CookieThemeStore({}, {})
    resolver, _ = make_resolver(store=store)
    resolver.set_preference(ThemeMode.DARK)
    assert store.get(THEME_KEY) == "dark"


def test_toggle_is_explicit():
    resolver, applied = make_resolver(os_dark=True)
    resolver.resolve()
    pref = resolver.toggle()
    assert pref == ThemePreference(ThemeMode.LIGHT, PreferenceSource.EXPLICIT)
    assert applied[-1] == pref


def test_on_change_only_fires_on_change():
    resolver, applied = make_resolver(os_dark=True)
    resolver.resolve()
    resolver.resolve()
    assert len(applied) == 1


def test_unsubscribed_resolver_ignores_os_changes():
    resolver, _ = make_resolver(os_dark=False)
    resolver.resolve()
    with resolver.watch():
        pass
    resolver.signal.publish(True)
    assert resolver.state.mode is ThemeMode.LIGHT
    assert resolver.signal.subscriber_count == 0


def test_unsubscribe_is_idempotent():
    signal = SystemThemeSignal(False)
    sub = signal.subscribe(lambda is_dark: None)
    sub.unsubscribe()
    sub.unsubscribe()
    assert not sub.active
    assert signal.subscriber_count == 0


def test_signal_only_notifies_on_change():
    seen = []
    signal = SystemThemeSignal(True)
    signal.subscribe(seen.append)
    signal.publish(True)
    signal.publish(None)
    signal.publish(False)
    assert seen == [False]


def test_broken_store_degrades_to_os_default():
    resolver, _ = make_resolver(os_dark=True, store=BrokenStore())
    assert resolver.resolve().mode is ThemeMode.DARK


def test_broken_store_keeps_explicit_choice_for_the_session():
    resolver, _ = make_resolver(os_dark=True, store=BrokenStore())
    resolver.resolve()
    with resolver.watch():
        resolver.set_preference(ThemeMode.LIGHT)
        resolver.signal.publish(False)
        resolver.signal.publish(True)
    assert resolver.resolve() == ThemePreference(ThemeMode.LIGHT, PreferenceSource.EXPLICIT)


def test_json_file_store_round_trip(tmp_path):
    path = tmp_path / "prefs" / "theme.json"
    store = JsonFileThemeStore(str(path))
    assert store.get(THEME_KEY) is None

    resolver, _ = make_resolver(store=store)
    resolver.set_preference(ThemeMode.DARK)

    assert json.loads(path.read_text()) == {"theme": "dark"}
    fresh, _ = make_resolver(os_dark=False, store=JsonFileThemeStore(str(path)))
    assert fresh.resolve() == ThemePreference(ThemeMode.DARK, PreferenceSource.EXPLICIT)


def test_json_file_store_corrupt_file_falls_back(tmp_path):
    path = tmp_path / "theme.json"
    path.write_text("{not json")
    store = JsonFileThemeStore(str(path))
    with pytest.raises(ThemeStoreError):
        store.get(THEME_KEY)

    resolver, _ = make_resolver(os_dark=True, store=store)
    assert resolver.resolve().source is PreferenceSource.SYSTEM

    # Writing replaces the corrupt file.
    resolver.set_preference(ThemeMode.LIGHT)
    assert json.loads(path.read_text()) == {"theme": "light"}


def test_mode_toggled():
    assert ThemeMode.LIGHT.toggled() is ThemeMode.DARK
    assert ThemeMode.DARK.toggled() is ThemeMode.LIGHT


def test_cookie_choice_beats_os_on_a_new_session():
    store = CookieThemeStore({THEME_KEY: "dark"}, {})
    resolver, _ = make_resolver(os_dark=False, store=store)
    assert resolver.resolve() == ThemePreference(ThemeMode.DARK, PreferenceSource.EXPLICIT)


def test_invalid_cookie_is_ignored():
    store = CookieThemeStore({THEME_KEY: "sepia"}, {})
    resolver, _ = make_resolver(os_dark=True, store=store)
    assert resolver.resolve().source is PreferenceSource.SYSTEM


def test_explicit_choice_is_queued_for_the_browser():
    session = {}
    store = CookieThemeStore({THEME_KEY: "light"}, session)
    resolver, _ = make_resolver(store=store)
    resolver.resolve()
    assert store.queued() == {}

    resolver.toggle()
    assert store.queued() == {THEME_KEY: "dark"}
    assert store.get(THEME_KEY) == "dark"

    # Reruns build a new store over the same session; the queued write still wins.
    assert CookieThemeStore({THEME_KEY: "light"}, session).get(THEME_KEY) == "dark"


def test_system_default_is_never_queued():
    store = CookieThemeStore({}, {})
    resolver, _ = make_resolver(os_dark=True, store=store)
    resolver.resolve()
    with resolver.watch():
        resolver.signal.publish(False)
    assert store.queued() == {}


def test_cookie_script_sets_a_long_lived_site_cookie():
    js = cookie_js({THEME_KEY: "dark"})
    assert '{"theme": "dark"}' in js
    assert "path=/; max-age=31536000; SameSite=Lax" in js
    assert "window.parent.document" in js
