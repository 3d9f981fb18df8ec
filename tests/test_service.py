from __future__ import annotations

import dataclasses
import threading
import time

import pytest
import requests

from portfolio.data import service
from portfolio.data.client import ContentClient
from portfolio.data.models import EducationEntry, ExperienceEntry, Post, Project
from tests.conftest import FakeResponse


def test_projects_are_typed_records(cfg, fake_backend):
    fake_backend.routes["/api/projects"] = FakeResponse(
        body=[{"slug": "a", "title": "Portfolio", "summary": "x", "demo_url": "https://e.com"}]
    )
    [project] = service.get_projects(cfg)
    assert project == Project(slug="a", title="Portfolio", summary="x", demo_url="https://e.com", repo_url=None)


def test_each_collection_maps_to_its_record_type(cfg, fake_backend):
    fake_backend.routes["/api/experience"] = FakeResponse(body=[{"id": 1, "role": "Dev"}])
    fake_backend.routes["/api/education"] = FakeResponse(body=[{"id": 2, "degree": "BSc"}])
    fake_backend.routes["/api/posts"] = FakeResponse(body=[{"id": 3, "title": "Hi", "tags": ["x"]}])

    assert isinstance(service.get_experience(cfg)[0], ExperienceEntry)
    assert isinstance(service.get_education(cfg)[0], EducationEntry)
    assert service.get_posts(cfg)[0].tags == ("x",)
    assert isinstance(service.get_posts(cfg)[0], Post)


def test_failure_and_empty_list_look_the_same(cfg, fake_backend):
    fake_backend.routes["/api/projects"] = FakeResponse(body=[])
    fake_backend.routes["/api/posts"] = FakeResponse(text="not json")

    empty = service.load_collection(cfg, "projects")
    broken = service.load_collection(cfg, "posts")
    assert empty.records == broken.records == ()
    assert empty.source == broken.source == "api"


def test_sample_mode_skips_backend(cfg, fake_backend):
    sample_cfg = dataclasses.replace(cfg, use_sample_content=True)
    result = service.load_collection(sample_cfg, "projects")

    assert result.source == "sample"
    assert result.records
    assert all(isinstance(p, Project) and p.title for p in result.records)
    assert fake_backend.calls == []


def test_sample_mode_is_deterministic(cfg):
    sample_cfg = dataclasses.replace(cfg, use_sample_content=True)
    first = service.load_collection(sample_cfg, "posts").records
    second = service.load_collection(sample_cfg, "posts").records
    assert first == second


def test_load_all_delivers_every_collection(cfg, fake_backend):
    for name in service.COLLECTIONS:
        fake_backend.routes[f"/api/{name}"] = FakeResponse(body=[{"id": name}])
    fake_backend.routes["/api/posts"] = requests.ConnectionError("down")

    got = {}
    count = service.load_all(cfg, service.COLLECTIONS, deliver=lambda r: got.__setitem__(r.name, r))

    assert count == 4
    assert set(got) == set(service.COLLECTIONS)
    assert got["posts"].records == ()
    assert len(got["projects"].records) == 1


def test_load_all_runs_loads_concurrently(cfg, monkeypatch):
    # Every load blocks until all of them have started; sequential loading would time out.
    barrier = threading.Barrier(len(service.COLLECTIONS), timeout=5)

    def fake_get(url, headers=None, timeout=None):
        barrier.wait()
        return FakeResponse(body=[{"id": url}])

    monkeypatch.setattr(requests, "get", fake_get)
    got = []
    service.load_all(cfg, service.COLLECTIONS, deliver=got.append)
    assert sorted(r.name for r in got) == sorted(service.COLLECTIONS)
    assert all(len(r.records) == 1 for r in got)


def test_slow_section_does_not_hold_back_others(cfg, monkeypatch):
    release = threading.Event()
    order = []

    def fake_get(url, headers=None, timeout=None):
        if url.endswith("/api/projects"):
            release.wait(timeout=5)
        return FakeResponse(body=[])

    def deliver(result):
        order.append(result.name)
        if len(order) == 3:
            release.set()

    monkeypatch.setattr(requests, "get", fake_get)
    service.load_all(cfg, service.COLLECTIONS, deliver=deliver)
    assert order[-1] == "projects"
    assert len(order) == 4


def test_results_for_torn_down_view_are_dropped(cfg, fake_backend):
    for name in service.COLLECTIONS:
        fake_backend.routes[f"/api/{name}"] = FakeResponse(body=[])

    alive = {"value": True}
    got = []

    def deliver(result):
        got.append(result.name)
        alive["value"] = False  # view torn down after the first section

    count = service.load_all(cfg, service.COLLECTIONS, deliver=deliver, is_alive=lambda: alive["value"])
    assert count == 1
    assert len(got) == 1


def test_load_all_with_no_names(cfg):
    assert service.load_all(cfg, [], deliver=lambda r: None) == 0


def test_load_all_uses_given_client(cfg, fake_backend):
    fake_backend.routes["/api/projects"] = FakeResponse(body=[])
    client = ContentClient(dataclasses.replace(cfg, backend_url=""), origin="https://me.dev")
    service.load_all(cfg, ["projects"], deliver=lambda r: None, client=client)
    assert fake_backend.calls[0]["url"] == "https://me.dev/api/projects"


def test_sample_experience_is_current_and_education_is_closed(cfg):
    sample_cfg = dataclasses.replace(cfg, use_sample_content=True)
    experience = service.get_experience(sample_cfg)
    education = service.get_education(sample_cfg)
    assert experience[0].end == "Present"
    assert all(e.end != "Present" for e in education)


def test_one_odd_post_does_not_empty_the_section(cfg, fake_backend):
    fake_backend.routes["/api/posts"] = FakeResponse(
        body=[{"id": "1", "title": "Good"}, {"id": "2", "title": "Odd", "tags": 5}]
    )
    posts = service.get_posts(cfg)
    assert [p.title for p in posts] == ["Good", "Odd"]

    got = {}
    service.load_all(cfg, ["posts"], deliver=lambda r: got.__setitem__(r.name, r))
    assert len(got["posts"].records) == 2


class StopRun(Exception):
    pass


def test_interrupted_delivery_does_not_wait_for_slow_loads(cfg, monkeypatch):
    release = threading.Event()

    def fake_get(url, headers=None, timeout=None):
        if url.endswith("/api/projects"):
            release.wait(timeout=5)
        return FakeResponse(body=[])

    def deliver(result):
        raise StopRun()

    monkeypatch.setattr(requests, "get", fake_get)
    started = time.monotonic()
    try:
        with pytest.raises(StopRun):
            service.load_all(cfg, service.COLLECTIONS, deliver=deliver)
        assert time.monotonic() - started < 2
    finally:
        release.set()
