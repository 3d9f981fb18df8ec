from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Tuple

from portfolio.config import AppConfig
from portfolio.data import sample_data
from portfolio.data.client import ContentClient, get_content_client
from portfolio.data.models import RECORD_TYPES, EducationEntry, ExperienceEntry, Post, Project


logger = logging.getLogger(__name__)


COLLECTIONS = ("projects", "experience", "education", "posts")


@dataclass(frozen=True)
class ContentResult:
    name: str
    records: Tuple[object, ...]
    source: str  # "api" | "sample"
    warning: str | None = None


def _to_records(name: str, rows: Iterable[dict]) -> Tuple[object, ...]:
    record_type = RECORD_TYPES.get(name)
    if record_type is None:
        return tuple(rows)
    return tuple(record_type.from_record(r) for r in rows)


def load_collection(cfg: AppConfig, name: str, client: Optional[ContentClient] = None) -> ContentResult:
    if cfg.use_sample_content:
        make = sample_data.SAMPLES.get(name)
        rows = make() if make else []
        return ContentResult(name=name, records=_to_records(name, rows), source="sample")

    client = client or get_content_client(cfg)
    rows = client.load_collection(name)
    warning = None if rows else f"No {name} loaded from {client.url_for(name)}"
    return ContentResult(name=name, records=_to_records(name, rows), source="api", warning=warning)


def get_projects(cfg: AppConfig, client: Optional[ContentClient] = None) -> Tuple[Project, ...]:
    return load_collection(cfg, "projects", client).records  # type: ignore[return-value]


def get_experience(cfg: AppConfig, client: Optional[ContentClient] = None) -> Tuple[ExperienceEntry, ...]:
    return load_collection(cfg, "experience", client).records  # type: ignore[return-value]


def get_education(cfg: AppConfig, client: Optional[ContentClient] = None) -> Tuple[EducationEntry, ...]:
    return load_collection(cfg, "education", client).records  # type: ignore[return-value]


def get_posts(cfg: AppConfig, client: Optional[ContentClient] = None) -> Tuple[Post, ...]:
    return load_collection(cfg, "posts", client).records  # type: ignore[return-value]


def load_all(
    cfg: AppConfig,
    names: Iterable[str],
    deliver: Callable[[ContentResult], None],
    is_alive: Callable[[], bool] = lambda: True,
    client: Optional[ContentClient] = None,
) -> int:
    """
    Issue every collection load at once and hand each result to `deliver`
    as soon as its own load finishes (completion order, not request order).

    Results that arrive after `is_alive()` turns False are dropped.
    An exception from `deliver` propagates at once, without waiting on the
    loads still in flight.
    Returns the number of results delivered.
    """
    names = list(names)
    if not names:
        return 0

    client = client or get_content_client(cfg)
    delivered = 0
    pool = ThreadPoolExecutor(max_workers=len(names), thread_name_prefix="content")
    try:
        futures = {pool.submit(load_collection, cfg, name, client): name for name in names}
        for fut in as_completed(futures):
            name = futures[fut]
            try:
                result = fut.result()
            except Exception:
                # Record mapping bug, not a fetch failure; still fail soft.
                logger.exception("Loading %s failed", name)
                result = ContentResult(name=name, records=(), source="api", warning="load error")
            if result.warning:
                logger.info(result.warning)
            if not is_alive():
                logger.debug("View gone, dropping %s", name)
                continue
            deliver(result)
            delivered += 1
    finally:
        # All done on a normal exit. If deliver raised, loads still in flight are abandoned.
        pool.shutdown(wait=False, cancel_futures=True)
    return delivered
