from __future__ import annotations
from concurrent.futures import Future, ThreadPoolExecutor, wait
from dataclasses import dataclass, field, replace
from datetime import datetime
import logging
from typing import Iterable

from job_aggregator.core.config import settings
from job_aggregator.crawlers.base import Job, ScrapeResult
from job_aggregator.crawlers.registry import ADAPTERS, ALL_SOURCES
from job_aggregator.utils.dates import as_utc, is_within_window, utc_now

logger = logging.getLogger(__name__)

MAX_ERROR_LENGTH = 2000


@dataclass
class AggregateResult:
    jobs: list[Job] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)


def select_sources(source_filter: str | None) -> list[str]:
    name = (source_filter or "").strip()
    if name and name != ALL_SOURCES:
        if name in ADAPTERS:
            return [name]
        logger.warning("unknown source filter %r, scraping all sources", name)
    return list(ADAPTERS)


def _posted_ts(job: Job) -> float:
    return job.posted_at.timestamp() if job.posted_at else 0.0


def merge_jobs(batches: Iterable[list[Job]], now: datetime, window_hours: int | None = None) -> list[Job]:
    """Concatenate, dedupe by id (first seen wins), sort newest first and tag freshness.

    Runs single-threaded after every fetch has settled; never call it concurrently
    with another merge over the same batches.
    """
    hours = settings.new_job_window_hours if window_hours is None else window_hours
    seen: set[str] = set()
    unique: list[Job] = []
    for batch in batches:
        for job in batch:
            if job.id in seen:
                continue
            seen.add(job.id)
            unique.append(job)

    ordered = sorted(unique, key=_posted_ts, reverse=True)
    return [replace(job, is_new=is_within_window(job.posted_at, now, hours)) for job in ordered]


def _run_adapter(adapter_cls, query: str | None) -> ScrapeResult:
    return adapter_cls().scrape(query)


def _collect(name: str, future: Future, finished: set, timeout: float) -> tuple[list[Job], str | None]:
    if future not in finished:
        return [], f"{name} timeout after {int(timeout * 1000)}ms"
    try:
        result: ScrapeResult = future.result()
    except Exception as exc:  # noqa: BLE001
        return [], f"{name}: {exc}"[:MAX_ERROR_LENGTH]
    error = result.error[:MAX_ERROR_LENGTH] if result.error else None
    return list(result.jobs), error


def aggregate(
    query: str | None = None,
    source_filter: str | None = None,
    *,
    now: datetime | None = None,
    timeout: float | None = None,
) -> AggregateResult:
    timeout = settings.scrape_timeout_seconds if timeout is None else timeout
    sources = select_sources(source_filter)
    logger.info("scraping sources: %s", ", ".join(sources))

    batches: list[list[Job]] = []
    errors: list[str] = []

    # One worker per source so every adapter starts immediately and shares one deadline.
    pool = ThreadPoolExecutor(max_workers=max(len(sources), 1), thread_name_prefix="scrape")
    try:
        futures = {name: pool.submit(_run_adapter, ADAPTERS[name], query) for name in sources}
        finished, _pending = wait(futures.values(), timeout=timeout)
    finally:
        # Timed-out fetches are abandoned, not joined; httpx's own deadline ends them.
        pool.shutdown(wait=False, cancel_futures=True)

    # Registry order, not arrival order, so first-seen dedup is repeatable.
    for name, future in futures.items():
        jobs, error = _collect(name, future, finished, timeout)
        if error:
            logger.warning("source %s failed: %s", name, error)
            errors.append(error)
        batches.append(jobs)

    evaluated_at = as_utc(now) if now is not None else utc_now()
    merged = merge_jobs(batches, evaluated_at)
    logger.info("aggregated %d jobs from %d sources (%d errors)", len(merged), len(sources), len(errors))
    return AggregateResult(jobs=merged, errors=errors)
