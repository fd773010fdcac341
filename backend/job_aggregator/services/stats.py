from __future__ import annotations
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime

from job_aggregator.core.config import settings
from job_aggregator.crawlers.base import Job
from job_aggregator.utils.dates import as_utc, is_within_window, utc_now


@dataclass
class Stats:
    total_active_jobs: int = 0
    jobs_per_source: dict[str, int] = field(default_factory=dict)
    new_today_count: int = 0


def compute_stats(jobs: list[Job], now: datetime | None = None, window_hours: int | None = None) -> Stats:
    now = as_utc(now) if now is not None else utc_now()
    hours = settings.new_job_window_hours if window_hours is None else window_hours
    per_source = Counter(job.source for job in jobs if job.source)
    return Stats(
        total_active_jobs=sum(1 for job in jobs if not job.is_archived),
        jobs_per_source=dict(per_source),
        new_today_count=sum(1 for job in jobs if is_within_window(job.posted_at, now, hours)),
    )
