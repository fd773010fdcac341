from __future__ import annotations

from datetime import datetime, timedelta, timezone

from job_aggregator.crawlers.base import Job
from job_aggregator.services.stats import Stats, compute_stats

NOW = datetime(2024, 6, 10, 12, tzinfo=timezone.utc)


def _job(job_id: str, source: str, age: timedelta, **kwargs) -> Job:
    return Job(
        id=job_id,
        title="Accountant",
        source=source,
        url=f"https://example.ge/{job_id}",
        posted_at=NOW - age,
        **kwargs,
    )


def test_empty_list():
    assert compute_stats([], now=NOW) == Stats(total_active_jobs=0, jobs_per_source={}, new_today_count=0)


def test_counts_per_source_active_and_new():
    jobs = [
        _job("jobsge-1", "jobs.ge", timedelta(hours=2)),
        _job("jobsge-2", "jobs.ge", timedelta(days=3)),
        _job("hrge-1", "hr.ge", timedelta(hours=23), is_archived=True),
        _job("hrge-2", "hr.ge", timedelta(hours=30)),
        _job("x-1", "", timedelta(hours=1)),
    ]

    stats = compute_stats(jobs, now=NOW)

    assert stats.total_active_jobs == 4
    assert stats.jobs_per_source == {"jobs.ge": 2, "hr.ge": 2}
    assert stats.new_today_count == 3


def test_new_today_ignores_stale_is_new_flag():
    jobs = [_job("jobsge-1", "jobs.ge", timedelta(days=2), is_new=True)]

    assert compute_stats(jobs, now=NOW).new_today_count == 0


def test_window_is_configurable():
    jobs = [_job("jobsge-1", "jobs.ge", timedelta(hours=40))]

    assert compute_stats(jobs, now=NOW, window_hours=48).new_today_count == 1
