from __future__ import annotations

from datetime import datetime, timedelta, timezone
import json

import pytest

import run_crawler
from job_aggregator.crawlers.base import Job
from job_aggregator.services.aggregator import AggregateResult

NOW = datetime.now(timezone.utc)


def _result() -> AggregateResult:
    return AggregateResult(
        jobs=[
            Job(
                id="jobsge-1",
                title="ბუღალტერი",
                source="jobs.ge",
                url="https://www.jobs.ge/ge/?view=jobs&id=1",
                posted_at=NOW,
                location="თბილისი",
                is_new=True,
            ),
            Job(
                id="hrge-2",
                title="Designer",
                source="hr.ge",
                url="https://www.hr.ge/announcement/2",
                posted_at=NOW - timedelta(days=4),
                location="თბილისი",
            ),
        ],
        errors=["hr.ge returned 503"],
    )


def test_run_filters_new_and_adds_stats(monkeypatch):
    calls = []

    def fake_aggregate(query, source):
        calls.append((query, source))
        return _result()

    monkeypatch.setattr(run_crawler, "aggregate", fake_aggregate)

    out = run_crawler.run(["--query", "buh", "--source", "jobs.ge", "--only-new", "--stats"])

    assert calls == [("buh", "jobs.ge")]
    assert [job.id for job in out.jobs] == ["jobsge-1"]
    assert out.errors == ["hr.ge returned 503"]
    assert out.stats.total_active_jobs == 2
    assert out.stats.jobs_per_source == {"jobs.ge": 1, "hr.ge": 1}

    payload = json.loads(out.model_dump_json())
    assert payload["jobs"][0]["posted_at"].startswith(str(NOW.year))


def test_run_defaults_to_all_sources(monkeypatch):
    monkeypatch.setattr(run_crawler, "aggregate", lambda query, source: _result())

    out = run_crawler.run([])

    assert len(out.jobs) == 2
    assert out.stats is None


def test_unknown_source_is_rejected():
    with pytest.raises(SystemExit):
        run_crawler.run(["--source", "myjobs.ge"])
