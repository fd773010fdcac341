from __future__ import annotations
from job_aggregator.crawlers.adapters.hr_ge import HrGeAdapter
from job_aggregator.crawlers.adapters.jobs_ge import JobsGeAdapter

# Only boards that render listings server-side; SPA boards need a browser.
ADAPTERS = {
    "jobs.ge": JobsGeAdapter,
    "hr.ge": HrGeAdapter,
}

ALL_SOURCES = "all"
AVAILABLE_SOURCES = tuple(ADAPTERS)
