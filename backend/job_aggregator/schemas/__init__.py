from __future__ import annotations
from job_aggregator.schemas.job import AggregateOut, JobOut, StatsOut

__all__ = [
    "AggregateOut",
    "JobOut",
    "StatsOut",
]
